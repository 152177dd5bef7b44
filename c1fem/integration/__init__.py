from .quadrature import one_dimensional_rule, two_dimensional_rule
