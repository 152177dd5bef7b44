"""c1fem: preprocessing for C1 (bicubic Hermite) elasticity on structured grids."""
from c1fem.assembly.local_assembler import constant_field, elemental_stiffness
from c1fem.assembly.stiffness_map import (
    StiffnessKind, build_elemental_map, flattened_dilation_integrand, flattened_shear_integrand,
)
from c1fem.core import Grid, adjacent_nodes, bandwidth, renumber_nodes, sparsity_matrix, sparsity_pattern
from c1fem.errors import C1FemError, ConfigurationError, PreconditionError
from c1fem.fem.reference import get_reference
from c1fem.fem.reference.quad_hermite import (
    cardinal_coefficients, cardinal_to_monomial, constraint_matrix, evaluate_basis,
    evaluate_monomials, evaluate_partials,
)
from c1fem.integration.quadrature import one_dimensional_rule, two_dimensional_rule
from c1fem.utils.precision import MultiPrecision
from c1fem.utils.symmetric import flatten_symmetric, unflatten_symmetric

__version__ = "0.1.0"

__all__ = [
    'Grid', 'adjacent_nodes', 'renumber_nodes', 'sparsity_pattern', 'sparsity_matrix', 'bandwidth',
    'one_dimensional_rule', 'two_dimensional_rule',
    'constraint_matrix', 'cardinal_coefficients', 'evaluate_monomials', 'evaluate_partials',
    'evaluate_basis', 'cardinal_to_monomial', 'get_reference',
    'StiffnessKind', 'build_elemental_map', 'flattened_dilation_integrand', 'flattened_shear_integrand',
    'elemental_stiffness', 'constant_field', 'flatten_symmetric', 'unflatten_symmetric',
    'MultiPrecision', 'C1FemError', 'ConfigurationError', 'PreconditionError',
]
