# c1fem.fem.reference
"""
Reference-element factory.
"""
from functools import lru_cache
from importlib import import_module

import numpy as np

from c1fem.utils.precision import readonly, resolve_precision

_ELEMENTS = {"quad_hermite": "c1fem.fem.reference.quad_hermite"}


class Ref:
    """Point evaluation of one reference element's cardinal basis."""

    def __init__(self, module, precision):
        self._m = module
        self.precision = precision
        self.n_basis = module.N_BASIS
        self.coefficients = module.cardinal_coefficients(precision)

    @lru_cache(maxsize=None)
    def shape(self, xi, eta):
        return readonly(self._m.evaluate_basis(xi, eta, self.precision))

    @lru_cache(maxsize=None)
    def derivative(self, xi, eta, order_xi, order_eta):
        return readonly(self._m.evaluate_derivative(xi, eta, order_xi, order_eta, self.precision))

    @lru_cache(maxsize=None)
    def grad(self, xi, eta):
        return readonly(self._m.evaluate_partials(xi, eta, self.precision))

    @lru_cache(maxsize=None)
    def hess(self, xi, eta):
        d20 = self.derivative(xi, eta, 2, 0)
        d11 = self.derivative(xi, eta, 1, 1)
        d02 = self.derivative(xi, eta, 0, 2)
        H = np.empty((d20.shape[0], 2, 2), dtype=d20.dtype)
        H[:, 0, 0] = d20
        H[:, 0, 1] = d11
        H[:, 1, 0] = d11
        H[:, 1, 1] = d02
        return readonly(H)


@lru_cache(maxsize=None)
def get_reference(element_type: str = "quad_hermite", precision=np.float64):
    if element_type not in _ELEMENTS:
        raise KeyError(element_type)
    return Ref(import_module(_ELEMENTS[element_type]), resolve_precision(precision))
