"""c1fem.fem.reference.quad_hermite
Bicubic Hermite (C1) element on [-1, 1]^2.

The 16 cardinal functions are bicubic polynomials, one per (derivative,
corner) pair.  DOF ``k = 4*d + c`` where ``d`` indexes
``DERIVATIVES = (value, d/dx, d/dy, d2/dxdy)`` and ``c`` indexes ``CORNERS``.
Function ``k`` has DOF ``k`` equal to one and the other 15 equal to zero.
"""
from functools import lru_cache

import numpy as np
import sympy as sp

from c1fem.errors import PreconditionError
from c1fem.fem.reference.monomials import DX_TERMS, DY_TERMS, TERMS
from c1fem.utils.precision import pick_precision, readonly, resolve_precision

N_BASIS = 16
CORNERS = ((-1, -1), (-1, 1), (1, 1), (1, -1))
DERIVATIVES = ((0, 0), (1, 0), (0, 1), (1, 1))
VALUE_DOFS = tuple(range(len(CORNERS)))


def dof_index(derivative: int, corner: int) -> int:
    return derivative * len(CORNERS) + corner


def _constraint_row(term):
    """DOF values of one monomial: 4 derivative kinds x 4 corners, exact ints."""
    return [term.partial(ox, oy)(cx, cy) for ox, oy in DERIVATIVES for cx, cy in CORNERS]


@lru_cache(maxsize=None)
def _exact_coefficients() -> sp.Matrix:
    # Precondition: the constraint matrix is regular, which holds for the
    # undistorted reference square.
    C = sp.Matrix([_constraint_row(t) for t in TERMS])
    return C.LUsolve(sp.eye(N_BASIS))


@lru_cache(maxsize=None)
def _coefficients(prec):
    X = _exact_coefficients()
    exact = [[sp.Rational(X[i, j]) for j in range(N_BASIS)] for i in range(N_BASIS)]
    with prec.context():
        A = prec.asarray([[prec.rational(e.p, e.q) for e in row] for row in exact])
    return readonly(A)


def constraint_matrix(precision=np.float64) -> np.ndarray:
    """
    16x16 matrix whose row ``j`` lists the 16 DOF values of monomial ``j``
    (value, d/dx, d/dy, d2/dxdy, each at the 4 corners).
    """
    prec = resolve_precision(precision)
    with prec.context():
        return prec.asarray([_constraint_row(t) for t in TERMS])


def cardinal_coefficients(precision=np.float64) -> np.ndarray:
    """
    Solution ``X`` of ``constraint_matrix @ X = I``; row ``i`` holds cardinal
    function ``i`` in the monomial basis ``TERMS``.

    The solve is carried out once in exact rational arithmetic and rounded to
    the requested precision. The returned array is shared and read-only.
    """
    return _coefficients(resolve_precision(precision))


def evaluate_monomials(points, precision=None) -> np.ndarray:
    """
    Raw monomial values at ``points`` (shape ``(N, 2)``), returned as ``(N, 16)``.

    Multiplying by a vector of monomial coefficients gives the values of that
    field at the points; this is how material fields are sampled at
    quadrature points.
    """
    prec = pick_precision(precision, points)
    with prec.context():
        P = prec.asarray(points).reshape(-1, 2)
        xs, ys = P[:, 0], P[:, 1]
        return np.stack([t(xs, ys) for t in TERMS], axis=1)


def evaluate_derivative(x, y, order_x: int, order_y: int, precision=None) -> np.ndarray:
    """``d^(ox+oy)/dx^ox dy^oy`` of all 16 cardinal functions at ``(x, y)``."""
    prec = pick_precision(precision, x, y)
    A = _coefficients(prec)
    with prec.context():
        x, y = prec.scalar(x), prec.scalar(y)
        d = prec.asarray([t.partial(order_x, order_y)(x, y) for t in TERMS])
        return A @ d


def evaluate_basis(x, y, precision=None) -> np.ndarray:
    return evaluate_derivative(x, y, 0, 0, precision)


def evaluate_partials(x, y, precision=None) -> np.ndarray:
    """
    First partials of the 16 cardinal functions at ``(x, y)``.

    Returns a ``(16, 2)`` array, column 0 = d/dx, column 1 = d/dy, computed as
    ``cardinal_coefficients @ [dx-terms, dy-terms]``.
    """
    prec = pick_precision(precision, x, y)
    A = _coefficients(prec)
    with prec.context():
        x, y = prec.scalar(x), prec.scalar(y)
        d = prec.asarray([[dx(x, y), dy(x, y)] for dx, dy in zip(DX_TERMS, DY_TERMS)])
        return A @ d


def cardinal_to_monomial(dofs, precision=None) -> np.ndarray:
    """Monomial coefficients of the field ``sum_k dofs[k] * phi_k``."""
    dofs = np.asarray(dofs)
    if dofs.shape != (N_BASIS,):
        raise PreconditionError(f"expected {N_BASIS} DOF values, got shape {dofs.shape}")
    prec = pick_precision(precision, dofs)
    A = _coefficients(prec)
    with prec.context():
        return A.T @ prec.asarray(dofs)
