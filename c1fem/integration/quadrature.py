"""c1fem.integration.quadrature
Five-point Gauss-Legendre rules on [-1, 1] and their 5x5 tensor product on the
reference square, in any supported precision.
"""
# c1fem.integration.quadrature
from functools import lru_cache

import numpy as np

from c1fem.utils.precision import readonly, resolve_precision

N_POINTS_1D = 5
EXACT_DEGREE = 2 * N_POINTS_1D - 1   # per axis


def _five_point_rule(one, sqrt):
    """Closed-form roots and weights of the degree-5 Legendre polynomial."""
    r = 2 * sqrt(10 * one / 7)
    p1 = sqrt(5 - r) / 3
    p2 = sqrt(5 + r) / 3
    s = 13 * sqrt(70 * one)
    w1 = (322 + s) / 900
    w2 = (322 - s) / 900
    return (0 * one, p1, -p1, p2, -p2), (128 * one / 225, w1, w1, w2, w2)


# -------------------------------------------------------------------------
# Cached builders keyed on the resolved precision object
# -------------------------------------------------------------------------
@lru_cache(maxsize=None)
def _line_rule(prec):
    with prec.context():
        pts, wts = _five_point_rule(prec.one(), prec.sqrt)
        return readonly(prec.asarray(pts)), readonly(prec.asarray(wts))


@lru_cache(maxsize=None)
def _square_rule(prec):
    xi, wi = _line_rule(prec)
    with prec.context():
        pts = prec.asarray([[x, y] for x in xi for y in xi])
        wts = prec.asarray([wx * wy for wx in wi for wy in wi])
    return readonly(pts), readonly(wts)


# -------------------------------------------------------------------------
# Public API
# -------------------------------------------------------------------------
def one_dimensional_rule(precision=np.float64):
    """
    Five-point Gauss-Legendre rule on [-1, 1], exact for degree <= 9.

    Returns ``(points, weights)``, both of shape ``(5,)``, ordered
    ``0, p1, -p1, p2, -p2`` with ``p1 < p2``.
    """
    return _line_rule(resolve_precision(precision))


def two_dimensional_rule(precision=np.float64):
    """
    25-point tensor rule on [-1, 1]^2: point ``(x_i, x_j)`` has weight
    ``w_i * w_j``, ``i`` the outer loop. Returns ``(points (25, 2), weights (25,))``.
    """
    return _square_rule(resolve_precision(precision))

