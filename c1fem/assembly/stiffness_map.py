"""c1fem.assembly.stiffness_map
Precomputed linear maps from a material field to the elemental stiffness block.

A scalar material field over the reference element is given by its 16
monomial coefficients ``c`` (order of ``monomials.TERMS``). The packed lower
triangle of the 32x32 elemental block is then ``M @ c`` with ``M`` the 528x16
map built here, one for the dilation (lambda) part and one for the shear (mu)
part of the elasticity bilinear form.

Local index ``r`` of the 32x32 block couples cardinal function ``r // 2``
with displacement direction ``r % 2`` (0 = x, 1 = y).
"""
import logging
from enum import Enum
from functools import lru_cache

import numpy as np

from c1fem.config import elevated_dps
from c1fem.errors import ConfigurationError
from c1fem.fem.reference.quad_hermite import evaluate_monomials, evaluate_partials
from c1fem.integration.quadrature import two_dimensional_rule
from c1fem.utils.precision import MultiPrecision, pick_precision, readonly, resolve_precision
from c1fem.utils.symmetric import LOCAL_SIZE, flat_size, lower_triangle_indices

logger = logging.getLogger(__name__)

N_FLAT = flat_size(LOCAL_SIZE)


class StiffnessKind(str, Enum):
    DILATION = "dilation"
    SHEAR = "shear"


_ROWS, _COLS = lower_triangle_indices(LOCAL_SIZE)
_I, _DI = np.divmod(_ROWS, 2)   # row: cardinal function, direction
_J, _DJ = np.divmod(_COLS, 2)   # col: cardinal function, direction
_SAME_DIRECTION = _DI == _DJ


def flattened_dilation_integrand(x, y, precision=None) -> np.ndarray:
    """``d_{dir(row)} phi_i * d_{dir(col)} phi_j`` for the 528 packed entries."""
    prec = pick_precision(precision, x, y)
    dphi = evaluate_partials(x, y, prec)
    with prec.context():
        return dphi[_I, _DI] * dphi[_J, _DJ]


def flattened_shear_integrand(x, y, precision=None) -> np.ndarray:
    """
    Shear part of the integrand for the 528 packed entries.

    Same direction: ``2 f_i f_j + g_i g_j`` with ``f`` the partial along that
    direction and ``g`` the other one. Different directions:
    ``d_{dir(col)} phi_i * d_{dir(row)} phi_j``.
    """
    prec = pick_precision(precision, x, y)
    dphi = evaluate_partials(x, y, prec)
    with prec.context():
        along = dphi[_I, _DI] * dphi[_J, _DJ]
        across = dphi[_I, 1 - _DI] * dphi[_J, 1 - _DJ]
        mixed = dphi[_I, _DJ] * dphi[_J, _DI]
        return np.where(_SAME_DIRECTION, 2 * along + across, mixed)


_INTEGRANDS = {
    StiffnessKind.DILATION: flattened_dilation_integrand,
    StiffnessKind.SHEAR: flattened_shear_integrand,
}


def _resolve_kind(kind) -> StiffnessKind:
    try:
        return StiffnessKind(kind)
    except ValueError:
        choices = ", ".join(k.value for k in StiffnessKind)
        raise ConfigurationError(f"unknown stiffness kind {kind!r}; expected one of {choices}") from None


@lru_cache(maxsize=None)
def _build(kind: StiffnessKind, working, elevated) -> np.ndarray:
    logger.info(f"Building {kind.value} stiffness map in {elevated}, rounded to {working}.")
    integrand = _INTEGRANDS[kind]
    points, weights = two_dimensional_rule(elevated)
    with elevated.context():
        Q = np.stack([w * integrand(p[0], p[1], elevated) for p, w in zip(points, weights)], axis=1)
        L = evaluate_monomials(points, elevated)
        QL = Q @ L
    return readonly(working.round(QL))


def build_elemental_map(kind, precision=np.float64, elevated=None) -> np.ndarray:
    """
    528x16 map from monomial material coefficients to the packed elemental block.

    The weighted integrand samples (528x25) and the monomial samples (25x16)
    are formed and multiplied in ``elevated`` precision and rounded to
    ``precision`` once at the end. ``elevated`` defaults to
    ``MultiPrecision(C1FEM_ELEVATED_DPS)`` and must carry more digits than
    ``precision``.

    The result is cached per (kind, precision, elevated) and read-only.
    """
    kind = _resolve_kind(kind)
    working = resolve_precision(precision)
    elevated = MultiPrecision(elevated_dps()) if elevated is None else resolve_precision(elevated)
    if elevated.digits <= working.digits:
        raise ConfigurationError(
            f"elevated precision ({elevated}, {elevated.digits} digits) must exceed "
            f"the working precision ({working}, {working.digits} digits)"
        )
    return _build(kind, working, elevated)
