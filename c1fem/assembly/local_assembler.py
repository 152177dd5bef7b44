"""c1fem.assembly.local_assembler
Elemental stiffness of the C1 elasticity element on the reference square.
"""
import numpy as np

from c1fem.assembly.stiffness_map import StiffnessKind, build_elemental_map
from c1fem.errors import PreconditionError
from c1fem.fem.reference.monomials import CONSTANT_TERM, TERMS
from c1fem.utils.precision import resolve_precision
from c1fem.utils.symmetric import unflatten_symmetric


def constant_field(value, precision=np.float64) -> np.ndarray:
    """Monomial coefficients of the field that equals ``value`` everywhere."""
    prec = resolve_precision(precision)
    c = prec.asarray(np.zeros(len(TERMS)))
    c[CONSTANT_TERM] = prec.scalar(value)
    return c


def _field(coefficients, prec) -> np.ndarray:
    if np.ndim(coefficients) == 0:
        return constant_field(coefficients, prec)
    c = prec.asarray(coefficients)
    if c.shape != (len(TERMS),):
        raise PreconditionError(f"expected {len(TERMS)} monomial coefficients, got shape {c.shape}")
    return c


def elemental_stiffness(lam, mu, precision=np.float64, *, full: bool = False, elevated=None) -> np.ndarray:
    """
    Stiffness block of one element for Lame fields ``lam`` and ``mu``.

    Each field is given by its 16 monomial coefficients, or by a scalar for a
    constant field. Returns the 528 packed lower-triangular entries, or the
    full symmetric 32x32 block when ``full`` is set.
    """
    prec = resolve_precision(precision)
    k_dil = build_elemental_map(StiffnessKind.DILATION, prec, elevated)
    k_shear = build_elemental_map(StiffnessKind.SHEAR, prec, elevated)
    with prec.context():
        flat = k_dil @ _field(lam, prec) + k_shear @ _field(mu, prec)
    return unflatten_symmetric(flat) if full else flat
