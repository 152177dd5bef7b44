"""c1fem.utils.precision
Numeric precisions the quadrature, basis and stiffness-map code is written
against.

Every numeric routine takes a ``precision`` argument and resolves it here into
one of two frozen, hashable objects:

* :class:`WorkingPrecision` wraps a numpy floating dtype (``float32``,
  ``float64`` or ``longdouble``) and produces ordinary numpy arrays.
* :class:`MultiPrecision` wraps a number of decimal digits and produces numpy
  *object* arrays of ``mpmath.mpf`` values.  All arithmetic on them has to run
  inside :meth:`MultiPrecision.context`, otherwise mpmath rounds to its global
  precision.

Both expose the same small surface (``one``, ``sqrt``, ``rational``,
``asarray``, ``round``, ``context``, ``digits``) so an algorithm is written once
and instantiated for any of them.
"""
from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from typing import Union

import mpmath
import numpy as np

from c1fem.errors import ConfigurationError

_SUPPORTED_DTYPES = (np.dtype(np.float32), np.dtype(np.float64), np.dtype(np.longdouble))


@dataclass(frozen=True)
class WorkingPrecision:
    dtype: np.dtype

    @property
    def digits(self) -> int:
        return int(np.finfo(self.dtype).precision)

    def context(self):
        return nullcontext()

    def one(self):
        return self.dtype.type(1)

    def sqrt(self, value):
        return np.sqrt(value)

    def rational(self, p: int, q: int = 1):
        return self.dtype.type(int(p)) / self.dtype.type(int(q))

    def scalar(self, value):
        return self.asarray(value)[()]

    def asarray(self, values) -> np.ndarray:
        arr = np.asarray(values)
        if arr.dtype == object:
            return self.round(arr)
        return arr.astype(self.dtype, copy=False)

    def round(self, values) -> np.ndarray:
        """Round (possibly multi-precision) values to this dtype."""
        arr = np.asarray(values)
        if arr.dtype != object:
            return arr.astype(self.dtype)
        if self.dtype == np.dtype(np.longdouble):
            # float() would drop the extra bits of the extended type
            conv = lambda v: self.dtype.type(mpmath.nstr(v, 40))
        else:
            conv = lambda v: float(v)
        flat = [conv(v) for v in arr.ravel()]
        return np.array(flat, dtype=self.dtype).reshape(arr.shape)

    def __str__(self) -> str:
        return self.dtype.name


@dataclass(frozen=True)
class MultiPrecision:
    dps: int = 50

    def __post_init__(self):
        if isinstance(self.dps, bool) or not isinstance(self.dps, (int, np.integer)):
            raise ConfigurationError(f"MultiPrecision.dps must be an integer, got {self.dps!r}")
        if self.dps < 1:
            raise ConfigurationError(f"MultiPrecision.dps must be positive, got {self.dps}")

    @property
    def digits(self) -> int:
        return int(self.dps)

    def context(self):
        return mpmath.workdps(int(self.dps))

    def one(self):
        return mpmath.mpf(1)

    def sqrt(self, value):
        return mpmath.sqrt(value)

    def rational(self, p: int, q: int = 1):
        with self.context():
            return mpmath.mpf(int(p)) / int(q)

    def _convert(self, value):
        if isinstance(value, np.floating) and not isinstance(value, np.float64):
            value = float(value)
        return mpmath.mpf(value)

    def scalar(self, value):
        with self.context():
            return self._convert(value)

    def asarray(self, values) -> np.ndarray:
        arr = np.array(values, dtype=object)
        with self.context():
            return np.vectorize(self._convert, otypes=[object])(arr)

    def round(self, values) -> np.ndarray:
        return self.asarray(values)

    def __str__(self) -> str:
        return f"mpmath[{self.dps} dps]"


Precision = Union[WorkingPrecision, MultiPrecision]


def resolve_precision(precision) -> Precision:
    """
    Turn a user-facing precision selector into a precision object.

    Accepts a precision object, a numpy floating dtype (or anything
    ``numpy.dtype`` understands, e.g. ``"float32"``) or ``mpmath.mpf``, which
    stands for multi-precision at the current ``mpmath.mp.dps``.
    """
    if isinstance(precision, (WorkingPrecision, MultiPrecision)):
        return precision
    if precision is None:
        raise ConfigurationError("precision must be given explicitly")
    if precision is mpmath.mpf:
        return MultiPrecision(int(mpmath.mp.dps))
    try:
        dtype = np.dtype(precision)
    except TypeError:
        raise ConfigurationError(f"unsupported precision {precision!r}") from None
    if dtype not in _SUPPORTED_DTYPES:
        raise ConfigurationError(
            f"unsupported precision {dtype.name}; choose float32, float64, longdouble "
            f"or MultiPrecision(dps)"
        )
    return WorkingPrecision(dtype)


def infer_precision(*values) -> Precision:
    """Precision implied by the given scalars or arrays (mpf wins, ints mean float64)."""
    arrays = [np.asarray(v) for v in values]
    if any(a.dtype == object for a in arrays):
        return MultiPrecision(int(mpmath.mp.dps))
    dtype = np.result_type(*arrays)
    if dtype.kind in "biu":
        dtype = np.dtype(np.float64)
    return resolve_precision(dtype)


def pick_precision(precision, *values) -> Precision:
    if precision is None:
        return infer_precision(*values)
    return resolve_precision(precision)


def readonly(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr
