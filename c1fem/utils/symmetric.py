"""c1fem.utils.symmetric
Packing of symmetric matrices into their lower triangle, column by column.
"""
from functools import lru_cache

import numpy as np

from c1fem.errors import PreconditionError

LOCAL_SIZE = 32   # 16 cardinal functions x 2 displacement components


@lru_cache(maxsize=None)
def _lower_triangle_indices(n: int):
    cols = np.repeat(np.arange(n), np.arange(n, 0, -1))
    rows = np.concatenate([np.arange(c, n) for c in range(n)])
    rows.flags.writeable = False
    cols.flags.writeable = False
    return rows, cols


def lower_triangle_indices(n: int = LOCAL_SIZE):
    """``(rows, cols)`` of the lower triangle in column-major order (``row >= col``)."""
    return _lower_triangle_indices(int(n))


def flat_size(n: int = LOCAL_SIZE) -> int:
    return n * (n + 1) // 2


def flatten_symmetric(matrix) -> np.ndarray:
    K = np.asarray(matrix)
    if K.ndim != 2 or K.shape[0] != K.shape[1]:
        raise PreconditionError(f"expected a square matrix, got shape {K.shape}")
    rows, cols = lower_triangle_indices(K.shape[0])
    return K[rows, cols]


def unflatten_symmetric(flat, n: int = LOCAL_SIZE) -> np.ndarray:
    """
    Rebuild the full ``n x n`` symmetric matrix from its packed lower triangle.
    The input must hold exactly ``n*(n+1)/2`` entries (528 for the elemental block).
    """
    flat = np.asarray(flat)
    expected = flat_size(n)
    if flat.ndim != 1 or flat.shape[0] != expected:
        raise PreconditionError(f"expected {expected} packed entries, got shape {flat.shape}")
    rows, cols = lower_triangle_indices(n)
    K = np.empty((n, n), dtype=flat.dtype)
    K[rows, cols] = flat
    K[cols, rows] = flat
    return K
