# dofhandler.py
"""
Global DOF layout of the C1 elasticity discretisation and the sparsity
pattern of its stiffness matrix.

Every node carries 8 consecutive DOFs (value, d/dx, d/dy, d2/dxdy for each
displacement component); node ``n`` owns DOFs ``8*node_map[n] .. 8*node_map[n]+7``.
The matrix is symmetric, so only its lower triangle is described.
"""
from __future__ import annotations

import logging
from typing import Tuple

import numba
import numpy as np
import scipy.sparse as sp

from c1fem.core.grid import DOFS_PER_NODE, Grid
from c1fem.core.topology import MAX_NEIGHBORS, _adjacent_nodes_kernel
from c1fem.errors import PreconditionError

logger = logging.getLogger(__name__)

_PAIRS_PER_NODE = DOFS_PER_NODE * (DOFS_PER_NODE + 1) // 2 + MAX_NEIGHBORS * DOFS_PER_NODE ** 2


@numba.njit(cache=True)
def _emit_lower_pairs(node_map, nx, ny, rows, cols):
    """
    Fill ``rows``/``cols`` with the lower-triangular (row, col) pairs of every
    node's diagonal block and of each cross block whose row block lies below
    the diagonal. Returns the number of pairs written.
    """
    nb = 8
    buf = np.empty(8, dtype=np.int64)
    k = 0
    for n in range(node_map.shape[0]):
        i = node_map[n] * nb
        for c in range(i, i + nb):
            for r in range(c, i + nb):
                rows[k] = r
                cols[k] = c
                k += 1
        count = _adjacent_nodes_kernel(n, nx, ny, buf)
        for a in range(count):
            j = node_map[buf[a]] * nb
            # each unordered pair is seen from both sides; keep the lower one
            if i > j:
                for r in range(i, i + nb):
                    for c in range(j, j + nb):
                        rows[k] = r
                        cols[k] = c
                        k += 1
    return k


def _check_permutation(grid: Grid, node_map) -> np.ndarray:
    node_map = np.asarray(node_map, dtype=np.int64)
    if node_map.shape != (grid.num_nodes,):
        raise PreconditionError(
            f"node permutation must have {grid.num_nodes} entries, got shape {node_map.shape}"
        )
    if not np.array_equal(np.sort(node_map), np.arange(grid.num_nodes)):
        raise PreconditionError("node permutation is not a bijection on [0, num_nodes)")
    return node_map


def sparsity_pattern(grid: Grid, node_map=None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compressed-row structure of the lower triangle of the global matrix.

    Returns ``(indptr, indices)`` in the ``scipy.sparse`` convention: row ``r``
    owns ``indices[indptr[r]:indptr[r+1]]``, strictly increasing and all
    ``<= r``; ``indptr[-1]`` is the number of stored entries.

    ``node_map`` defaults to the grid's own permutation.
    """
    node_map = grid.node_map if node_map is None else _check_permutation(grid, node_map)
    n_dofs = grid.num_dofs

    capacity = grid.num_nodes * _PAIRS_PER_NODE
    rows = np.empty(capacity, dtype=np.int64)
    cols = np.empty(capacity, dtype=np.int64)
    k = _emit_lower_pairs(node_map, grid.nx, grid.ny, rows, cols)

    # dedupe + (row, col) sort in one go
    keys = np.unique(rows[:k] * n_dofs + cols[:k])
    rows, cols = np.divmod(keys, n_dofs)

    indptr = np.zeros(n_dofs + 1, dtype=np.int64)
    np.cumsum(np.bincount(rows, minlength=n_dofs), out=indptr[1:])
    logger.debug(f"Sparsity of {grid.nx}x{grid.ny} grid: {n_dofs} rows, {cols.size} stored entries.")
    return indptr, cols


def sparsity_matrix(grid: Grid, dtype=np.float64, node_map=None) -> sp.csr_matrix:
    """Lower-triangular CSR matrix with explicit zeros on the pattern, ready for accumulation."""
    indptr, indices = sparsity_pattern(grid, node_map)
    n = grid.num_dofs
    return sp.csr_matrix((np.zeros(indices.size, dtype=dtype), indices, indptr), shape=(n, n))


def bandwidth(grid: Grid, node_map=None) -> int:
    """Largest ``row - col`` over the stored entries."""
    indptr, indices = sparsity_pattern(grid, node_map)
    rows = np.repeat(np.arange(grid.num_dofs), np.diff(indptr))
    return int(np.max(rows - indices))
