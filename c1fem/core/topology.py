"""c1fem.core.topology
Node adjacency of a structured nx-by-ny grid and the bandwidth-reducing node
numbering built on it.

Reference node ``n`` sits at ``row = n // (nx + 1)``, ``col = n % (nx + 1)``:
row-major, bottom row first, left to right.  Two nodes are adjacent when they
share an element, corner contact included, so interior nodes have 8 neighbours.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cmp_to_key
from typing import List, Tuple

import numba
import numpy as np

from c1fem.errors import ConfigurationError

logger = logging.getLogger(__name__)

MAX_NEIGHBORS = 8

# counter-clockwise, starting at the bottom-left diagonal: SW S SE E NE N NW W
_DCOL = np.array([-1, 0, 1, 1, 1, 0, -1, -1], dtype=np.int64)
_DROW = np.array([-1, -1, -1, 0, 1, 1, 1, 0], dtype=np.int64)


def check_extents(nx, ny) -> None:
    for name, n in (("nx", nx), ("ny", ny)):
        if isinstance(n, (bool, np.bool_)) or not isinstance(n, (int, np.integer)):
            raise ConfigurationError(f"{name} must be an integer, got {n!r}")
        if n < 1:
            raise ConfigurationError(f"{name} must be at least 1, got {n}")


@numba.njit(cache=True)
def _adjacent_nodes_kernel(node, nx, ny, out):
    """Write the neighbours of ``node`` into ``out``; return how many there are."""
    stride = nx + 1
    n_nodes = stride * (ny + 1)
    col = node % stride
    count = 0
    for k in range(8):
        dc = _DCOL[k]
        if (dc < 0 and col == 0) or (dc > 0 and col == nx):
            continue
        cand = node + _DROW[k] * stride + dc
        if 0 <= cand < n_nodes:
            out[count] = cand
            count += 1
    return count


def adjacent_nodes(node: int, nx: int, ny: int) -> np.ndarray:
    """
    Reference indices of the nodes sharing an element with ``node``, in
    counter-clockwise order from the bottom-left diagonal. Boundary nodes
    have fewer than 8.
    """
    check_extents(nx, ny)
    n_nodes = (nx + 1) * (ny + 1)
    if not 0 <= node < n_nodes:
        raise IndexError(node)
    out = np.empty(MAX_NEIGHBORS, dtype=np.int64)
    return out[:_adjacent_nodes_kernel(int(node), int(nx), int(ny), out)]


class ScratchPool:
    """Neighbour buffers recycled within one traversal."""

    def __init__(self, size: int = MAX_NEIGHBORS):
        self.size = size
        self._free: List[np.ndarray] = []

    def take(self) -> np.ndarray:
        return self._free.pop() if self._free else np.empty(self.size, dtype=np.int64)

    def give(self, buf: np.ndarray) -> None:
        self._free.append(buf)


@dataclass(frozen=True)
class Candidate:
    node: int
    numbered: Tuple[int, ...]   # new indices of already numbered neighbours, descending
    degree: int


def compare_candidates(a: Candidate, b: Candidate) -> int:
    """
    Order in which freshly discovered nodes receive their numbers.

    1. ``numbered`` compared lexicographically, larger first: a node tied to
       recently numbered nodes goes first.
    2. ``degree``, smaller first.
    3. Reference index, smaller first.

    Negative when ``a`` goes before ``b``.
    """
    if a.numbered != b.numbered:
        return -1 if a.numbered > b.numbered else 1
    if a.degree != b.degree:
        return -1 if a.degree < b.degree else 1
    return (a.node > b.node) - (a.node < b.node)


def renumber_nodes(nx: int, ny: int) -> np.ndarray:
    """
    Reverse-Cuthill-McKee style numbering of the grid nodes.

    Reference node 0 gets number 0. Nodes are then expanded in the order they
    were numbered; the unnumbered neighbours of the expanded node are sorted
    with :func:`compare_candidates` and numbered in that order.

    Returns ``node_map`` with ``node_map[reference] = new index``.
    """
    check_extents(nx, ny)
    nx, ny = int(nx), int(ny)
    n_nodes = (nx + 1) * (ny + 1)

    node_map = np.full(n_nodes, -1, dtype=np.int64)
    node_map[0] = 0
    order = [0]
    pool = ScratchPool()
    head = 0
    while len(order) < n_nodes:
        buf = pool.take()
        count = _adjacent_nodes_kernel(order[head], nx, ny, buf)
        candidates = []
        for n in buf[:count]:
            if node_map[n] >= 0:
                continue
            nbuf = pool.take()
            degree = _adjacent_nodes_kernel(n, nx, ny, nbuf)
            assigned = node_map[nbuf[:degree]]
            numbered = tuple(sorted(assigned[assigned >= 0].tolist(), reverse=True))
            pool.give(nbuf)
            candidates.append(Candidate(int(n), numbered, int(degree)))
        pool.give(buf)

        candidates.sort(key=cmp_to_key(compare_candidates))
        for cand in candidates:
            node_map[cand.node] = len(order)
            order.append(cand.node)
        head += 1

    logger.debug(f"Renumbered {n_nodes} nodes of a {nx}x{ny} grid.")
    return node_map
