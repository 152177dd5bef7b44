import math
from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

from c1fem.core.topology import check_extents, renumber_nodes
from c1fem.errors import ConfigurationError

DOFS_PER_NODE = 8


@dataclass(frozen=True)
class Grid:
    """
    Structured grid of ``nx`` x ``ny`` rectangular elements of size
    ``dx`` x ``dy``; ``(x0, y0)`` is the bottom-left corner of element 0.

    Elements are numbered left to right, bottom to top, and so are the
    reference nodes. ``node_map[n]`` is the number node ``n`` actually gets
    in the DOF layout; it is computed on construction and is read-only.
    """
    nx: int
    ny: int
    dx: float = 1.0
    dy: float = 1.0
    x0: float = 0.0
    y0: float = 0.0
    node_map: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        check_extents(self.nx, self.ny)
        for name in ("dx", "dy", "x0", "y0"):
            value = getattr(self, name)
            try:
                ok = math.isfinite(value)
            except TypeError:
                ok = False
            if not ok:
                raise ConfigurationError(f"{name} must be a finite number, got {value!r}")
        if self.dx <= 0 or self.dy <= 0:
            raise ConfigurationError(f"element size must be positive, got dx={self.dx}, dy={self.dy}")

        node_map = renumber_nodes(self.nx, self.ny)
        node_map.flags.writeable = False
        object.__setattr__(self, "node_map", node_map)

    @property
    def num_elements(self) -> int:
        return self.nx * self.ny

    @property
    def num_nodes(self) -> int:
        return (self.nx + 1) * (self.ny + 1)

    @property
    def num_dofs(self) -> int:
        return DOFS_PER_NODE * self.num_nodes

    def element_nodes(self, element: int) -> Tuple[int, int, int, int]:
        """Reference nodes of ``element``, counter-clockwise from the bottom left."""
        if not 0 <= element < self.num_elements:
            raise IndexError(element)
        row, col = divmod(element, self.nx)
        bl = row * (self.nx + 1) + col
        tl = bl + self.nx + 1
        return bl, bl + 1, tl + 1, tl

    def node_coordinates(self) -> np.ndarray:
        """Physical ``(x, y)`` of every reference node, shape ``(num_nodes, 2)``."""
        rows, cols = np.divmod(np.arange(self.num_nodes), self.nx + 1)
        return np.column_stack([self.x0 + cols * self.dx, self.y0 + rows * self.dy])

    def node_dofs(self, node: int) -> np.ndarray:
        """The 8 consecutive global DOF indices owned by reference node ``node``."""
        start = int(self.node_map[node]) * DOFS_PER_NODE
        return np.arange(start, start + DOFS_PER_NODE)
