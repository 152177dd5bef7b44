import matplotlib.pyplot as plt
import numpy as np
from matplotlib.collections import LineCollection

from c1fem.core.dofhandler import sparsity_matrix


def _grid_lines(grid):
    xs = grid.x0 + grid.dx * np.arange(grid.nx + 1)
    ys = grid.y0 + grid.dy * np.arange(grid.ny + 1)
    segs = [[(x, ys[0]), (x, ys[-1])] for x in xs]
    segs += [[(xs[0], y), (xs[-1], y)] for y in ys]
    return segs


def plot_node_numbering(grid, ax=None, *, title="Node numbering", fontsize=8):
    """
    Draws the grid and labels every node with the number it receives in the
    DOF layout (``grid.node_map``).
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 6))
    else:
        fig = ax.figure
    ax.set_aspect('equal')
    ax.set_title(title, fontsize=10)

    ax.add_collection(LineCollection(_grid_lines(grid), colors='0.6', linewidths=0.8, zorder=1))
    pts = grid.node_coordinates()
    ax.plot(pts[:, 0], pts[:, 1], 'ko', markersize=3, zorder=2)
    for (x, y), new in zip(pts, grid.node_map):
        ax.annotate(str(int(new)), (x, y), xytext=(3, 3), textcoords='offset points',
                    fontsize=fontsize, color='blue', zorder=3)
    ax.autoscale_view()
    return fig, ax


def plot_sparsity(grid, ax=None, *, title="Lower-triangular sparsity", markersize=1.0):
    """Spy plot of every stored entry of the lower-triangular pattern."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 6))
    else:
        fig = ax.figure
    K = sparsity_matrix(grid)
    ax.spy(K, precision='present', markersize=markersize)
    ax.set_title(f"{title} ({K.nnz} entries)", fontsize=10)
    return fig, ax
