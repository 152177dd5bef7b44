import matplotlib.pyplot as plt
import pytest

from c1fem.core import Grid, sparsity_pattern
from c1fem.io.visualization import plot_node_numbering, plot_sparsity


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_node_numbering_labels_every_node():
    grid = Grid(3, 3)
    fig, ax = plot_node_numbering(grid)
    labels = sorted(int(t.get_text()) for t in ax.texts)
    assert labels == list(range(grid.num_nodes))
    assert ax.texts[3].get_text() == str(grid.node_map[3])


def test_node_numbering_on_given_axes():
    fig, ax = plt.subplots()
    out_fig, out_ax = plot_node_numbering(Grid(2, 1), ax=ax, title="numbering")
    assert out_ax is ax and out_fig is fig
    assert ax.get_title() == "numbering"


def test_sparsity_plot_marks_every_entry():
    grid = Grid(2, 2)
    _, indices = sparsity_pattern(grid)
    fig, ax = plot_sparsity(grid)
    (line,) = ax.get_lines()
    assert len(line.get_xdata()) == indices.size
    assert str(indices.size) in ax.get_title()
