import numpy as np
import pytest
import scipy.sparse as sp

from c1fem.core import Grid, bandwidth, sparsity_matrix, sparsity_pattern
from c1fem.errors import PreconditionError

INDPTR_1X1 = [
    0, 1, 3, 6, 10, 15, 21, 28, 36, 45, 55, 66, 78, 91, 105, 120, 136, 153,
    171, 190, 210, 231, 253, 276, 300, 325, 351, 378, 406, 435, 465, 496, 528,
]


def _reference_lower_pattern(grid):
    """Dense lower-triangular coupling built element by element."""
    n = grid.num_dofs
    dense = np.zeros((n, n), dtype=bool)
    for e in range(grid.num_elements):
        dofs = np.concatenate([grid.node_dofs(v) for v in grid.element_nodes(e)])
        dense[np.ix_(dofs, dofs)] = True
    return np.tril(dense)


def _as_dense(grid, indptr, indices):
    n = grid.num_dofs
    M = sp.csr_matrix((np.ones(indices.size, dtype=bool), indices, indptr), shape=(n, n))
    return M.toarray()


def test_single_element_is_dense_lower_triangle():
    indptr, indices = sparsity_pattern(Grid(1, 1))
    assert indptr.tolist() == INDPTR_1X1
    assert indices.tolist() == [j for i in range(32) for j in range(i + 1)]


@pytest.mark.parametrize("nx, ny", [(2, 3), (4, 1), (3, 3)])
def test_csr_invariants(nx, ny):
    grid = Grid(nx, ny)
    indptr, indices = sparsity_pattern(grid)
    assert len(indptr) == grid.num_dofs + 1
    assert indptr[0] == 0 and indptr[-1] == indices.size
    assert np.all(np.diff(indptr) > 0)
    for r in range(grid.num_dofs):
        row = indices[indptr[r]:indptr[r + 1]]
        assert np.all(np.diff(row) > 0)
        assert row[-1] == r


@pytest.mark.parametrize("nx, ny", [(2, 3), (3, 3), (5, 1)])
def test_pattern_matches_element_coupling(nx, ny):
    grid = Grid(nx, ny)
    indptr, indices = sparsity_pattern(grid)
    assert np.array_equal(_as_dense(grid, indptr, indices), _reference_lower_pattern(grid))


def test_entry_count():
    # 36 per node block, 64 per adjacent node pair
    grid = Grid(3, 2)
    n_pairs = sum(
        1 for n in range(grid.num_nodes) for m in range(n)
        if max(abs(n // 4 - m // 4), abs(n % 4 - m % 4)) == 1
    )
    _, indices = sparsity_pattern(grid)
    assert indices.size == 36 * grid.num_nodes + 64 * n_pairs


def test_custom_node_map():
    grid = Grid(2, 2)
    identity = np.arange(grid.num_nodes)
    indptr, indices = sparsity_pattern(grid, identity)
    ref = np.zeros((grid.num_dofs,) * 2, dtype=bool)
    for e in range(grid.num_elements):
        dofs = np.concatenate([np.arange(8 * v, 8 * v + 8) for v in grid.element_nodes(e)])
        ref[np.ix_(dofs, dofs)] = True
    assert np.array_equal(_as_dense(grid, indptr, indices), np.tril(ref))


@pytest.mark.parametrize("node_map", [np.arange(8), np.zeros(9, dtype=int), np.arange(1, 10)])
def test_invalid_node_map(node_map):
    with pytest.raises(PreconditionError):
        sparsity_pattern(Grid(2, 2), node_map)


def test_sparsity_matrix_holds_explicit_zeros():
    grid = Grid(2, 2)
    K = sparsity_matrix(grid)
    indptr, indices = sparsity_pattern(grid)
    assert K.shape == (grid.num_dofs, grid.num_dofs)
    assert K.nnz == indices.size
    assert not K.data.any()
    assert np.array_equal(K.indptr, indptr)
    assert np.array_equal(K.indices, indices)
    assert sparsity_matrix(grid, dtype=np.float32).dtype == np.float32


def test_bandwidth():
    assert bandwidth(Grid(1, 1)) == 31
    grid = Grid(3, 3)
    # row-major numbering couples nodes 5 apart (north-east neighbour)
    assert bandwidth(grid, np.arange(grid.num_nodes)) == 5 * 8 + 7
    # renumbered: nodes 12 and 9 end up 8 apart
    assert bandwidth(grid) == 8 * 8 + 7
