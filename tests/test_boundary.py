import numpy as np

from solislab.analysis.boundary import boundary_indices, boundary_mask, boundary_ring, interior_mask


def test_ring_length_and_order():
    ring = boundary_ring(4)
    assert len(ring) == 12
    coords = [(p.x, p.y) for p in ring]
    assert coords == [
        (0, 0), (1, 0), (2, 0), (3, 0),
        (3, 1), (3, 2),
        (3, 3), (2, 3), (1, 3), (0, 3),
        (0, 2), (0, 1),
    ]
    assert all(p.index == p.y * 4 + p.x for p in ring)


def test_ring_cells_are_unique_and_cover_mask():
    for grid in (2, 3, 5, 9):
        idx = boundary_indices(grid)
        assert idx.size == 4 * grid - 4
        assert len(set(idx.tolist())) == idx.size
        assert set(idx.tolist()) == set(np.flatnonzero(boundary_mask(grid)).tolist())


def test_small_grids():
    assert boundary_ring(1) == []
    assert boundary_ring(0) == []
    assert boundary_mask(1).tolist() == [True]


def test_interior_mask():
    inner = interior_mask(4).reshape(4, 4)
    assert inner.sum() == 4
    assert inner[1:3, 1:3].all()
    assert not interior_mask(2).any()
