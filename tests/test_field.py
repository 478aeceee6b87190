import math

import numpy as np
import pytest

from solislab.field import (
    LCG,
    RIGID_KERNEL,
    SMOOTH_KERNEL,
    Mulberry32,
    XorShift32,
    apply_kernel,
    apply_lattice,
    compute_holographic_bulk,
    cosine_sim01,
    generate_particles,
    lattice_from_seed,
    resonance_stats,
    seeded_possibilities,
)


def test_lcg_recurrence():
    rand = LCG(1)
    state = (1 * 1664525 + 1013904223) % 2 ** 32
    assert rand.next() == state / 0xFFFFFFFF
    state = (state * 1664525 + 1013904223) % 2 ** 32
    assert rand.next() == state / 0xFFFFFFFF


def test_xorshift_first_value():
    assert XorShift32(1).next() == 270369 / 0xFFFFFFFF
    assert XorShift32(0).state != 0


def test_generators_are_deterministic():
    a = Mulberry32(42)
    b = Mulberry32(42)
    draws = [a.next() for _ in range(50)]
    assert draws == [b.next() for _ in range(50)]
    assert all(0.0 <= d < 1.0 for d in draws)


def test_cosine_sim01():
    assert cosine_sim01([1, 0], [1, 0]) == pytest.approx(1.0)
    assert cosine_sim01([1, 0], [-1, 0]) == pytest.approx(0.0)
    assert cosine_sim01([1, 0], [0, 1]) == pytest.approx(0.5)
    assert cosine_sim01([0, 0], [1, 1]) == 0.0
    assert cosine_sim01([1, 2, 99], [1, 2]) == pytest.approx(1.0)


def test_resonance_stats():
    values, mean, variance = resonance_stats([[1, 0], [0, 1]], [1, 0])
    assert values.tolist() == pytest.approx([1.0, 0.5])
    assert mean == pytest.approx(0.75)
    assert variance == pytest.approx(0.0625)
    assert resonance_stats([], [1, 0])[1:] == (0.0, 0.0)


def test_lattice_and_particles():
    lattice = lattice_from_seed(11, 3)
    assert len(lattice) == 3
    assert sum(lattice) == pytest.approx(1.0)
    assert lattice == lattice_from_seed(11, 3)

    particles = generate_particles(11, 5, 3)
    assert [p.id for p in particles] == [f"p-11-{i}" for i in range(5)]
    assert all(len(p.features) == 3 and p.energy == 1.0 for p in particles)

    for p in seeded_possibilities(7, 4, 3):
        assert math.hypot(*p.features) == pytest.approx(1.0)


def test_rigid_kernel_annihilates_constant_field():
    grid = 5
    out = apply_kernel(np.full(grid * grid, 0.7), grid, RIGID_KERNEL)
    np.testing.assert_allclose(out, 0.0, atol=1e-12)


def test_smooth_kernel_preserves_constant_field():
    grid = 5
    out = apply_lattice(np.full(grid * grid, 0.7), grid, kernel_mix=0.0)
    np.testing.assert_allclose(out, 0.7 * SMOOTH_KERNEL.sum() / np.abs(SMOOTH_KERNEL).sum())


def test_holographic_bulk_is_deterministic():
    lattice = lattice_from_seed(23, 3)
    first = compute_holographic_bulk(lattice, 12, 2, 0.1, 0.5)
    second = compute_holographic_bulk(lattice, 12, 2, 0.1, 0.5)
    assert first.grid == 24
    bulk = first.field[0]
    assert bulk.shape == (24 * 24,)
    assert bulk.min() >= 0.0 and bulk.max() <= 1.0
    np.testing.assert_array_equal(bulk, second.field[0])
    assert not bulk.flags.writeable


def test_holographic_bulk_depends_on_inputs():
    lattice = lattice_from_seed(23, 3)
    base = compute_holographic_bulk(lattice, 12, 1, 0.0, 0.0).field[0]
    mixed = compute_holographic_bulk(lattice, 12, 1, 0.0, 1.0).field[0]
    other = compute_holographic_bulk(lattice_from_seed(37, 3), 12, 1, 0.0, 0.0).field[0]
    assert not np.array_equal(base, mixed)
    assert not np.array_equal(base, other)
    assert compute_holographic_bulk(lattice, 12, 0, 0.0, 0.0).grid == 16
