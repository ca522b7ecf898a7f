# tests/test_noise.py
"""
Tests for the gradient noise field and the table policy.
"""
import numpy as np
import pytest

from hexbloop.noise import NoiseField, NoiseMode, noise_for, shared_noise_field
from hexbloop.seeds import derive_dna


class TestNoiseField:

    def test_range(self):
        field = NoiseField(1234)
        for i in range(200):
            v = field.noise2d(i * 0.173, i * 0.291 - 5.0)
            assert 0.0 <= v <= 1.0

    def test_lattice_points_are_mid_grey(self):
        field = NoiseField(1234)
        assert field.noise2d(3.0, 7.0) == 0.5
        assert field.noise2d(-2.0, 0.0) == 0.5

    def test_same_seed_same_table(self):
        assert np.array_equal(NoiseField(9).permutation, NoiseField(9).permutation)

    def test_different_seed_different_table(self):
        assert not np.array_equal(NoiseField(9).permutation, NoiseField(10).permutation)

    def test_permutation_read_only(self):
        field = NoiseField(1)
        with pytest.raises(ValueError):
            field.permutation[0] = 5

    def test_grid_matches_scalar(self):
        field = NoiseField(77)
        xs = np.array([0.1, 1.7, 12.25, -3.4])
        ys = np.array([0.9, 4.2, 0.5, 8.8])
        grid = field.noise_grid(xs, ys)
        scalar = [field.noise2d(x, y) for x, y in zip(xs, ys)]
        assert np.allclose(grid, scalar)

    def test_turbulence_grid_matches_scalar(self):
        field = NoiseField(77)
        grid = field.turbulence_grid(np.array([0.3, 2.6]), np.array([1.1, 0.4]), octaves=3)
        assert grid[0] == pytest.approx(field.turbulence(0.3, 1.1, octaves=3))
        assert grid[1] == pytest.approx(field.turbulence(2.6, 0.4, octaves=3))

    def test_field_shape(self):
        values = NoiseField(5).field(32, 16, scale=0.05)
        assert values.shape == (16, 32)
        assert values.min() >= 0.0
        assert values.max() <= 1.0

    def test_smooth_across_cells(self):
        field = NoiseField(1)
        xs = np.linspace(0.0, 8.0, 8001)
        for y in (0.25, 3.6):
            values = np.array([field.noise2d(x, y) for x in xs])
            assert np.abs(np.diff(values)).max() < 0.01


class TestNoisePolicy:

    def test_parse(self):
        assert NoiseMode.parse(None) is NoiseMode.FIXED
        assert NoiseMode.parse("per_call") is NoiseMode.PER_CALL
        assert NoiseMode.parse("FIXED") is NoiseMode.FIXED

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            NoiseMode.parse("chaotic")

    def test_shared_field_is_reused(self):
        assert shared_noise_field() is shared_noise_field()

    def test_fixed_mode_ignores_dna(self):
        a = noise_for(NoiseMode.FIXED, derive_dna("one"))
        b = noise_for(NoiseMode.FIXED, derive_dna("two"))
        assert a is b

    def test_per_call_mode_depends_on_seed(self):
        dna = derive_dna("one")
        a = noise_for(NoiseMode.PER_CALL, dna)
        b = noise_for(NoiseMode.PER_CALL, dna)
        c = noise_for(NoiseMode.PER_CALL, dna.with_seed(dna.primary + 1))
        assert np.array_equal(a.permutation, b.permutation)
        assert not np.array_equal(a.permutation, c.permutation)
