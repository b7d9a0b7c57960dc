"""
Tests for the KD-tree based neighbor pair construction.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from sphsim.neighbor_pairs import build_neighbor_pairs
from sphsim.kernel.spline_kernels import CubicSplineKernel


class TestBuildNeighborPairs:

    def test_pairs_within_support_radius(self, cubic_kernel):
        positions = np.array([[0.0, 0.0, 0.0], [0.1, 0.0, 0.0], [0.5, 0.0, 0.0], [0.1, 0.2, 0.0]])
        pairs = build_neighbor_pairs(positions, cubic_kernel)

        assert len(pairs) == 3
        assert_array_equal(pairs.i, [0, 0, 1])
        assert_array_equal(pairs.j, [1, 3, 3])
        assert_allclose(pairs.abs_rij, [0.1, np.hypot(0.1, 0.2), 0.2])
        assert_allclose(pairs.e_ij[0], [1.0, 0.0, 0.0])
        assert_allclose(pairs.e_ij[2], [0.0, 1.0, 0.0])
        assert_allclose(pairs.dWdrij, cubic_kernel.dWdrij(pairs.abs_rij))
        assert_array_equal(pairs.dWdrij, pairs.dWdrji)

    def test_unit_vectors_point_from_i_to_j(self, cubic_kernel):
        rng = np.random.default_rng(3)
        positions = rng.uniform(0.0, 0.5, (30, 3))
        pairs = build_neighbor_pairs(positions, cubic_kernel)

        assert len(pairs) > 0
        assert_allclose(np.linalg.norm(pairs.e_ij, axis=1), 1.0)
        r_ij = positions[pairs.j] - positions[pairs.i]
        assert_allclose(pairs.e_ij * pairs.abs_rij[:, None], r_ij)
        assert np.all(pairs.i < pairs.j)
        assert np.all(pairs.abs_rij <= cubic_kernel.support_radius)

    def test_coincident_particles_skipped(self, cubic_kernel, capsys):
        positions = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 0.0], [0.1, 0.0, 0.0]])
        pairs = build_neighbor_pairs(positions, cubic_kernel)

        assert len(pairs) == 2
        assert np.all(pairs.abs_rij > 0.0)
        assert "coincident" in capsys.readouterr().out

    def test_no_pairs(self, cubic_kernel):
        positions = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
        pairs = build_neighbor_pairs(positions, cubic_kernel)
        assert len(pairs) == 0
        assert pairs.e_ij.shape == (0, 3)

    def test_requires_kernel_setup(self):
        with pytest.raises(ValueError, match="set up"):
            build_neighbor_pairs(np.zeros((2, 3)), CubicSplineKernel({"support_radius": 0.3}))

    def test_rejects_bad_positions_shape(self, cubic_kernel):
        with pytest.raises(ValueError, match="shape"):
            build_neighbor_pairs(np.zeros((4, 2)), cubic_kernel)
