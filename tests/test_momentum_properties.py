"""
Properties shared by all momentum formulations: optional accumulators,
accumulation instead of overwriting, pair symmetry and unmodified transport
velocities.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from sphsim.momentum.base import MomentumFormulation

DENS_I, DENS_J = 1.2, 0.9
MASS_I, MASS_J = 0.8, 1.1
E_IJ = np.array([0.6, 0.0, 0.8])
VEL_I = np.array([0.3, -0.2, 0.5])
VEL_J = np.array([-0.1, 0.4, 0.2])


def _call_operation(formulation: MomentumFormulation, name: str, out_i, out_j):
    """Invokes one pair operation with fixed inputs, writing into the given accumulators."""
    sc_ij, sc_ji = formulation.specific_coefficient(DENS_I, DENS_J, MASS_I, MASS_J, -2.0, -1.5)
    if name == "pressure_gradient":
        formulation.pressure_gradient(DENS_I, DENS_J, 3.0, 1.0, sc_ij, sc_ji, E_IJ, out_i, out_j)
    elif name == "shear_forces":
        formulation.shear_forces(DENS_I, DENS_J, VEL_I, VEL_J, 5.0, 0.4, 0.6, 0.1, 0.2, 0.25,
                                 sc_ij, sc_ji, E_IJ, out_i, out_j)
    elif name == "standard_background_pressure":
        formulation.standard_background_pressure(DENS_I, DENS_J, 10.0, 12.0, sc_ij, sc_ji, E_IJ, out_i, out_j)
    elif name == "generalized_background_pressure":
        formulation.generalized_background_pressure(DENS_I, DENS_J, MASS_I, MASS_J, 10.0, 12.0, -2.5, -1.0,
                                                    E_IJ, out_i, out_j)
    elif name == "modified_velocity_contribution":
        formulation.modified_velocity_contribution(DENS_I, DENS_J, VEL_I, VEL_J, VEL_I + [0.1, 0.2, 0.3],
                                                   VEL_J - [0.2, 0.0, 0.1], sc_ij, sc_ji, E_IJ, out_i, out_j)
    else:
        raise AssertionError(f"unknown operation {name}")


OPERATIONS = [
    "pressure_gradient",
    "shear_forces",
    "standard_background_pressure",
    "generalized_background_pressure",
    "modified_velocity_contribution",
]


class TestOptionalAccumulators:

    @pytest.mark.parametrize("operation", OPERATIONS)
    def test_missing_side_i_leaves_side_j_unchanged(self, formulation, operation):
        ref_i, ref_j = np.zeros(3), np.zeros(3)
        _call_operation(formulation, operation, ref_i, ref_j)

        only_j = np.zeros(3)
        _call_operation(formulation, operation, None, only_j)
        assert_array_equal(only_j, ref_j)

    @pytest.mark.parametrize("operation", OPERATIONS)
    def test_missing_side_j_leaves_side_i_unchanged(self, formulation, operation):
        ref_i, ref_j = np.zeros(3), np.zeros(3)
        _call_operation(formulation, operation, ref_i, ref_j)

        only_i = np.zeros(3)
        _call_operation(formulation, operation, only_i, None)
        assert_array_equal(only_i, ref_i)

    @pytest.mark.parametrize("operation", OPERATIONS)
    def test_both_sides_missing_is_a_no_op(self, formulation, operation):
        _call_operation(formulation, operation, None, None)

    @pytest.mark.parametrize("operation", OPERATIONS)
    def test_contributions_are_added(self, formulation, operation):
        ref_i, ref_j = np.zeros(3), np.zeros(3)
        _call_operation(formulation, operation, ref_i, ref_j)

        acc_i = np.array([1.0, -2.0, 3.0])
        acc_j = np.array([-4.0, 5.0, -6.0])
        _call_operation(formulation, operation, acc_i, acc_j)
        assert_allclose(acc_i, ref_i + [1.0, -2.0, 3.0])
        assert_allclose(acc_j, ref_j + [-4.0, 5.0, -6.0])

    def test_inputs_are_not_mutated(self, formulation):
        e_ij, vel_i, vel_j = E_IJ.copy(), VEL_I.copy(), VEL_J.copy()
        sc_ij, sc_ji = formulation.specific_coefficient(DENS_I, DENS_J, MASS_I, MASS_J, -2.0, -1.5)
        formulation.shear_forces(DENS_I, DENS_J, vel_i, vel_j, 5.0, 0.4, 0.6, 0.1, 0.2, 0.25,
                                 sc_ij, sc_ji, e_ij, np.zeros(3), np.zeros(3))
        formulation.modified_velocity_contribution(DENS_I, DENS_J, vel_i, vel_j, vel_j, vel_i,
                                                   sc_ij, sc_ji, e_ij, np.zeros(3), np.zeros(3))
        assert_array_equal(e_ij, E_IJ)
        assert_array_equal(vel_i, VEL_I)
        assert_array_equal(vel_j, VEL_J)


class TestPairSymmetry:

    def test_pressure_gradient_independent_of_pair_order(self, formulation):
        """The acceleration of a particle must not depend on whether it is i or j of the pair."""
        sc_ij, sc_ji = formulation.specific_coefficient(DENS_I, DENS_J, MASS_I, MASS_J, -2.0, -1.5)
        acc_i = np.zeros(3)
        formulation.pressure_gradient(DENS_I, DENS_J, 3.0, 1.0, sc_ij, sc_ji, E_IJ, acc_i, None)

        sw_ij, sw_ji = formulation.specific_coefficient(DENS_J, DENS_I, MASS_J, MASS_I, -1.5, -2.0)
        acc_j_swapped = np.zeros(3)
        formulation.pressure_gradient(DENS_J, DENS_I, 1.0, 3.0, sw_ij, sw_ji, -E_IJ, None, acc_j_swapped)
        assert_allclose(acc_i, acc_j_swapped)

    def test_pressure_gradient_action_reaction(self, formulation):
        """Equal specific coefficients give exactly opposite accelerations along e_ij."""
        sc_ij, sc_ji = formulation.specific_coefficient(1.0, 1.0, 1.0, 1.0, -1.0, -1.0)
        assert sc_ij == sc_ji
        acc_i, acc_j = np.zeros(3), np.zeros(3)
        formulation.pressure_gradient(1.0, 1.0, 2.0, 5.0, sc_ij, sc_ji, E_IJ, acc_i, acc_j)
        assert_allclose(acc_i, -acc_j)
        assert_allclose(np.cross(acc_i, E_IJ), np.zeros(3), atol=1e-14)

    @pytest.mark.parametrize("operation", ["pressure_gradient", "shear_forces", "modified_velocity_contribution"])
    def test_momentum_conserved_for_symmetric_kernel(self, formulation, operation):
        """m_i * acc_i + m_j * acc_j == 0 when both sides see the same kernel gradient."""
        sc_ij, sc_ji = formulation.specific_coefficient(DENS_I, DENS_J, MASS_I, MASS_J, -1.7, -1.7)
        acc_i, acc_j = np.zeros(3), np.zeros(3)
        if operation == "pressure_gradient":
            formulation.pressure_gradient(DENS_I, DENS_J, 3.0, 1.0, sc_ij, sc_ji, E_IJ, acc_i, acc_j)
        elif operation == "shear_forces":
            formulation.shear_forces(DENS_I, DENS_J, VEL_I, VEL_J, 5.0, 0.4, 0.6, 0.1, 0.2, 0.25,
                                     sc_ij, sc_ji, E_IJ, acc_i, acc_j)
        else:
            formulation.modified_velocity_contribution(DENS_I, DENS_J, VEL_I, VEL_J, VEL_I * 2.0, VEL_J * 0.5,
                                                       sc_ij, sc_ji, E_IJ, acc_i, acc_j)
        assert np.linalg.norm(acc_i) > 0.0
        assert_allclose(MASS_I * acc_i + MASS_J * acc_j, np.zeros(3), atol=1e-12)


class TestModifiedVelocity:

    def test_unmodified_velocity_contributes_zero(self, formulation):
        acc_i = np.array([0.5, 0.5, 0.5])
        acc_j = np.zeros(3)
        formulation.modified_velocity_contribution(DENS_I, DENS_J, VEL_I, VEL_J, VEL_I.copy(), None,
                                                   -1.0, -1.0, E_IJ, acc_i, acc_j)
        assert_array_equal(acc_i, [0.5, 0.5, 0.5])
        assert_array_equal(acc_j, np.zeros(3))

    def test_correction_is_along_true_velocity(self, formulation):
        acc_i = np.zeros(3)
        formulation.modified_velocity_contribution(DENS_I, DENS_J, VEL_I, VEL_J, VEL_I + E_IJ, None,
                                                   -1.0, -1.0, E_IJ, acc_i, None)
        assert_allclose(np.cross(acc_i, VEL_I), np.zeros(3), atol=1e-14)
        assert np.linalg.norm(acc_i) > 0.0


class TestShearWithoutViscosity:

    def test_zero_viscosity_adds_nothing(self, formulation):
        acc_i = np.array([1.0, 2.0, 3.0])
        acc_j = np.array([3.0, 2.0, 1.0])
        formulation.shear_forces(DENS_I, DENS_J, VEL_I, VEL_J, 5.0, 0.0, 0.0, 0.0, 0.0, 0.25,
                                 -1.0, -1.0, E_IJ, acc_i, acc_j)
        assert_array_equal(acc_i, [1.0, 2.0, 3.0])
        assert_array_equal(acc_j, [3.0, 2.0, 1.0])
