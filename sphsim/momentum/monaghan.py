# sphmomentum/sphsim/momentum/monaghan.py
"""
Monaghan momentum formulation.

Classical formulation: the specific coefficient is the kernel gradient scaled by
the neighbour mass, and every term is normalised by the squared density of the
particle it acts on. The shear term combines shear and bulk viscosity into a
diffusion part (along the relative velocity) and a convection part (along e_ij).
"""

from typing import Optional, Tuple

import numpy as np

from sphsim.momentum.base import MomentumFormulation, NegativeDiffusionCoefficientError, Vector
from sphsim.momentum.formulation_kernels import (
    add_scaled, add_transport_term, add_monaghan_shear,
    monaghan_specific_coefficient, monaghan_pressure_factor,
    monaghan_viscosity_coefficients, monaghan_background_factor,
    monaghan_generalized_background,
)

FORMULATION_ID_MONAGHAN = 0

class MomentumFormulationMonaghan(MomentumFormulation):
    """Monaghan SPH momentum formulation (double-length-specific smoothing)."""

    FORMULATION_ID = FORMULATION_ID_MONAGHAN

    def specific_coefficient(self, dens_i: float, dens_j: float, mass_i: float, mass_j: float,
                             dWdrij: float, dWdrji: float) -> Tuple[float, float]:
        speccoeff_ij, speccoeff_ji = monaghan_specific_coefficient(
            float(dens_i), float(dens_j), float(mass_i), float(mass_j), float(dWdrij), float(dWdrji))
        return speccoeff_ij, speccoeff_ji

    def pressure_gradient(self, dens_i: float, dens_j: float, press_i: float, press_j: float,
                          speccoeff_ij: float, speccoeff_ji: float, e_ij: Vector,
                          acc_i: Optional[np.ndarray] = None, acc_j: Optional[np.ndarray] = None):
        fac = monaghan_pressure_factor(float(dens_i), float(dens_j), float(press_i), float(press_j))
        e_ij = np.asarray(e_ij, dtype=np.float64)

        if acc_i is not None: add_scaled(acc_i, -speccoeff_ij * fac, e_ij)
        if acc_j is not None: add_scaled(acc_j, speccoeff_ji * fac, e_ij)

    def shear_forces(self, dens_i: float, dens_j: float, vel_i: Vector, vel_j: Vector,
                     kernelfac: float, visc_i: float, visc_j: float,
                     bulk_visc_i: float, bulk_visc_j: float, abs_rij: float,
                     speccoeff_ij: float, speccoeff_ji: float, e_ij: Vector,
                     acc_i: Optional[np.ndarray] = None, acc_j: Optional[np.ndarray] = None):
        """
        Adds the viscous shear contribution.

        Raises:
            NegativeDiffusionCoefficientError: if 5 * scaled shear viscosity is smaller
                than the bulk viscosity. Nothing is written in that case.
        """
        convection_coeff, diffusion_coeff = monaghan_viscosity_coefficients(
            float(kernelfac), float(visc_i), float(visc_j), float(bulk_visc_i), float(bulk_visc_j))

        # safety check
        if diffusion_coeff < 0.0:
            raise NegativeDiffusionCoefficientError(diffusion_coeff, visc_i, visc_j, bulk_visc_i, bulk_visc_j)

        vel_ij = np.asarray(vel_i, dtype=np.float64) - np.asarray(vel_j, dtype=np.float64)
        e_ij = np.asarray(e_ij, dtype=np.float64)
        dens_i, dens_j, abs_rij = float(dens_i), float(dens_j), float(abs_rij)

        if acc_i is not None:
            add_monaghan_shear(acc_i, speccoeff_ij, convection_coeff, diffusion_coeff,
                               dens_i, dens_j, abs_rij, vel_ij, e_ij)
        if acc_j is not None:
            add_monaghan_shear(acc_j, -speccoeff_ji, convection_coeff, diffusion_coeff,
                               dens_i, dens_j, abs_rij, vel_ij, e_ij)

    def standard_background_pressure(self, dens_i: float, dens_j: float,
                                     bg_press_i: float, bg_press_j: float,
                                     speccoeff_ij: float, speccoeff_ji: float, e_ij: Vector,
                                     mod_acc_i: Optional[np.ndarray] = None,
                                     mod_acc_j: Optional[np.ndarray] = None):
        fac = monaghan_background_factor(float(dens_i), float(dens_j))
        e_ij = np.asarray(e_ij, dtype=np.float64)

        if mod_acc_i is not None: add_scaled(mod_acc_i, -speccoeff_ij * bg_press_i * fac, e_ij)
        if mod_acc_j is not None: add_scaled(mod_acc_j, speccoeff_ji * bg_press_j * fac, e_ij)

    def generalized_background_pressure(self, dens_i: float, dens_j: float,
                                        mass_i: float, mass_j: float,
                                        mod_bg_press_i: float, mod_bg_press_j: float,
                                        mod_dWdrij: float, mod_dWdrji: float, e_ij: Vector,
                                        mod_acc_i: Optional[np.ndarray] = None,
                                        mod_acc_j: Optional[np.ndarray] = None):
        e_ij = np.asarray(e_ij, dtype=np.float64)

        if mod_acc_i is not None:
            fac_i = monaghan_generalized_background(
                float(mod_bg_press_i), float(mass_j), float(dens_i), float(mod_dWdrij))
            add_scaled(mod_acc_i, -fac_i, e_ij)
        if mod_acc_j is not None:
            fac_j = monaghan_generalized_background(
                float(mod_bg_press_j), float(mass_i), float(dens_j), float(mod_dWdrji))
            add_scaled(mod_acc_j, fac_j, e_ij)

    def modified_velocity_contribution(self, dens_i: float, dens_j: float,
                                       vel_i: Vector, vel_j: Vector,
                                       mod_vel_i: Optional[Vector], mod_vel_j: Optional[Vector],
                                       speccoeff_ij: float, speccoeff_ji: float, e_ij: Vector,
                                       acc_i: Optional[np.ndarray] = None,
                                       acc_j: Optional[np.ndarray] = None):
        e_ij = np.asarray(e_ij, dtype=np.float64)
        A_ij_e_ij = np.zeros(3, dtype=np.float64)

        if mod_vel_i is not None:
            add_transport_term(A_ij_e_ij, 1.0 / dens_i, np.asarray(vel_i, dtype=np.float64),
                               np.asarray(mod_vel_i, dtype=np.float64), e_ij)
        if mod_vel_j is not None:
            add_transport_term(A_ij_e_ij, 1.0 / dens_j, np.asarray(vel_j, dtype=np.float64),
                               np.asarray(mod_vel_j, dtype=np.float64), e_ij)

        if acc_i is not None: add_scaled(acc_i, speccoeff_ij, A_ij_e_ij)
        if acc_j is not None: add_scaled(acc_j, -speccoeff_ji, A_ij_e_ij)
