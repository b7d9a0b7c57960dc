# sphmomentum/sphsim/momentum/adami.py
"""
Adami momentum formulation.

Single-length-specific smoothing: the specific coefficient uses the sum of the
squared particle volumes (m/rho)^2, the pressure term an inverse-density weighted
average of both pressures, and the shear term the harmonic mean of both
viscosities without any bulk viscosity contribution.
"""

from typing import Optional, Tuple

import numpy as np

from sphsim.momentum.base import MomentumFormulation, Vector
from sphsim.momentum.formulation_kernels import (
    add_scaled, add_transport_term,
    adami_specific_coefficient, adami_pressure_factor, adami_viscosity,
    adami_generalized_background,
)

FORMULATION_ID_ADAMI = 1

class MomentumFormulationAdami(MomentumFormulation):
    """Adami SPH momentum formulation (single-length-specific smoothing)."""

    FORMULATION_ID = FORMULATION_ID_ADAMI

    def specific_coefficient(self, dens_i: float, dens_j: float, mass_i: float, mass_j: float,
                             dWdrij: float, dWdrji: float) -> Tuple[float, float]:
        speccoeff_ij, speccoeff_ji = adami_specific_coefficient(
            float(dens_i), float(dens_j), float(mass_i), float(mass_j), float(dWdrij), float(dWdrji))
        return speccoeff_ij, speccoeff_ji

    def pressure_gradient(self, dens_i: float, dens_j: float, press_i: float, press_j: float,
                          speccoeff_ij: float, speccoeff_ji: float, e_ij: Vector,
                          acc_i: Optional[np.ndarray] = None, acc_j: Optional[np.ndarray] = None):
        fac = adami_pressure_factor(float(dens_i), float(dens_j), float(press_i), float(press_j))
        e_ij = np.asarray(e_ij, dtype=np.float64)

        if acc_i is not None: add_scaled(acc_i, -speccoeff_ij * fac, e_ij)
        if acc_j is not None: add_scaled(acc_j, speccoeff_ji * fac, e_ij)

    def shear_forces(self, dens_i: float, dens_j: float, vel_i: Vector, vel_j: Vector,
                     kernelfac: float, visc_i: float, visc_j: float,
                     bulk_visc_i: float, bulk_visc_j: float, abs_rij: float,
                     speccoeff_ij: float, speccoeff_ji: float, e_ij: Vector,
                     acc_i: Optional[np.ndarray] = None, acc_j: Optional[np.ndarray] = None):
        # no contribution at all unless both sides are viscous
        if not (visc_i > 0.0 and visc_j > 0.0):
            return

        viscosity = adami_viscosity(float(visc_i), float(visc_j))
        vel_ij = np.asarray(vel_i, dtype=np.float64) - np.asarray(vel_j, dtype=np.float64)
        fac = viscosity / abs_rij

        if acc_i is not None: add_scaled(acc_i, speccoeff_ij * fac, vel_ij)
        if acc_j is not None: add_scaled(acc_j, -speccoeff_ji * fac, vel_ij)

    def standard_background_pressure(self, dens_i: float, dens_j: float,
                                     bg_press_i: float, bg_press_j: float,
                                     speccoeff_ij: float, speccoeff_ji: float, e_ij: Vector,
                                     mod_acc_i: Optional[np.ndarray] = None,
                                     mod_acc_j: Optional[np.ndarray] = None):
        e_ij = np.asarray(e_ij, dtype=np.float64)

        if mod_acc_i is not None: add_scaled(mod_acc_i, -speccoeff_ij * bg_press_i, e_ij)
        if mod_acc_j is not None: add_scaled(mod_acc_j, speccoeff_ji * bg_press_j, e_ij)

    def generalized_background_pressure(self, dens_i: float, dens_j: float,
                                        mass_i: float, mass_j: float,
                                        mod_bg_press_i: float, mod_bg_press_j: float,
                                        mod_dWdrij: float, mod_dWdrji: float, e_ij: Vector,
                                        mod_acc_i: Optional[np.ndarray] = None,
                                        mod_acc_j: Optional[np.ndarray] = None):
        e_ij = np.asarray(e_ij, dtype=np.float64)

        if mod_acc_i is not None:
            fac_i = adami_generalized_background(
                float(mod_bg_press_i), float(mass_i), float(dens_i), float(mod_dWdrij))
            add_scaled(mod_acc_i, -fac_i, e_ij)
        if mod_acc_j is not None:
            fac_j = adami_generalized_background(
                float(mod_bg_press_j), float(mass_j), float(dens_j), float(mod_dWdrji))
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
            add_transport_term(A_ij_e_ij, 0.5 * dens_i, np.asarray(vel_i, dtype=np.float64),
                               np.asarray(mod_vel_i, dtype=np.float64), e_ij)
        if mod_vel_j is not None:
            add_transport_term(A_ij_e_ij, 0.5 * dens_j, np.asarray(vel_j, dtype=np.float64),
                               np.asarray(mod_vel_j, dtype=np.float64), e_ij)

        if acc_i is not None: add_scaled(acc_i, speccoeff_ij, A_ij_e_ij)
        if acc_j is not None: add_scaled(acc_j, -speccoeff_ji, A_ij_e_ij)
