# sphmomentum/sphsim/momentum/formulation_kernels.py
"""
Numba-compiled scalar kernels for the SPH momentum formulations.

These functions hold the actual pair-force formulas of the Monaghan and Adami
formulations. They are called both from the per-pair Python strategy classes
(`MomentumFormulationMonaghan`, `MomentumFormulationAdami`) and from the batched
pair loop in `sphsim.momentum.evaluator`, so the two paths can never drift apart.

All vector arguments are length-3 float64 arrays. Functions named `add_*`
accumulate in place into their first argument and never overwrite it.
"""

import numpy as np
from numba import njit

# --- Vector Helpers ---

@njit(cache=True)
def dot3(a: np.ndarray, b: np.ndarray) -> float:
    """(Numba Kernel) Dot product of two 3-vectors."""
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]

@njit(cache=True)
def add_scaled(out: np.ndarray, fac: float, vec: np.ndarray):
    """(Numba Kernel) out += fac * vec."""
    for k in range(3):
        out[k] += fac * vec[k]

@njit(cache=True)
def add_transport_term(a_ij: np.ndarray, weight: float, vel: np.ndarray,
                       mod_vel: np.ndarray, e_ij: np.ndarray):
    """(Numba Kernel) a_ij += weight * ((mod_vel - vel) . e_ij) * vel."""
    proj = 0.0
    for k in range(3):
        proj += (mod_vel[k] - vel[k]) * e_ij[k]
    add_scaled(a_ij, weight * proj, vel)

# --- Monaghan Formulation ---

@njit(cache=True)
def monaghan_specific_coefficient(dens_i, dens_j, mass_i, mass_j, dWdrij, dWdrji):
    """(Numba Kernel) Kernel gradient scaled by the neighbour mass, per side."""
    return dWdrij * mass_j, dWdrji * mass_i

@njit(cache=True)
def monaghan_pressure_factor(dens_i, dens_j, press_i, press_j) -> float:
    """(Numba Kernel) p_i/rho_i^2 + p_j/rho_j^2."""
    return press_i / (dens_i * dens_i) + press_j / (dens_j * dens_j)

@njit(cache=True)
def monaghan_viscosity_coefficients(kernelfac, visc_i, visc_j, bulk_visc_i, bulk_visc_j):
    """
    (Numba Kernel) Convection and diffusion coefficients of the Monaghan shear term.

    Returns (convection_coeff, diffusion_coeff). The caller is responsible for
    rejecting a negative diffusion coefficient.
    """
    scaled_viscosity = 0.0
    if visc_i > 0.0 and visc_j > 0.0:
        scaled_viscosity = 2.0 * visc_i * visc_j / (3.0 * (visc_i + visc_j))

    bulk_viscosity = 0.0
    if bulk_visc_i > 0.0 and bulk_visc_j > 0.0:
        bulk_viscosity = 2.0 * bulk_visc_i * bulk_visc_j / (bulk_visc_i + bulk_visc_j)

    convection_coeff = kernelfac * (bulk_viscosity + scaled_viscosity)
    diffusion_coeff = 5.0 * scaled_viscosity - bulk_viscosity
    return convection_coeff, diffusion_coeff

@njit(cache=True)
def monaghan_background_factor(dens_i, dens_j) -> float:
    """(Numba Kernel) 1/rho_i^2 + 1/rho_j^2."""
    return 1.0 / (dens_i * dens_i) + 1.0 / (dens_j * dens_j)

@njit(cache=True)
def monaghan_generalized_background(mod_bg_press, mass_other, dens_self, mod_dWdr) -> float:
    """(Numba Kernel) Magnitude pb * (m_other / rho_self^2) * dW_mod/dr of one side."""
    return mod_bg_press * (mass_other / (dens_self * dens_self)) * mod_dWdr

@njit(cache=True)
def add_monaghan_shear(acc: np.ndarray, speccoeff: float, convection_coeff: float,
                       diffusion_coeff: float, dens_i, dens_j, abs_rij,
                       vel_ij: np.ndarray, e_ij: np.ndarray):
    """(Numba Kernel) Adds diffusion (along vel_ij) and convection (along e_ij) parts to one side."""
    inv_densi_densj_absdist = 1.0 / (dens_i * dens_j * abs_rij)
    fac_diff = diffusion_coeff * inv_densi_densj_absdist
    add_scaled(acc, speccoeff * fac_diff, vel_ij)
    fac_conv = convection_coeff * dot3(vel_ij, e_ij) * inv_densi_densj_absdist
    add_scaled(acc, speccoeff * fac_conv, e_ij)

# --- Adami Formulation ---

@njit(cache=True)
def adami_specific_coefficient(dens_i, dens_j, mass_i, mass_j, dWdrij, dWdrji):
    """(Numba Kernel) Summed squared particle volumes times the kernel gradient per unit own mass."""
    vol_i = mass_i / dens_i
    vol_j = mass_j / dens_j
    fac = vol_i * vol_i + vol_j * vol_j
    return fac * (dWdrij / mass_i), fac * (dWdrji / mass_j)

@njit(cache=True)
def adami_pressure_factor(dens_i, dens_j, press_i, press_j) -> float:
    """(Numba Kernel) Inverse-density weighted pressure (rho_i p_j + rho_j p_i)/(rho_i + rho_j)."""
    return (dens_i * press_j + dens_j * press_i) / (dens_i + dens_j)

@njit(cache=True)
def adami_generalized_background(mod_bg_press, mass_self, dens_self, mod_dWdr) -> float:
    """(Numba Kernel) Magnitude pb * m_self * dW_mod/dr / rho_self^2 of one side."""
    return (mod_bg_press * mass_self * mod_dWdr) / (dens_self * dens_self)

@njit(cache=True)
def adami_viscosity(visc_i, visc_j) -> float:
    """(Numba Kernel) Harmonic mean 2 mu_i mu_j / (mu_i + mu_j); 0.0 if either side is non-positive."""
    if visc_i > 0.0 and visc_j > 0.0:
        return 2.0 * visc_i * visc_j / (visc_i + visc_j)
    return 0.0
