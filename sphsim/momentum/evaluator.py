# sphmomentum/sphsim/momentum/evaluator.py
"""
Evaluates the SPH momentum equation over all neighbor pairs.

For every pair (i, j) the active formulation contributes, in order:
specific coefficient -> pressure gradient -> shear forces -> background
pressure (into the modified accelerations, optional) -> modified velocity
contribution (optional). Only owned particles accumulate; ghost particles
provide read-only state.

Two backends share the same pair formulas:
- 'numba': a compiled pair loop calling the scalar kernels of
  `sphsim.momentum.formulation_kernels` directly.
- 'python': a loop driving the formulation's per-pair methods, passing `None`
  for the accumulators of non-owned sides. Works for any `MomentumFormulation`.
"""

from typing import Dict, Optional

import numpy as np
from numba import njit

from sphsim.particle_data import ParticleData
from sphsim.neighbor_pairs import NeighborPairs
from sphsim.kernel.base import SPHKernel
from sphsim.momentum.base import MomentumFormulation, NegativeDiffusionCoefficientError
from sphsim.momentum.monaghan import FORMULATION_ID_MONAGHAN
from sphsim.momentum.adami import FORMULATION_ID_ADAMI
from sphsim.momentum.formulation_kernels import (
    add_scaled, add_transport_term, add_monaghan_shear,
    monaghan_specific_coefficient, monaghan_pressure_factor,
    monaghan_viscosity_coefficients, monaghan_background_factor,
    monaghan_generalized_background,
    adami_specific_coefficient, adami_pressure_factor, adami_viscosity,
    adami_generalized_background,
)
from sphsim.utils import timing_decorator

# background pressure variants understood by the pair loop
BACKGROUND_PRESSURE_TYPES = {"none": 0, "standard": 1, "generalized": 2}
VALID_BACKENDS = ("numba", "python")

# --- Numba Kernels ---

@njit(cache=True)
def first_negative_diffusion_pair(pair_i, pair_j, visc, bulk_visc, kernelfac):
    """(Numba Kernel) Index of the first pair with a negative Monaghan diffusion coefficient, or -1."""
    for p in range(pair_i.shape[0]):
        i = pair_i[p]
        j = pair_j[p]
        conv, diff = monaghan_viscosity_coefficients(kernelfac, visc[i], visc[j], bulk_visc[i], bulk_visc[j])
        if diff < 0.0:
            return p
    return -1

@njit(cache=True)
def momentum_pairs_kernel(formulation_id, pair_i, pair_j, e_ij, abs_rij, dWdrij, dWdrji,
                          mod_dWdrij, mod_dWdrji,
                          dens, mass, press, vel, visc, bulk_visc, kernelfac, owned,
                          bg_type, bg_press, transport, mod_vel,
                          acc, mod_acc):
    """(Numba Kernel) Accumulates all momentum pair terms into acc / mod_acc of owned particles."""
    monaghan = formulation_id == FORMULATION_ID_MONAGHAN
    for p in range(pair_i.shape[0]):
        i = pair_i[p]
        j = pair_j[p]
        own_i = owned[i]
        own_j = owned[j]
        if not own_i and not own_j:
            continue
        e = e_ij[p]

        if monaghan:
            sc_ij, sc_ji = monaghan_specific_coefficient(dens[i], dens[j], mass[i], mass[j], dWdrij[p], dWdrji[p])
            press_fac = monaghan_pressure_factor(dens[i], dens[j], press[i], press[j])
        else:
            sc_ij, sc_ji = adami_specific_coefficient(dens[i], dens[j], mass[i], mass[j], dWdrij[p], dWdrji[p])
            press_fac = adami_pressure_factor(dens[i], dens[j], press[i], press[j])

        # pressure gradient
        if own_i: add_scaled(acc[i], -sc_ij * press_fac, e)
        if own_j: add_scaled(acc[j], sc_ji * press_fac, e)

        # shear forces
        vel_ij = vel[i] - vel[j]
        if monaghan:
            conv, diff = monaghan_viscosity_coefficients(kernelfac, visc[i], visc[j], bulk_visc[i], bulk_visc[j])
            if own_i: add_monaghan_shear(acc[i], sc_ij, conv, diff, dens[i], dens[j], abs_rij[p], vel_ij, e)
            if own_j: add_monaghan_shear(acc[j], -sc_ji, conv, diff, dens[i], dens[j], abs_rij[p], vel_ij, e)
        elif visc[i] > 0.0 and visc[j] > 0.0:
            visc_fac = adami_viscosity(visc[i], visc[j]) / abs_rij[p]
            if own_i: add_scaled(acc[i], sc_ij * visc_fac, vel_ij)
            if own_j: add_scaled(acc[j], -sc_ji * visc_fac, vel_ij)

        # background pressure
        if bg_type == 1:
            bg_fac = 1.0
            if monaghan:
                bg_fac = monaghan_background_factor(dens[i], dens[j])
            if own_i: add_scaled(mod_acc[i], -sc_ij * bg_press[i] * bg_fac, e)
            if own_j: add_scaled(mod_acc[j], sc_ji * bg_press[j] * bg_fac, e)
        elif bg_type == 2:
            if monaghan:
                fac_i = monaghan_generalized_background(bg_press[i], mass[j], dens[i], mod_dWdrij[p])
                fac_j = monaghan_generalized_background(bg_press[j], mass[i], dens[j], mod_dWdrji[p])
            else:
                fac_i = adami_generalized_background(bg_press[i], mass[i], dens[i], mod_dWdrij[p])
                fac_j = adami_generalized_background(bg_press[j], mass[j], dens[j], mod_dWdrji[p])
            if own_i: add_scaled(mod_acc[i], -fac_i, e)
            if own_j: add_scaled(mod_acc[j], fac_j, e)

        # modified velocity contribution
        if transport:
            A_ij_e_ij = np.zeros(3)
            if monaghan:
                w_i = 1.0 / dens[i]
                w_j = 1.0 / dens[j]
            else:
                w_i = 0.5 * dens[i]
                w_j = 0.5 * dens[j]
            add_transport_term(A_ij_e_ij, w_i, vel[i], mod_vel[i], e)
            add_transport_term(A_ij_e_ij, w_j, vel[j], mod_vel[j], e)
            if own_i: add_scaled(acc[i], sc_ij, A_ij_e_ij)
            if own_j: add_scaled(acc[j], -sc_ji, A_ij_e_ij)

# --- Python Class ---

class MomentumEvaluator:
    """Drives a momentum formulation over a neighbor pair list."""

    def __init__(self, formulation: MomentumFormulation, kernel: SPHKernel, config: Optional[Dict] = None):
        self.formulation = formulation
        self.kernel = kernel
        self.config: Dict = config.copy() if config is not None else {}
        self._is_setup = False

    def setup(self):
        """Validates the collaborators and reads the momentum settings from the configuration."""
        if not self.formulation.is_ready():
            raise ValueError(f"Formulation {self.formulation.__class__.__name__} must be initialized and set up first.")
        if not self.kernel.is_ready():
            raise ValueError(f"Kernel {self.kernel.__class__.__name__} must be set up first.")

        bg_name = self.config.get('background_pressure_type', 'none')
        if bg_name not in BACKGROUND_PRESSURE_TYPES:
            raise ValueError(f"Unknown background_pressure_type '{bg_name}'. Valid: {list(BACKGROUND_PRESSURE_TYPES)}")
        backend = self.config.get('momentum_backend', 'numba')
        if backend not in VALID_BACKENDS:
            raise ValueError(f"Unknown momentum_backend '{backend}'. Valid: {list(VALID_BACKENDS)}")
        if backend == 'numba' and self.formulation.FORMULATION_ID not in (FORMULATION_ID_MONAGHAN, FORMULATION_ID_ADAMI):
            raise ValueError(f"Formulation {self.formulation.__class__.__name__} has no compiled pair loop; use momentum_backend='python'.")

        self.bg_type = BACKGROUND_PRESSURE_TYPES[bg_name]
        self.transport = bool(self.config.get('transport_velocity', False))
        self.backend = backend
        self.kernelfac = self.kernel.convection_factor()
        self._is_setup = True

    def _check_diffusion(self, pd: ParticleData, pairs: NeighborPairs):
        if self.formulation.FORMULATION_ID != FORMULATION_ID_MONAGHAN or len(pairs) == 0:
            return
        visc = pd.get("viscosities")
        bulk_visc = pd.get("bulk_viscosities")
        p = first_negative_diffusion_pair(pairs.i, pairs.j, visc, bulk_visc, self.kernelfac)
        if p >= 0:
            i, j = int(pairs.i[p]), int(pairs.j[p])
            conv, diff = monaghan_viscosity_coefficients(self.kernelfac, visc[i], visc[j], bulk_visc[i], bulk_visc[j])
            print(f"ERROR: MomentumEvaluator: negative diffusion coefficient for pair ({i}, {j}); nothing accumulated.")
            raise NegativeDiffusionCoefficientError(diff, visc[i], visc[j], bulk_visc[i], bulk_visc[j])

    @timing_decorator
    def evaluate(self, pd: ParticleData, pairs: NeighborPairs,
                 mod_dWdrij: Optional[np.ndarray] = None, mod_dWdrji: Optional[np.ndarray] = None):
        """
        Adds the momentum pair contributions to 'accelerations' (and
        'modified_accelerations' for background pressure) of all owned particles.

        Args:
            pd: particle data holding state and accumulators.
            pairs: neighbor pairs built for the current positions.
            mod_dWdrij, mod_dWdrji: modified kernel derivatives for the generalized
                background pressure; default to the regular kernel derivatives.

        Raises:
            NegativeDiffusionCoefficientError: Monaghan shear inputs invalid for any
                pair. Raised before any accumulator is touched.
        """
        if not self._is_setup:
            raise ValueError("MomentumEvaluator.setup() must be called before evaluate().")
        if mod_dWdrij is None: mod_dWdrij = pairs.dWdrij
        if mod_dWdrji is None: mod_dWdrji = pairs.dWdrji
        mod_dWdrij = np.ascontiguousarray(mod_dWdrij, dtype=np.float64)
        mod_dWdrji = np.ascontiguousarray(mod_dWdrji, dtype=np.float64)
        if mod_dWdrij.shape != (len(pairs),) or mod_dWdrji.shape != (len(pairs),):
            raise ValueError(f"Modified kernel derivatives must have shape ({len(pairs)},)")

        self._check_diffusion(pd, pairs)
        if len(pairs) == 0:
            return

        if self.backend == 'numba':
            momentum_pairs_kernel(
                self.formulation.FORMULATION_ID, pairs.i, pairs.j, pairs.e_ij, pairs.abs_rij,
                pairs.dWdrij, pairs.dWdrji, mod_dWdrij, mod_dWdrji,
                pd.get("densities"), pd.get("masses"), pd.get("pressures"), pd.get("velocities"),
                pd.get("viscosities"), pd.get("bulk_viscosities"), self.kernelfac, pd.get("owned"),
                self.bg_type, pd.get("background_pressures"), self.transport, pd.get("modified_velocities"),
                pd.get("accelerations"), pd.get("modified_accelerations"),
            )
        else:
            self._evaluate_python(pd, pairs, mod_dWdrij, mod_dWdrji)

    def _evaluate_python(self, pd: ParticleData, pairs: NeighborPairs,
                         mod_dWdrij: np.ndarray, mod_dWdrji: np.ndarray):
        f = self.formulation
        dens, mass, press = pd.get("densities"), pd.get("masses"), pd.get("pressures")
        vel, mod_vel = pd.get("velocities"), pd.get("modified_velocities")
        visc, bulk_visc = pd.get("viscosities"), pd.get("bulk_viscosities")
        bg_press, owned = pd.get("background_pressures"), pd.get("owned")
        acc, mod_acc = pd.get("accelerations"), pd.get("modified_accelerations")

        for p in range(len(pairs)):
            i, j = int(pairs.i[p]), int(pairs.j[p])
            if not owned[i] and not owned[j]:
                continue
            acc_i = acc[i] if owned[i] else None
            acc_j = acc[j] if owned[j] else None
            mod_acc_i = mod_acc[i] if owned[i] else None
            mod_acc_j = mod_acc[j] if owned[j] else None
            e_ij, abs_rij = pairs.e_ij[p], pairs.abs_rij[p]

            sc_ij, sc_ji = f.specific_coefficient(dens[i], dens[j], mass[i], mass[j], pairs.dWdrij[p], pairs.dWdrji[p])
            f.pressure_gradient(dens[i], dens[j], press[i], press[j], sc_ij, sc_ji, e_ij, acc_i, acc_j)
            f.shear_forces(dens[i], dens[j], vel[i], vel[j], self.kernelfac, visc[i], visc[j],
                           bulk_visc[i], bulk_visc[j], abs_rij, sc_ij, sc_ji, e_ij, acc_i, acc_j)

            if self.bg_type == BACKGROUND_PRESSURE_TYPES["standard"]:
                f.standard_background_pressure(dens[i], dens[j], bg_press[i], bg_press[j],
                                               sc_ij, sc_ji, e_ij, mod_acc_i, mod_acc_j)
            elif self.bg_type == BACKGROUND_PRESSURE_TYPES["generalized"]:
                f.generalized_background_pressure(dens[i], dens[j], mass[i], mass[j], bg_press[i], bg_press[j],
                                                  mod_dWdrij[p], mod_dWdrji[p], e_ij, mod_acc_i, mod_acc_j)

            if self.transport:
                f.modified_velocity_contribution(dens[i], dens[j], vel[i], vel[j], mod_vel[i], mod_vel[j],
                                                 sc_ij, sc_ji, e_ij, acc_i, acc_j)
