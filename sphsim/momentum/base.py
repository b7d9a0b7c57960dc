# sphmomentum/sphsim/momentum/base.py
"""
Defines the Abstract Base Class (ABC) for all SPH momentum formulations.

A momentum formulation is a stateless strategy evaluating the pairwise SPH
acceleration terms for one ordered particle pair (i, j). All formulations expose
the same six operations so that the pair evaluator can drive any of them
uniformly:

1. `specific_coefficient`: per-pair prefactors (speccoeff_ij, speccoeff_ji) that
   every other term of the same pair is scaled with.
2. `pressure_gradient`: symmetric pressure force along e_ij.
3. `shear_forces`: viscous dissipation from the relative velocity.
4. `standard_background_pressure`: background pressure stabilization.
5. `generalized_background_pressure`: background pressure using modified kernel
   gradients instead of the specific coefficients.
6. `modified_velocity_contribution`: transport velocity correction.

Output accumulators are optional numpy arrays updated in place. Passing `None`
for one side means that side's contribution is not requested (e.g. a ghost
particle owned by another process); it is then neither computed nor written.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence, Tuple, Union

import numpy as np

# type definitions
Vector = Union[np.ndarray, Sequence[float]] # any 3-component vector-like input

class NegativeDiffusionCoefficientError(ValueError):
    """Raised when viscosity inputs lead to a negative shear diffusion coefficient."""

    def __init__(self, diffusion_coeff: float, visc_i: float, visc_j: float,
                 bulk_visc_i: float, bulk_visc_j: float):
        self.diffusion_coeff = diffusion_coeff
        self.visc_i = visc_i
        self.visc_j = visc_j
        self.bulk_visc_i = bulk_visc_i
        self.bulk_visc_j = bulk_visc_j
        super().__init__(
            f"diffusion coefficient is negative! ({diffusion_coeff:.6e} from "
            f"visc=({visc_i:.6e}, {visc_j:.6e}), bulk_visc=({bulk_visc_i:.6e}, {bulk_visc_j:.6e}))"
        )

class MomentumFormulation(ABC):
    """
    Abstract Base Class for SPH momentum formulations.

    Subclasses implement the six pair operations. `init` and `setup` form the
    two-phase initialization used throughout the package; neither needs any
    particle data for the formulations shipped here.
    """

    # identifier used by the batched pair loop to select the matching numba branch
    FORMULATION_ID: int = -1

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize the formulation with configuration.

        Args:
            config: Simulation-wide configuration dictionary. Stored internally.
        """
        self.config: Dict = config.copy() if config is not None else {}
        self._is_init: bool = False
        self._is_setup: bool = False

    def init(self):
        """First initialization phase. Nothing to do for stateless formulations."""
        self._is_init = True

    def setup(self):
        """Second initialization phase. Nothing to do for stateless formulations."""
        self._is_setup = True

    def is_ready(self) -> bool:
        """Checks if both initialization phases have been completed."""
        return self._is_init and self._is_setup

    def update_config(self, config: Dict):
        """Updates the internal configuration dictionary."""
        if config:
            self.config.update(config)

    @abstractmethod
    def specific_coefficient(self, dens_i: float, dens_j: float, mass_i: float, mass_j: float,
                             dWdrij: float, dWdrji: float) -> Tuple[float, float]:
        pass

    @abstractmethod
    def pressure_gradient(self, dens_i: float, dens_j: float, press_i: float, press_j: float,
                          speccoeff_ij: float, speccoeff_ji: float, e_ij: Vector,
                          acc_i: Optional[np.ndarray] = None, acc_j: Optional[np.ndarray] = None):
        pass

    @abstractmethod
    def shear_forces(self, dens_i: float, dens_j: float, vel_i: Vector, vel_j: Vector,
                     kernelfac: float, visc_i: float, visc_j: float,
                     bulk_visc_i: float, bulk_visc_j: float, abs_rij: float,
                     speccoeff_ij: float, speccoeff_ji: float, e_ij: Vector,
                     acc_i: Optional[np.ndarray] = None, acc_j: Optional[np.ndarray] = None):
        pass

    @abstractmethod
    def standard_background_pressure(self, dens_i: float, dens_j: float,
                                     bg_press_i: float, bg_press_j: float,
                                     speccoeff_ij: float, speccoeff_ji: float, e_ij: Vector,
                                     mod_acc_i: Optional[np.ndarray] = None,
                                     mod_acc_j: Optional[np.ndarray] = None):
        pass

    @abstractmethod
    def generalized_background_pressure(self, dens_i: float, dens_j: float,
                                        mass_i: float, mass_j: float,
                                        mod_bg_press_i: float, mod_bg_press_j: float,
                                        mod_dWdrij: float, mod_dWdrji: float, e_ij: Vector,
                                        mod_acc_i: Optional[np.ndarray] = None,
                                        mod_acc_j: Optional[np.ndarray] = None):
        pass

    @abstractmethod
    def modified_velocity_contribution(self, dens_i: float, dens_j: float,
                                       vel_i: Vector, vel_j: Vector,
                                       mod_vel_i: Optional[Vector], mod_vel_j: Optional[Vector],
                                       speccoeff_ij: float, speccoeff_ji: float, e_ij: Vector,
                                       acc_i: Optional[np.ndarray] = None,
                                       acc_j: Optional[np.ndarray] = None):
        pass
