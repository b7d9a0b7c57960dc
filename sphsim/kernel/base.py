# sphmomentum/sphsim/kernel/base.py
"""
Defines the Abstract Base Class (ABC) for SPH smoothing kernels.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Union

import numpy as np

ArrayOrFloat = Union[float, np.ndarray]

class SPHKernel(ABC):
    """
    ABC for smoothing kernels with compact support.

    Kernels are configured with a `support_radius` (rc) and a spatial dimension
    `kernel_space_dim` (1, 2 or 3). `setup` validates both and precomputes the
    smoothing length and normalisation constant.
    """
    VALID_DIMENSIONS = (1, 2, 3)

    def __init__(self, config: Optional[Dict] = None):
        self.config: Dict = config.copy() if config is not None else {}
        self._is_setup: bool = False
        self.support_radius: float = 0.0
        self.dim: int = 3
        self.h: float = 0.0
        self.norm: float = 0.0

    def setup(self):
        rc = self.config.get('support_radius')
        if not isinstance(rc, (float, int)) or rc <= 0:
            raise ValueError(f"{self.__class__.__name__} requires a positive 'support_radius' in configuration.")
        dim = self.config.get('kernel_space_dim', 3)
        if dim not in self.VALID_DIMENSIONS:
            raise ValueError(f"{self.__class__.__name__}: 'kernel_space_dim' must be one of {self.VALID_DIMENSIONS}, got {dim}.")

        self.support_radius = float(rc)
        self.dim = int(dim)
        self.h = self.support_radius / self.support_to_smoothing_ratio()
        self.norm = self.normalization_constant(self.dim, self.h)
        self._is_setup = True

    def is_ready(self) -> bool:
        return self._is_setup

    def kernel_space_dimension(self) -> int:
        return self.dim

    def convection_factor(self) -> float:
        """Factor `kernelfac` of the Monaghan shear convection term (dim + 2)."""
        return float(self.dim + 2)

    @abstractmethod
    def support_to_smoothing_ratio(self) -> float:
        """Ratio rc / h of support radius to smoothing length."""
        pass

    @abstractmethod
    def normalization_constant(self, dim: int, h: float) -> float:
        pass

    @abstractmethod
    def w(self, rij: ArrayOrFloat) -> ArrayOrFloat:
        """Kernel value W(r)."""
        pass

    @abstractmethod
    def dWdrij(self, rij: ArrayOrFloat) -> ArrayOrFloat:
        """Kernel derivative dW/dr (non-positive inside the support)."""
        pass
