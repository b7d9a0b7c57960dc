# sphmomentum/sphsim/kernel/spline_kernels.py
"""
Cubic and quintic B-spline smoothing kernels.

Both are written as sums of truncated powers max(0, n - q)^k with q = r / h, which
evaluates the piecewise definitions on scalars and numpy arrays alike.
"""

import numpy as np
from math import pi

from sphsim.kernel.base import SPHKernel, ArrayOrFloat

def _trunc(x):
    return np.maximum(0.0, x)

class CubicSplineKernel(SPHKernel):
    """Cubic spline (M4) kernel, support radius rc = 2h."""

    def support_to_smoothing_ratio(self) -> float:
        return 2.0

    def normalization_constant(self, dim: int, h: float) -> float:
        if dim == 1:
            return 2.0 / (3.0 * h)
        if dim == 2:
            return 10.0 / (7.0 * pi * h**2)
        return 1.0 / (pi * h**3)

    def w(self, rij: ArrayOrFloat) -> ArrayOrFloat:
        q = np.asarray(rij, dtype=np.float64) / self.h
        val = self.norm * (0.25 * _trunc(2.0 - q)**3 - _trunc(1.0 - q)**3)
        return val if val.ndim else float(val)

    def dWdrij(self, rij: ArrayOrFloat) -> ArrayOrFloat:
        q = np.asarray(rij, dtype=np.float64) / self.h
        val = (self.norm / self.h) * (-0.75 * _trunc(2.0 - q)**2 + 3.0 * _trunc(1.0 - q)**2)
        return val if val.ndim else float(val)

class QuinticSplineKernel(SPHKernel):
    """Quintic spline (M6) kernel, support radius rc = 3h."""

    def support_to_smoothing_ratio(self) -> float:
        return 3.0

    def normalization_constant(self, dim: int, h: float) -> float:
        if dim == 1:
            return 1.0 / (120.0 * h)
        if dim == 2:
            return 7.0 / (478.0 * pi * h**2)
        return 1.0 / (120.0 * pi * h**3)

    def w(self, rij: ArrayOrFloat) -> ArrayOrFloat:
        q = np.asarray(rij, dtype=np.float64) / self.h
        val = self.norm * (_trunc(3.0 - q)**5 - 6.0 * _trunc(2.0 - q)**5 + 15.0 * _trunc(1.0 - q)**5)
        return val if val.ndim else float(val)

    def dWdrij(self, rij: ArrayOrFloat) -> ArrayOrFloat:
        q = np.asarray(rij, dtype=np.float64) / self.h
        val = (self.norm / self.h) * (-5.0 * _trunc(3.0 - q)**4 + 30.0 * _trunc(2.0 - q)**4
                                      - 75.0 * _trunc(1.0 - q)**4)
        return val if val.ndim else float(val)
