# sphmomentum/sphsim/particle_data.py

"""
Holds the per-particle arrays read and written by the momentum evaluation.

Particle state (density, mass, pressure, viscosities, ...) is read-only for the
momentum formulations; only the acceleration accumulators are written. The
`owned` flag marks particles whose accelerations this process accumulates;
non-owned (ghost) particles only provide state to their owned neighbours.
"""

import numpy as np
from typing import Dict, List, Tuple

# type definitions
AttrName = str      # e.g., "positions", "masses"
NpArray = np.ndarray


class ParticleData:
    """Manages named numpy particle attribute arrays (CPU only)."""

    def __init__(self, N: int, numpy_precision: type = np.float64):
        if not isinstance(N, int) or N < 0:
            raise ValueError(f"N must be a non-negative integer, got {N}")
        self.N = N # number of particles
        self._internal_numpy_fp_type = numpy_precision
        # definitions for all particle attributes: (shape_suffix, dtype, default fill value)
        self._attr_definitions: Dict[AttrName, Tuple[Tuple[int, ...], type, float]] = {
            "positions":                 ((3,), self._internal_numpy_fp_type, 0.0),
            "velocities":                ((3,), self._internal_numpy_fp_type, 0.0),
            "modified_velocities":       ((3,), self._internal_numpy_fp_type, 0.0),
            "accelerations":             ((3,), self._internal_numpy_fp_type, 0.0),
            "modified_accelerations":    ((3,), self._internal_numpy_fp_type, 0.0),
            "masses":                    ((),   self._internal_numpy_fp_type, 1.0),
            "densities":                 ((),   self._internal_numpy_fp_type, 1.0),
            "pressures":                 ((),   self._internal_numpy_fp_type, 0.0),
            "viscosities":               ((),   self._internal_numpy_fp_type, 0.0),
            "bulk_viscosities":          ((),   self._internal_numpy_fp_type, 0.0),
            "background_pressures":      ((),   self._internal_numpy_fp_type, 0.0),
            "owned":                     ((),   np.bool_,                      True),
        }
        self._cpu_data: Dict[AttrName, NpArray] = {}
        for name, (shape_suffix, dtype, fill) in self._attr_definitions.items():
            self._cpu_data[name] = np.full((N,) + shape_suffix, fill, dtype=dtype)

    def _validate_attribute(self, name: AttrName):
        if name not in self._attr_definitions:
            raise ValueError(f"Unknown particle attribute: '{name}'. Valid: {self.get_attribute_names()}")

    def get_n(self) -> int: return self.N
    def get_dtype(self, name: AttrName) -> np.dtype:
        self._validate_attribute(name); return np.dtype(self._attr_definitions[name][1])
    def get_shape(self, name: AttrName) -> Tuple[int, ...]:
        self._validate_attribute(name); return (self.N,) + self._attr_definitions[name][0]
    def get_attribute_names(self) -> List[AttrName]: return list(self._attr_definitions.keys())

    def set(self, name: AttrName, data):
        """Copies `data` into the attribute array (broadcasting scalars), checking its shape."""
        self._validate_attribute(name)
        expected_shape = self.get_shape(name)
        arr = np.asarray(data, dtype=self.get_dtype(name))
        if arr.ndim == 0 or (arr.shape == self._attr_definitions[name][0] and arr.shape != expected_shape):
            arr = np.broadcast_to(arr, expected_shape)
        if arr.shape != expected_shape:
            raise ValueError(f"Shape mismatch for '{name}': expected {expected_shape}, got {arr.shape}")
        self._cpu_data[name][...] = arr

    def get(self, name: AttrName) -> NpArray:
        """Returns the attribute array itself (writes go straight into the particle data)."""
        self._validate_attribute(name)
        return self._cpu_data[name]

    def zero(self, names):
        """Resets one or more attributes (list or space separated string) to zero."""
        if isinstance(names, str): names = names.split()
        for name in names:
            self._validate_attribute(name)
            self._cpu_data[name].fill(0)

    def owned_count(self) -> int:
        return int(np.count_nonzero(self._cpu_data["owned"]))
