"""
Pytest fixtures for the SPH momentum package tests.

Provides set up formulations, kernels and small particle configurations.
"""

import copy

import numpy as np
import pytest

from sphsim.formulation_manager import create_momentum_formulation, create_kernel
from sphsim.particle_data import ParticleData
from config.default_settings import DEFAULT_SETTINGS


@pytest.fixture
def settings():
    """Deep copy of the default settings, safe to modify per test."""
    return copy.deepcopy(DEFAULT_SETTINGS)


@pytest.fixture
def monaghan():
    return create_momentum_formulation("monaghan")


@pytest.fixture
def adami():
    return create_momentum_formulation("adami")


@pytest.fixture(params=["monaghan", "adami"])
def formulation(request):
    """Each registered formulation in turn."""
    return create_momentum_formulation(request.param)


@pytest.fixture
def cubic_kernel():
    return create_kernel("cubic_spline", {"support_radius": 0.3, "kernel_space_dim": 3})


@pytest.fixture
def lattice_pd():
    """A jittered 4x4x4 lattice with a non-trivial viscous, compressible state."""
    rng = np.random.default_rng(7)
    n, spacing, rho0 = 4, 0.1, 1000.0
    grid = np.arange(n) * spacing
    positions = np.stack(np.meshgrid(grid, grid, grid, indexing="ij"), axis=-1).reshape(-1, 3)
    positions = positions + rng.uniform(-0.01, 0.01, positions.shape)

    pd = ParticleData(positions.shape[0])
    densities = rho0 * (1.0 + 0.02 * rng.uniform(-1.0, 1.0, pd.get_n()))
    pd.set("positions", positions)
    pd.set("velocities", rng.normal(0.0, 0.1, (pd.get_n(), 3)))
    pd.set("modified_velocities", pd.get("velocities") + rng.normal(0.0, 0.01, (pd.get_n(), 3)))
    pd.set("masses", rho0 * spacing**3)
    pd.set("densities", densities)
    pd.set("pressures", 100.0 * (densities - rho0))
    pd.set("viscosities", 1e-2)
    pd.set("bulk_viscosities", 1e-3)
    pd.set("background_pressures", 50.0)
    return pd
