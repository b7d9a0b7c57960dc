# sphmomentum/main.py
"""
main.py runs a small SPH momentum scenario from the command line.

It performs the following steps:

1. Settings: copies DEFAULT_SETTINGS and applies an optional formulation id
   given as the first command line argument ('monaghan' or 'adami').
2. Setup: selects the momentum formulation and smoothing kernel through the
   FormulationManager and builds a jittered cubic particle lattice with a
   weakly compressible state (perturbed density, p = c0^2 (rho - rho0),
   random velocities).
3. Evaluation: builds the neighbor pairs and evaluates the momentum equation
   once, accumulating the pair accelerations.
4. Report: prints the maximum acceleration and the total momentum rate
   (sum of m * a, zero up to round-off for both formulations) and optionally
   writes the pair profile PDF.
"""
import copy
import os
import sys
import traceback

import numpy as np

# --- Project Setup ---
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from sphsim.particle_data import ParticleData
from sphsim.neighbor_pairs import build_neighbor_pairs
from sphsim.formulation_manager import FormulationManager
from sphsim.utils import format_value_scientific
from config.default_settings import DEFAULT_SETTINGS

def build_lattice(settings: dict) -> ParticleData:
    """Creates a jittered cubic lattice with a weakly compressible particle state."""
    rng = np.random.default_rng(settings.get('seed', 42))
    n = int(settings['lattice_n'])
    spacing = float(settings['lattice_spacing'])
    rho0 = float(settings['density'])

    grid = np.arange(n) * spacing
    positions = np.stack(np.meshgrid(grid, grid, grid, indexing='ij'), axis=-1).reshape(-1, 3)
    positions = positions + rng.uniform(-1.0, 1.0, positions.shape) * float(settings['lattice_jitter'])

    pd = ParticleData(positions.shape[0])
    densities = rho0 * (1.0 + float(settings['density_perturbation']) * rng.uniform(-1.0, 1.0, pd.get_n()))
    pd.set("positions", positions)
    pd.set("velocities", rng.normal(0.0, float(settings['velocity_scale']), (pd.get_n(), 3)))
    pd.set("masses", rho0 * spacing**3)
    pd.set("densities", densities)
    pd.set("pressures", float(settings['speed_of_sound'])**2 * (densities - rho0))
    pd.set("viscosities", float(settings['dynamic_viscosity']))
    pd.set("bulk_viscosities", float(settings['bulk_viscosity']))
    pd.set("background_pressures", float(settings['background_pressure']))
    # transport velocity: advect with the momentum velocity unless a correction is applied elsewhere
    pd.set("modified_velocities", pd.get("velocities"))
    return pd

def run_scenario(settings: dict) -> dict:
    """Runs one momentum evaluation on the lattice and returns summary quantities."""
    manager = FormulationManager(settings)
    evaluator = manager.get_evaluator()
    pd = build_lattice(settings)
    pairs = build_neighbor_pairs(pd.get("positions"), manager.get_kernel())
    print(f"Scenario: N={pd.get_n()}, pairs={len(pairs)}, formulation={manager.get_active_ids()['formulation']}")

    pd.zero("accelerations modified_accelerations")
    evaluator.evaluate(pd, pairs)

    acc = pd.get("accelerations")
    masses = pd.get("masses")
    momentum_rate = np.sum(masses[:, None] * acc, axis=0)
    return {
        "n_particles": pd.get_n(),
        "n_pairs": len(pairs),
        "max_acc": float(np.max(np.linalg.norm(acc, axis=1))) if pd.get_n() else 0.0,
        "momentum_rate": momentum_rate,
    }

if __name__ == "__main__":
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    if len(sys.argv) > 1:
        settings['default_formulation'] = sys.argv[1]
    try:
        summary = run_scenario(settings)
    except Exception as e:
        print(f"ERROR: Scenario failed: {e}"); traceback.print_exc()
        sys.exit(1)

    print(f"  Max |acc|      : {format_value_scientific(summary['max_acc'], 4)}")
    print(f"  Momentum rate  : [{', '.join(format_value_scientific(v, 4) for v in summary['momentum_rate'])}]")

    if settings['PLOT_SETTINGS'].get('enable_plotting', False):
        from sphsim.plotting import generate_pair_profile_pdf
        generate_pair_profile_pdf(settings, settings['PLOT_SETTINGS'].get('output_dir', 'output'))
