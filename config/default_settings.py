# sphmomentum/config/default_settings.py

# Units are whatever the caller uses consistently; nothing here is converted.

DEFAULT_SETTINGS = {
    # --- Model Defaults ---
    'default_formulation': 'adami',
    'default_kernel': 'cubic_spline',
    'momentum_backend': 'numba',        # 'numba' (compiled pair loop) or 'python' (per-pair strategy calls)

    # --- Kernel Parameters ---
    'support_radius': 0.3,              # Kernel support radius rc
    'kernel_space_dim': 3,              # 1, 2 or 3

    # --- Lattice Scenario (main.py) ---
    'lattice_n': 6,                     # Particles per edge of the cubic lattice
    'lattice_spacing': 0.1,
    'lattice_jitter': 0.01,             # Random position perturbation amplitude
    'seed': 42,
    'density': 1000.0,
    'speed_of_sound': 10.0,             # Weakly compressible EOS p = c^2 (rho - rho0)
    'density_perturbation': 0.01,       # Relative random density perturbation
    'velocity_scale': 0.1,

    # --- Momentum Parameters ---
    'dynamic_viscosity': 1e-3,
    'bulk_viscosity': 0.0,
    'background_pressure_type': 'none', # 'none', 'standard' or 'generalized'
    'background_pressure': 0.0,
    'transport_velocity': False,

    # --- Plotting Settings ---
    'PLOT_SETTINGS': {
        'enable_plotting': False,
        'output_dir': 'output',
        'n_samples': 200,
    },
}
