# sphmomentum/config/param_defs.py
"""
Numeric parameter definitions (ranges and display formats) for the momentum settings.
`validate_settings` checks a settings dictionary against these ranges.
"""

PARAM_DEFS = {
      # --- Kernel Parameters ---
      'support_radius':   {'label':'Support Radius rc', 'min':1e-6,'max':1e3, 'val':0.3,   'fmt':"{:.3f}"},
      'kernel_space_dim': {'label':'Kernel Dimension',  'min':1,   'max':3,   'val':3,     'fmt':"{:d}"},

      # --- Lattice Scenario ---
      'lattice_n':        {'label':'Lattice Edge N',    'min':2,   'max':64,  'val':6,     'fmt':"{:d}"},
      'lattice_spacing':  {'label':'Lattice Spacing',   'min':1e-6,'max':1e3, 'val':0.1,   'fmt':"{:.3f}"},
      'lattice_jitter':   {'label':'Lattice Jitter',    'min':0.0, 'max':1e3, 'val':0.01,  'fmt':"{:.3f}"},
      'density':          {'label':'Density rho0',      'min':1e-9,'max':1e9, 'val':1000.0,'fmt':"{:.1f}"},
      'speed_of_sound':   {'label':'Speed of Sound c0', 'min':0.0, 'max':1e6, 'val':10.0,  'fmt':"{:.2f}"},
      'density_perturbation':{'label':'Density Perturb.','min':0.0,'max':0.5, 'val':0.01,  'fmt':"{:.3f}"},
      'velocity_scale':   {'label':'Velocity Scale',    'min':0.0, 'max':1e6, 'val':0.1,   'fmt':"{:.2f}"},

      # --- Momentum Parameters ---
      'dynamic_viscosity':{'label':'Dyn. Viscosity mu', 'min':0.0, 'max':1e6, 'val':1e-3,  'fmt':"{:.2e}"},
      'bulk_viscosity':   {'label':'Bulk Viscosity',    'min':0.0, 'max':1e6, 'val':0.0,   'fmt':"{:.2e}"},
      'background_pressure':{'label':'Background Press.','min':0.0,'max':1e12,'val':0.0,   'fmt':"{:.2e}"},
}

# --- VALIDATION ---
if len(PARAM_DEFS.keys()) != len(set(PARAM_DEFS.keys())):
    raise ValueError("Duplicate keys found in PARAM_DEFS!")

def validate_settings(settings: dict):
    """Raises ValueError for any known numeric parameter outside its defined range."""
    for key, pdef in PARAM_DEFS.items():
        if key not in settings:
            continue
        value = settings[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Parameter '{key}' must be numeric, got {value!r}")
        if not pdef['min'] <= value <= pdef['max']:
            raise ValueError(f"Parameter '{key}'={value} outside allowed range [{pdef['min']}, {pdef['max']}]")
