# sphmomentum/config/available_formulations.py
"""
Defines the SPH momentum formulations available for selection.
The structure allows dynamic loading by the FormulationManager.
"""

AVAILABLE_FORMULATIONS = [
    {
        "id": "monaghan",
        "name": "Monaghan",
        "description": "Classical formulation: kernel gradient scaled by neighbour mass, density^2 normalised terms.",
        "module": "sphsim.momentum.monaghan",
        "class": "MomentumFormulationMonaghan",
        "notes": "Shear term combines shear and bulk viscosity; rejects negative diffusion coefficients.",
    },
    {
        "id": "adami",
        "name": "Adami",
        "description": "Summed squared particle volume prefactor with inverse-density weighted pressure.",
        "module": "sphsim.momentum.adami",
        "class": "MomentumFormulationAdami",
        "notes": "Better conditioned near free surfaces and interfaces. No bulk viscosity.",
    },
]

# --- formulation validation ---
def _validate_formulations():
    seen_ids = set()
    for formulation_def in AVAILABLE_FORMULATIONS:
        required_keys = ["id", "name", "module", "class"]
        if not all(key in formulation_def for key in required_keys):
            raise ValueError(f"Formulation definition is missing required keys: {formulation_def}")
        if formulation_def["id"] in seen_ids:
            raise ValueError(f"Duplicate formulation id '{formulation_def['id']}' in AVAILABLE_FORMULATIONS.")
        seen_ids.add(formulation_def["id"])
_validate_formulations()
