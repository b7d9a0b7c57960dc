# sphmomentum/sphsim/formulation_manager.py
"""
Manages the selection of the momentum formulation and smoothing kernel.

This module loads the definitions of the available formulations and kernels,
instantiates the selected ones through dynamic import, runs their two-phase
initialization, and keeps them active for the lifetime of a simulation. The
formulation is selected once at configuration time and then used as an opaque
strategy handle by the momentum evaluator.
"""

from typing import Dict, List, Optional

from sphsim.kernel.base import SPHKernel
from sphsim.momentum.base import MomentumFormulation
from sphsim.momentum.evaluator import MomentumEvaluator
from sphsim.utils import dynamic_import
from config.available_formulations import AVAILABLE_FORMULATIONS
from config.available_kernels import AVAILABLE_KERNELS
from config.param_defs import validate_settings

def _find_definition(definitions: List[Dict], item_id: str, kind: str) -> Dict:
    for item_def in definitions:
        if item_def['id'] == item_id:
            return item_def
    raise ValueError(f"Unknown {kind} id '{item_id}'. Available: {[d['id'] for d in definitions]}")

def create_momentum_formulation(formulation_id: str, config: Optional[Dict] = None) -> MomentumFormulation:
    """Instantiates, initializes and sets up the formulation registered under `formulation_id`."""
    formulation_def = _find_definition(AVAILABLE_FORMULATIONS, formulation_id, "momentum formulation")
    FormulationClass = dynamic_import(formulation_def['module'], formulation_def['class'])
    formulation = FormulationClass(config=config)
    formulation.init()
    formulation.setup()
    return formulation

def create_kernel(kernel_id: str, config: Optional[Dict] = None) -> SPHKernel:
    """Instantiates and sets up the smoothing kernel registered under `kernel_id`."""
    kernel_def = _find_definition(AVAILABLE_KERNELS, kernel_id, "kernel")
    KernelClass = dynamic_import(kernel_def['module'], kernel_def['class'])
    kernel = KernelClass(config=config)
    kernel.setup()
    return kernel

class FormulationManager:
    """Handles selection and setup of the active formulation, kernel and evaluator."""

    def __init__(self, initial_config: Dict):
        validate_settings(initial_config)
        self._config = initial_config.copy()
        self._formulation: Optional[MomentumFormulation] = None
        self._formulation_id: Optional[str] = None
        self._kernel: Optional[SPHKernel] = None
        self._kernel_id: Optional[str] = None
        self._evaluator: Optional[MomentumEvaluator] = None

    def get_available(self) -> Dict[str, List[Dict]]:
        """Returns the available formulations and kernels."""
        return {"formulations": list(AVAILABLE_FORMULATIONS), "kernels": list(AVAILABLE_KERNELS)}

    def select_formulation(self, formulation_id: str):
        if self._formulation_id == formulation_id and self._formulation is not None:
            self._formulation.update_config(self._config)
            return # No change needed
        print(f"FormulationManager: Selecting momentum formulation '{formulation_id}'...")
        self._formulation = create_momentum_formulation(formulation_id, self._config)
        self._formulation_id = formulation_id
        self._evaluator = None

    def select_kernel(self, kernel_id: str):
        print(f"FormulationManager: Selecting kernel '{kernel_id}'...")
        self._kernel = create_kernel(kernel_id, self._config)
        self._kernel_id = kernel_id
        self._evaluator = None

    def update_config(self, config: Dict):
        """Validates and merges new settings; the kernel and evaluator are rebuilt on next use."""
        merged = self._config.copy()
        merged.update(config)
        validate_settings(merged)
        self._config = merged
        if self._formulation is not None:
            self._formulation.update_config(self._config)
        if self._kernel_id is not None:
            self.select_kernel(self._kernel_id)
        self._evaluator = None

    def get_formulation(self) -> MomentumFormulation:
        if self._formulation is None:
            self.select_formulation(self._config.get('default_formulation', 'adami'))
        return self._formulation

    def get_kernel(self) -> SPHKernel:
        if self._kernel is None:
            self.select_kernel(self._config.get('default_kernel', 'cubic_spline'))
        return self._kernel

    def get_evaluator(self) -> MomentumEvaluator:
        if self._evaluator is None:
            evaluator = MomentumEvaluator(self.get_formulation(), self.get_kernel(), self._config)
            evaluator.setup()
            self._evaluator = evaluator
        return self._evaluator

    def get_active_ids(self) -> Dict[str, Optional[str]]:
        return {"formulation": self._formulation_id, "kernel": self._kernel_id}
