# sphmomentum/config/available_kernels.py
"""
Defines the SPH smoothing kernels available for selection.
"""

AVAILABLE_KERNELS = [
    {
        "id": "cubic_spline",
        "name": "Cubic Spline",
        "description": "M4 cubic B-spline kernel with support radius 2h.",
        "module": "sphsim.kernel.spline_kernels",
        "class": "CubicSplineKernel",
    },
    {
        "id": "quintic_spline",
        "name": "Quintic Spline",
        "description": "M6 quintic B-spline kernel with support radius 3h.",
        "module": "sphsim.kernel.spline_kernels",
        "class": "QuinticSplineKernel",
    },
]

# --- kernel validation ---
def _validate_kernels():
    for kernel_def in AVAILABLE_KERNELS:
        required_keys = ["id", "name", "module", "class"]
        if not all(key in kernel_def for key in required_keys):
            raise ValueError(f"Kernel definition is missing required keys: {kernel_def}")
_validate_kernels()
