# sphmomentum/sphsim/utils.py
"""General utility functions for the SPH momentum package."""

import numpy as np
import time
import importlib

def timing_decorator(func):
    """Decorator to print the execution time of a function (useful for profiling pair loops)."""
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        end_time = time.perf_counter()
        print(f"Timing: {func.__name__:<25} executed in {(end_time - start_time) * 1000:.3f} ms")
        return result
    wrapper.__name__ = func.__name__
    wrapper.__doc__ = func.__doc__
    return wrapper

def dynamic_import(module_name, class_name):
    """Dynamically imports a class from a specified module."""
    try:
        module = importlib.import_module(module_name)
        imported_class = getattr(module, class_name)
        return imported_class
    except ImportError:
        print(f"ERROR: Module '{module_name}' not found.")
        raise # Re-raise the error for calling code to handle
    except AttributeError:
        print(f"ERROR: Class '{class_name}' not found in module '{module_name}'.")
        raise # Re-raise the error

def format_value_scientific(value, precision=2):
    """Formats a number into scientific notation string, handling non-finite values."""
    if not isinstance(value, (int, float, np.number)) or not np.isfinite(value):
        return "-" # Return dash for NaN, Inf, or non-numeric types
    if abs(value) < 1e-15: # Handle zero or very small numbers cleanly
        return "0.0e+00"
    return f"{value:.{precision}e}"
