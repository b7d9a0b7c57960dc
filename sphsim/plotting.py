# sphmomentum/sphsim/plotting.py
"""
Generates diagnostic pair-force profiles and saves them to a PDF file.

For two identical particles at varying separation, the pressure gradient and
shear acceleration felt by particle i are evaluated for every available
momentum formulation, which makes the different normalisations of the
formulations directly comparable.
"""

import matplotlib
matplotlib.use('Agg') # use non-interactive backend before importing pyplot to prevent display issues
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
import numpy as np
import os
import datetime
import traceback
from typing import Dict

from sphsim.formulation_manager import create_momentum_formulation, create_kernel
from config.available_formulations import AVAILABLE_FORMULATIONS

# --- plotting constants for consistent styling ---
TITLE_FONTSIZE = 10
LABEL_FONTSIZE = 8
TICK_FONTSIZE = 7
LEGEND_FONTSIZE = 7
LINE_WIDTH = 1.5
GRID_ALPHA = 0.6


def compute_pair_profiles(settings: Dict) -> Dict[str, np.ndarray]:
    """
    Evaluates |acc_i| of the pressure gradient and shear terms over the separation.

    Returns a dict with 'r' and, per formulation id, '<id>_pressure' and '<id>_shear'.
    """
    plot_settings = settings.get('PLOT_SETTINGS', {})
    kernel = create_kernel(settings.get('default_kernel', 'cubic_spline'), settings)
    n_samples = int(plot_settings.get('n_samples', 200))
    rc = kernel.support_radius
    r = np.linspace(0.02 * rc, rc, n_samples)
    dWdr = np.asarray(kernel.dWdrij(r), dtype=np.float64)

    rho0 = float(settings.get('density', 1000.0))
    mass = rho0 * float(settings.get('lattice_spacing', 0.1)) ** kernel.kernel_space_dimension()
    press = float(settings.get('speed_of_sound', 10.0)) ** 2 * rho0 * float(settings.get('density_perturbation', 0.01))
    visc = float(settings.get('dynamic_viscosity', 1e-3))
    bulk_visc = float(settings.get('bulk_viscosity', 0.0))
    e_ij = np.array([1.0, 0.0, 0.0])
    vel_i = np.array([0.0, float(settings.get('velocity_scale', 0.1)), 0.0])
    vel_j = np.zeros(3)

    profiles = {'r': r}
    for formulation_def in AVAILABLE_FORMULATIONS:
        formulation = create_momentum_formulation(formulation_def['id'], settings)
        pressure_mag = np.empty(n_samples)
        shear_mag = np.empty(n_samples)
        for k in range(n_samples):
            sc_ij, sc_ji = formulation.specific_coefficient(rho0, rho0, mass, mass, dWdr[k], dWdr[k])
            acc_i = np.zeros(3)
            formulation.pressure_gradient(rho0, rho0, press, press, sc_ij, sc_ji, e_ij, acc_i, None)
            pressure_mag[k] = np.linalg.norm(acc_i)
            acc_i = np.zeros(3)
            formulation.shear_forces(rho0, rho0, vel_i, vel_j, kernel.convection_factor(), visc, visc,
                                     bulk_visc, bulk_visc, r[k], sc_ij, sc_ji, e_ij, acc_i, None)
            shear_mag[k] = np.linalg.norm(acc_i)
        profiles[f"{formulation_def['id']}_pressure"] = pressure_mag
        profiles[f"{formulation_def['id']}_shear"] = shear_mag
    return profiles


def _plot_profiles(ax: plt.Axes, r: np.ndarray, series_data: Dict[str, np.ndarray], title: str, ylabel: str):
    """helper to plot one or more separation profiles on a given axes object."""
    ax.set_title(title, fontsize=TITLE_FONTSIZE)
    ax.set_xlabel("Separation |r_ij|", fontsize=LABEL_FONTSIZE)
    ax.set_ylabel(ylabel, fontsize=LABEL_FONTSIZE)
    for label, data_arr in series_data.items():
        ax.plot(r, data_arr, label=label, lw=LINE_WIDTH)
    if len(series_data) > 1: ax.legend(fontsize=LEGEND_FONTSIZE)
    ax.grid(True, linestyle=':', alpha=GRID_ALPHA)
    ax.tick_params(axis='both', which='major', labelsize=TICK_FONTSIZE)


def generate_pair_profile_pdf(settings: Dict, output_dir: str) -> str:
    """
    Generates a one-page PDF comparing the pair acceleration profiles of all formulations.

    Returns the PDF path, or an empty string if generation failed.
    """
    os.makedirs(output_dir, exist_ok=True)
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    pdf_filename = os.path.join(output_dir, f"sph_momentum_profiles_{timestamp}.pdf")
    print(f"Generating plots PDF: {os.path.normpath(pdf_filename)}")

    profiles = compute_pair_profiles(settings)
    ids = [d['id'] for d in AVAILABLE_FORMULATIONS]
    try:
        with PdfPages(pdf_filename) as pdf:
            fig, axes = plt.subplots(1, 2, figsize=(10, 4))
            fig.suptitle("Pair Acceleration Profiles", fontsize=14)
            _plot_profiles(axes[0], profiles['r'], {fid: profiles[f"{fid}_pressure"] for fid in ids},
                           "Pressure Gradient", "|acc_i|")
            _plot_profiles(axes[1], profiles['r'], {fid: profiles[f"{fid}_shear"] for fid in ids},
                           "Shear Forces", "|acc_i|")
            plt.tight_layout(rect=[0, 0.03, 1, 0.95])
            pdf.savefig(fig)
            plt.close(fig)
        print(f"Successfully generated PDF: {pdf_filename}")
        return pdf_filename

    except Exception as e:
        print(f"ERROR during PDF generation process: {e}"); traceback.print_exc()
        if os.path.exists(pdf_filename):
            try: os.remove(pdf_filename)
            except OSError: pass
        return ""
