"""
Tests for the pair profile diagnostics.
"""

import os

import numpy as np

from sphsim.plotting import compute_pair_profiles, generate_pair_profile_pdf


class TestPairProfiles:

    def test_profile_keys_and_shapes(self, settings):
        settings['PLOT_SETTINGS']['n_samples'] = 25
        profiles = compute_pair_profiles(settings)

        assert set(profiles) == {'r', 'monaghan_pressure', 'monaghan_shear', 'adami_pressure', 'adami_shear'}
        for values in profiles.values():
            assert values.shape == (25,)
            assert np.all(np.isfinite(values))
        assert profiles['r'][-1] == settings['support_radius']

    def test_profiles_vanish_at_support_radius(self, settings):
        profiles = compute_pair_profiles(settings)
        assert profiles['adami_pressure'][-1] == 0.0
        assert profiles['monaghan_shear'][-1] == 0.0
        assert np.max(profiles['adami_pressure']) > 0.0

    def test_equal_state_formulations_agree_on_pressure(self, settings):
        """For identical particles both formulations reduce to 2 m p / rho^2 dW/dr."""
        profiles = compute_pair_profiles(settings)
        np.testing.assert_allclose(profiles['monaghan_pressure'], profiles['adami_pressure'], rtol=1e-12)


class TestPdfGeneration:

    def test_writes_pdf(self, settings, tmp_path):
        settings['PLOT_SETTINGS']['n_samples'] = 20
        pdf_path = generate_pair_profile_pdf(settings, str(tmp_path / "plots"))

        assert pdf_path.endswith(".pdf")
        assert os.path.isfile(pdf_path)
        assert os.path.getsize(pdf_path) > 0
