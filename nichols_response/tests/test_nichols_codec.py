"""
Unit tests for the complex / Nichols-form codec.

Test coverage:
- Principal value phase and dB magnitude
- Round trip complex -> Nichols -> complex
- Continuous unwrapping across the vector
- Anchored wrapping window used by series composition
- Zero magnitude -> -inf dB
"""

import pytest
import numpy as np

from nichols_response.core.frequency_response import (
    complex_to_nichols,
    nichols_to_complex,
    pack_nichols,
    split_nichols,
    wrap_phase,
    InvalidArgumentError,
)


class TestComplexToNichols:
    """Test suite for complex_to_nichols."""

    def test_known_samples(self):
        """Unit gain, integrator-like and first-order samples."""
        z = np.array([1.0 + 0j, 1j, -1.0 + 0j, (1 - 1j) / 2])
        n = complex_to_nichols(z)

        phase_deg, mag_db = split_nichols(n)
        np.testing.assert_allclose(phase_deg, [0.0, 90.0, 180.0, -45.0], atol=1e-12)
        np.testing.assert_allclose(mag_db, [0.0, 0.0, 0.0, 20 * np.log10(1 / np.sqrt(2))],
                                   atol=1e-12)

    def test_principal_value_window(self):
        """Default phase lies in (-180, 180]."""
        theta = np.linspace(-720, 720, 97)
        z = 2.0 * np.exp(1j * np.deg2rad(theta))
        phase_deg, _ = split_nichols(complex_to_nichols(z))

        assert np.all(phase_deg > -180 - 1e-9)
        assert np.all(phase_deg <= 180 + 1e-9)

    def test_round_trip(self):
        """toComplex(toNichols(z)) == z for nonzero samples."""
        rng = np.random.default_rng(7)
        z = rng.normal(size=64) + 1j * rng.normal(size=64)

        np.testing.assert_allclose(nichols_to_complex(complex_to_nichols(z)), z,
                                   rtol=1e-12, atol=1e-14)

    def test_unwrap_flag_gives_continuous_phase(self):
        """A steadily decreasing phase is recovered past -180 deg."""
        theta = -np.arange(0, 600, 30.0)
        z = np.exp(1j * np.deg2rad(theta))

        wrapped, _ = split_nichols(complex_to_nichols(z))
        unwrapped, _ = split_nichols(complex_to_nichols(z, unwrap=True))

        assert np.max(np.abs(np.diff(wrapped))) > 180
        np.testing.assert_allclose(unwrapped, theta, atol=1e-9)

    def test_anchor_window(self):
        """Anchoring at -180 deg maps phases into (-360, 0]."""
        z = np.array([1.0 + 0j, 1j, -1.0 + 0j, -1j])
        phase_deg, _ = split_nichols(complex_to_nichols(z, anchor_deg=-180.0))

        np.testing.assert_allclose(phase_deg, [0.0, -270.0, -180.0, -90.0], atol=1e-12)

    def test_unwrap_and_anchor_are_exclusive(self):
        with pytest.raises(InvalidArgumentError):
            complex_to_nichols(np.ones(3), unwrap=True, anchor_deg=-180.0)

    def test_zero_magnitude_maps_to_negative_infinity(self):
        """Zero magnitude is not an error: -inf dB with a warning."""
        with pytest.warns(RuntimeWarning, match="zero-magnitude"):
            n = complex_to_nichols(np.array([0.0 + 0j, 1.0 + 0j]))

        _, mag_db = split_nichols(n)
        assert mag_db[0] == -np.inf
        assert mag_db[1] == 0.0
        assert not np.any(np.isnan(n))
        assert nichols_to_complex(n)[0] == 0


class TestChannelHelpers:
    """Test suite for packing and wrapping helpers."""

    def test_pack_keeps_infinite_magnitude(self):
        """Packing must not turn -inf dB into a NaN phase."""
        n = pack_nichols([-90.0], [-np.inf])

        assert np.real(n)[0] == -90.0
        assert np.imag(n)[0] == -np.inf

    def test_pack_split_channels(self):
        phase_deg, mag_db = split_nichols(pack_nichols([-10.0, -20.0], [3.0, -6.0]))

        np.testing.assert_array_equal(phase_deg, [-10.0, -20.0])
        np.testing.assert_array_equal(mag_db, [3.0, -6.0])

    @pytest.mark.parametrize("anchor", [0.0, -180.0, 90.0])
    def test_wrap_phase_window(self, anchor):
        phases = np.linspace(-1000, 1000, 201)
        wrapped = wrap_phase(phases, anchor)

        assert np.all(wrapped > anchor - 180)
        assert np.all(wrapped <= anchor + 180)
        np.testing.assert_allclose(np.exp(1j * np.deg2rad(wrapped)),
                                   np.exp(1j * np.deg2rad(phases)), atol=1e-9)
