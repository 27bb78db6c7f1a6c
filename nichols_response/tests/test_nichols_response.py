"""
Unit tests for NicholsResponse construction and projections.

Test coverage:
- Named constructors (Nichols, complex, polynomial, LTI, FRD, dict)
- Fail-fast validation of malformed input
- Canonical 1-D storage and immutability
- FRD / DataFrame / dict export
"""

import dataclasses

import pytest
import numpy as np
import control as ctrl

from nichols_response.core.frequency_response import (
    NicholsResponse,
    ConstructionError,
    InvalidArgumentError,
    pack_nichols,
)


@pytest.fixture
def omega():
    """Logarithmic angular frequency grid [rad/s]."""
    return np.logspace(-1, 2, 31)


@pytest.fixture
def first_order(omega):
    """H(s) = 1/(s+1) in Nichols form."""
    return NicholsResponse.from_polynomial([1], [1, 1], omega)


class TestConstruction:
    """Test suite for the named constructors."""

    def test_first_order_at_unit_frequency(self):
        """1/(s+1) at w=1: -3.01 dB and -45 deg."""
        F = NicholsResponse.from_polynomial([1], [1, 1], [1.0])

        assert F.magnitude_db[0] == pytest.approx(20 * np.log10(1 / np.sqrt(2)), abs=1e-12)
        assert F.magnitude_db[0] == pytest.approx(-3.0103, abs=1e-4)
        assert F.phase_deg[0] == pytest.approx(-45.0, abs=1e-12)

    def test_from_nichols_stores_samples(self):
        w = [1.0, 10.0, 100.0]
        res = pack_nichols([-30.0, -90.0, -170.0], [0.0, -20.0, -40.0])
        F = NicholsResponse.from_nichols(res, w)

        np.testing.assert_array_equal(F.frequency, w)
        np.testing.assert_array_equal(F.response, res)
        assert len(F) == 3

    @pytest.mark.parametrize("shape", [(4,), (4, 1), (1, 4)])
    def test_storage_is_one_dimensional(self, shape):
        """Row and column inputs are normalized to the same 1-D storage."""
        w = np.array([1.0, 2.0, 3.0, 4.0]).reshape(shape)
        res = (np.arange(4.0) - 1j * np.arange(4.0)).reshape(shape)
        F = NicholsResponse.from_nichols(res, w)

        assert F.frequency.shape == (4,)
        assert F.response.shape == (4,)

    def test_from_complex(self, omega):
        h = 1.0 / (1j * omega + 1.0)
        F = NicholsResponse.from_complex(h, omega)

        np.testing.assert_allclose(F.to_complex(), h, rtol=1e-12)

    def test_from_complex_unwrapped(self):
        """Third-order lag keeps a continuous phase past -180 deg."""
        w = np.logspace(-1, 2, 50)
        h = 1.0 / (1j * w + 1.0) ** 3
        F = NicholsResponse.from_complex(h, w, unwrap_phase=True)

        np.testing.assert_allclose(F.phase_deg, -3 * np.degrees(np.arctan(w)), atol=1e-8)

    def test_from_lti_transfer_function(self, omega, first_order):
        F = NicholsResponse.from_lti(ctrl.tf([1], [1, 1]), omega)

        np.testing.assert_allclose(F.phase_deg, first_order.phase_deg, atol=1e-9)
        np.testing.assert_allclose(F.magnitude_db, first_order.magnitude_db, atol=1e-9)

    def test_from_lti_state_space(self, omega, first_order):
        F = NicholsResponse.from_lti(ctrl.ss([[-1.0]], [[1.0]], [[1.0]], [[0.0]]), omega)

        np.testing.assert_allclose(F.magnitude_db, first_order.magnitude_db, atol=1e-9)

    def test_from_lti_unwrapped(self):
        """Unwrapped LTI construction (continuous phase)."""
        w = np.logspace(-1, 2, 50)
        F = NicholsResponse.from_lti(ctrl.tf([1], [1, 3, 3, 1]), w, unwrap_phase=True)

        np.testing.assert_allclose(F.phase_deg, -3 * np.degrees(np.arctan(w)), atol=1e-6)

    def test_from_lti_accepts_frequency_response_like(self, first_order):
        """Any object with complex_response_at() is a valid source."""
        w = first_order.frequency[5:10]
        F = NicholsResponse.from_lti(first_order, w)

        np.testing.assert_allclose(F.phase_deg, first_order.phase_deg[5:10], atol=1e-9)
        np.testing.assert_allclose(F.magnitude_db, first_order.magnitude_db[5:10], atol=1e-9)

    def test_from_lti_rejects_mimo(self, omega):
        mimo = ctrl.ss([[-1.0]], [[1.0, 1.0]], [[1.0]], [[0.0, 0.0]])
        with pytest.raises(InvalidArgumentError, match="SISO"):
            NicholsResponse.from_lti(mimo, omega)

    def test_from_lti_rejects_unknown_kind(self, omega):
        with pytest.raises(ConstructionError):
            NicholsResponse.from_lti("not a system", omega)

    def test_from_lti_frd_off_grid(self):
        frd = ctrl.frd(np.array([1.0, 0.5, 0.25], dtype=complex), [1.0, 2.0, 3.0])
        with pytest.raises(ConstructionError, match="FrequencyResponseData") as info:
            NicholsResponse.from_lti(frd, [0.5, 1.0])

        assert isinstance(info.value.__cause__, ValueError)

    def test_from_lti_frd_on_grid(self):
        frd = ctrl.frd(np.array([1.0, 0.5, 0.25], dtype=complex), [1.0, 2.0, 3.0])
        F = NicholsResponse.from_lti(frd, [1.0, 3.0])

        np.testing.assert_allclose(F.to_complex(), [1.0, 0.25], rtol=1e-12)

    def test_from_frd(self, omega):
        h = 2.0 / (1j * omega + 4.0)
        F = NicholsResponse.from_frd(ctrl.frd(h, omega))

        np.testing.assert_allclose(F.frequency, omega)
        np.testing.assert_allclose(F.to_complex(), h, rtol=1e-12)

    def test_from_frd_rejects_mimo(self, omega):
        frd = ctrl.frd(np.ones((2, 1, omega.size), dtype=complex), omega)
        with pytest.raises(InvalidArgumentError):
            NicholsResponse.from_frd(frd)

    def test_from_frd_rejects_other_kinds(self):
        with pytest.raises(ConstructionError):
            NicholsResponse.from_frd(ctrl.tf([1], [1, 1]))


class TestValidation:
    """Malformed input fails at construction time."""

    def test_length_mismatch(self):
        with pytest.raises(ConstructionError, match="same length"):
            NicholsResponse.from_nichols([0j, 1j], [1.0, 2.0, 3.0])

    def test_complex_length_mismatch(self):
        with pytest.raises(ConstructionError, match="same length"):
            NicholsResponse.from_complex([1 + 0j], [1.0, 2.0])

    def test_not_one_dimensional(self):
        with pytest.raises(ConstructionError, match="one-dimensional"):
            NicholsResponse.from_nichols(np.zeros((2, 2)), np.ones((2, 2)))

    def test_not_numeric(self):
        with pytest.raises(ConstructionError, match="numeric"):
            NicholsResponse.from_nichols(['a', 'b'], [1.0, 2.0])

    def test_empty(self):
        with pytest.raises(ConstructionError, match="empty"):
            NicholsResponse.from_nichols([], [])

    @pytest.mark.parametrize("w", [[0.0, 1.0], [-1.0, 1.0], [1.0, np.inf], [1.0, np.nan]])
    def test_invalid_frequency(self, w):
        with pytest.raises(ConstructionError):
            NicholsResponse.from_nichols([0j, 0j], w)

    def test_complex_frequency(self):
        with pytest.raises(ConstructionError, match="real"):
            NicholsResponse.from_nichols([0j, 0j], [1.0 + 1j, 2.0])

    def test_unsorted_frequency_fails_fast(self):
        with pytest.raises(ConstructionError, match="ascending"):
            NicholsResponse.from_nichols([0j, 0j, 0j], [1.0, 10.0, 5.0])

    def test_duplicate_frequency(self):
        with pytest.raises(ConstructionError, match="ascending"):
            NicholsResponse.from_nichols([0j, 0j], [1.0, 1.0])

    def test_zero_denominator(self):
        with pytest.raises(ConstructionError, match="denominator"):
            NicholsResponse.from_polynomial([1], [0, 0], [1.0])

    def test_non_finite_coefficients(self):
        with pytest.raises(ConstructionError, match="numerator"):
            NicholsResponse.from_polynomial([np.nan], [1, 1], [1.0])

    def test_construction_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            NicholsResponse.from_nichols([0j], [-1.0])


class TestValueSemantics:
    """Immutability, equality and exports."""

    def test_arrays_are_read_only(self, first_order):
        with pytest.raises(ValueError):
            first_order.frequency[0] = 5.0
        with pytest.raises(ValueError):
            first_order.response[0] = 0j

    def test_fields_are_frozen(self, first_order):
        with pytest.raises(dataclasses.FrozenInstanceError):
            first_order.frequency = np.ones(3)

    def test_inputs_are_copied(self):
        w = np.array([1.0, 2.0])
        res = np.array([-10 + 0j, -20 + 0j])
        F = NicholsResponse.from_nichols(res, w)
        w[0] = 0.5
        res[0] = 0j

        assert F.frequency[0] == 1.0
        assert F.response[0] == -10 + 0j

    def test_equality(self, omega, first_order):
        same = NicholsResponse.from_polynomial([1], [1, 1], omega)
        other = NicholsResponse.from_polynomial([2], [1, 1], omega)

        assert first_order == same
        assert first_order != other
        assert first_order != "not a response"

    def test_to_frd_round_trip(self, first_order):
        frd = first_order.to_frd()
        assert isinstance(frd, ctrl.FrequencyResponseData)

        back = NicholsResponse.from_frd(frd)
        np.testing.assert_allclose(back.phase_deg, first_order.phase_deg, atol=1e-9)
        np.testing.assert_allclose(back.magnitude_db, first_order.magnitude_db, atol=1e-9)

    def test_to_dict_round_trip(self, first_order):
        data = first_order.to_dict()

        assert set(data) == {'frequency_rad', 'phase_deg', 'magnitude_db'}
        assert NicholsResponse.from_dict(data) == first_order

    def test_from_dict_missing_key(self):
        with pytest.raises(ConstructionError, match="missing key"):
            NicholsResponse.from_dict({'frequency_rad': [1.0], 'phase_deg': [0.0]})

    def test_to_dataframe(self, first_order):
        frame = first_order.to_dataframe()

        assert list(frame.columns) == ['frequency_rad', 'phase_deg', 'magnitude_db']
        assert len(frame) == len(first_order)
        np.testing.assert_array_equal(frame['phase_deg'].to_numpy(), first_order.phase_deg)

    def test_repr(self, first_order):
        assert 'NicholsResponse' in repr(first_order)
        assert 'n=31' in repr(first_order)
