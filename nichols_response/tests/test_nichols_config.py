"""
Tests for the phase/interpolation policy configuration.
"""

import dataclasses

import pytest

from nichols_response.core.frequency_response import (
    NicholsConfig,
    DEFAULT_CONFIG,
    INTERPOLATION_KINDS,
    InvalidArgumentError,
)


class TestNicholsConfig:
    """Test suite for NicholsConfig."""

    def test_defaults(self):
        assert DEFAULT_CONFIG.unwrap_tolerance_deg == 180.0
        assert DEFAULT_CONFIG.gauge_window_deg == 360.0
        assert DEFAULT_CONFIG.series_anchor_deg == -180.0
        assert DEFAULT_CONFIG.interpolation_kind == 'linear'

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.gauge_window_deg = 720.0

    @pytest.mark.parametrize("kwargs", [
        {'unwrap_tolerance_deg': 0.0},
        {'gauge_window_deg': -360.0},
        {'interpolation_kind': 'spline'},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(InvalidArgumentError):
            NicholsConfig(**kwargs)

    @pytest.mark.parametrize("kind", INTERPOLATION_KINDS)
    def test_all_kinds_accepted(self, kind):
        assert NicholsConfig(interpolation_kind=kind).interpolation_kind == kind
