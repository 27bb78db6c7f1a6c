"""
Configuration constants for phase handling and interpolation.

The unwrap jump tolerance, the gauge window used to canonicalize the first
phase sample, and the anchor used when wrapping an external system's phase
are fixed conventions of the Nichols-form representation. They live in a
single frozen dataclass so the policy is explicit and can be overridden per
call in tests or special studies.

Gauge Convention
----------------
After unwrapping, the whole phase trace is shifted by an integer number of
windows so that the first sample satisfies

    -gauge_window_deg < phase[0] <= 0

With the default 360 deg window this places the trace in (-360, 0] deg.
"""

from dataclasses import dataclass

from .exceptions import InvalidArgumentError


INTERPOLATION_KINDS = (
    'linear',
    'nearest',
    'zero',
    'slinear',
    'quadratic',
    'cubic',
)


@dataclass(frozen=True)
class NicholsConfig:
    """
    Phase and interpolation policy.

    Attributes
    ----------
    unwrap_tolerance_deg : float
        Jump between consecutive phase samples above which a 360 deg
        correction is applied
    gauge_window_deg : float
        Width of the window the first unwrapped phase sample is folded into
    series_anchor_deg : float
        Centre of the wrapping window applied to an external system's phase
        before series composition
    interpolation_kind : str
        1-D interpolation scheme ('linear' uses ``np.interp``, other kinds
        use ``scipy.interpolate.interp1d``)
    """
    unwrap_tolerance_deg: float = 180.0
    gauge_window_deg: float = 360.0
    series_anchor_deg: float = -180.0
    interpolation_kind: str = 'linear'

    def __post_init__(self):
        if not self.unwrap_tolerance_deg > 0:
            raise InvalidArgumentError(
                f"unwrap_tolerance_deg must be positive, got {self.unwrap_tolerance_deg}"
            )
        if not self.gauge_window_deg > 0:
            raise InvalidArgumentError(
                f"gauge_window_deg must be positive, got {self.gauge_window_deg}"
            )
        if self.interpolation_kind not in INTERPOLATION_KINDS:
            raise InvalidArgumentError(
                f"interpolation_kind must be one of {INTERPOLATION_KINDS}, "
                f"got {self.interpolation_kind!r}"
            )


DEFAULT_CONFIG = NicholsConfig()
