"""
Phase Unwrapping and Gauge Fixing

The principal value branch of the arctangent introduces artificial 360 deg
jumps into a phase trace. Canonicalization happens in two steps:

1. Continuous unwrapping: scanning the samples in order, any jump larger
   than the tolerance (180 deg) is folded by the smallest multiple of
   360 deg that brings it back within tolerance.
2. Gauge fix: with n = ceil(phase[0] / 360), subtract n * 360 from the
   whole trace so that the first sample lands in (-360, 0] deg.

The gauge fix makes the representation unique: two responses that are
360 deg equivalent at the first sample converge to the same trace. The
magnitude channel is never touched.

Non-finite phase samples (e.g. where D(jw) = 0) are left in place and
skipped; the finite samples on either side are unwrapped as one trace.
"""

from typing import Optional

import numpy as np

from .exceptions import InvalidArgumentError
from .nichols_codec import pack_nichols, split_nichols
from .nichols_config import NicholsConfig, DEFAULT_CONFIG
from .nichols_response import NicholsResponse


def unwrap_phase(phase_deg: np.ndarray,
                 config: Optional[NicholsConfig] = None) -> np.ndarray:
    """
    Unwrap a phase trace and fold its first sample into the gauge window.

    Parameters
    ----------
    phase_deg : np.ndarray
        Phase samples [deg], ordered by frequency
    config : NicholsConfig, optional
        Jump tolerance and gauge window

    Returns
    -------
    np.ndarray
        Continuous phase with -window < phase[0] <= 0
    """
    config = config or DEFAULT_CONFIG
    window = config.gauge_window_deg

    phase_deg = np.asarray(phase_deg, dtype=float)
    if phase_deg.size == 0:
        return phase_deg.copy()
    if not np.isfinite(phase_deg[0]):
        raise InvalidArgumentError(
            f"cannot fix the phase gauge: first phase sample is {phase_deg[0]}"
        )

    # Unwrapping in degrees with a 360 deg period avoids a radian round trip
    finite = np.isfinite(phase_deg)
    continuous = phase_deg.copy()
    continuous[finite] = np.unwrap(
        phase_deg[finite], discont=config.unwrap_tolerance_deg, period=360.0
    )
    n_turns = np.ceil(continuous[0] / window)
    return continuous - n_turns * window


def unwrap_response(value: NicholsResponse,
                    config: Optional[NicholsConfig] = None) -> NicholsResponse:
    """Return a new response with canonical, continuous phase."""
    phase_deg, magnitude_db = split_nichols(value.response)
    return NicholsResponse(
        frequency=value.frequency,
        response=pack_nichols(unwrap_phase(phase_deg, config), magnitude_db)
    )
