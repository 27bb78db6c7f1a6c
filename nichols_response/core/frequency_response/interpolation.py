"""
Frequency-domain interpolation of Nichols-form responses.

Phase and magnitude channels are interpolated independently against the
stored frequency grid. Phase is never wrapped here; unwrap the response
first when a continuous trace matters.
"""

from typing import Any, Optional

import numpy as np
from scipy.interpolate import interp1d

from .exceptions import InvalidArgumentError, OutOfRangeError
from .nichols_codec import pack_nichols, split_nichols
from .nichols_config import NicholsConfig, DEFAULT_CONFIG
from .nichols_response import NicholsResponse, as_frequency_vector


def _interpolate_linear(grid: np.ndarray, values: np.ndarray,
                        query: np.ndarray) -> np.ndarray:
    # (1 - t) * y0 + t * y1 stays at -inf between a -inf and a finite sample,
    # where np.interp's y0 + t * (y1 - y0) gives -inf + inf = nan
    upper = np.clip(np.searchsorted(grid, query, side='right'), 1, grid.size - 1)
    lower = upper - 1
    t = (query - grid[lower]) / (grid[upper] - grid[lower])
    return (1.0 - t) * values[lower] + t * values[upper]


def _interpolate_channel(grid: np.ndarray, values: np.ndarray,
                         query: np.ndarray, kind: str) -> np.ndarray:
    if grid.size == 1:
        return np.full(query.shape, values[0])
    if kind == 'linear':
        return _interpolate_linear(grid, values, query)
    try:
        interpolant = interp1d(grid, values, kind=kind, assume_sorted=True)
    except ValueError as exc:
        raise InvalidArgumentError(
            f"'{kind}' interpolation not possible on {grid.size} samples: {exc}"
        ) from exc
    return interpolant(query)


def evaluate(value: NicholsResponse, frequency: Any,
             config: Optional[NicholsConfig] = None) -> np.ndarray:
    """
    Evaluate a response at arbitrary frequencies.

    Parameters
    ----------
    value : NicholsResponse
        Response to interpolate
    frequency : array_like
        Query frequencies [rad/s]; a scalar is treated as a one-element vector
    config : NicholsConfig, optional
        Selects the interpolation kind

    Returns
    -------
    np.ndarray
        Nichols-form samples, one per query frequency. With linear
        interpolation a -inf dB sample pulls the whole adjacent interval to
        -inf dB; +inf next to -inf gives nan.

    Raises
    ------
    InvalidArgumentError
        Query is not a numeric vector of finite positive frequencies
    OutOfRangeError
        Query lies outside [min(frequency), max(frequency)]
    """
    config = config or DEFAULT_CONFIG
    query = as_frequency_vector(frequency, 'frequency', InvalidArgumentError)

    grid = value.frequency
    outside = (query < grid[0]) | (query > grid[-1])
    if np.any(outside):
        raise OutOfRangeError(
            f"query frequencies {query[outside].tolist()} outside the stored "
            f"range [{grid[0]!r}, {grid[-1]!r}] rad/s"
        )

    phase_deg, magnitude_db = split_nichols(value.response)
    with np.errstate(invalid='ignore'):
        phase_q = _interpolate_channel(grid, phase_deg, query, config.interpolation_kind)
        magnitude_q = _interpolate_channel(grid, magnitude_db, query, config.interpolation_kind)

    # Grid points return the stored samples bit for bit
    index = np.searchsorted(grid, query)
    hit = grid[np.minimum(index, grid.size - 1)] == query
    phase_q[hit] = phase_deg[index[hit]]
    magnitude_q[hit] = magnitude_db[index[hit]]

    return pack_nichols(phase_q, magnitude_q)


def magnitude(value: NicholsResponse, frequency: Any = None,
              config: Optional[NicholsConfig] = None) -> np.ndarray:
    """Magnitude [dB]: the stored channel, or interpolated at ``frequency``."""
    if frequency is None:
        return value.magnitude_db
    return np.imag(evaluate(value, frequency, config))


def phase(value: NicholsResponse, frequency: Any = None,
          config: Optional[NicholsConfig] = None) -> np.ndarray:
    """Phase [deg]: the stored channel, or interpolated at ``frequency``."""
    if frequency is None:
        return value.phase_deg
    return np.real(evaluate(value, frequency, config))
