"""
Series (Cascade) Composition

A series connection multiplies complex transfer functions:

$$L(j\\omega) = A(j\\omega) B(j\\omega)$$

so magnitudes multiply (dB values add) and phases add. In Nichols form the
cascade is therefore a pointwise sum of the packed samples.

Operand Kinds
-------------
- ``NicholsResponse``: grids must match element-wise; samples are summed
  with no renormalization.
- LTI-like (python-control system or any ``complex_response_at``
  implementer): evaluated on the left operand's grid, wrapped into the
  window centred on ``series_anchor_deg`` (-180 deg), then summed with no
  renormalization.
- real scalar: a pure gain in dB, see ``series_gain``. The result is always
  canonicalized through the unwrapper.
"""

from numbers import Real
from typing import Any, Optional

import numpy as np

from .exceptions import FrequencyMismatchError, InvalidArgumentError, UnsupportedOperandError
from .lti_adapter import as_frequency_response_like
from .nichols_codec import complex_to_nichols, pack_nichols
from .nichols_config import NicholsConfig, DEFAULT_CONFIG
from .nichols_response import NicholsResponse
from .unwrapper import unwrap_response


def _is_real_scalar(obj: Any) -> bool:
    return isinstance(obj, (Real, np.integer, np.floating)) and not isinstance(obj, (bool, np.bool_))


def series(a: NicholsResponse, b: Any,
           config: Optional[NicholsConfig] = None) -> NicholsResponse:
    """
    Series connection of a response with another operand.

    Parameters
    ----------
    a : NicholsResponse
        Left operand; its frequency grid is the grid of the result
    b : NicholsResponse, LTI-like or float
        Right operand
    config : NicholsConfig, optional
        Wrapping anchor and unwrap policy

    Returns
    -------
    NicholsResponse
        Cascaded response on ``a.frequency``

    Raises
    ------
    FrequencyMismatchError
        ``b`` is a NicholsResponse sampled on a different grid
    InvalidArgumentError
        ``b`` is a non-SISO LTI system
    UnsupportedOperandError
        ``b`` is of any other kind
    """
    config = config or DEFAULT_CONFIG

    if isinstance(b, NicholsResponse):
        if not np.array_equal(a.frequency, b.frequency):
            detail = 'differing values' if len(a) == len(b) else f"{len(a)} vs {len(b)} samples"
            raise FrequencyMismatchError(
                f"series connection requires identical frequency vectors ({detail})"
            )
        return NicholsResponse(frequency=a.frequency, response=a.response + b.response)

    if _is_real_scalar(b):
        return series_gain(a, float(b), config=config)

    source = as_frequency_response_like(b)
    if source is None:
        raise UnsupportedOperandError(
            f"series operand must be a NicholsResponse, an LTI system or a "
            f"real gain, got {type(b).__name__}"
        )
    h = np.asarray(source.complex_response_at(a.frequency), dtype=complex).ravel()
    if h.size != len(a):
        raise InvalidArgumentError(
            f"{type(b).__name__}.complex_response_at returned {h.size} samples "
            f"for {len(a)} frequencies"
        )
    b_nichols = complex_to_nichols(h, anchor_deg=config.series_anchor_deg, config=config)
    return NicholsResponse(frequency=a.frequency, response=a.response + b_nichols)


def series_gain(a: NicholsResponse, gain_db: float, phase_deg: float = 0.0,
                config: Optional[NicholsConfig] = None) -> NicholsResponse:
    """
    Series connection with a pure gain.

    Adds ``gain_db`` to the magnitude channel and ``phase_deg`` to the phase
    channel, then canonicalizes the result with the unwrapper.

    Parameters
    ----------
    a : NicholsResponse
        Response to scale
    gain_db : float
        Gain [dB]
    phase_deg : float
        Constant phase offset [deg], e.g. -180 for a sign inversion
    config : NicholsConfig, optional
        Unwrap policy
    """
    for name, val in (('gain_db', gain_db), ('phase_deg', phase_deg)):
        if not _is_real_scalar(val):
            raise UnsupportedOperandError(
                f"'{name}' must be a real scalar, got {type(val).__name__}"
            )
        if not np.isfinite(val):
            raise InvalidArgumentError(f"'{name}' must be finite, got {val}")

    shifted = a.response + pack_nichols(float(phase_deg), float(gain_db))
    return unwrap_response(NicholsResponse(frequency=a.frequency, response=shifted), config)
