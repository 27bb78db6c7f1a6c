"""
Complex / Nichols-Form Codec

Conversion between conventional complex frequency response samples
H(jω) and the Nichols-form packing used throughout this package:

$$N = \\angle H \\cdot \\frac{180}{\\pi} + j \\cdot 20\\log_{10}|H|$$

The packed value is a storage convenience. Its real part is phase [deg]
and its imaginary part is magnitude [dB]; it is never a geometric complex
number. The inverse mapping is

$$H = 10^{\\Im N / 20} \\, e^{j \\Re N \\pi / 180}$$

Phase Conventions
-----------------
- default: principal value per sample, (-180, 180] deg
- ``unwrap=True``: continuous phase across the vector, jumps larger than
  the configured tolerance are folded by multiples of 360 deg
- ``anchor_deg=a``: principal value shifted into (a-180, a+180] deg

Zero-magnitude samples map to -inf dB following IEEE semantics.
"""

import warnings
from typing import Optional, Tuple

import numpy as np

from .exceptions import InvalidArgumentError
from .nichols_config import NicholsConfig, DEFAULT_CONFIG


def pack_nichols(phase_deg: np.ndarray, magnitude_db: np.ndarray) -> np.ndarray:
    """
    Pack phase and magnitude channels into Nichols-form samples.

    The channels are assigned directly; ``phase + 1j * mag`` would turn an
    infinite magnitude into a NaN phase.
    """
    phase_deg = np.asarray(phase_deg, dtype=float)
    magnitude_db = np.asarray(magnitude_db, dtype=float)
    phase_deg, magnitude_db = np.broadcast_arrays(phase_deg, magnitude_db)
    packed = np.empty(phase_deg.shape, dtype=complex)
    packed.real = phase_deg
    packed.imag = magnitude_db
    return packed


def split_nichols(samples: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Return the (phase_deg, magnitude_db) channels of Nichols-form samples."""
    samples = np.asarray(samples)
    return np.real(samples).astype(float), np.imag(samples).astype(float)


def wrap_phase(phase_deg: np.ndarray, anchor_deg: float = 0.0) -> np.ndarray:
    """
    Fold phase values into the 360 deg window (anchor-180, anchor+180].

    Parameters
    ----------
    phase_deg : np.ndarray
        Phase values [deg]
    anchor_deg : float
        Centre of the target window [deg]

    Returns
    -------
    np.ndarray
        Phase values congruent to the input modulo 360 deg
    """
    upper = anchor_deg + 180.0
    return upper - np.mod(upper - np.asarray(phase_deg, dtype=float), 360.0)


def complex_to_nichols(
    samples: np.ndarray,
    unwrap: bool = False,
    anchor_deg: Optional[float] = None,
    config: Optional[NicholsConfig] = None
) -> np.ndarray:
    """
    Convert complex frequency response samples to Nichols form.

    Parameters
    ----------
    samples : np.ndarray
        Complex samples H(jω)
    unwrap : bool
        Remove 360 deg discontinuities across the whole vector
    anchor_deg : float, optional
        Wrap each sample into (anchor-180, anchor+180] deg instead of the
        principal value window
    config : NicholsConfig, optional
        Supplies the unwrap jump tolerance

    Returns
    -------
    np.ndarray
        Nichols-form samples (phase_deg + j*mag_db), same shape as input
    """
    if unwrap and anchor_deg is not None:
        raise InvalidArgumentError(
            "complex_to_nichols: 'unwrap' and 'anchor_deg' are mutually exclusive"
        )
    config = config or DEFAULT_CONFIG
    samples = np.asarray(samples, dtype=complex)

    magnitude = np.abs(samples)
    n_zero = int(np.count_nonzero(magnitude == 0))
    if n_zero:
        warnings.warn(
            f"{n_zero} zero-magnitude sample(s) mapped to -inf dB",
            RuntimeWarning,
            stacklevel=2
        )
    with np.errstate(divide='ignore'):
        magnitude_db = 20.0 * np.log10(magnitude)

    phase_deg = np.angle(samples, deg=True)
    if unwrap:
        # NaN samples (e.g. a pole on the grid) would poison the running sum
        finite = np.isfinite(phase_deg)
        phase_deg[finite] = np.unwrap(
            phase_deg[finite],
            discont=config.unwrap_tolerance_deg,
            period=360.0
        )
    elif anchor_deg is not None:
        phase_deg = wrap_phase(phase_deg, anchor_deg)

    return pack_nichols(phase_deg, magnitude_db)


def nichols_to_complex(samples: np.ndarray) -> np.ndarray:
    """
    Convert Nichols-form samples back to complex frequency response.

    Exact inverse of ``complex_to_nichols`` for the principal value branch;
    any 360 deg multiple in the phase channel maps to the same sample.
    """
    phase_deg, magnitude_db = split_nichols(samples)
    return 10.0 ** (magnitude_db / 20.0) * np.exp(1j * np.deg2rad(phase_deg))
