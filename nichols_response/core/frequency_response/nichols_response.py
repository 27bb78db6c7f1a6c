"""
Nichols-Form Frequency Response Value

``NicholsResponse`` stores a sampled frequency response as two index
aligned vectors:

- ``frequency``: strictly ascending, positive angular frequencies [rad/s]
- ``response``:  Nichols-form samples, phase [deg] + j * magnitude [dB]

The value is immutable. Both arrays are private read-only copies, and every
operation (unwrap, series, gain, resampling) returns a new value.

Construction
------------
One named factory per input shape, each validated independently:

>>> F = NicholsResponse.from_nichols(response, w)          # stored as-is
>>> F = NicholsResponse.from_complex(h, w)                 # via codec
>>> F = NicholsResponse.from_polynomial([1], [1, 1], w)    # N(jw)/D(jw)
>>> F = NicholsResponse.from_lti(ctrl.tf([1], [1, 1]), w)  # python-control
>>> F = NicholsResponse.from_frd(G_frd)                    # SISO FRD

Cascade Algebra
---------------
Multiplying two transfer functions multiplies magnitudes and adds phases,
so in Nichols form (phase deg, magnitude dB) a series connection is a plain
pointwise addition:

>>> L = F.series(C)          # or F * C
>>> L = F.series_gain(20.0)  # +20 dB, canonicalized through unwrap
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd
import control as ctrl
from scipy import signal

from .exceptions import ConstructionError, InvalidArgumentError
from .nichols_codec import (
    complex_to_nichols,
    nichols_to_complex,
    pack_nichols,
    split_nichols,
)
from .nichols_config import NicholsConfig
from .lti_adapter import as_frequency_response_like, is_siso


def as_vector(values: Any, name: str, error=ConstructionError) -> np.ndarray:
    """
    Convert input to a one-dimensional numeric array.

    Scalars become one-element vectors; row (1, n) and column (n, 1) inputs
    are flattened.

    Parameters
    ----------
    values : array_like
        Input data
    name : str
        Argument name used in error messages
    error : type
        Exception class raised on malformed input

    Returns
    -------
    np.ndarray
        One-dimensional array (a new copy)
    """
    try:
        array = np.array(values)
    except (TypeError, ValueError) as exc:
        raise error(f"'{name}' must be a numeric vector: {exc}") from exc

    if not np.issubdtype(array.dtype, np.number):
        raise error(f"'{name}' must be numeric, got dtype {array.dtype}")
    if array.ndim == 0:
        array = array.reshape(1)
    elif array.ndim == 2 and 1 in array.shape:
        array = array.ravel()
    elif array.ndim != 1:
        raise error(f"'{name}' must be one-dimensional, got shape {array.shape}")
    if array.size == 0:
        raise error(f"'{name}' must not be empty")
    return array


def as_frequency_vector(values: Any, name: str = 'frequency',
                        error=ConstructionError) -> np.ndarray:
    """Validate a real, finite, strictly positive angular frequency vector."""
    array = as_vector(values, name, error)
    if np.iscomplexobj(array):
        if np.any(np.imag(array) != 0):
            raise error(f"'{name}' must be real")
        array = np.real(array)
    array = array.astype(float)
    if not np.all(np.isfinite(array)):
        raise error(f"'{name}' must be finite")
    if np.any(array <= 0):
        raise error(f"'{name}' must be strictly positive [rad/s]")
    return array


def _read_only(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class NicholsResponse:
    """
    Sampled frequency response in Nichols form.

    Attributes
    ----------
    frequency : np.ndarray
        Angular frequency grid [rad/s], strictly ascending
    response : np.ndarray
        Nichols-form samples (phase_deg + j*magnitude_db)
    """
    frequency: np.ndarray
    response: np.ndarray

    def __post_init__(self):
        frequency = as_frequency_vector(self.frequency)
        if np.any(np.diff(frequency) <= 0):
            raise ConstructionError("'frequency' must be strictly ascending")

        response = as_vector(self.response, 'response')
        if response.size != frequency.size:
            raise ConstructionError(
                f"'response' and 'frequency' must have the same length, "
                f"got {response.size} and {frequency.size}"
            )
        response = response.astype(complex)

        object.__setattr__(self, 'frequency', _read_only(frequency))
        object.__setattr__(self, 'response', _read_only(response))

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_nichols(cls, response: Any, frequency: Any) -> 'NicholsResponse':
        """Construct from Nichols-form samples and a matching frequency vector."""
        return cls(frequency=frequency, response=response)

    @classmethod
    def from_complex(cls, response: Any, frequency: Any,
                     unwrap_phase: bool = False,
                     config: Optional[NicholsConfig] = None) -> 'NicholsResponse':
        """
        Construct from complex samples H(jω) and a matching frequency vector.

        Parameters
        ----------
        response : array_like
            Complex frequency response samples
        frequency : array_like
            Angular frequency vector [rad/s]
        unwrap_phase : bool
            Store continuous phase instead of the principal value
        config : NicholsConfig, optional
            Phase policy
        """
        samples = as_vector(response, 'response')
        frequency = as_frequency_vector(frequency)
        if samples.size != frequency.size:
            raise ConstructionError(
                f"'response' and 'frequency' must have the same length, "
                f"got {samples.size} and {frequency.size}"
            )
        nichols = complex_to_nichols(samples, unwrap=unwrap_phase, config=config)
        return cls(frequency=frequency, response=nichols)

    @classmethod
    def from_polynomial(cls, numerator: Any, denominator: Any,
                        frequency: Any) -> 'NicholsResponse':
        """
        Construct from transfer function polynomial coefficients.

        Evaluates H(jω) = N(jω) / D(jω) with coefficients in descending
        powers of s.

        Parameters
        ----------
        numerator : array_like
            Numerator coefficients
        denominator : array_like
            Denominator coefficients
        frequency : array_like
            Angular frequency vector [rad/s]
        """
        num = as_vector(numerator, 'numerator')
        den = as_vector(denominator, 'denominator')
        for name, coeffs in (('numerator', num), ('denominator', den)):
            if np.iscomplexobj(coeffs) or not np.all(np.isfinite(coeffs)):
                raise ConstructionError(f"'{name}' coefficients must be real and finite")
        if not np.any(den):
            raise ConstructionError("'denominator' must have a nonzero coefficient")

        frequency = as_frequency_vector(frequency)
        _, h = signal.freqs(num.astype(float), den.astype(float), worN=frequency)
        return cls.from_complex(h, frequency)

    @classmethod
    def from_lti(cls, system: Any, frequency: Any, unwrap_phase: bool = False,
                 config: Optional[NicholsConfig] = None) -> 'NicholsResponse':
        """
        Construct by evaluating an LTI system on a frequency grid.

        Parameters
        ----------
        system : ctrl.LTI or FrequencyResponseLike
            SISO python-control system, or any object exposing
            ``complex_response_at(frequency)``
        frequency : array_like
            Angular frequency vector [rad/s]
        unwrap_phase : bool
            Store continuous phase instead of the principal value
        config : NicholsConfig, optional
            Phase policy

        Raises
        ------
        ConstructionError
            Unrecognized system kind, malformed frequency vector, or a
            system that cannot be evaluated on the frequency grid
        InvalidArgumentError
            Non-SISO system
        """
        frequency = as_frequency_vector(frequency)
        source = as_frequency_response_like(system)
        if source is None:
            raise ConstructionError(
                f"cannot construct a frequency response from {type(system).__name__}; "
                f"expected a python-control LTI system or an object with "
                f"complex_response_at()"
            )
        try:
            h = source.complex_response_at(frequency)
        except InvalidArgumentError as exc:
            raise ConstructionError(str(exc)) from exc
        return cls.from_complex(h, frequency, unwrap_phase=unwrap_phase, config=config)

    @classmethod
    def from_frd(cls, frd: Any) -> 'NicholsResponse':
        """
        Construct from a SISO python-control FrequencyResponseData object.

        Raises
        ------
        ConstructionError
            If the input is not an FRD object
        InvalidArgumentError
            If the FRD is not SISO
        """
        if not isinstance(frd, ctrl.FrequencyResponseData):
            raise ConstructionError(
                f"from_frd expects a FrequencyResponseData, got {type(frd).__name__}"
            )
        if not is_siso(frd):
            raise InvalidArgumentError(
                f"FRD must be SISO, got {frd.noutputs} output(s) and {frd.ninputs} input(s)"
            )
        return cls.from_complex(np.asarray(frd.fresp)[0, 0, :], frd.omega)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NicholsResponse':
        """Construct from the parallel sequences produced by ``to_dict``."""
        try:
            phase_deg = data['phase_deg']
            magnitude_db = data['magnitude_db']
            frequency = data['frequency_rad']
        except KeyError as exc:
            raise ConstructionError(f"missing key {exc} in response data") from exc
        phase_deg = as_vector(phase_deg, 'phase_deg')
        magnitude_db = as_vector(magnitude_db, 'magnitude_db')
        if phase_deg.size != magnitude_db.size:
            raise ConstructionError(
                f"'phase_deg' and 'magnitude_db' must have the same length, "
                f"got {phase_deg.size} and {magnitude_db.size}"
            )
        return cls(frequency=frequency, response=pack_nichols(phase_deg, magnitude_db))

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    @property
    def phase_deg(self) -> np.ndarray:
        """Stored phase channel [deg]."""
        return split_nichols(self.response)[0]

    @property
    def magnitude_db(self) -> np.ndarray:
        """Stored magnitude channel [dB]."""
        return split_nichols(self.response)[1]

    def to_complex(self) -> np.ndarray:
        """Conventional complex response H(jω) on the stored grid."""
        return nichols_to_complex(self.response)

    def to_frd(self) -> ctrl.FrequencyResponseData:
        """Convert to a python-control FrequencyResponseData object."""
        return ctrl.FrequencyResponseData(self.to_complex(), np.array(self.frequency))

    def to_dict(self) -> Dict[str, list]:
        """Serialize as parallel numeric sequences."""
        return {
            'frequency_rad': self.frequency.tolist(),
            'phase_deg': self.phase_deg.tolist(),
            'magnitude_db': self.magnitude_db.tolist(),
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Tabular view, one row per frequency sample."""
        return pd.DataFrame({
            'frequency_rad': self.frequency,
            'phase_deg': self.phase_deg,
            'magnitude_db': self.magnitude_db,
        })

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def evaluate(self, frequency: Any,
                 config: Optional[NicholsConfig] = None) -> np.ndarray:
        """Nichols-form samples interpolated at the given frequencies."""
        from .interpolation import evaluate
        return evaluate(self, frequency, config)

    def magnitude(self, frequency: Any = None,
                  config: Optional[NicholsConfig] = None) -> np.ndarray:
        """Magnitude [dB], stored or interpolated at the given frequencies."""
        from .interpolation import magnitude
        return magnitude(self, frequency, config)

    def phase(self, frequency: Any = None,
              config: Optional[NicholsConfig] = None) -> np.ndarray:
        """Phase [deg], stored or interpolated at the given frequencies."""
        from .interpolation import phase
        return phase(self, frequency, config)

    def complex_response_at(self, frequency: Any) -> np.ndarray:
        """Complex response H(jω) interpolated at the given frequencies."""
        return nichols_to_complex(self.evaluate(frequency))

    def unwrap(self, config: Optional[NicholsConfig] = None) -> 'NicholsResponse':
        """Remove phase wraps and fold the first sample into (-360, 0] deg."""
        from .unwrapper import unwrap_response
        return unwrap_response(self, config)

    def series(self, other: Any,
               config: Optional[NicholsConfig] = None) -> 'NicholsResponse':
        """Series connection with another response, an LTI system or a gain."""
        from .series_composer import series
        return series(self, other, config)

    def series_gain(self, gain_db: float, phase_deg: float = 0.0,
                    config: Optional[NicholsConfig] = None) -> 'NicholsResponse':
        """Series connection with a pure gain [dB] and optional phase offset [deg]."""
        from .series_composer import series_gain
        return series_gain(self, gain_db, phase_deg, config)

    def __mul__(self, other: Any) -> 'NicholsResponse':
        return self.series(other)

    def __rmul__(self, other: Any) -> 'NicholsResponse':
        return self.series(other)

    def __len__(self) -> int:
        return self.frequency.size

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, NicholsResponse):
            return NotImplemented
        return (np.array_equal(self.frequency, other.frequency)
                and np.array_equal(self.response, other.response))

    __hash__ = None

    def __repr__(self) -> str:
        return (f"NicholsResponse(n={len(self)}, "
                f"frequency=[{self.frequency[0]:.4g}, {self.frequency[-1]:.4g}] rad/s)")
