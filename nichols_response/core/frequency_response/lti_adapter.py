"""
Frequency-Response-Like Interface and LTI Adapter

Series composition and construction accept any operand that can report its
complex frequency response on a given angular frequency grid. The interface
is deliberately small:

    complex_response_at(frequency) -> complex ndarray

``NicholsResponse`` implements it directly. Systems from python-control
(``TransferFunction``, ``StateSpace``, ``FrequencyResponseData``) are
wrapped in ``LTIResponseAdapter``. Only single-input single-output systems
are accepted.
"""

from typing import Any, Optional, Protocol, runtime_checkable

import numpy as np
import control as ctrl
from control.lti import LTI

from .exceptions import InvalidArgumentError


@runtime_checkable
class FrequencyResponseLike(Protocol):
    """Anything that can be evaluated on an angular frequency grid."""

    def complex_response_at(self, frequency: np.ndarray) -> np.ndarray:
        ...


def is_siso(system: LTI) -> bool:
    """Check whether a python-control system has one input and one output."""
    return system.ninputs == 1 and system.noutputs == 1


class LTIResponseAdapter:
    """
    Adapter exposing a python-control LTI system as FrequencyResponseLike.

    Parameters
    ----------
    system : LTI
        SISO transfer function, state space or FRD system

    Raises
    ------
    InvalidArgumentError
        If the system is not SISO
    """

    def __init__(self, system: LTI):
        if not is_siso(system):
            raise InvalidArgumentError(
                f"LTI system must be SISO, got {system.noutputs} output(s) "
                f"and {system.ninputs} input(s)"
            )
        self.system = system

    def complex_response_at(self, frequency: np.ndarray) -> np.ndarray:
        """
        Evaluate H(jω) at the given angular frequencies.

        Parameters
        ----------
        frequency : np.ndarray
            Angular frequency vector [rad/s]

        Returns
        -------
        np.ndarray
            Complex response, one sample per frequency

        Raises
        ------
        InvalidArgumentError
            If the system cannot be evaluated at the requested frequencies,
            e.g. an FRD queried off its stored grid
        """
        omega = np.asarray(frequency, dtype=float).ravel()
        try:
            mag, phase, _ = ctrl.frequency_response(self.system, omega)
        except ValueError as exc:
            raise InvalidArgumentError(
                f"cannot evaluate {type(self.system).__name__} on the requested "
                f"frequencies: {exc}"
            ) from exc
        response = np.asarray(mag) * np.exp(1j * np.asarray(phase))
        return response.reshape(omega.shape)

    def __repr__(self) -> str:
        return f"LTIResponseAdapter({type(self.system).__name__})"


def as_frequency_response_like(obj: Any) -> Optional[FrequencyResponseLike]:
    """
    Resolve an operand to the FrequencyResponseLike interface.

    Returns ``None`` for unrecognized kinds. Raises ``InvalidArgumentError``
    for recognized but non-SISO LTI systems.
    """
    if isinstance(obj, LTI):
        return LTIResponseAdapter(obj)
    if isinstance(obj, FrequencyResponseLike):
        return obj
    return None
