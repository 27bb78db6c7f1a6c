"""
Error taxonomy for Nichols-form frequency response operations.

Every error is raised synchronously at the call that violates a
precondition. The concrete classes also derive from the matching builtin
(``ValueError`` / ``TypeError``) so callers written against the builtins
keep working.
"""


class NicholsResponseError(Exception):
    """Base class for all frequency response errors."""


class ConstructionError(NicholsResponseError, ValueError):
    """Malformed, mismatched or ambiguous constructor input."""


class FrequencyMismatchError(NicholsResponseError, ValueError):
    """Series composition of two responses sampled on different grids."""


class UnsupportedOperandError(NicholsResponseError, TypeError):
    """Series composition with an operand of unrecognized kind."""


class OutOfRangeError(NicholsResponseError, ValueError):
    """Interpolation query outside the stored frequency span."""


class InvalidArgumentError(NicholsResponseError, ValueError):
    """Malformed query parameter or option."""
