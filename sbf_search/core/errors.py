"""
Exceptions raised by sbf-search.

All errors derive from ValueError: every failure is a deterministic function
of the input, so retrying with the same arguments will fail the same way.
"""


class SBFError(ValueError):
    """Base class for all sbf-search errors."""


class InvalidParameterError(SBFError):
    """A rate, width, frequency or serialized filter is out of range."""


class EmptyInputError(SBFError):
    """A filter was requested for a frequency map with no keys."""


class DecodeError(SBFError):
    """Base2p15 text could not be decoded."""
