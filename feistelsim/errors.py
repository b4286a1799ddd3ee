"""
Error Types

All validation failures raised by the simulator derive from FeistelError,
which is itself a ValueError so callers catching ValueError keep working.
"""


class FeistelError(ValueError):
    """Base class for every error raised by the simulator."""


class InvalidKeyError(FeistelError):
    """The base key (or a round key) is empty."""


class InvalidRoundsError(FeistelError):
    """The round count or round index is not an integer >= 1, or exceeds the allowed maximum."""


class InvalidMessageError(FeistelError):
    """The plaintext or ciphertext to transform is empty."""


class EncodingError(FeistelError):
    """A character cannot be represented in 8 bits (strict encoding only)."""


class DecodingError(FeistelError):
    """A bit buffer cannot be turned back into text."""
