"""
Round Function (F)

The keyed mixing step applied to one half-block in every round. Each
output bit is the input bit XOR the cycled key bit XOR the parity of its
position. This is a reversible bit-mix for teaching purposes, not a
secure round function.
"""

import numpy as np

from ..codec.binary_codec import encode
from ..errors import InvalidKeyError


def mix(input_bits: np.ndarray, round_key: str) -> np.ndarray:
    """
    Mix a half-block with a round key.

    Output bit i = input[i] ^ key_bits[i % len(key_bits)] ^ (i % 2), where
    key_bits is the 8-bit encoding of round_key.

    Args:
        input_bits: The half-block as a bit buffer
        round_key: The round key text

    Returns:
        A bit buffer of the same length as input_bits

    Raises:
        InvalidKeyError: If round_key is empty
    """
    if not round_key:
        raise InvalidKeyError("Round key must not be empty")

    key_bits = encode(round_key)
    positions = np.arange(len(input_bits))

    # Position parity keeps adjacent bits from repeating under a short key stream
    keystream = key_bits[positions % len(key_bits)] ^ (positions % 2).astype(np.uint8)
    return np.bitwise_xor(np.asarray(input_bits, dtype=np.uint8), keystream).astype(np.uint8)
