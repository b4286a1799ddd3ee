"""
Binary Text Codec

This module converts text to a fixed-width binary representation (8 bits
per character, most significant bit first) and back. Bit buffers are
numpy uint8 arrays holding one bit per element.
"""

import logging
import numpy as np

from ..errors import EncodingError, DecodingError

logger = logging.getLogger(__name__)

BITS_PER_CHAR = 8
CHAR_MASK = (1 << BITS_PER_CHAR) - 1


def empty_bits() -> np.ndarray:
    """Return a zero-length bit buffer."""
    return np.zeros(0, dtype=np.uint8)


def encode(text: str, strict: bool = False) -> np.ndarray:
    """
    Encode text as a bit buffer, 8 bits per character.

    Code points above 255 do not fit the 8-bit budget. By default only
    their low 8 bits are kept; with strict=True they are rejected.

    Args:
        text: The text to encode
        strict: Whether to raise instead of truncating wide characters

    Returns:
        A uint8 array of length 8 * len(text) containing 0s and 1s

    Raises:
        EncodingError: If strict is set and a code point exceeds 255
    """
    codes = [ord(ch) for ch in text]
    wide = [(i, c) for i, c in enumerate(codes) if c > CHAR_MASK]

    if wide:
        position, code = wide[0]
        if strict:
            raise EncodingError(
                f"Character {text[position]!r} (U+{code:04X}) at position {position} "
                f"does not fit in {BITS_PER_CHAR} bits"
            )
        logger.warning(f"Truncating {len(wide)} character(s) above U+00FF to their low {BITS_PER_CHAR} bits")

    data = np.array([c & CHAR_MASK for c in codes], dtype=np.uint8)
    return np.unpackbits(data)


def decode(bits: np.ndarray) -> str:
    """
    Decode a bit buffer back into text.

    Args:
        bits: A bit buffer whose length is a multiple of 8

    Returns:
        The decoded text, one character per 8 bits

    Raises:
        DecodingError: If the length is not a multiple of 8 or an element is not a bit
    """
    bits = np.asarray(bits)
    if len(bits) % BITS_PER_CHAR != 0:
        raise DecodingError(f"Bit length must be a multiple of {BITS_PER_CHAR}, got {len(bits)}")
    if bits.size and not np.isin(bits, (0, 1)).all():
        raise DecodingError("Bit buffer may only contain 0 and 1")

    data = np.packbits(bits.astype(np.uint8))
    return ''.join(chr(b) for b in data.tolist())


def to_bit_string(bits: np.ndarray) -> str:
    """Render a bit buffer as a string of '0' and '1' characters."""
    return ''.join('1' if b else '0' for b in np.asarray(bits).tolist())


def from_bit_string(text: str) -> np.ndarray:
    """
    Parse a string of '0' and '1' characters into a bit buffer.

    Raises:
        DecodingError: If any other character is present
    """
    stray = set(text) - {'0', '1'}
    if stray:
        raise DecodingError(f"Bit strings may only contain '0' and '1', found {sorted(stray)!r}")
    return np.array([int(ch) for ch in text], dtype=np.uint8)


def xor_bits(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    XOR two bit buffers of equal length.

    Raises:
        ValueError: If the lengths differ
    """
    if len(a) != len(b):
        raise ValueError(f"Cannot XOR bit buffers of different lengths ({len(a)} and {len(b)})")
    return np.bitwise_xor(a, b).astype(np.uint8)
