"""
Codec Package

This package converts text to fixed-width bit buffers and back, and
provides the small bit-buffer helpers used by the rest of the simulator.
"""

from .binary_codec import (
    encode, decode, to_bit_string, from_bit_string, xor_bits, empty_bits, BITS_PER_CHAR
)

__all__ = ['encode', 'decode', 'to_bit_string', 'from_bit_string', 'xor_bits', 'empty_bits',
           'BITS_PER_CHAR']
