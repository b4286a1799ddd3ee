"""
Tests for the round function F.
"""

import numpy as np
import pytest

from feistelsim.cipher_core import mix
from feistelsim.codec import encode, from_bit_string, to_bit_string
from feistelsim.errors import InvalidKeyError


def test_zero_key_leaves_only_position_parity():
    """With an all-zero key byte the output is input XOR 0101..."""
    zeros = np.zeros(16, dtype=np.uint8)
    assert to_bit_string(mix(zeros, "\x00")) == "01" * 8


def test_all_ones_key():
    zeros = np.zeros(16, dtype=np.uint8)
    assert to_bit_string(mix(zeros, "\xff")) == "10" * 8


def test_known_value():
    """R0 of 'AB' mixed with the first round key of 'key'."""
    right = encode("B")
    assert to_bit_string(mix(right, "eyk1")) == "01110010"


def test_key_stream_repeats_over_long_inputs():
    """Key bits are reused cyclically when the input outgrows the key."""
    zeros = np.zeros(24, dtype=np.uint8)
    out = to_bit_string(mix(zeros, "A"))
    # 01000001 ^ 01010101 = 00010100, repeated
    assert out == "00010100" * 3


def test_output_length_matches_input():
    for length in (1, 7, 8, 33, 128):
        bits = np.ones(length, dtype=np.uint8)
        assert len(mix(bits, "secretkey3")) == length


def test_mix_is_deterministic():
    bits = from_bit_string("1011001110001111")
    first = mix(bits, "ecretkeys1")
    second = mix(bits, "ecretkeys1")
    assert np.array_equal(first, second)


def test_mix_does_not_modify_input():
    bits = from_bit_string("10110011")
    mix(bits, "k1")
    assert to_bit_string(bits) == "10110011"


def test_empty_round_key_is_rejected():
    with pytest.raises(InvalidKeyError):
        mix(np.zeros(8, dtype=np.uint8), "")
