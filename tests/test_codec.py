"""
Tests for the binary text codec.
"""

import numpy as np
import pytest

from feistelsim.codec import encode, decode, to_bit_string, from_bit_string, xor_bits
from feistelsim.errors import EncodingError, DecodingError


def test_encode_is_msb_first_eight_bits_per_char():
    """'A' (0x41) encodes as 01000001 and each character takes 8 bits."""
    assert to_bit_string(encode("A")) == "01000001"
    assert to_bit_string(encode("AB")) == "0100000101000010"
    assert len(encode("Hello123")) == 64


def test_encode_zero_pads_small_code_points():
    assert to_bit_string(encode("\x01")) == "00000001"
    assert to_bit_string(encode("\x00")) == "00000000"


def test_encode_empty_text():
    bits = encode("")
    assert len(bits) == 0
    assert decode(bits) == ""


def test_round_trip_for_all_byte_values():
    """Every code point from 0 to 255 survives encode then decode."""
    text = "".join(chr(c) for c in range(256))
    assert decode(encode(text)) == text


def test_wide_characters_are_truncated_by_default():
    """U+0141 keeps only its low byte 0x41."""
    assert decode(encode("Ł")) == "A"


def test_strict_encoding_rejects_wide_characters():
    with pytest.raises(EncodingError):
        encode("ok€", strict=True)


def test_decode_rejects_partial_bytes():
    with pytest.raises(DecodingError):
        decode(np.array([0, 1, 0, 0, 0, 0, 1], dtype=np.uint8))


def test_decode_rejects_non_bits():
    with pytest.raises(DecodingError):
        decode(np.array([0, 1, 2, 0, 0, 0, 0, 1], dtype=np.uint8))


def test_bit_string_helpers():
    bits = from_bit_string("0110")
    assert bits.dtype == np.uint8
    assert list(bits) == [0, 1, 1, 0]
    assert to_bit_string(bits) == "0110"

    with pytest.raises(DecodingError):
        from_bit_string("01x0")


def test_xor_bits():
    a = from_bit_string("1100")
    b = from_bit_string("1010")
    assert to_bit_string(xor_bits(a, b)) == "0110"

    with pytest.raises(ValueError):
        xor_bits(a, from_bit_string("10"))
