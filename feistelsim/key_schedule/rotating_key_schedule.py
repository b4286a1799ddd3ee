"""
Rotating Key Schedule Implementation

This module derives one round key per round from a textual base key by
rotating the key left by (round mod key length) characters and appending
the decimal round number.
"""

import logging
import numbers
from typing import List

from ..errors import InvalidKeyError, InvalidRoundsError

logger = logging.getLogger(__name__)


def rotate_left(text: str, shift: int) -> str:
    """
    Rotate a string left by the specified number of characters.

    Characters that fall off the front are appended at the end.

    Args:
        text: The string to rotate
        shift: The number of characters to rotate by

    Returns:
        The rotated string
    """
    if not text:
        return text
    shift %= len(text)
    return text[shift:] + text[:shift]


def check_round_index(round_index: int) -> int:
    """
    Ensure a round index (or round count) is an integer of at least 1.

    Any integral type is accepted, numpy integers included.

    Returns:
        The value as a plain int

    Raises:
        InvalidRoundsError: If it is not
    """
    # bool is an int subclass but never a meaningful round count
    if isinstance(round_index, bool) or not isinstance(round_index, numbers.Integral):
        raise InvalidRoundsError(f"Rounds must be an integer, got {type(round_index).__name__}")
    if round_index < 1:
        raise InvalidRoundsError(f"Rounds must be at least 1, got {round_index}")
    return int(round_index)


def check_base_key(base_key: str) -> None:
    """
    Ensure the base key is a non-empty string.

    Raises:
        InvalidKeyError: If it is not
    """
    if not isinstance(base_key, str):
        raise InvalidKeyError(f"Key must be a string, got {type(base_key).__name__}")
    if not base_key:
        raise InvalidKeyError("Key must not be empty")


def derive_round_key(base_key: str, round_index: int) -> str:
    """
    Derive the key for a single round.

    The result is rotate_left(base_key, round_index % len(base_key)) followed
    by str(round_index). A one-character key therefore never rotates; the
    suffix alone keeps the round keys apart.

    Args:
        base_key: The base key text
        round_index: The round number, starting at 1

    Returns:
        The round key text

    Raises:
        InvalidKeyError: If base_key is empty
        InvalidRoundsError: If round_index is below 1
    """
    check_base_key(base_key)
    round_index = check_round_index(round_index)

    rotated = rotate_left(base_key, round_index % len(base_key))
    return rotated + str(round_index)


def round_keys(base_key: str, rounds: int) -> List[str]:
    """
    Derive the keys for rounds 1..rounds in ascending order.

    Args:
        base_key: The base key text
        rounds: Number of rounds

    Returns:
        A list of round keys, index 0 holding the key of round 1
    """
    check_base_key(base_key)
    rounds = check_round_index(rounds)

    keys = [derive_round_key(base_key, r) for r in range(1, rounds + 1)]
    logger.debug(f"Derived {len(keys)} round keys from a {len(base_key)}-character base key")
    return keys
