"""
Feistel Engine Implementation

This module provides the FeistelEngine, which splits a message into two
halves, runs them through a configurable number of Feistel rounds and
recombines them, recording every intermediate state in a Trace.

The final block is Left ++ Right with no closing swap, and decryption
walks the round keys in reverse with the roles of the halves exchanged.
When an odd-length bit buffer is padded with a 0 bit, the inverse
transform reproduces the padded buffer; the original length is not
recovered.
"""

import logging
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple, Union

import numpy as np

from ..codec.binary_codec import (
    encode, decode, to_bit_string, from_bit_string, xor_bits, BITS_PER_CHAR
)
from ..errors import InvalidMessageError, InvalidRoundsError
from ..key_schedule.rotating_key_schedule import (
    derive_round_key, check_base_key, check_round_index
)
from ..trace.steps import ConversionStep, SplitStep, RoundRecord, FinalStep, Trace
from .mix_function import mix

logger = logging.getLogger(__name__)


class Mode(Enum):
    """Direction of a transform."""
    ENCRYPT = 'encrypt'
    DECRYPT = 'decrypt'


class EncryptionResult(NamedTuple):
    ciphertext: str
    trace: Trace


class DecryptionResult(NamedTuple):
    plaintext: str
    trace: Trace


class BitResult(NamedTuple):
    bits: np.ndarray
    trace: Trace


def validate_rounds(rounds: int, max_rounds: Optional[int] = None) -> int:
    """
    Check a round count, optionally against an upper bound.

    The engine itself only needs rounds >= 1; human-facing callers
    normally also cap it (16 by default, see config.DEFAULT_PARAMS).

    Args:
        rounds: The requested round count
        max_rounds: Optional inclusive upper bound

    Returns:
        The validated round count

    Raises:
        InvalidRoundsError: If rounds is not an integer in range
    """
    rounds = check_round_index(rounds)
    if max_rounds is not None and rounds > max_rounds:
        raise InvalidRoundsError(f"Rounds must be at most {max_rounds}, got {rounds}")
    return rounds


class FeistelEngine:
    """
    Feistel network over 8-bit encoded text with a full step trace.

    The engine holds no per-call state and may be shared between threads.
    """

    def __init__(self, strict_encoding: bool = False):
        """
        Initialize the engine.

        Args:
            strict_encoding: Reject characters above U+00FF instead of
                truncating them to their low 8 bits
        """
        self.strict_encoding = strict_encoding

    def _check_message(self, message: str) -> None:
        """
        Ensure the message to transform is a non-empty string.

        Args:
            message: The plaintext or ciphertext

        Raises:
            InvalidMessageError: If it is not a string or is empty
        """
        if not isinstance(message, str):
            raise InvalidMessageError(f"Message must be a string, got {type(message).__name__}")
        if not message:
            raise InvalidMessageError("Message must not be empty")

    def _describe_conversion(self, text: Optional[str], bit_count: int, padded: bool) -> str:
        """
        Build the narration for the conversion step.

        Args:
            text: The message text, or None for raw bit input
            bit_count: Number of bits before padding
            padded: Whether a 0 bit was appended

        Returns:
            The description text
        """
        if text is not None:
            description = f'We convert "{text}" into {bit_count} bits, 8 per character'
        else:
            description = f'We take the input as a block of {bit_count} bits'
        if padded:
            description += ', then add one 0 bit so the block splits evenly'
        return description

    def _transform(self,
                   bits: np.ndarray,
                   text: Optional[str],
                   key: str,
                   rounds: int,
                   mode: Mode) -> Tuple[np.ndarray, Trace]:
        """
        Run the split, round and combine pipeline in one direction.

        Args:
            bits: The message as a bit buffer
            text: The message text, or None for raw bit input
            key: The base key
            rounds: Number of rounds
            mode: Direction of the transform

        Returns:
            A tuple of (final block bits, trace)
        """
        padded = len(bits) % 2 == 1
        if padded:
            bits = np.append(bits, np.uint8(0)).astype(np.uint8)

        steps: List = [
            ConversionStep(
                text=text,
                bits=to_bit_string(bits),
                padded=padded,
                description=self._describe_conversion(text, len(bits) - padded, padded)
            )
        ]

        half = len(bits) // 2
        left, right = bits[:half], bits[half:]

        if mode is Mode.ENCRYPT:
            split_description = f'We start by splitting the {len(bits)}-bit block into two equal parts'
            key_order = range(1, rounds + 1)
        else:
            split_description = 'We start by splitting the ciphertext into two parts'
            key_order = range(rounds, 0, -1)

        steps.append(SplitStep(
            left=to_bit_string(left),
            right=to_bit_string(right),
            description=split_description
        ))

        for number, key_index in enumerate(key_order, start=1):
            round_key = derive_round_key(key, key_index)

            if mode is Mode.ENCRYPT:
                mixed = mix(right, round_key)
                new_left, new_right = right, xor_bits(left, mixed)
                description = (f'Round {number}: We mix the Right part with the key "{round_key}", '
                               f'then combine with Left')
                action = 'Mixed Right with Key -> Combined with Left -> Swapped sides'
            else:
                mixed = mix(left, round_key)
                new_left, new_right = xor_bits(right, mixed), left
                description = (f'Round {number}: We mix the Left part with the key "{round_key}", '
                               f'then combine with Right')
                action = 'Mixed Left with Key -> Combined with Right -> Swapped sides'

            steps.append(RoundRecord(
                round=number,
                key_index=key_index,
                round_key=round_key,
                mix_output=to_bit_string(mixed),
                left_in=to_bit_string(left),
                right_in=to_bit_string(right),
                left_out=to_bit_string(new_left),
                right_out=to_bit_string(new_right),
                description=description,
                action=action
            ))
            logger.debug(f"{mode.value} round {number} used key index {key_index}")

            left, right = new_left, new_right

        final_bits = np.concatenate((left, right)).astype(np.uint8)
        final_text = decode(final_bits) if len(final_bits) % BITS_PER_CHAR == 0 else None

        if mode is Mode.ENCRYPT:
            final_description = 'After all rounds, we join Left and Right to form the ciphertext'
            final_action = 'Combined Left and Right to get the encrypted message'
        else:
            final_description = 'After all rounds, we combine the parts to get the original message'
            final_action = 'Combined Left and Right to get original message'

        steps.append(FinalStep(
            left=to_bit_string(left),
            right=to_bit_string(right),
            bits=to_bit_string(final_bits),
            text=final_text,
            description=final_description,
            action=final_action
        ))

        return final_bits, Trace(mode=mode.value, rounds=rounds, steps=tuple(steps))

    def _run_text(self, message: str, key: str, rounds: int, mode: Mode) -> Tuple[str, Trace]:
        """
        Validate a text request, encode it and run the transform.

        Args:
            message: The plaintext or ciphertext
            key: The base key
            rounds: Number of rounds
            mode: Direction of the transform

        Returns:
            A tuple of (output text, trace)
        """
        self._check_message(message)
        check_base_key(key)
        rounds = validate_rounds(rounds)

        bits = encode(message, strict=self.strict_encoding)
        _, trace = self._transform(bits, message, key, rounds, mode)

        logger.info(f"{mode.value}ed {len(message)} character(s) with {rounds} round(s)")
        return trace.final.text, trace

    def _run_bits(self,
                  bits: Union[np.ndarray, str],
                  key: str,
                  rounds: int,
                  mode: Mode) -> BitResult:
        """
        Validate a bit-buffer request and run the transform.

        Args:
            bits: The message as a bit buffer or a '0'/'1' string
            key: The base key
            rounds: Number of rounds
            mode: Direction of the transform

        Returns:
            BitResult of (final block bits, trace)
        """
        if isinstance(bits, str):
            bits = from_bit_string(bits)
        bits = np.asarray(bits, dtype=np.uint8)
        if not len(bits):
            raise InvalidMessageError("Bit buffer must not be empty")
        if not np.isin(bits, (0, 1)).all():
            raise InvalidMessageError("Bit buffer may only contain 0 and 1")
        check_base_key(key)
        rounds = validate_rounds(rounds)

        final_bits, trace = self._transform(bits, None, key, rounds, mode)
        logger.info(f"{mode.value}ed {len(bits)} bit(s) with {rounds} round(s)")
        return BitResult(final_bits, trace)

    def encrypt(self, plaintext: str, key: str, rounds: int) -> EncryptionResult:
        """
        Encrypt text.

        Args:
            plaintext: The text to encrypt (non-empty)
            key: The base key (non-empty)
            rounds: Number of rounds (at least 1)

        Returns:
            EncryptionResult of (ciphertext, trace)

        Raises:
            InvalidMessageError: If plaintext is empty
            InvalidKeyError: If key is empty
            InvalidRoundsError: If rounds is below 1
            EncodingError: If strict encoding rejects a character
        """
        ciphertext, trace = self._run_text(plaintext, key, rounds, Mode.ENCRYPT)
        return EncryptionResult(ciphertext, trace)

    def decrypt(self, ciphertext: str, key: str, rounds: int) -> DecryptionResult:
        """
        Decrypt text produced by encrypt() with the same key and rounds.

        Args:
            ciphertext: The text to decrypt (non-empty)
            key: The base key (non-empty)
            rounds: Number of rounds (at least 1)

        Returns:
            DecryptionResult of (plaintext, trace)

        Raises:
            InvalidMessageError: If ciphertext is empty
            InvalidKeyError: If key is empty
            InvalidRoundsError: If rounds is below 1
            EncodingError: If strict encoding rejects a character
        """
        plaintext, trace = self._run_text(ciphertext, key, rounds, Mode.DECRYPT)
        return DecryptionResult(plaintext, trace)

    def encrypt_bits(self, bits: Union[np.ndarray, str], key: str, rounds: int) -> BitResult:
        """
        Encrypt a raw bit buffer (array of 0/1 or a '0'/'1' string).

        Odd-length input is padded with a single 0 bit before splitting.
        """
        return self._run_bits(bits, key, rounds, Mode.ENCRYPT)

    def decrypt_bits(self, bits: Union[np.ndarray, str], key: str, rounds: int) -> BitResult:
        """Decrypt a raw bit buffer produced by encrypt_bits()."""
        return self._run_bits(bits, key, rounds, Mode.DECRYPT)

    def process(self, mode: Union[Mode, str], text: str, key: str, rounds: int) -> Tuple[str, Trace]:
        """
        Encrypt or decrypt depending on mode.

        Args:
            mode: Mode.ENCRYPT, Mode.DECRYPT, 'encrypt' or 'decrypt'
            text: The message
            key: The base key
            rounds: Number of rounds

        Returns:
            A tuple of (output text, trace)

        Raises:
            ValueError: If mode is not recognised
        """
        mode = Mode(mode)
        if mode is Mode.ENCRYPT:
            return self.encrypt(text, key, rounds)
        return self.decrypt(text, key, rounds)


def encrypt(plaintext: str, key: str, rounds: int, strict_encoding: bool = False) -> EncryptionResult:
    """
    Convenience function to encrypt text.

    Args:
        plaintext: The text to encrypt
        key: The base key
        rounds: Number of rounds
        strict_encoding: Reject characters above U+00FF

    Returns:
        EncryptionResult of (ciphertext, trace)
    """
    engine = FeistelEngine(strict_encoding=strict_encoding)
    return engine.encrypt(plaintext, key, rounds)


def decrypt(ciphertext: str, key: str, rounds: int, strict_encoding: bool = False) -> DecryptionResult:
    """
    Convenience function to decrypt text.

    Args:
        ciphertext: The text to decrypt
        key: The base key
        rounds: Number of rounds
        strict_encoding: Reject characters above U+00FF

    Returns:
        DecryptionResult of (plaintext, trace)
    """
    engine = FeistelEngine(strict_encoding=strict_encoding)
    return engine.decrypt(ciphertext, key, rounds)


def process(mode: Union[Mode, str], text: str, key: str, rounds: int,
            strict_encoding: bool = False) -> Tuple[str, Trace]:
    """Convenience function dispatching to encrypt or decrypt by mode."""
    engine = FeistelEngine(strict_encoding=strict_encoding)
    return engine.process(mode, text, key, rounds)


if __name__ == "__main__":
    # Walk through a small example
    result = encrypt("Hello123", "secretkey", 4)
    for step in result.trace:
        print(f"{step.operation}: {step.description}")
    print(f"Ciphertext: {result.ciphertext!r}")

    restored = decrypt(result.ciphertext, "secretkey", 4)
    print(f"Decrypted: {restored.plaintext}")
    assert restored.plaintext == "Hello123"
