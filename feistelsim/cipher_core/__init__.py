"""
Cipher Core Package

This package implements the core of the simulator: the round function
and the Feistel engine that drives the forward and inverse round
schedules while recording a step trace.
"""

from .mix_function import mix
from .feistel_engine import (
    FeistelEngine, Mode, EncryptionResult, DecryptionResult, BitResult,
    validate_rounds, encrypt, decrypt, process
)

__all__ = ['mix', 'FeistelEngine', 'Mode', 'EncryptionResult', 'DecryptionResult', 'BitResult',
           'validate_rounds', 'encrypt', 'decrypt', 'process']
