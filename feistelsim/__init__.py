"""
FeistelSim - Step-by-step Feistel Network Simulator

This library implements a small, deliberately insecure Feistel-network
block cipher over text, together with a complete trace of every
intermediate state so that each round can be inspected or animated.

Key Features:
- 8-bit text to bit-buffer codec
- Rotate-and-append round key schedule
- Simple reversible bit-mix round function
- Forward and inverse round schedules sharing one engine
- Immutable step traces with a navigation cursor

"""

from .errors import (
    FeistelError,
    InvalidKeyError,
    InvalidRoundsError,
    InvalidMessageError,
    EncodingError,
    DecodingError,
)
from .cipher_core import (
    FeistelEngine,
    Mode,
    EncryptionResult,
    DecryptionResult,
    encrypt,
    decrypt,
    process,
)
from .trace import Trace, TraceCursor, StepKind

__version__ = '0.1.0'
__author__ = 'FeistelSim Team'

__all__ = [
    'FeistelError', 'InvalidKeyError', 'InvalidRoundsError', 'InvalidMessageError',
    'EncodingError', 'DecodingError',
    'FeistelEngine', 'Mode', 'EncryptionResult', 'DecryptionResult',
    'encrypt', 'decrypt', 'process',
    'Trace', 'TraceCursor', 'StepKind',
]
