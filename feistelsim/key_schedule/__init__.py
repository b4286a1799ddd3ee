"""
Key Schedule Package

This package implements the key expansion that turns a textual base key
into one distinct round key per round.
"""

from .rotating_key_schedule import derive_round_key, round_keys, rotate_left

__all__ = ['derive_round_key', 'round_keys', 'rotate_left']
