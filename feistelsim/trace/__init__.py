"""
Trace Package

This package holds the immutable step records produced alongside every
transform and the cursor used to walk through them.
"""

from .steps import (
    StepKind, ConversionStep, SplitStep, RoundRecord, FinalStep, Trace, TraceCursor
)

__all__ = ['StepKind', 'ConversionStep', 'SplitStep', 'RoundRecord', 'FinalStep', 'Trace',
           'TraceCursor']
