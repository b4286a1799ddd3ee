"""
Trace Model

Immutable records of every intermediate state produced while a message
passes through the Feistel network, plus a cursor for stepping through
them one at a time. Bit buffers are stored as '0'/'1' strings so that a
record can never be changed after the engine has built it.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple, Union


class StepKind(Enum):
    """Kind tag carried by every trace step."""
    CONVERSION = 'conversion'
    SPLIT = 'split'
    ROUND = 'round'
    FINAL = 'final'


@dataclass(frozen=True)
class ConversionStep:
    """The message converted to its binary form. `text` is None for raw bit input."""
    text: Optional[str]
    bits: str
    padded: bool
    description: str = ''

    kind: ClassVar[StepKind] = StepKind.CONVERSION

    @property
    def operation(self) -> str:
        return 'Binary Conversion'


@dataclass(frozen=True)
class SplitStep:
    """The block split into its two initial halves."""
    left: str
    right: str
    description: str = ''

    kind: ClassVar[StepKind] = StepKind.SPLIT

    @property
    def operation(self) -> str:
        return 'Initial Split'


@dataclass(frozen=True)
class RoundRecord:
    """
    Snapshot of a single round.

    `round` is the presentation number (1..rounds in both directions);
    `key_index` is the round whose key was used, which runs backwards
    when decrypting.
    """
    round: int
    key_index: int
    round_key: str
    mix_output: str
    left_in: str
    right_in: str
    left_out: str
    right_out: str
    description: str = ''
    action: str = ''

    kind: ClassVar[StepKind] = StepKind.ROUND

    @property
    def operation(self) -> str:
        return f'Round {self.round}'


@dataclass(frozen=True)
class FinalStep:
    """The recombined block and the text it decodes to (None when it is not whole bytes)."""
    left: str
    right: str
    bits: str
    text: Optional[str]
    description: str = ''
    action: str = ''

    kind: ClassVar[StepKind] = StepKind.FINAL

    @property
    def operation(self) -> str:
        return 'Final Combine'


TraceStep = Union[ConversionStep, SplitStep, RoundRecord, FinalStep]


@dataclass(frozen=True)
class Trace:
    """
    Ordered, read-only sequence of steps for one encrypt or decrypt call:
    conversion, split, one record per round, final.
    """
    mode: str
    rounds: int
    steps: Tuple[TraceStep, ...]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[TraceStep]:
        return iter(self.steps)

    def __getitem__(self, index: int) -> TraceStep:
        return self.steps[index]

    @property
    def conversion(self) -> ConversionStep:
        return self.steps[0]

    @property
    def split(self) -> SplitStep:
        return self.steps[1]

    @property
    def round_records(self) -> Tuple[RoundRecord, ...]:
        return tuple(s for s in self.steps if s.kind is StepKind.ROUND)

    @property
    def final(self) -> FinalStep:
        return self.steps[-1]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the trace to plain, JSON-serializable data.

        Returns:
            A dictionary with the mode, round count and a list of step dictionaries
        """
        steps: List[Dict[str, Any]] = []
        for step in self.steps:
            data = {'kind': step.kind.value, 'operation': step.operation}
            data.update(asdict(step))
            steps.append(data)

        return {
            'mode': self.mode,
            'rounds': self.rounds,
            'steps': steps
        }


class TraceCursor:
    """
    Steps forwards and backwards through a Trace.

    Movement is clamped at both ends, so calling next() on the last step
    (or previous() on the first) stays where it is.
    """

    def __init__(self, trace: Trace):
        if not len(trace):
            raise ValueError("Cannot navigate an empty trace")
        self.trace = trace
        self.position = 0

    @property
    def current(self) -> TraceStep:
        return self.trace[self.position]

    @property
    def at_start(self) -> bool:
        return self.position == 0

    @property
    def at_end(self) -> bool:
        return self.position == len(self.trace) - 1

    def next(self) -> TraceStep:
        self.position = min(len(self.trace) - 1, self.position + 1)
        return self.current

    def previous(self) -> TraceStep:
        self.position = max(0, self.position - 1)
        return self.current

    def reset(self) -> TraceStep:
        self.position = 0
        return self.current
