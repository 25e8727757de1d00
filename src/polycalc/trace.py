"""Append-only log of stack mutations made during one evaluation.

The evaluator owns a TraceRecorder for the duration of a call and hands the
finished records back with its result. ``replay`` rebuilds the intermediate
stack contents from those records; the renderer animates them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import MalformedExpression


class Action(str, Enum):
    PUSH = "push"
    POP = "pop"


class StackName(str, Enum):
    OPERAND = "operand"
    OPERATOR = "operator"


@dataclass(frozen=True)
class StackOperation:
    """One push or pop. Operator-stack values are code points."""

    sequence: int
    action: Action
    value: int
    stack: StackName

    @property
    def symbol(self) -> Optional[str]:
        if self.stack is StackName.OPERATOR:
            return chr(self.value)
        return None

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "action": self.action.value,
            "value": self.value,
            "stack": self.stack.value,
        }

    @classmethod
    def from_dict(cls, d: dict) -> StackOperation:
        return cls(
            sequence=d["sequence"],
            action=Action(d["action"]),
            value=d["value"],
            stack=StackName(d["stack"]),
        )


Trace = Tuple[StackOperation, ...]


@dataclass
class TraceRecorder:
    records: List[StackOperation] = field(default_factory=list)

    def _append(self, action: Action, value: int, stack: StackName) -> None:
        self.records.append(StackOperation(len(self.records), action, value, stack))

    def push_operand(self, value: int) -> None:
        self._append(Action.PUSH, value, StackName.OPERAND)

    def pop_operand(self, value: int) -> None:
        self._append(Action.POP, value, StackName.OPERAND)

    def push_operator(self, symbol: str) -> None:
        self._append(Action.PUSH, ord(symbol), StackName.OPERATOR)

    def pop_operator(self, symbol: str) -> None:
        self._append(Action.POP, ord(symbol), StackName.OPERATOR)

    def snapshot(self) -> Trace:
        return tuple(self.records)

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class StackSnapshot:
    operands: Tuple[int, ...]
    operators: Tuple[str, ...]


def replay(records: Iterable[StackOperation]) -> Iterator[StackSnapshot]:
    """Apply records in sequence order to two empty stacks, yielding the
    stack contents after every record."""
    operands: List[int] = []
    operators: List[str] = []
    for record in sorted(records, key=lambda r: r.sequence):
        target: list = operands if record.stack is StackName.OPERAND else operators
        if record.action is Action.PUSH:
            target.append(record.value if target is operands else chr(record.value))
        else:
            if not target:
                raise MalformedExpression(f"Record {record.sequence} pops an empty {record.stack.value} stack")
            target.pop()
        yield StackSnapshot(tuple(operands), tuple(operators))
