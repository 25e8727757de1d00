"""Dual-stack evaluator for integer expressions.

Operands live on one stack, operators and the openers ``(`` and ``|`` on the
other. Every push and pop on either stack is written to a TraceRecorder so the
whole evaluation can be replayed step by step.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from . import int32
from .errors import MalformedExpression, NestedAbsoluteValue
from .tokens import LEFT, NEGATE, PRECEDENCE, AbsBar, Integer, LeftParen, Operator, RightParen, Token, tokenize
from .trace import Trace, TraceRecorder

logger = logging.getLogger(__name__)

OPENERS = "(|"

APPLY: Dict[str, Callable[[int, int], int]] = {
    "+": int32.add,
    "-": int32.sub,
    "*": int32.mul,
    "/": int32.floordiv,
    "^": int32.power,
}


@dataclass(frozen=True)
class Evaluation:
    value: int
    trace: Trace


class StackMachine:
    def __init__(self, tokens: List[Token], capacity: Optional[int] = None) -> None:
        self.tokens = tokens
        self.capacity = capacity
        self.operands: List[int] = []
        self.operators: List[str] = []
        self.recorder = TraceRecorder()
        self.inside_abs = False
        self.expect_operand = True
        self._capacity_warned = False

    def _check_capacity(self, stack: list) -> None:
        if self.capacity and len(stack) > self.capacity and not self._capacity_warned:
            self._capacity_warned = True
            logger.warning("Stack depth %d exceeds advisory capacity %d", len(stack), self.capacity)

    def push_operand(self, value: int) -> None:
        self.operands.append(value)
        self.recorder.push_operand(value)
        self._check_capacity(self.operands)

    def pop_operand(self) -> int:
        if not self.operands:
            raise MalformedExpression("Operator is missing an operand")
        value = self.operands.pop()
        self.recorder.pop_operand(value)
        return value

    def push_operator(self, symbol: str) -> None:
        self.operators.append(symbol)
        self.recorder.push_operator(symbol)
        self._check_capacity(self.operators)

    def pop_operator(self) -> str:
        symbol = self.operators.pop()
        self.recorder.pop_operator(symbol)
        return symbol

    def top(self) -> Optional[str]:
        return self.operators[-1] if self.operators else None

    def apply_top(self) -> None:
        symbol = self.pop_operator()
        if symbol == NEGATE:
            self.push_operand(int32.negate(self.pop_operand()))
            return
        b = self.pop_operand()
        a = self.pop_operand()
        self.push_operand(APPLY[symbol](a, b))

    def _should_reduce(self, incoming: Operator) -> bool:
        top = self.top()
        if top is None or top in OPENERS:
            return False
        top_prec = PRECEDENCE[top][0]
        if top_prec > incoming.precedence:
            return True
        return top_prec == incoming.precedence and incoming.associativity == LEFT

    def close(self, opener: str, position: int) -> None:
        while self.top() is not None and self.top() not in OPENERS:
            self.apply_top()
        closer = ")" if opener == "(" else "|"
        top = self.top()
        if top is None:
            raise MalformedExpression(f"Unmatched {closer!r}", position=position, token=closer)
        if top != opener:
            raise MalformedExpression(f"{top!r} closed by {closer!r}", position=position, token=closer)
        self.pop_operator()

    def feed(self, token: Token) -> None:
        if isinstance(token, Integer):
            if not self.expect_operand:
                raise MalformedExpression("Unexpected number", position=token.position, token=str(token.value))
            self.push_operand(token.value)
            self.expect_operand = False
        elif isinstance(token, Operator):
            if token.symbol == NEGATE:
                # prefix: applies to the operand that follows, reduces nothing
                self.push_operator(NEGATE)
                return
            if self.expect_operand:
                raise MalformedExpression(
                    f"Operator {token.symbol!r} is missing its left operand", position=token.position, token=token.symbol
                )
            while self._should_reduce(token):
                self.apply_top()
            self.push_operator(token.symbol)
            self.expect_operand = True
        elif isinstance(token, LeftParen):
            if not self.expect_operand:
                raise MalformedExpression("Unexpected '('", position=token.position, token="(")
            self.push_operator("(")
        elif isinstance(token, RightParen):
            if self.expect_operand:
                raise MalformedExpression("Unexpected ')'", position=token.position, token=")")
            self.close("(", token.position)
        elif isinstance(token, AbsBar):
            self._feed_bar(token)

    def _feed_bar(self, token: AbsBar) -> None:
        if not self.inside_abs:
            if not self.expect_operand:
                raise MalformedExpression("Absolute value must start an operand", position=token.position, token="|")
            self.push_operator("|")
            self.inside_abs = True
            return
        if self.expect_operand:
            # a bar where an operand belongs opens a second absolute value
            raise NestedAbsoluteValue("Absolute values cannot be nested", position=token.position, token="|")
        self.close("|", token.position)
        value = self.pop_operand()
        self.push_operand(int32.check(abs(value), f"|{value}| ="))
        self.inside_abs = False

    def finish(self) -> int:
        if self.expect_operand:
            if not self.tokens:
                raise MalformedExpression("Empty expression")
            raise MalformedExpression("Expression ends without an operand")
        while self.operators:
            top = self.top()
            if top in OPENERS:
                raise MalformedExpression(f"Unclosed {top!r}")
            self.apply_top()
        if len(self.operands) != 1:
            raise MalformedExpression(f"Expected one result, found {len(self.operands)}")
        return self.operands[-1]

    def run(self) -> int:
        for token in self.tokens:
            self.feed(token)
        return self.finish()


def evaluate(text: str, capacity: Optional[int] = None) -> Evaluation:
    machine = StackMachine(tokenize(text), capacity)
    value = machine.run()
    logger.debug("Evaluated %r = %d (%d stack operations)", text, value, len(machine.recorder))
    return Evaluation(value, machine.recorder.snapshot())
