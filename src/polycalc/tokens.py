from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .errors import InvalidCharacter, Overflow
from .int32 import INT32_MAX, INT32_MIN

DIGITS = "0123456789"
LEFT = "left"
RIGHT = "right"

# symbol -> (precedence, associativity); higher binds tighter
OPERATORS: Dict[str, Tuple[int, str]] = {
    "+": (1, LEFT),
    "-": (1, LEFT),
    "*": (2, LEFT),
    "/": (2, LEFT),
    "^": (4, LEFT),
}

# prefix negation; never read from input, only produced for a unary "-"
NEGATE = "~"
PRECEDENCE: Dict[str, Tuple[int, str]] = {**OPERATORS, NEGATE: (3, RIGHT)}


@dataclass(frozen=True)
class Integer:
    value: int
    position: int = 0


@dataclass(frozen=True)
class Operator:
    symbol: str
    position: int = 0

    @property
    def precedence(self) -> int:
        return PRECEDENCE[self.symbol][0]

    @property
    def associativity(self) -> str:
        return PRECEDENCE[self.symbol][1]


@dataclass(frozen=True)
class LeftParen:
    position: int = 0


@dataclass(frozen=True)
class RightParen:
    position: int = 0


@dataclass(frozen=True)
class AbsBar:
    position: int = 0


Token = Integer | Operator | LeftParen | RightParen | AbsBar


def _scan_digits(s: str, start: int) -> int:
    end = start
    while end < len(s) and s[end] in DIGITS:
        end += 1
    return end


def _integer(text: str, position: int) -> Integer:
    value = int(text)
    if value < INT32_MIN or value > INT32_MAX:
        raise Overflow(f"Literal {text} does not fit in 32 bits", position=position, token=text)
    return Integer(value, position)


def _next_char(s: str, start: int) -> str:
    while start < len(s) and s[start].isspace():
        start += 1
    return s[start] if start < len(s) else ""


def _expects_operand(tokens: List[Token], bar_open: bool) -> bool:
    if not tokens:
        return True
    last = tokens[-1]
    if isinstance(last, (Operator, LeftParen)):
        return True
    # a bar that left the expression "inside" was an opening bar
    return isinstance(last, AbsBar) and bar_open


def tokenize(s: str) -> List[Token]:
    """Split an integer expression into tokens.

    A ``-`` in operand position (at the start, after an operator, ``(`` or an
    opening ``|``) is unary. Followed by digits it is folded into a negative
    literal, unless that literal is the base of ``^``: ``-2^2`` is ``-(2^2)``.
    Everywhere else it becomes a prefix ``NEGATE`` operator, which binds
    tighter than ``*`` and ``/`` and looser than ``^``.
    """
    tokens: List[Token] = []
    bar_open = False
    i = 0
    while i < len(s):
        ch = s[i]
        if ch.isspace():
            i += 1
            continue
        if ch in DIGITS:
            j = _scan_digits(s, i)
            tokens.append(_integer(s[i:j], i))
            i = j
            continue
        if ch == "-" and _expects_operand(tokens, bar_open):
            j = i + 1
            while j < len(s) and s[j].isspace():
                j += 1
            if j < len(s) and s[j] in DIGITS:
                k = _scan_digits(s, j)
                if _next_char(s, k) != "^":
                    tokens.append(_integer("-" + s[j:k], i))
                    i = k
                    continue
            tokens.append(Operator(NEGATE, i))
            i += 1
            continue
        if ch in OPERATORS:
            tokens.append(Operator(ch, i))
        elif ch == "(":
            tokens.append(LeftParen(i))
        elif ch == ")":
            tokens.append(RightParen(i))
        elif ch == "|":
            tokens.append(AbsBar(i))
            bar_open = not bar_open
        else:
            raise InvalidCharacter(f"Unexpected character: {ch!r}", position=i, token=ch)
        i += 1
    return tokens
