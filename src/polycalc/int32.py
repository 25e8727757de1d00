"""Checked arithmetic over 32-bit signed integers.

Python integers never wrap, so each operation computes the exact result and
rejects it when it falls outside ``[INT32_MIN, INT32_MAX]``.
"""
from __future__ import annotations

from .errors import DivisionByZero, InvalidExponent, Overflow

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def check(value: int, what: str = "result") -> int:
    if value < INT32_MIN or value > INT32_MAX:
        raise Overflow(f"{what} {value} does not fit in 32 bits")
    return value


def add(a: int, b: int) -> int:
    return check(a + b, f"{a} + {b} =")


def sub(a: int, b: int) -> int:
    return check(a - b, f"{a} - {b} =")


def negate(a: int) -> int:
    return check(-a, f"-({a}) =")


def mul(a: int, b: int) -> int:
    return check(a * b, f"{a} * {b} =")


def floordiv(a: int, b: int) -> int:
    # Python's // already rounds toward negative infinity.
    if b == 0:
        raise DivisionByZero(f"division of {a} by zero")
    return check(a // b, f"{a} / {b} =")


def power(base: int, exponent: int) -> int:
    if exponent < 0:
        raise InvalidExponent(f"negative exponent {exponent}")
    if base in (0, 1):
        return base if exponent else 1
    if base == -1:
        return -1 if exponent % 2 else 1
    result = 1
    for _ in range(exponent):
        result = mul(result, base)
    return result
