from __future__ import annotations

from typing import Optional


class CalcError(ValueError):
    """Base class for every failure raised by the calculation core."""

    def __init__(self, message: str, position: Optional[int] = None, token: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position
        self.token = token

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


class InvalidCharacter(CalcError):
    pass


class Overflow(CalcError):
    pass


class DivisionByZero(CalcError):
    pass


class InvalidExponent(CalcError):
    pass


class NestedAbsoluteValue(CalcError):
    pass


class MalformedExpression(CalcError):
    pass


class MalformedPolynomialInput(CalcError):
    pass


class NegativeExponent(CalcError):
    pass


class UnknownPolynomial(CalcError):
    pass
