"""polycalc: integer expression evaluator and sparse polynomial algebra.

The expression evaluator runs on two stacks and records every push and pop so
the evaluation can be replayed; the polynomial engine stores named polynomials
and evaluates ``+ - *`` expressions over them.
"""
from .errors import (
    CalcError,
    DivisionByZero,
    InvalidCharacter,
    InvalidExponent,
    MalformedExpression,
    MalformedPolynomialInput,
    NegativeExponent,
    NestedAbsoluteValue,
    Overflow,
    UnknownPolynomial,
)
from .evaluator import Evaluation, evaluate
from .polynomial import Polynomial, Term
from .registry import PolynomialRegistry
from .session import PolynomialOutput, Session
from .trace import StackOperation, StackSnapshot, replay

__all__ = [
    'CalcError',
    'DivisionByZero',
    'InvalidCharacter',
    'InvalidExponent',
    'MalformedExpression',
    'MalformedPolynomialInput',
    'NegativeExponent',
    'NestedAbsoluteValue',
    'Overflow',
    'UnknownPolynomial',
    'Evaluation',
    'evaluate',
    'Polynomial',
    'Term',
    'PolynomialRegistry',
    'PolynomialOutput',
    'Session',
    'StackOperation',
    'StackSnapshot',
    'replay',
]
