from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from . import int32
from .errors import MalformedPolynomialInput, NegativeExponent
from .formatting import format_latex, format_standard, format_text

INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")


@dataclass(frozen=True)
class Term:
    coefficient: int
    exponent: int


def _canonical(coeffs: Dict[int, int]) -> Tuple[Term, ...]:
    return tuple(Term(coeffs[exp], exp) for exp in sorted(coeffs, reverse=True) if coeffs[exp] != 0)


def _accumulate(coeffs: Dict[int, int], exponent: int, coefficient: int) -> None:
    coeffs[exponent] = int32.add(coeffs.get(exponent, 0), coefficient)


class Polynomial:
    """Sparse polynomial in one variable with 32-bit coefficients.

    Instances are immutable and always canonical: terms sorted by exponent
    descending, one term per exponent, no zero coefficients. The zero
    polynomial has no terms. Every operation returns a new instance.
    """

    __slots__ = ("_terms",)

    def __init__(self, terms: Iterable[Term] = ()) -> None:
        coeffs: Dict[int, int] = {}
        for term in terms:
            if term.exponent < 0:
                raise NegativeExponent(f"Exponent {term.exponent} is negative")
            int32.check(term.coefficient, "coefficient")
            _accumulate(coeffs, term.exponent, term.coefficient)
        self._terms = _canonical(coeffs)

    @classmethod
    def _from_canonical(cls, terms: Tuple[Term, ...]) -> Polynomial:
        poly = cls.__new__(cls)
        poly._terms = terms
        return poly

    @classmethod
    def from_pairs(cls, values: Sequence[int]) -> Polynomial:
        """Build from a flat ``[c1, e1, c2, e2, ...]`` list."""
        if len(values) % 2:
            raise MalformedPolynomialInput(f"Expected coefficient/exponent pairs, got {len(values)} values")
        terms: List[Term] = []
        for i in range(0, len(values), 2):
            coefficient, exponent = values[i], values[i + 1]
            int32.check(exponent, "exponent")
            terms.append(Term(coefficient, exponent))
        return cls(terms)

    @classmethod
    def parse(cls, text: str) -> Polynomial:
        """Parse comma-separated pairs such as ``"3,2,2,1,1,0"``."""
        if not text.strip():
            return cls()
        values: List[int] = []
        for position, item in enumerate(text.split(",")):
            item = item.strip()
            if not INTEGER_RE.match(item):
                raise MalformedPolynomialInput(f"Not an integer: {item!r}", position=position, token=item)
            values.append(int(item))
        return cls.from_pairs(values)

    @property
    def terms(self) -> Tuple[Term, ...]:
        return self._terms

    @property
    def degree(self) -> int:
        return self._terms[0].exponent if self._terms else 0

    def is_zero(self) -> bool:
        return not self._terms

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self):
        return iter(self._terms)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self._terms == other._terms

    def __hash__(self) -> int:
        return hash(self._terms)

    def __repr__(self) -> str:
        return f"Polynomial({format_text(self._terms)!r})"

    def __str__(self) -> str:
        return format_text(self._terms)

    def negate(self) -> Polynomial:
        return Polynomial._from_canonical(tuple(Term(int32.sub(0, t.coefficient), t.exponent) for t in self._terms))

    def add(self, other: Polynomial) -> Polynomial:
        """Sorted merge of two term lists."""
        out: List[Term] = []
        left, right = self._terms, other._terms
        i = j = 0
        while i < len(left) and j < len(right):
            a, b = left[i], right[j]
            if a.exponent > b.exponent:
                out.append(a)
                i += 1
            elif a.exponent < b.exponent:
                out.append(b)
                j += 1
            else:
                coef = int32.add(a.coefficient, b.coefficient)
                if coef:
                    out.append(Term(coef, a.exponent))
                i += 1
                j += 1
        out.extend(left[i:])
        out.extend(right[j:])
        return Polynomial._from_canonical(tuple(out))

    def subtract(self, other: Polynomial) -> Polynomial:
        return self.add(other.negate())

    def multiply(self, other: Polynomial) -> Polynomial:
        coeffs: Dict[int, int] = {}
        for a in self._terms:
            for b in other._terms:
                _accumulate(coeffs, a.exponent + b.exponent, int32.mul(a.coefficient, b.coefficient))
        return Polynomial._from_canonical(_canonical(coeffs))

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply
    __neg__ = negate

    def evaluate_at(self, x: int) -> int:
        int32.check(x, "x")
        total = 0
        for term in self._terms:
            value = int32.mul(term.coefficient, int32.power(x, term.exponent))
            total = int32.add(total, value)
        return total

    def derivative(self) -> Polynomial:
        out: List[Term] = []
        for term in self._terms:
            if term.exponent == 0:
                continue
            out.append(Term(int32.mul(term.coefficient, term.exponent), term.exponent - 1))
        return Polynomial._from_canonical(tuple(out))

    def to_text(self) -> str:
        return format_text(self._terms)

    def to_latex(self) -> str:
        return format_latex(self._terms)

    def to_standard(self) -> str:
        return format_standard(self._terms)
