"""Text, LaTeX and export renderings of polynomial terms.

All three walk the terms highest exponent first and assume canonical input:
no zero coefficients, no repeated exponents.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:
    from .polynomial import Term

VAR = "x"


def _monomial(magnitude: int, exponent: int, latex: bool) -> str:
    coef = "" if magnitude == 1 and exponent > 0 else str(magnitude)
    if exponent == 0:
        return coef
    if exponent == 1:
        return f"{coef}{VAR}"
    if latex:
        return f"{coef}{VAR}^{{{exponent}}}"
    return f"{coef}{VAR}^{exponent}"


def _render(terms: Sequence["Term"], latex: bool) -> str:
    if not terms:
        return "0"
    plus, minus = (" + ", " - ") if latex else ("+", "-")
    parts: List[str] = []
    for i, term in enumerate(terms):
        negative = term.coefficient < 0
        if i == 0:
            parts.append("-" if negative else "")
        else:
            parts.append(minus if negative else plus)
        parts.append(_monomial(abs(term.coefficient), term.exponent, latex))
    return "".join(parts)


def format_text(terms: Sequence["Term"]) -> str:
    """Plain canonical text, e.g. ``3x^2+2x+1``."""
    return _render(terms, latex=False)


def format_latex(terms: Sequence["Term"]) -> str:
    """Typeset markup for MathTex, e.g. ``3x^{2} + 2x + 1``."""
    return _render(terms, latex=True)


def format_standard(terms: Sequence["Term"]) -> str:
    """Export format ``n,c1,e1,c2,e2,...``; the zero polynomial is ``0``."""
    if not terms:
        return "0"
    fields = [str(len(terms))]
    for term in terms:
        fields.append(str(term.coefficient))
        fields.append(str(term.exponent))
    return ",".join(fields)
