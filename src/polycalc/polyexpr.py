"""Recursive-descent evaluation of expressions over named polynomials.

    expr   := term (('+' | '-') term)*
    term   := factor ('*' factor)*
    factor := NAME | '(' expr ')'
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from .errors import InvalidCharacter, MalformedExpression
from .polynomial import Polynomial
from .registry import PolynomialRegistry

PolyToken = Tuple[str, str, int]

ADD_OPS = {"+", "-"}


def _is_name_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch.lower() <= "z")


def _is_name_char(ch: str) -> bool:
    return _is_name_start(ch) or ch in "0123456789"


def tokenize(s: str) -> List[PolyToken]:
    tokens: List[PolyToken] = []
    i = 0
    while i < len(s):
        ch = s[i]
        if ch.isspace():
            i += 1
            continue
        if _is_name_start(ch):
            j = i
            while j < len(s) and _is_name_char(s[j]):
                j += 1
            tokens.append(("NAME", s[i:j], i))
            i = j
            continue
        if ch in "+-*":
            tokens.append(("OP", ch, i))
        elif ch == "(":
            tokens.append(("LPAREN", ch, i))
        elif ch == ")":
            tokens.append(("RPAREN", ch, i))
        else:
            raise InvalidCharacter(f"Unexpected character: {ch!r}", position=i, token=ch)
        i += 1
    return tokens


class Parser:
    def __init__(self, tokens: List[PolyToken], registry: PolynomialRegistry) -> None:
        self.tokens = tokens
        self.registry = registry
        self.pos = 0

    def peek(self) -> Optional[PolyToken]:
        if self.pos >= len(self.tokens):
            return None
        return self.tokens[self.pos]

    def consume(self, kind: str) -> PolyToken:
        tok = self.peek()
        if tok is None:
            raise MalformedExpression("Unexpected end of input")
        if tok[0] != kind:
            raise MalformedExpression(f"Expected {kind}, got {tok[1]!r}", position=tok[2], token=tok[1])
        self.pos += 1
        return tok

    def parse(self) -> Polynomial:
        if not self.tokens:
            raise MalformedExpression("Empty expression")
        result = self.parse_expression()
        tok = self.peek()
        if tok is not None:
            raise MalformedExpression(f"Unexpected {tok[1]!r}", position=tok[2], token=tok[1])
        return result

    def parse_expression(self) -> Polynomial:
        node = self.parse_term()
        while True:
            tok = self.peek()
            if tok and tok[0] == "OP" and tok[1] in ADD_OPS:
                self.consume("OP")
                right = self.parse_term()
                node = node.add(right) if tok[1] == "+" else node.subtract(right)
            else:
                break
        return node

    def parse_term(self) -> Polynomial:
        node = self.parse_factor()
        while True:
            tok = self.peek()
            if tok and tok[0] == "OP" and tok[1] == "*":
                self.consume("OP")
                node = node.multiply(self.parse_factor())
            else:
                break
        return node

    def parse_factor(self) -> Polynomial:
        tok = self.peek()
        if tok is None:
            raise MalformedExpression("Unexpected end of input")
        if tok[0] == "NAME":
            self.consume("NAME")
            return self.registry.lookup(tok[1])
        if tok[0] == "LPAREN":
            self.consume("LPAREN")
            node = self.parse_expression()
            self.consume("RPAREN")
            return node
        raise MalformedExpression(f"Unexpected {tok[1]!r}", position=tok[2], token=tok[1])


def evaluate(text: str, registry: PolynomialRegistry) -> Polynomial:
    tokens = tokenize(text)
    with registry.lock.reading():
        return Parser(tokens, registry).parse()
