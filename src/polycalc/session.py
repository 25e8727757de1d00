"""Command surface of the calculation core.

A Session owns the polynomial registry and the trace of the last integer
evaluation. Each method is one command; failures raise a CalcError and leave
the registry untouched.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import List, Optional

from . import evaluator, polyexpr
from .config import Settings
from .evaluator import Evaluation
from .polynomial import Polynomial
from .registry import PolynomialRegistry
from .trace import Trace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PolynomialOutput:
    text: str
    latex: str
    standard: str

    @classmethod
    def of(cls, poly: Polynomial) -> PolynomialOutput:
        return cls(text=poly.to_text(), latex=poly.to_latex(), standard=poly.to_standard())


class Session:
    def __init__(self, settings: Optional[Settings] = None, registry: Optional[PolynomialRegistry] = None) -> None:
        self.settings = settings or Settings()
        self.capacity = self.settings.capacity
        self.registry = registry if registry is not None else PolynomialRegistry()
        self._trace: Trace = ()
        self._trace_lock = threading.Lock()

    def initialize(self, capacity: int) -> str:
        if capacity < 1:
            logger.warning("Capacity must be positive, keeping %d", self.capacity)
        else:
            self.capacity = capacity
        return f"Stacks initialized with capacity {self.capacity}"

    def evaluate_expression(self, text: str) -> Evaluation:
        with self._trace_lock:
            self._trace = ()
        result = evaluator.evaluate(text, self.capacity)
        with self._trace_lock:
            self._trace = result.trace
        return result

    def fetch_trace(self) -> Trace:
        with self._trace_lock:
            return self._trace

    def create_polynomial(self, name: str, raw_pairs: str) -> str:
        return self.registry.create(name, raw_pairs)

    def evaluate_polynomial_expression(self, text: str) -> PolynomialOutput:
        return PolynomialOutput.of(polyexpr.evaluate(text, self.registry))

    def evaluate_polynomial_at(self, name: str, x: int) -> int:
        return self.registry.get(name).evaluate_at(x)

    def differentiate_polynomial(self, name: str) -> PolynomialOutput:
        return PolynomialOutput.of(self.registry.get(name).derivative())

    def clear_all_polynomials(self) -> str:
        return self.registry.clear_all()

    def list_polynomial_names(self) -> List[str]:
        return self.registry.names()

    def fetch_polynomial(self, name: str) -> PolynomialOutput:
        return PolynomialOutput.of(self.registry.get(name))

    def polynomial_exists(self, name: str) -> bool:
        return self.registry.exists(name)

    def polynomial_term_count(self, name: str) -> int:
        return len(self.registry.get(name))
