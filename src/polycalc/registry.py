from __future__ import annotations

import logging
import re
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List

from .errors import MalformedPolynomialInput, UnknownPolynomial
from .polynomial import Polynomial

logger = logging.getLogger(__name__)

NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ReadWriteLock:
    """Many readers or one writer. A waiting writer blocks new readers, so a
    steady stream of reads cannot starve it. Not reentrant."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0

    @contextmanager
    def reading(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def writing(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class PolynomialRegistry:
    """Named polynomials, kept in creation order."""

    def __init__(self) -> None:
        self._polys: Dict[str, Polynomial] = {}
        self.lock = ReadWriteLock()

    def create(self, name: str, raw_pairs: str) -> str:
        if not NAME_RE.match(name):
            raise MalformedPolynomialInput(f"Invalid polynomial name: {name!r}", token=name)
        poly = Polynomial.parse(raw_pairs)
        with self.lock.writing():
            replaced = name in self._polys
            self._polys[name] = poly
        logger.debug("%s polynomial %s = %s", "Replaced" if replaced else "Created", name, poly)
        return f"Polynomial {name} {'updated' if replaced else 'created'}: {poly.to_text()}"

    def get(self, name: str) -> Polynomial:
        with self.lock.reading():
            return self.lookup(name)

    def lookup(self, name: str) -> Polynomial:
        """Fetch without locking; callers hold the read side already."""
        try:
            return self._polys[name]
        except KeyError:
            raise UnknownPolynomial(f"Unknown polynomial: {name!r}", token=name) from None

    def exists(self, name: str) -> bool:
        with self.lock.reading():
            return name in self._polys

    def names(self) -> List[str]:
        with self.lock.reading():
            return list(self._polys)

    def clear_all(self) -> str:
        with self.lock.writing():
            count = len(self._polys)
            self._polys.clear()
        logger.debug("Cleared %d polynomials", count)
        return f"Cleared {count} polynomial{'s' if count != 1 else ''}"

    def __len__(self) -> int:
        with self.lock.reading():
            return len(self._polys)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.exists(name)
