import pytest

from polycalc.registry import PolynomialRegistry
from polycalc.session import Session


@pytest.fixture
def registry():
    """A registry holding a = 3x^2+2x+1, b = x-1 and c = 2."""
    reg = PolynomialRegistry()
    reg.create("a", "3,2,2,1,1,0")
    reg.create("b", "1,1,-1,0")
    reg.create("c", "2,0")
    return reg


@pytest.fixture
def session():
    return Session()
