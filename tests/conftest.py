import random

import pytest

from ecelgamal.curves import get_curve
from ecelgamal.ecc import EllipticCurve, Point


@pytest.fixture
def small_curve():
    # y^2 = x^3 + x + 6 over F_11
    return EllipticCurve(1, 6, 11)


@pytest.fixture
def small_point():
    return Point(3, 5)


@pytest.fixture
def p192():
    return get_curve("P-192")


@pytest.fixture
def rng():
    return random.Random(1234)
