# ecc.py
import dataclasses
from dataclasses import dataclass
from typing import Optional

from sympy import isprime

from ecelgamal.utils import InvalidCurve


class FieldElement:
    def __init__(self, num, prime):
        if num >= prime or num < 0:
            raise ValueError(f"Num {num} not in field range 0 to {prime - 1}")
        self.num = num
        self.prime = prime

    @classmethod
    def reduce(cls, num, prime):
        """Build an element from any integer, reducing it modulo prime."""
        return cls(num % prime, prime)

    def __eq__(self, other):
        return self.num == other.num and self.prime == other.prime

    def __add__(self, other):
        self._check_field(other)
        return FieldElement((self.num + other.num) % self.prime, self.prime)

    def __sub__(self, other):
        self._check_field(other)
        return FieldElement((self.num - other.num) % self.prime, self.prime)

    def __mul__(self, other):
        self._check_field(other)
        return FieldElement((self.num * other.num) % self.prime, self.prime)

    def __pow__(self, exp):
        return FieldElement(pow(self.num, exp, self.prime), self.prime)

    def __truediv__(self, other):
        self._check_field(other)
        return self * other.inv()

    def __neg__(self):
        return FieldElement(-self.num % self.prime, self.prime)

    def inv(self):
        return FieldElement(pow(self.num, -1, self.prime), self.prime)

    def is_zero(self):
        return self.num == 0

    def _check_field(self, other):
        if self.prime != other.prime:
            raise TypeError("Cannot operate on two numbers in different Fields.")

    def __repr__(self):
        return f"FieldElement_{self.prime}({self.num})"


@dataclass(frozen=True, eq=False)
class Point:
    """An affine point, or the point at infinity when ``infinity`` is set.

    Points carry no curve; arithmetic lives on :class:`EllipticCurve`.
    Coordinates are compared exactly, so compare reduced representatives.
    """
    x: int = 0
    y: int = 0
    infinity: bool = False

    def is_infinity(self) -> bool:
        return self.infinity

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        if self.infinity or other.infinity:
            return self.infinity and other.infinity
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        if self.infinity:
            return hash(("infinity",))
        return hash((self.x, self.y))

    def hex(self) -> str:
        if self.infinity:
            return "INFINITY"
        return f"({self.x:x}, {self.y:x})"

    def __repr__(self):
        if self.infinity:
            return "Point(infinity)"
        return f"Point({self.x}, {self.y})"


INFINITY = Point(infinity=True)


@dataclass(frozen=True)
class EllipticCurve:
    """The curve y^2 = x^3 + ax + b over F_p, with an optional base point G."""
    a: int
    b: int
    p: int
    G: Optional[Point] = None

    @property
    def bit_length(self) -> int:
        return self.p.bit_length()

    @property
    def supports_encoding(self) -> bool:
        # Square roots via a^((p+1)/4) need p = 3 (mod 4)
        return self.p % 4 == 3

    def with_base_point(self, G: Point) -> "EllipticCurve":
        return dataclasses.replace(self, G=G)

    def validate(self) -> None:
        '''Check the curve parameters:
        - p is prime
        - 4a^3 + 27b^2 != 0 (mod p)
        - G, when present, lies on the curve'''
        if self.p < 3 or not isprime(self.p):
            raise InvalidCurve(f"Modulus {self.p} is not an odd prime.")
        if (4 * self.a ** 3 + 27 * self.b ** 2) % self.p == 0:
            raise InvalidCurve("Discriminant 4a^3 + 27b^2 vanishes modulo p.")
        if self.G is not None and not self.is_on_curve(self.G):
            raise InvalidCurve(f"Base point {self.G} is not on the curve.")

    def _element(self, num):
        return FieldElement.reduce(num, self.p)

    def rhs(self, x: int) -> int:
        """Evaluate x^3 + ax + b (mod p)."""
        fx = self._element(x)
        return (fx ** 3 + self._element(self.a) * fx + self._element(self.b)).num

    def is_on_curve(self, point: Point) -> bool:
        if point.infinity:
            return True
        left = self._element(point.y) ** 2
        return left.num == self.rhs(point.x)

    def negate(self, point: Point) -> Point:
        if point.infinity:
            return INFINITY
        return Point(point.x, (-self._element(point.y)).num)

    def add(self, p1: Point, p2: Point) -> Point:
        if p1.infinity:
            return Point(p2.x, p2.y, p2.infinity)
        if p2.infinity:
            return Point(p1.x, p1.y, p1.infinity)

        x1, y1 = self._element(p1.x), self._element(p1.y)
        x2, y2 = self._element(p2.x), self._element(p2.y)

        if x1 == x2:
            # Vertical line, this also covers doubling a point with y = 0
            if y1 != y2 or y1.is_zero():
                return INFINITY
            # Point doubling
            s = (x1 ** 2 * self._element(3) + self._element(self.a)) / (y1 * self._element(2))
        else:
            s = (y2 - y1) / (x2 - x1)

        x3 = s ** 2 - x1 - x2
        y3 = s * (x1 - x3) - y1

        return Point(x3.num, y3.num)

    def subtract(self, p1: Point, p2: Point) -> Point:
        return self.add(p1, self.negate(p2))

    def multiply(self, point: Point, n: int) -> Point:
        """Double-and-add from the most significant bit of n down to bit 0."""
        if n < 0:
            raise ValueError(f"Scalar {n} must be non-negative")
        if point.infinity:
            return INFINITY

        result = INFINITY
        for i in reversed(range(n.bit_length())):
            result = self.add(result, result)
            if (n >> i) & 1:
                result = self.add(result, point)

        return result

    def __repr__(self):
        base = "None" if self.G is None else self.G.hex()
        return f"EllipticCurve(a={self.a}, b={self.b}, p={self.p:x}, G={base})"
