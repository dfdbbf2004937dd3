"""
Koblitz's probabilistic encoding of integers as curve points.

A message m is mapped to x = m*K + j for the smallest j in [0, K) for which
x^3 + ax + b is a quadratic residue mod p. Decoding is x // K. With p = 3
(mod 4) the square root is a^((p+1)/4), so only such curves are supported.
"""
import logging

from ecelgamal.ecc import EllipticCurve, Point
from ecelgamal.utils import EncodingExhausted, UnsupportedCurve, int_from_bytes, int_to_bytes

logger = logging.getLogger(__name__)

KOBLITZ_K = 1000

# Prepended to every block so its integer value is unambiguously non-negative
BLOCK_PREFIX = b"\x00\x00"


def check_curve(curve: EllipticCurve) -> None:
    if not curve.supports_encoding:
        raise UnsupportedCurve(f"p = {curve.p % 4} (mod 4), expected 3.")


def is_quadratic_residue(a: int, p: int) -> bool:
    # Euler's criterion
    return pow(a, (p - 1) // 2, p) == 1


def encode(m: int, curve: EllipticCurve, koblitz_k: int = KOBLITZ_K) -> Point:
    check_curve(curve)
    p = curve.p
    base = (m * koblitz_k) % p
    for j in range(koblitz_k):
        x = (base + j) % p
        a = curve.rhs(x)
        if is_quadratic_residue(a, p):
            y = pow(a, (p + 1) // 4, p)
            logger.debug("Encoded message after %d trial(s)", j + 1)
            return Point(x, y)
    raise EncodingExhausted(f"No quadratic residue within {koblitz_k} trials.")


def decode(point: Point, curve: EllipticCurve, koblitz_k: int = KOBLITZ_K) -> int:
    check_curve(curve)
    return point.x // koblitz_k


def encode_block(block: bytes, curve: EllipticCurve, koblitz_k: int = KOBLITZ_K) -> Point:
    return encode(int_from_bytes(BLOCK_PREFIX + block), curve, koblitz_k)


def decode_block(point: Point, curve: EllipticCurve, block_size: int,
                 koblitz_k: int = KOBLITZ_K) -> bytes:
    '''Recover a block_size-byte block, zero-padded on the left.
    Values wider than the block keep only their low-order block_size bytes.'''
    m = decode(point, curve, koblitz_k)
    return int_to_bytes(m % (1 << (8 * block_size)), block_size)
