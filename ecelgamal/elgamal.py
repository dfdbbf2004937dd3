import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from ecelgamal import koblitz
from ecelgamal.ecc import EllipticCurve, Point
from ecelgamal.koblitz import KOBLITZ_K
from ecelgamal.utils import (InvalidCiphertextLength, int_from_bytes, int_to_bytes,
                             random_scalar, split_blocks)

logger = logging.getLogger(__name__)

Timer = Callable[[str, float], None]


@dataclass(frozen=True)
class PublicKey:
    curve: EllipticCurve
    """The curve, carrying the base point G."""
    point: Point
    """Q = kG."""


@dataclass(frozen=True)
class PrivateKey:
    curve: EllipticCurve
    """The curve, carrying the base point G."""
    scalar: int
    """The secret k, non-zero modulo p."""


@dataclass(frozen=True)
class KeyPair:
    public_key: PublicKey
    private_key: PrivateKey


def block_size(curve: EllipticCurve) -> int:
    """Plaintext bytes per block, leaving room for the prefix and Koblitz offset."""
    return max(curve.bit_length // 8 - 5, 1)


def cipher_block_size(curve: EllipticCurve) -> int:
    """Width in bytes of each serialized coordinate."""
    return curve.bit_length // 8 + 5


def pad(data: bytes, size: int) -> bytes:
    '''Append n = size - len % size bytes: zeros followed by n itself.
    A full block is added when data is already a multiple of size.'''
    if size > 255:
        raise ValueError(f"Block size {size} does not fit the one-byte padding length")
    n = size - len(data) % size
    return data + b"\x00" * (n - 1) + bytes([n])


def unpad(data: bytes, size: int) -> bytes:
    # The padding length is not verified, see DESIGN.md
    if not data:
        return data
    n = data[-1]
    return data[:max(len(data) - n, 0)]


def _report(timer: Optional[Timer], operation: str, start: float) -> None:
    if timer is not None:
        timer(operation, time.perf_counter() - start)


def generate_key_pair(curve: EllipticCurve, rng=None, base_point: Optional[Point] = None,
                      timer: Optional[Timer] = None, koblitz_k: int = KOBLITZ_K) -> KeyPair:
    '''Key Generation:
    - k: random private scalar, k != 0 (mod p)
    - G: base point; curve.G, else base_point, else a freshly encoded random point
    - Q: public key = kG

    The given curve is never modified: the returned keys carry
    curve.with_base_point(G). A base_point that differs from curve.G is
    rejected with ValueError.'''
    if curve.G is not None and base_point is not None and base_point != curve.G:
        raise ValueError(f"Base point {base_point} conflicts with the curve's {curve.G}")
    start = time.perf_counter()
    k = random_scalar(curve.p, rng)

    G = curve.G if curve.G is not None else base_point
    if G is None:
        seed = random_scalar(curve.p, rng)
        G = koblitz.encode(seed, curve, koblitz_k)
        logger.debug("Generated base point %s", G.hex())
    curve = curve.with_base_point(G)

    Q = curve.multiply(G, k)
    pair = KeyPair(PublicKey(curve, Q), PrivateKey(curve, k))
    _report(timer, "generate_key_pair", start)
    return pair


def encrypt(plaintext: bytes, public_key: PublicKey, rng=None,
            timer: Optional[Timer] = None, koblitz_k: int = KOBLITZ_K) -> bytes:
    '''Encryption, per block:
    - M: block encoded as a point
    - k: fresh random scalar
    - C1 = kG
    - C2 = M + kQ
    Each block is serialized as C1.x, C1.y, C2.x, C2.y in fixed-width big-endian.'''
    start = time.perf_counter()
    curve = public_key.curve
    koblitz.check_curve(curve)
    G, Q = curve.G, public_key.point
    if G is None:
        raise ValueError("Public key curve has no base point")
    size = block_size(curve)
    width = cipher_block_size(curve)

    blocks = split_blocks(pad(plaintext, size), size)
    logger.debug("Encrypting %d byte(s) as %d block(s) of %d", len(plaintext), len(blocks), size)

    out: List[bytes] = []
    for block in blocks:
        M = koblitz.encode_block(block, curve, koblitz_k)
        k = random_scalar(curve.p, rng)
        C1 = curve.multiply(G, k)
        C2 = curve.add(M, curve.multiply(Q, k))
        out.extend(int_to_bytes(v, width) for v in (C1.x, C1.y, C2.x, C2.y))

    ciphertext = b"".join(out)
    _report(timer, "encrypt", start)
    return ciphertext


def _parse_points(ciphertext: bytes, width: int) -> List[tuple]:
    if not ciphertext or len(ciphertext) % width:
        raise InvalidCiphertextLength(
            f"Expected a non-zero multiple of {width} bytes, got {len(ciphertext)}.")
    values = [int_from_bytes(chunk) for chunk in split_blocks(ciphertext, width)]
    if len(values) % 4:
        raise InvalidCiphertextLength(
            f"Expected a multiple of {4 * width} bytes, got {len(ciphertext)}.")
    return [(Point(values[i], values[i + 1]), Point(values[i + 2], values[i + 3]))
            for i in range(0, len(values), 4)]


def decrypt(ciphertext: bytes, private_key: PrivateKey,
            timer: Optional[Timer] = None, koblitz_k: int = KOBLITZ_K) -> bytes:
    '''Decryption, per block:
    - S = kC1
    - M = C2 - S'''
    start = time.perf_counter()
    curve = private_key.curve
    koblitz.check_curve(curve)
    size = block_size(curve)
    pairs = _parse_points(ciphertext, cipher_block_size(curve))
    logger.debug("Decrypting %d block(s)", len(pairs))

    blocks = []
    for C1, C2 in pairs:
        M = curve.subtract(C2, curve.multiply(C1, private_key.scalar))
        blocks.append(koblitz.decode_block(M, curve, size, koblitz_k))

    plaintext = unpad(b"".join(blocks), size)
    _report(timer, "decrypt", start)
    return plaintext
