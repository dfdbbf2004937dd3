"""
Keys are stored as text, one hexadecimal integer per line without a 0x prefix:
- private key: a, b, p, G.x, G.y, k
- public key:  a, b, p, G.x, G.y, Q.x, Q.y
"""
from pathlib import Path

from ecelgamal.ecc import EllipticCurve, Point
from ecelgamal.elgamal import PrivateKey, PublicKey
from ecelgamal.utils import CryptoError, InvalidKeyFile

PRIVATE_KEY_LINES = 6
PUBLIC_KEY_LINES = 7


def _curve_values(curve: EllipticCurve) -> list[int]:
    if curve.G is None:
        raise ValueError("Cannot save a key whose curve has no base point")
    return [curve.a, curve.b, curve.p, curve.G.x, curve.G.y]


def _write(path, values: list[int]) -> None:
    Path(path).write_text("".join(f"{v:x}\n" for v in values))


def _read(path, expected: int) -> list[int]:
    try:
        lines = Path(path).read_text().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidKeyFile(f"Cannot read {path}: {e}")
    while lines and not lines[-1].strip():
        lines.pop()
    if len(lines) != expected:
        raise InvalidKeyFile(f"{path} has {len(lines)} line(s), expected {expected}.")
    try:
        return [int(line.strip(), 16) for line in lines]
    except ValueError as e:
        raise InvalidKeyFile(f"{path} holds a non-hexadecimal value: {e}")


def _load_curve(path, a, b, p, gx, gy) -> EllipticCurve:
    curve = EllipticCurve(a, b, p, Point(gx, gy))
    try:
        curve.validate()
    except CryptoError as e:
        raise InvalidKeyFile(f"{path}: {e.message}")
    return curve


def save_private_key(key: PrivateKey, path) -> None:
    _write(path, _curve_values(key.curve) + [key.scalar])


def save_public_key(key: PublicKey, path) -> None:
    _write(path, _curve_values(key.curve) + [key.point.x, key.point.y])


def load_private_key(path) -> PrivateKey:
    *params, k = _read(path, PRIVATE_KEY_LINES)
    curve = _load_curve(path, *params)
    if k % curve.p == 0:
        raise InvalidKeyFile(f"{path}: private scalar is zero modulo p.")
    return PrivateKey(curve, k)


def load_public_key(path) -> PublicKey:
    *params, qx, qy = _read(path, PUBLIC_KEY_LINES)
    curve = _load_curve(path, *params)
    Q = Point(qx, qy)
    if not curve.is_on_curve(Q):
        raise InvalidKeyFile(f"{path}: public point {Q} is not on the curve.")
    return PublicKey(curve, Q)
