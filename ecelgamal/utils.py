from Crypto.Random.random import StrongRandom
from Crypto.Util.number import bytes_to_long, long_to_bytes

default_rng = StrongRandom()


def random_scalar(p: int, rng=None) -> int:
    '''Draw k uniformly from [0, 2^bitlen(p)), redrawing while k = 0 (mod p).'''
    rng = rng if rng is not None else default_rng
    bits = p.bit_length()
    k = rng.getrandbits(bits)
    while k % p == 0:
        k = rng.getrandbits(bits)
    return k


def int_to_bytes(value: int, size: int) -> bytes:
    """Big-endian, left-padded with zero bytes to exactly size bytes."""
    data = long_to_bytes(value, size)
    if len(data) != size:
        raise ValueError(f"Integer {value} does not fit in {size} bytes")
    return data


def int_from_bytes(data: bytes) -> int:
    return bytes_to_long(data)


def split_blocks(data: bytes, size: int) -> list[bytes]:
    return [data[i:i + size] for i in range(0, len(data), size)]


class CryptoError(Exception):
    def __init__(self, message):
        self.message = message
        super().__init__(self.message)


class UnsupportedCurve(CryptoError):
    def __init__(self, message):
        super().__init__(f"Curve cannot be used for encoding. {message}")


class EncodingExhausted(CryptoError):
    def __init__(self, message):
        super().__init__(f"Koblitz encoding failed. {message}")


class InvalidCiphertextLength(CryptoError):
    def __init__(self, message):
        super().__init__(f"Ciphertext has an invalid length. {message}")


class InvalidKeyFile(CryptoError):
    def __init__(self, message):
        super().__init__(f"Key file is malformed. {message}")


class InvalidCurve(CryptoError):
    def __init__(self, message):
        super().__init__(f"Curve parameters are invalid. {message}")
