from functools import lru_cache

from Crypto.PublicKey import ECC

from ecelgamal.ecc import EllipticCurve, Point

DEFAULT_CURVE = "P-256"

# All NIST prime curves use a = -3
NIST_A = -3


def supported_curves():
    return ['P-192', 'P-224', 'P-256', 'P-384', 'P-521']


def print_supported_curves():
    for name in supported_curves():
        usable = "encrypt/decrypt" if get_curve(name).supports_encoding else "point arithmetic only"
        print(f"{name}: {usable}")


@lru_cache(maxsize=None)
def get_curve(name: str) -> EllipticCurve:
    '''Build the named NIST curve from the pycryptodome curve table.
    P-224 has p = 1 (mod 4) and cannot be used with the Koblitz encoder.'''
    if name not in supported_curves():
        raise ValueError("{} is not one of the specified curves. \
                         Please choose one of the following curves:\n \
                         {}".format(name, supported_curves()))
    params = ECC._curves[name]
    G = Point(int(params.Gx), int(params.Gy))
    return EllipticCurve(NIST_A, int(params.b), int(params.p), G)
