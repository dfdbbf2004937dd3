from ecelgamal.ecc import INFINITY, EllipticCurve, Point
from ecelgamal.curves import get_curve, supported_curves
from ecelgamal.elgamal import KeyPair, PrivateKey, PublicKey, decrypt, encrypt, generate_key_pair
from ecelgamal.utils import (CryptoError, EncodingExhausted, InvalidCiphertextLength, InvalidCurve,
                             InvalidKeyFile, UnsupportedCurve)
