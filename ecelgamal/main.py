import argparse
import logging
import sys
from pathlib import Path

from ecelgamal.curves import DEFAULT_CURVE, get_curve, print_supported_curves, supported_curves
from ecelgamal.elgamal import (block_size, cipher_block_size, decrypt, encrypt,
                               generate_key_pair)
from ecelgamal.keyfile import (load_private_key, load_public_key, save_private_key,
                               save_public_key)
from ecelgamal.utils import CryptoError


# === Helper Functions ===
def print_timing(operation, elapsed):
    print(f"{operation} took {elapsed * 1000:.3f} ms")


def build_parser():
    parser = argparse.ArgumentParser(prog="ecelgamal", description="Elliptic curve ElGamal encryption")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    parser.add_argument("-t", "--time", action="store_true", help="Print elapsed time of each operation")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("curves", help="List the supported curves")

    keygen = commands.add_parser("keygen", help="Generate a key pair")
    keygen.add_argument("-c", "--curve", default=DEFAULT_CURVE, choices=supported_curves(),
                        help=f"Curve name (default: {DEFAULT_CURVE})")
    keygen.add_argument("-o", "--out", required=True, help="Writes OUT.pub and OUT.pri")

    for name, suffix in (("encrypt", "pub"), ("decrypt", "pri")):
        cmd = commands.add_parser(name, help=f"{name.capitalize()} a file")
        cmd.add_argument("-k", "--key", required=True, help=f"Key file (*.{suffix})")
        cmd.add_argument("-i", "--in", dest="input", required=True, help="Input file")
        cmd.add_argument("-o", "--out", required=True, help="Output file")

    demo = commands.add_parser("demo", help="Generate keys, encrypt and decrypt a message")
    demo.add_argument("-c", "--curve", default=DEFAULT_CURVE, choices=supported_curves(),
                      help=f"Curve name (default: {DEFAULT_CURVE})")
    demo.add_argument("-m", "--message", default="Hello elliptic ElGamal", help="Message to encrypt")
    return parser


def run_demo(curve_name, message, timer):
    curve = get_curve(curve_name)
    print(f"=== {curve_name} ElGamal Demo ===")
    print(f"Block size: {block_size(curve)} bytes, cipher block size: {cipher_block_size(curve)} bytes")

    keys = generate_key_pair(curve, timer=timer)
    print(f"Private key (k): {keys.private_key.scalar:x}")
    print(f"Public key (Q): {keys.public_key.point.hex()}\n")

    plaintext = message.encode("utf-8")
    ciphertext = encrypt(plaintext, keys.public_key, timer=timer)
    print(f"Message: {message}")
    print(f"Ciphertext ({len(ciphertext)} bytes): {ciphertext.hex()}\n")

    decrypted = decrypt(ciphertext, keys.private_key, timer=timer)
    print(f"Decrypted: {decrypted.decode('utf-8', errors='replace')}")
    print(f"Round trip ok? {decrypted == plaintext}")
    return decrypted == plaintext


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    timer = print_timing if args.time else None

    try:
        if args.command == "curves":
            print_supported_curves()
        elif args.command == "keygen":
            curve = get_curve(args.curve)
            if not curve.supports_encoding:
                parser.error(f"{args.curve} cannot be used for encryption.")
            keys = generate_key_pair(curve, timer=timer)
            save_public_key(keys.public_key, f"{args.out}.pub")
            save_private_key(keys.private_key, f"{args.out}.pri")
            print(f"Wrote {args.out}.pub and {args.out}.pri")
        elif args.command == "encrypt":
            key = load_public_key(args.key)
            data = encrypt(Path(args.input).read_bytes(), key, timer=timer)
            Path(args.out).write_bytes(data)
            print(f"Wrote {len(data)} bytes to {args.out}")
        elif args.command == "decrypt":
            key = load_private_key(args.key)
            data = decrypt(Path(args.input).read_bytes(), key, timer=timer)
            Path(args.out).write_bytes(data)
            print(f"Wrote {len(data)} bytes to {args.out}")
        elif args.command == "demo":
            if not run_demo(args.curve, args.message, timer):
                return 1
    except (CryptoError, OSError) as e:
        parser.exit(1, f"{parser.prog}: error: {e}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
