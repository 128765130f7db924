#!/usr/bin/env python3
"""
Sign and Verify Files with RSA + PSS Encoding

The file is hashed and PSS-encoded by pssr; the raw RSA operation is done
here with the key's numbers. The private operation is blinded but runs on
Python integers, so this is a demonstration tool, not a hardened signer.
Signatures verify with any standard RSASSA-PSS implementation using the
same hash, MGF1 hash and salt length.

Usage:
    python scripts/pss_tool.py sign   --key keys/signer_private.key --in report.pdf --out report.sig
    python scripts/pss_tool.py verify --key keys/signer_public.pem  --in report.pdf --sig report.sig
    python scripts/pss_tool.py sign ... --scheme "EMSA4(SHA-512,MGF1,64)"
"""

import argparse
import math
import os
import sys

from Crypto.Random import random as crypto_random

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pssr.common.exceptions import PSSRError
from pssr.config import configure_logging, load_config
from pssr.crypto.emsa import default_spec, get_emsa
from pssr.crypto.pki import encoding_bits, load_private_key, load_public_key
from pssr.crypto.rng import SystemRNG

CHUNK_SIZE = 64 * 1024


def hash_file(emsa, path):
    """Stream a file through the encoder and return its digest"""
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b''):
            emsa.update(chunk)
    return emsa.finalize()


def rsa_sign_block(private_key, em):
    """
    Apply the RSA private operation to an encoded block
    The input is blinded by a random r^e so the exponentiation never sees
    the block itself.
    Returns: signature (bytes) of the modulus length
    """
    numbers = private_key.private_numbers()
    n = numbers.public_numbers.n
    e = numbers.public_numbers.e
    k = (private_key.key_size + 7) // 8

    r = crypto_random.randint(2, n - 1)
    while math.gcd(r, n) != 1:
        r = crypto_random.randint(2, n - 1)

    m = int.from_bytes(em, byteorder='big')
    blinded = (m * pow(r, e, n)) % n
    s = (pow(blinded, numbers.d, n) * pow(r, -1, n)) % n
    return s.to_bytes(k, byteorder='big')


def rsa_recover_block(public_key, signature):
    """
    Apply the RSA public operation to a signature
    Returns: encoded block (bytes, leading zeros stripped) or None if
    the signature is out of range
    """
    numbers = public_key.public_numbers()
    k = (public_key.key_size + 7) // 8
    if len(signature) != k:
        return None
    s = int.from_bytes(signature, byteorder='big')
    if s >= numbers.n:
        return None
    m = pow(s, numbers.e, numbers.n)
    return m.to_bytes((m.bit_length() + 7) // 8, byteorder='big')


def cmd_sign(args):
    emsa = get_emsa(args.scheme)
    private_key = load_private_key(args.key)

    print(f"[*] Scheme: {emsa.name()}")
    print(f"[*] Hashing {args.infile}...")
    digest = hash_file(emsa, args.infile)

    print(f"[*] Encoding for {private_key.key_size}-bit key...")
    em = emsa.encoding_of(digest, encoding_bits(private_key), SystemRNG())
    signature = rsa_sign_block(private_key, em)

    with open(args.out, 'wb') as f:
        f.write(signature)

    print(f"[✓] Signature written to {args.out} ({len(signature)} bytes)")
    return 0


def cmd_verify(args):
    emsa = get_emsa(args.scheme)
    public_key = load_public_key(args.key)

    print(f"[*] Scheme: {emsa.name()}")
    with open(args.sig, 'rb') as f:
        signature = f.read()

    print(f"[*] Hashing {args.infile}...")
    digest = hash_file(emsa, args.infile)

    em = rsa_recover_block(public_key, signature)
    ok = em is not None and emsa.verify(em, digest, encoding_bits(public_key))

    if ok:
        print("[✓] Signature is VALID")
        return 0
    print("[✗] Signature is INVALID")
    return 1


def build_parser():
    parser = argparse.ArgumentParser(description="RSA signatures with PSS encoding")
    parser.add_argument("--scheme", default=None,
                        help='Encoding, e.g. "EMSA4(SHA-256,MGF1,32)" (default from PSS_HASH/PSS_SALT_SIZE)')
    parser.add_argument("--log-level", default=None, help="Logging level (default from PSS_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    sign = sub.add_parser("sign", help="Sign a file")
    sign.add_argument("--key", required=True, help="RSA private key (PEM)")
    sign.add_argument("--in", dest="infile", required=True, help="File to sign")
    sign.add_argument("--out", required=True, help="Where to write the signature")
    sign.set_defaults(func=cmd_sign)

    verify = sub.add_parser("verify", help="Verify a signature")
    verify.add_argument("--key", required=True, help="RSA public key or certificate (PEM)")
    verify.add_argument("--in", dest="infile", required=True, help="Signed file")
    verify.add_argument("--sig", required=True, help="Signature file")
    verify.set_defaults(func=cmd_verify)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        config = load_config()
        configure_logging(args.log_level or config['log_level'])
        if args.scheme is None:
            args.scheme = default_spec(config)
        return args.func(args)
    except (PSSRError, OSError, ValueError) as e:
        print(f"[✗] Error: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
