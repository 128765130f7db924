#!/usr/bin/env python3
"""
Generate RSA Signing Key
Creates an RSA private key and the matching public key as PEM files

Usage:
    python scripts/gen_key.py [name] [bits]

Example:
    python scripts/gen_key.py signer 3072
"""

from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives import serialization
import os
import sys

KEY_DIR = 'keys'


def generate_key(name="signer", bits=2048):
    """Generate an RSA key pair and write keys/<name>_private.key, keys/<name>_public.pem"""

    # Create keys directory if it doesn't exist
    os.makedirs(KEY_DIR, exist_ok=True)

    print(f"[*] Generating {bits}-bit RSA private key for {name}...")
    private_key = rsa.generate_private_key(
        public_exponent=65537,
        key_size=bits,
    )

    private_path = os.path.join(KEY_DIR, f"{name}_private.key")
    public_path = os.path.join(KEY_DIR, f"{name}_public.pem")

    print(f"[*] Saving private key to {private_path}...")
    with open(private_path, "wb") as f:
        f.write(
            private_key.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption()
            )
        )

    print(f"[*] Saving public key to {public_path}...")
    with open(public_path, "wb") as f:
        f.write(
            private_key.public_key().public_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PublicFormat.SubjectPublicKeyInfo
            )
        )

    print("\n[✓] Key pair generated successfully!")
    print(f"    Private Key: {private_path}")
    print(f"    Public Key:  {public_path}")
    print(f"\n[!] Keep {private_path} secret and never commit to Git!")
    return private_path, public_path


if __name__ == "__main__":
    name = sys.argv[1] if len(sys.argv) > 1 else "signer"
    try:
        bits = int(sys.argv[2]) if len(sys.argv) > 2 else 2048
    except ValueError:
        print(f"[✗] Error: key size must be an integer, got {sys.argv[2]!r}")
        sys.exit(1)
    generate_key(name, bits)
