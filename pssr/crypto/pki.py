#!/usr/bin/env python3
"""
Key Loading for the Command-Line Tools
Reads RSA keys / certificates from PEM and reports modulus sizes
"""

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from pssr.common.exceptions import InvalidArgument


def load_private_key(key_path, password=None):
    """Load RSA private key from PEM file"""
    with open(key_path, "rb") as f:
        private_key = serialization.load_pem_private_key(
            f.read(),
            password=password
        )
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise InvalidArgument(f"{key_path} does not hold an RSA private key")
    return private_key


def load_public_key(path):
    """
    Load RSA public key from a PEM public key or X.509 certificate
    Returns: RSAPublicKey
    """
    with open(path, "rb") as f:
        data = f.read()

    if b"-----BEGIN CERTIFICATE-----" in data:
        public_key = x509.load_pem_x509_certificate(data).public_key()
    else:
        public_key = serialization.load_pem_public_key(data)

    if not isinstance(public_key, rsa.RSAPublicKey):
        raise InvalidArgument(f"{path} does not hold an RSA public key")
    return public_key


def modulus_bits(key):
    """Bit length of the RSA modulus (private or public key)"""
    return key.key_size


def encoding_bits(key):
    """
    Bit length of the PSS encoded block for this key
    One less than the modulus so the block is always smaller than n
    """
    return modulus_bits(key) - 1
