#!/usr/bin/env python3
"""
Shared fixtures for the PSS tests
"""

import os
import sys

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pssr.crypto.hashes import get_hash


class FixedRNG:
    """Hands out caller-chosen bytes and records the requested sizes"""

    def __init__(self, fill=0x5A):
        self.fill = fill
        self.requests = []

    def random_vec(self, n):
        self.requests.append(n)
        return bytes([self.fill]) * n


@pytest.fixture
def sha256():
    return get_hash("SHA-256")


@pytest.fixture
def sha1():
    return get_hash("SHA-1")


@pytest.fixture
def fixed_rng():
    return FixedRNG()


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def key_files(rsa_key, tmp_path):
    """Write rsa_key to PEM files, return (private_path, public_path)"""
    private_path = tmp_path / "signer_private.key"
    public_path = tmp_path / "signer_public.pem"
    private_path.write_bytes(
        rsa_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption()
        )
    )
    public_path.write_bytes(
        rsa_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo
        )
    )
    return private_path, public_path
