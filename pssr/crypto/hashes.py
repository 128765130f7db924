#!/usr/bin/env python3
"""
Hash Function Adapters
Wraps hashlib / pycryptodome hash objects behind a small stateful interface:
output_length(), update(), final(), name()
"""

import hashlib

from Crypto.Hash import RIPEMD160, SHA512

from pssr.common.exceptions import AlgorithmNotFound


class HashFunction:
    """
    A named, reusable hash engine

    final() returns the digest and resets the engine, so the same object
    can be fed again for the next message. Not safe for concurrent use.
    """

    def __init__(self, name, factory):
        self._name = name
        self._factory = factory
        self._state = factory()

    def name(self):
        return self._name

    def output_length(self):
        """Digest size in bytes"""
        return self._state.digest_size

    def update(self, data):
        if isinstance(data, int):
            data = bytes([data])
        self._state.update(bytes(data))

    def final(self):
        """
        Finish the current computation and reset
        Returns: digest (bytes)
        """
        digest = self._state.digest()
        self._state = self._factory()
        return digest

    def clear(self):
        """Drop any buffered input"""
        self._state = self._factory()

    def new_object(self):
        """Fresh, empty instance of the same algorithm"""
        return HashFunction(self._name, self._factory)

    def __repr__(self):
        return f"HashFunction({self._name!r})"


# Canonical name -> object factory
_HASHES = {
    "SHA-1": hashlib.sha1,
    "SHA-224": hashlib.sha224,
    "SHA-256": hashlib.sha256,
    "SHA-384": hashlib.sha384,
    "SHA-512": hashlib.sha512,
    "SHA-512-256": lambda: SHA512.new(truncate="256"),
    "SHA-3(224)": hashlib.sha3_224,
    "SHA-3(256)": hashlib.sha3_256,
    "SHA-3(384)": hashlib.sha3_384,
    "SHA-3(512)": hashlib.sha3_512,
    "RIPEMD-160": RIPEMD160.new,
}

_ALIASES = {
    "SHA1": "SHA-1",
    "SHA-160": "SHA-1",
    "SHA224": "SHA-224",
    "SHA256": "SHA-256",
    "SHA384": "SHA-384",
    "SHA512": "SHA-512",
    "SHA-512/256": "SHA-512-256",
    "SHA512_256": "SHA-512-256",
    "SHA3-224": "SHA-3(224)",
    "SHA3-256": "SHA-3(256)",
    "SHA3-384": "SHA-3(384)",
    "SHA3-512": "SHA-3(512)",
    "SHA3_224": "SHA-3(224)",
    "SHA3_256": "SHA-3(256)",
    "SHA3_384": "SHA-3(384)",
    "SHA3_512": "SHA-3(512)",
    "RIPEMD160": "RIPEMD-160",
}


def canonical_hash_name(name):
    """
    Resolve an alias (case-insensitive) to the canonical hash name
    Returns: canonical name, or None if unknown
    """
    key = name.strip().upper()
    if key in _HASHES:
        return key
    return _ALIASES.get(key)


def available_hashes():
    """Canonical names of all supported hashes"""
    return sorted(_HASHES)


def get_hash(name):
    """
    Create a HashFunction by name ("SHA-256", "sha256", "SHA-3(256)", ...)
    Raises: AlgorithmNotFound
    """
    canonical = canonical_hash_name(name)
    if canonical is None:
        raise AlgorithmNotFound(name)
    return HashFunction(canonical, _HASHES[canonical])
