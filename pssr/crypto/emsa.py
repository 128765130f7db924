#!/usr/bin/env python3
"""
PSS Encoding Schemes
PSSR (EMSA4) hashes the message as it is streamed in; PSSR_Raw takes a
digest that was already computed elsewhere. Both share pss_encode/pss_verify.
"""

from pssr.common.exceptions import AlgorithmNotFound, EncodingError, InvalidArgument
from pssr.common.utils import parse_algorithm_spec
from pssr.config import load_config
from pssr.crypto.hashes import get_hash
from pssr.crypto.pss import pss_encode, pss_verify


# ==================== DIGEST PRODUCERS ====================

class HashingDigest:
    """Feeds input straight into the hash; finalize() returns its digest"""

    def __init__(self, hash_fn):
        self._hash = hash_fn

    def accept(self, data):
        self._hash.update(data)

    def finalize(self):
        return self._hash.final()


class RawDigest:
    """Buffers input that must already be a digest of the right length"""

    def __init__(self, hash_fn):
        self._hash = hash_fn
        self._msg = bytearray()

    def accept(self, data):
        self._msg.extend(data)

    def finalize(self):
        # Swap the buffer out first so a failed call leaves us empty
        msg, self._msg = bytes(self._msg), bytearray()
        if len(msg) != self._hash.output_length():
            raise EncodingError(
                f"PSSR_Raw Bad input length, did not match hash "
                f"({len(msg)} != {self._hash.output_length()})"
            )
        return msg


# ==================== ENCODING SCHEMES ====================

class EMSA:
    """
    Stateful PSS encoder/verifier owning one hash engine

    Usage:
        emsa.update(message)             # any number of times
        digest = emsa.finalize()
        em = emsa.encoding_of(digest, key_bits - 1, rng)
    and for verification:
        emsa.update(message)
        ok = emsa.verify(em, emsa.finalize(), key_bits - 1)

    One update*/finalize cycle must complete before the next begins;
    instances must not be shared between threads without a lock.
    """

    scheme_name = None
    digest_producer = None

    def __init__(self, hash_fn, salt_size=None):
        self._hash = hash_fn

        if salt_size is None:
            self._salt_size = hash_fn.output_length()
            self._required_salt_len = False
        else:
            if salt_size < 0:
                raise InvalidArgument(f"Invalid salt size {salt_size}")
            self._salt_size = salt_size
            self._required_salt_len = True

        self._digest = self.digest_producer(hash_fn)

    @property
    def salt_size(self):
        return self._salt_size

    @property
    def required_salt_len(self):
        return self._required_salt_len

    def update(self, data):
        # A single int is one byte, as in HashFunction.update
        if isinstance(data, int):
            data = bytes([data])
        self._digest.accept(bytes(data))

    def finalize(self):
        """
        Digest of everything passed to update() since the last call
        Raises: EncodingError (raw variant, wrong length)
        """
        return self._digest.finalize()

    raw_data = finalize

    def encoding_of(self, msg, output_bits, rng):
        """
        Encode digest `msg` with a fresh salt from rng.random_vec()
        Returns: EM (bytes)
        Raises: EncodingError
        """
        salt = rng.random_vec(self._salt_size)
        return pss_encode(self._hash, msg, salt, output_bits)

    def verify(self, coded, raw, key_bits):
        """
        Check encoded block `coded` against digest `raw`
        Returns: True or False, never raises on malformed blocks
        """
        ok, salt_size = pss_verify(self._hash, coded, raw, key_bits)

        if self._required_salt_len and salt_size != self._salt_size:
            return False

        return ok

    def name(self):
        return f"{self.scheme_name}({self._hash.name()},MGF1,{self._salt_size})"

    def new_object(self):
        """Fresh instance with the same hash and salt settings"""
        salt_size = self._salt_size if self._required_salt_len else None
        return type(self)(self._hash.new_object(), salt_size)

    def __repr__(self):
        return f"<{type(self).__name__} {self.name()}>"


class PSSR(EMSA):
    """EMSA4: PSS over the hash of the streamed message"""

    scheme_name = "EMSA4"
    digest_producer = HashingDigest


class PSSR_Raw(EMSA):
    """PSS over a precomputed digest passed in through update()"""

    scheme_name = "PSSR_Raw"
    digest_producer = RawDigest


# ==================== FACTORY ====================

_STREAMING_NAMES = ("EMSA4", "EMSA_PSSR", "PSSR", "EMSA-PSS", "PSS-MGF1")
_RAW_NAMES = ("PSSR_Raw", "PSS_Raw")


def get_emsa(spec=None):
    """
    Build an encoder from its name, e.g. "EMSA4(SHA-256)",
    "EMSA4(SHA-256,MGF1,32)" or "PSSR_Raw(SHA-512,MGF1,64)".
    With no argument the configured default is used (see load_config).
    Raises: AlgorithmNotFound, InvalidArgument (bad configuration)
    """
    if spec is None:
        spec = default_spec(load_config())

    try:
        name, args = parse_algorithm_spec(spec)
    except InvalidArgument:
        raise AlgorithmNotFound(spec)

    if name in _STREAMING_NAMES:
        cls = PSSR
    elif name in _RAW_NAMES:
        cls = PSSR_Raw
    else:
        raise AlgorithmNotFound(spec)

    if not 1 <= len(args) <= 3:
        raise AlgorithmNotFound(spec)
    if len(args) >= 2 and args[1] != "MGF1":
        raise AlgorithmNotFound(spec)

    hash_fn = get_hash(args[0])

    if len(args) == 3:
        try:
            salt_size = int(args[2])
        except ValueError:
            raise AlgorithmNotFound(spec)
        if salt_size < 0:
            raise AlgorithmNotFound(spec)
        return cls(hash_fn, salt_size)

    return cls(hash_fn)


def default_spec(config):
    """Algorithm string for the configured hash and salt size"""
    if config['salt_size'] is None:
        return f"EMSA4({config['hash']})"
    return f"EMSA4({config['hash']},MGF1,{config['salt_size']})"
