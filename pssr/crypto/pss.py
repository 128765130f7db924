#!/usr/bin/env python3
"""
EMSA-PSS Encoding and Verification (PKCS #1 v2.2, section 9.1)

Encoded block layout, output_length = ceil(output_bits / 8) bytes:

    EM = maskedDB || H || 0xBC
    DB = 0x00 ... 0x00 || 0x01 || salt
    H  = Hash(0x00 * 8 || mHash || salt)

maskedDB = DB xor MGF1(H), with the top 8*output_length - output_bits
bits of the first byte forced to zero.
"""

import logging

from pssr.common.exceptions import EncodingError
from pssr.common.utils import bytes_for_bits, ct_equal, high_bit
from pssr.crypto.mgf1 import mgf1_mask

logger = logging.getLogger(__name__)

TRAILER = 0xBC
PREFIX = b"\x00" * 8


def _salted_hash(hash_fn, message_hash, salt):
    """Compute H = Hash(8 zero bytes || message_hash || salt)"""
    hash_fn.update(PREFIX)
    hash_fn.update(message_hash)
    hash_fn.update(salt)
    return hash_fn.final()


def pss_encode(hash_fn, msg, salt, output_bits):
    """
    Build the encoded block for digest `msg`

    Args:
        hash_fn: HashFunction (left reset on return)
        msg: message digest, exactly hash_fn.output_length() bytes
        salt: salt bytes, any length
        output_bits: bit length the block must fit in (modulus bits - 1)
    Returns: EM (bytes) of length ceil(output_bits / 8)
    Raises: EncodingError
    """
    hash_size = hash_fn.output_length()
    msg = bytes(msg)
    salt = bytes(salt)
    salt_size = len(salt)

    if len(msg) != hash_size:
        raise EncodingError(
            f"Cannot encode PSS string, input length {len(msg)} "
            f"invalid for hash {hash_fn.name()} ({hash_size} bytes)"
        )
    if output_bits < 8 * hash_size + 8 * salt_size + 9:
        raise EncodingError(
            f"Cannot encode PSS string, output length too small "
            f"({output_bits} bits, need {8 * hash_size + 8 * salt_size + 9})"
        )

    output_length = bytes_for_bits(output_bits)
    top_bits = 8 * output_length - output_bits

    H = _salted_hash(hash_fn, msg, salt)

    # DB = padding || 0x01 || salt, then masked in place
    db = bytearray(output_length - hash_size - 1)
    db[len(db) - salt_size - 1] = 0x01
    db[len(db) - salt_size:] = salt
    mgf1_mask(hash_fn, H, db)
    db[0] &= 0xFF >> top_bits

    logger.debug(
        "PSS encode: hash=%s output_bits=%d salt_size=%d",
        hash_fn.name(), output_bits, salt_size,
    )

    return bytes(db) + H + bytes([TRAILER])


def _recover_salt_size(hash_fn, pss_repr, message_hash, key_bits):
    # Returns the embedded salt length, or None if the block is invalid
    hash_size = hash_fn.output_length()
    key_bytes = bytes_for_bits(key_bits)

    if key_bits < 8 * hash_size + 9:
        return None
    if len(message_hash) != hash_size:
        return None
    if len(pss_repr) > key_bytes or len(pss_repr) <= 1:
        return None
    if pss_repr[-1] != TRAILER:
        return None

    # Leading zeros may have been stripped by the integer conversion
    coded = bytearray(key_bytes - len(pss_repr)) + bytearray(pss_repr)

    top_bits = 8 * key_bytes - key_bits
    if top_bits > 8 - high_bit(coded[0]):
        return None

    db_size = len(coded) - hash_size - 1
    db = coded[:db_size]
    H = bytes(coded[db_size:db_size + hash_size])

    mgf1_mask(hash_fn, H, db)
    db[0] &= 0xFF >> top_bits

    # Padding is public once unmasked, so an early-exit scan is fine here
    salt_offset = 0
    for j in range(db_size):
        if db[j] == 0x01:
            salt_offset = j + 1
            break
        if db[j]:
            return None
    if salt_offset == 0:
        return None

    salt = bytes(db[salt_offset:])
    H2 = _salted_hash(hash_fn, message_hash, salt)

    if not ct_equal(H, H2):
        return None
    return len(salt)


def pss_verify(hash_fn, pss_repr, message_hash, key_bits):
    """
    Check that `pss_repr` is a valid encoding of `message_hash`

    Args:
        hash_fn: HashFunction (left reset on return)
        pss_repr: encoded block recovered from the signature primitive
        message_hash: independently computed digest
        key_bits: bit length of the encoded block (modulus bits - 1)
    Returns: (ok, salt_size); salt_size is 0 unless ok
    """
    salt_size = _recover_salt_size(
        hash_fn, bytes(pss_repr), bytes(message_hash), key_bits
    )
    if salt_size is None:
        logger.debug("PSS verification failed")
        return False, 0
    return True, salt_size
