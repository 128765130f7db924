#!/usr/bin/env python3
"""
MGF1 Mask Generation Function (PKCS #1 v2.2, appendix B.2.1)
mask = Hash(seed || C0) || Hash(seed || C1) || ... truncated to mask_len,
where Ci is the 4-byte big-endian counter
"""

from pssr.common.utils import xor_into


def mgf1_mask(hash_fn, seed, buf):
    """
    XOR len(buf) bytes of MGF1(seed) into buf (bytearray) in place
    The hash engine is left reset.
    """
    seed = bytes(seed)
    remaining = len(buf)
    offset = 0
    counter = 0

    while remaining > 0:
        hash_fn.update(seed)
        hash_fn.update(counter.to_bytes(4, byteorder='big'))
        block = hash_fn.final()

        # Last block may be only partially used
        take = min(len(block), remaining)
        xor_into(buf, block[:take], offset)

        offset += take
        remaining -= take
        counter += 1


def mgf1(hash_fn, seed, mask_len):
    """
    Generate the bare MGF1 mask
    Returns: mask (bytes) of length mask_len
    """
    out = bytearray(mask_len)
    mgf1_mask(hash_fn, seed, out)
    return bytes(out)
