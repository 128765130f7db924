#!/usr/bin/env python3
"""
Common Utility Functions
Bit/byte arithmetic, in-place XOR, constant-time comparison and
algorithm name parsing
"""

from cryptography.hazmat.primitives import constant_time

from pssr.common.exceptions import InvalidArgument


def bytes_for_bits(bits):
    """Number of bytes needed to hold `bits` bits: ceil(bits / 8)"""
    return (bits + 7) // 8


def high_bit(value):
    """
    Position of the highest set bit, counting from 1
    Returns: 0 if value is 0
    """
    return value.bit_length()


def xor_into(buf, mask, offset=0):
    """XOR mask into buf (bytearray) in place, starting at offset"""
    for i, m in enumerate(mask):
        buf[offset + i] ^= m


def ct_equal(a, b):
    """
    Compare two byte strings in constant time
    Returns: True if equal, False otherwise
    """
    return constant_time.bytes_eq(bytes(a), bytes(b))


def parse_algorithm_spec(text):
    """
    Split an algorithm string into its name and arguments
    "EMSA4(SHA-3(256),MGF1,32)" -> ("EMSA4", ["SHA-3(256)", "MGF1", "32"])
    Returns: (name, args)
    """
    text = text.strip()
    if not text:
        raise InvalidArgument("Empty algorithm specification")

    if "(" not in text:
        if ")" in text or "," in text:
            raise InvalidArgument(f"Malformed algorithm specification: {text}")
        return text, []

    if not text.endswith(")"):
        raise InvalidArgument(f"Malformed algorithm specification: {text}")

    name, body = text[:text.index("(")], text[text.index("(") + 1:-1]
    if not name:
        raise InvalidArgument(f"Malformed algorithm specification: {text}")

    args = []
    depth = 0
    current = ""
    for ch in body:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise InvalidArgument(f"Unbalanced parentheses in: {text}")
        elif ch == "," and depth == 0:
            args.append(current.strip())
            current = ""
            continue
        current += ch

    if depth != 0:
        raise InvalidArgument(f"Unbalanced parentheses in: {text}")

    args.append(current.strip())
    if any(arg == "" for arg in args):
        raise InvalidArgument(f"Empty argument in: {text}")

    return name.strip(), args
