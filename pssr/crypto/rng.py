#!/usr/bin/env python3
"""
Random Byte Source for Salts
"""

from Crypto.Random import get_random_bytes

from pssr.common.exceptions import InvalidArgument


class SystemRNG:
    """Operating-system CSPRNG exposed as random_vec(n)"""

    def random_vec(self, n):
        """
        Generate n fresh random bytes
        Returns: bytes of length n
        """
        if n < 0:
            raise InvalidArgument(f"Cannot generate {n} random bytes")
        if n == 0:
            return b""
        return get_random_bytes(n)

    def __repr__(self):
        return "SystemRNG()"
