#!/usr/bin/env python3
"""
Exception Types
Explicit failures raised by the encoder (verification never raises)
"""


class PSSRError(Exception):
    """Base class for all errors raised by pssr"""


class EncodingError(PSSRError, ValueError):
    """Input cannot be encoded (wrong digest length, output too small, ...)"""


class InvalidArgument(PSSRError, ValueError):
    """A parameter is out of range or malformed"""


class AlgorithmNotFound(PSSRError, LookupError):
    """
    Requested hash or encoding scheme is unknown
    """

    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown or unavailable algorithm: {name}")
