#!/usr/bin/env python3
"""
Configuration
Defaults for the encoder factory and the command-line tools, read from the
environment (or a .env file in the working directory) when asked for
"""

import logging
import os

from dotenv import find_dotenv, load_dotenv

from pssr.common.exceptions import InvalidArgument


def _optional_int(name, value):
    if value is None or value.strip() == "":
        return None
    try:
        number = int(value)
    except ValueError:
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if number < 0:
        raise InvalidArgument(f"{name} must not be negative, got {number}")
    return number


def load_config():
    """
    Load environment variables from .env, then read the PSS settings
    Returns: dict with 'hash', 'salt_size' and 'log_level'
    Raises: InvalidArgument (bad PSS_SALT_SIZE)
    """
    load_dotenv(find_dotenv(usecwd=True))

    return {
        'hash': os.getenv('PSS_HASH', 'SHA-256'),
        'salt_size': _optional_int('PSS_SALT_SIZE', os.getenv('PSS_SALT_SIZE')),
        'log_level': os.getenv('PSS_LOG_LEVEL', 'WARNING'),
    }


def configure_logging(level='WARNING'):
    """Set up root logging at the given level name"""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
