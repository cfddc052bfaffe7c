# file: acrypt/salt.py
"""
Per-hash salt generation from the operating system's secure random source.
"""

from os import urandom

from .errors import RandomSourceError


def generate_salt(length: int) -> bytes:
    """
    Draw a fresh random salt.

    Args:
        length: Salt length in bytes

    Returns:
        length bytes from urandom

    Raises:
        RandomSourceError: If the entropy source fails or returns a short read
    """
    try:
        salt = urandom(length)
    except OSError as e:
        raise RandomSourceError(f"Secure random source failed: {e}") from e

    if len(salt) != length:
        raise RandomSourceError(f"Short read from random source: {len(salt)} of {length} bytes")

    return salt
