# file: acrypt/errors.py

"""
Exception hierarchy for password hashing and verification.

All exceptions inherit from AcryptError for unified handling. Decode
failures (MalformedHashError and its subclasses) are kept apart from
PasswordMismatchError so callers can tell a corrupt or foreign hash
from a wrong password.
"""

from typing import Optional


class AcryptError(Exception):
    """Base exception for all acrypt errors."""
    pass


class ConfigInvalidError(AcryptError, ValueError):
    """Raised when a Config field is non-positive or out of range."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class RandomSourceError(AcryptError):
    """Raised when the secure random source cannot supply salt bytes."""
    pass


class DeriveError(AcryptError):
    """Raised when the Argon2id primitive fails to derive a key."""
    pass


class MalformedHashError(AcryptError):
    """Raised when an encoded hash cannot be parsed."""
    pass


class UnsupportedAlgorithmError(MalformedHashError):
    """Raised when the algorithm tag is not argon2id."""

    def __init__(self, message: str, algorithm: Optional[str] = None):
        super().__init__(message)
        self.algorithm = algorithm


class IncompatibleVersionError(MalformedHashError):
    """Raised when the Argon2 version tag is not one this package understands."""

    def __init__(self, message: str, version: Optional[int] = None):
        super().__init__(message)
        self.version = version


class PasswordMismatchError(AcryptError):
    """Raised when the hash decodes cleanly but the password does not match."""
    pass
