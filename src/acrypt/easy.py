# file: acrypt/easy.py
"""
String-based convenience API bound to DEFAULT_CONFIG.
"""

import logging

from .config import DEFAULT_CONFIG
from .errors import AcryptError
from .hasher import generate_from_password
from .verifier import EncodedHash, compare_hash_and_password

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """
    Hash a password with DEFAULT_CONFIG.

    Returns:
        Encoded hash as text, e.g. "$argon2id$v=19$m=65536,t=3,p=2$..."

    Raises:
        AcryptError: If hashing fails
    """
    if not isinstance(password, str):
        raise TypeError(f"Password must be str, got {type(password).__name__}")
    return generate_from_password(password.encode("utf-8"), DEFAULT_CONFIG).decode("ascii")


def verify_password(encoded: EncodedHash, password: str) -> bool:
    """
    Check a password against a hash.

    Returns True only on a match. A wrong password, a corrupt or foreign
    hash, or a failed derivation all return False without raising.
    """
    if not isinstance(password, str):
        return False

    try:
        compare_hash_and_password(encoded, password.encode("utf-8"))
    except (AcryptError, UnicodeEncodeError) as e:
        logger.debug("Password verification failed: %s", type(e).__name__)
        return False

    return True
