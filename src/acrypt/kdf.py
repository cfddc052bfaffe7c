# file: acrypt/kdf.py
"""
Key derivation using Argon2id.
"""

from typing import Optional

from argon2.exceptions import HashingError
from argon2.low_level import ARGON2_VERSION, Type, hash_secret_raw

from .config import Config
from .errors import DeriveError


def derive_key(password: Optional[bytes], salt: bytes, config: Config) -> bytes:
    """
    Derive a raw key from a password using Argon2id.

    Args:
        password: Password bytes. None is treated as empty.
        salt: Salt bytes (random for new hashes, decoded for verification)
        config: Cost parameters and key length

    Returns:
        config.key_length bytes

    Raises:
        DeriveError: If the Argon2 primitive reports a failure
    """
    if password is None:
        password = b""

    try:
        key = hash_secret_raw(
            secret=password,
            salt=salt,
            time_cost=config.times,
            memory_cost=config.memory_kb,
            parallelism=config.parallelism,
            hash_len=config.key_length,
            type=Type.ID,  # Argon2id
            version=ARGON2_VERSION,
        )
    except HashingError as e:
        raise DeriveError(f"Argon2id derivation failed: {e}") from e

    if len(key) != config.key_length:
        raise DeriveError(f"Derived key is {len(key)} bytes, expected {config.key_length}")

    return key
