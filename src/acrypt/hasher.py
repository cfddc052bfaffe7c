# file: acrypt/hasher.py
"""
Password hashing: salt generation, Argon2id derivation and encoding.
"""

import logging
from typing import Optional

from .config import Config, resolve_config
from .framing import encode_hash
from .kdf import derive_key
from .salt import generate_salt

logger = logging.getLogger(__name__)


def generate_from_password(password: Optional[bytes], config: Optional[Config] = None) -> bytes:
    """
    Hash a password into a self-describing Argon2id hash.

    Every call draws a fresh salt, so hashing the same password twice
    with the same config gives two different results.

    Args:
        password: Password bytes. None and b"" are both accepted and hash alike.
        config: Cost parameters. None selects DEFAULT_CONFIG.

    Returns:
        Encoded hash (ASCII bytes) embedding config, salt and key

    Raises:
        ConfigInvalidError: If config is invalid (checked before any other work)
        RandomSourceError: If the secure random source fails
        DeriveError: If the Argon2id primitive fails
        TypeError: If password is not bytes-like or None
    """
    # Validate before drawing randomness or spending CPU
    config = resolve_config(config)

    if password is not None and not isinstance(password, (bytes, bytearray, memoryview)):
        raise TypeError(f"Password must be bytes, got {type(password).__name__}")
    if password is not None:
        password = bytes(password)

    salt = generate_salt(config.salt_length)
    key = derive_key(password, salt, config)

    logger.debug(
        "Generated argon2id hash: m=%d, t=%d, p=%d, salt=%dB, key=%dB",
        config.memory_kb, config.times, config.parallelism,
        config.salt_length, config.key_length,
    )

    return encode_hash(config, salt, key)
