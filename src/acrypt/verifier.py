# file: acrypt/verifier.py
"""
Password verification against stored Argon2id hashes.

Verification always uses the parameters embedded in the hash, so callers
never need to remember the config a hash was created with.
"""

import logging
from typing import Optional, Union

from cryptography.hazmat.primitives.constant_time import bytes_eq

from .config import Config, resolve_config
from .errors import MalformedHashError, PasswordMismatchError
from .framing import decode_hash
from .kdf import derive_key

logger = logging.getLogger(__name__)

EncodedHash = Union[bytes, str]


def compare_hash_and_password(encoded: EncodedHash, password: Optional[bytes]) -> None:
    """
    Check a password against an encoded hash.

    Args:
        encoded: Hash produced by generate_from_password() or hash_password()
        password: Candidate password bytes (None is treated as empty)

    Returns:
        None on success

    Raises:
        MalformedHashError: If the hash cannot be decoded
        UnsupportedAlgorithmError: If the hash is not argon2id
        IncompatibleVersionError: If the Argon2 version is unknown
        DeriveError: If re-deriving the key fails
        PasswordMismatchError: If the password does not match
        TypeError: If password is not bytes-like or None
    """
    try:
        decoded = decode_hash(encoded)
    except MalformedHashError as e:
        logger.info("Rejected stored hash: %s", type(e).__name__)
        raise

    if password is not None and not isinstance(password, (bytes, bytearray, memoryview)):
        raise TypeError(f"Password must be bytes, got {type(password).__name__}")
    if password is not None:
        password = bytes(password)

    config = decoded.config
    logger.debug(
        "Verifying argon2id hash: m=%d, t=%d, p=%d",
        config.memory_kb, config.times, config.parallelism,
    )

    candidate = derive_key(password, decoded.salt, config)

    # Running time independent of where the keys differ
    if not bytes_eq(candidate, decoded.key):
        raise PasswordMismatchError("Password does not match hash")


def cost(encoded: EncodedHash) -> Config:
    """
    Return the Config a hash was created with.

    Raises:
        MalformedHashError: If the hash cannot be decoded
    """
    return decode_hash(encoded).config


def needs_rehash(encoded: EncodedHash, config: Optional[Config] = None) -> bool:
    """
    Report whether a stored hash was made with parameters other than config.

    Intended for upgrading hashes after a successful login when the
    deployment's cost parameters have been raised.

    Args:
        encoded: Stored hash
        config: Wanted parameters. None selects DEFAULT_CONFIG.

    Raises:
        MalformedHashError: If the hash cannot be decoded
        ConfigInvalidError: If config is invalid
    """
    config = resolve_config(config)
    return cost(encoded) != config
