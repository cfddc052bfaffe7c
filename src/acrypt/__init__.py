# file: acrypt/__init__.py

"""
acrypt: bcrypt-style password hashing on Argon2id.

Hashes are self-describing PHC strings that embed the cost parameters,
salt and derived key, so verification never needs the original config.

Public API:
    - hash_password(password: str) -> str
    - verify_password(hash, password: str) -> bool
    - generate_from_password(password: bytes, config: Config = None) -> bytes
    - compare_hash_and_password(hash, password: bytes) -> None
    - cost(hash) -> Config
    - needs_rehash(hash, config: Config = None) -> bool
"""

import logging

from .config import Config, DEFAULT_CONFIG, load_config, resolve_config
from .easy import hash_password, verify_password
from .errors import (
    AcryptError,
    ConfigInvalidError,
    RandomSourceError,
    DeriveError,
    MalformedHashError,
    UnsupportedAlgorithmError,
    IncompatibleVersionError,
    PasswordMismatchError,
)
from .framing import DecodedHash, decode_hash, encode_hash
from .hasher import generate_from_password
from .verifier import compare_hash_and_password, cost, needs_rehash

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
    "hash_password",
    "verify_password",
    "generate_from_password",
    "compare_hash_and_password",
    "cost",
    "needs_rehash",
    "Config",
    "DEFAULT_CONFIG",
    "load_config",
    "resolve_config",
    "DecodedHash",
    "decode_hash",
    "encode_hash",
    "AcryptError",
    "ConfigInvalidError",
    "RandomSourceError",
    "DeriveError",
    "MalformedHashError",
    "UnsupportedAlgorithmError",
    "IncompatibleVersionError",
    "PasswordMismatchError",
]
