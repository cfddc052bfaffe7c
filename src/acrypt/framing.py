# file: acrypt/framing.py
"""
Encoding and parsing of self-describing Argon2id hashes.

Hash structure (PHC string format, ASCII):
    $argon2id$v=19$m=<memory_kb>,t=<times>,p=<parallelism>$<salt>$<key>

salt and key are standard base64 without padding. Key length is implied
by the decoded key. This is the layout written by the Argon2 reference
implementation and by argon2-cffi, so hashes are exchangeable with them.
"""

import base64
import binascii
import re
from dataclasses import dataclass, field
from typing import Union

from argon2.low_level import ARGON2_VERSION

from .config import MAX_KEY_LENGTH, MAX_PARALLELISM, MAX_SALT_LENGTH, MAX_UINT32, Config
from .errors import (
    ConfigInvalidError,
    IncompatibleVersionError,
    MalformedHashError,
    UnsupportedAlgorithmError,
)


ALGORITHM = "argon2id"
VERSION = ARGON2_VERSION  # 0x13


def _b64_length(n: int) -> int:
    return (4 * n + 2) // 3


# Length of the longest hash a valid Config can produce
MAX_ENCODED_SIZE = (
    len(f"${ALGORITHM}$v={VERSION}$m={MAX_UINT32},t={MAX_UINT32},p={MAX_PARALLELISM}$$")
    + _b64_length(MAX_SALT_LENGTH)
    + _b64_length(MAX_KEY_LENGTH)
)
FIELD_COUNT = 6

_DECIMAL = r"(0|[1-9][0-9]*)"
_VERSION_RE = re.compile(r"v=" + _DECIMAL)
_PARAMS_RE = re.compile(r"m=" + _DECIMAL + r",t=" + _DECIMAL + r",p=" + _DECIMAL)


@dataclass(frozen=True)
class DecodedHash:
    """The (config, salt, key) triple carried by an encoded hash."""

    config: Config
    salt: bytes = field(repr=False)
    key: bytes = field(repr=False)


def _b64encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii").rstrip("=")


def _b64decode(text: str, name: str) -> bytes:
    padded = text + "=" * (-len(text) % 4)
    try:
        raw = base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedHashError(f"Invalid base64 in {name}: {e}") from e

    # Reject non-canonical text (stray low bits, embedded padding)
    if _b64encode(raw) != text:
        raise MalformedHashError(f"Non-canonical base64 in {name}")

    return raw


def encode_hash(config: Config, salt: bytes, key: bytes) -> bytes:
    """
    Assemble an encoded hash from its components.

    Args:
        config: Cost parameters used to derive key
        salt: config.salt_length bytes
        key: config.key_length bytes

    Returns:
        ASCII bytes of the PHC string

    Raises:
        ValueError: If salt or key length disagrees with config
    """
    if len(salt) != config.salt_length:
        raise ValueError(f"Salt is {len(salt)} bytes, config expects {config.salt_length}")
    if len(key) != config.key_length:
        raise ValueError(f"Key is {len(key)} bytes, config expects {config.key_length}")

    encoded = "${alg}$v={ver}$m={m},t={t},p={p}${salt}${key}".format(
        alg=ALGORITHM,
        ver=VERSION,
        m=config.memory_kb,
        t=config.times,
        p=config.parallelism,
        salt=_b64encode(salt),
        key=_b64encode(key),
    )
    return encoded.encode("ascii")


def _as_text(encoded: Union[bytes, str]) -> str:
    if isinstance(encoded, (bytes, bytearray, memoryview)):
        encoded = bytes(encoded)
        if len(encoded) > MAX_ENCODED_SIZE:
            raise MalformedHashError(
                f"Hash too long: {len(encoded)} bytes (maximum {MAX_ENCODED_SIZE})"
            )
        try:
            return encoded.decode("ascii")
        except UnicodeDecodeError as e:
            raise MalformedHashError("Hash contains non-ASCII bytes") from e

    if isinstance(encoded, str):
        if len(encoded) > MAX_ENCODED_SIZE:
            raise MalformedHashError(
                f"Hash too long: {len(encoded)} characters (maximum {MAX_ENCODED_SIZE})"
            )
        if not encoded.isascii():
            raise MalformedHashError("Hash contains non-ASCII characters")
        return encoded

    raise MalformedHashError(f"Expected bytes or str, got {type(encoded).__name__}")


def decode_hash(encoded: Union[bytes, str]) -> DecodedHash:
    """
    Parse an encoded hash into its components.

    Args:
        encoded: Output of encode_hash(), as bytes or str

    Returns:
        DecodedHash whose config carries the salt and key lengths

    Raises:
        MalformedHashError: If the structure, numbers or base64 are invalid
        UnsupportedAlgorithmError: If the algorithm tag is not argon2id
        IncompatibleVersionError: If the version is not 19
    """
    text = _as_text(encoded)

    parts = text.split("$")
    if len(parts) != FIELD_COUNT or parts[0] != "":
        raise MalformedHashError(
            f"Expected {FIELD_COUNT - 1} '$'-delimited fields, got {len(parts) - 1}"
        )
    _, algorithm, version_field, params_field, salt_field, key_field = parts

    if algorithm != ALGORITHM:
        raise UnsupportedAlgorithmError(
            f"Unsupported algorithm: {algorithm!r}", algorithm=algorithm
        )

    match = _VERSION_RE.fullmatch(version_field)
    if match is None:
        raise MalformedHashError(f"Invalid version field: {version_field!r}")
    version = int(match.group(1))
    if version != VERSION:
        raise IncompatibleVersionError(
            f"Unsupported Argon2 version: {version} (expected {VERSION})", version=version
        )

    match = _PARAMS_RE.fullmatch(params_field)
    if match is None:
        raise MalformedHashError(f"Invalid parameter field: {params_field!r}")
    memory_kb, times, parallelism = (int(g) for g in match.groups())

    salt = _b64decode(salt_field, "salt")
    key = _b64decode(key_field, "key")

    try:
        config = Config(
            memory_kb=memory_kb,
            times=times,
            parallelism=parallelism,
            salt_length=len(salt),
            key_length=len(key),
        ).validate()
    except ConfigInvalidError as e:
        raise MalformedHashError(f"Invalid parameters in hash: {e}") from e

    return DecodedHash(config=config, salt=salt, key=key)
