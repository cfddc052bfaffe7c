# file: acrypt/config.py

"""
Argon2id cost parameters.

A Config is an immutable value. DEFAULT_CONFIG is built once at import
time and never written afterwards, so it can be read from any thread
without locking.
"""

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigInvalidError

logger = logging.getLogger(__name__)

MAX_PARALLELISM = 255
MAX_UINT32 = 2 ** 32 - 1

# Lower bounds enforced by the Argon2 reference implementation
MIN_SALT_LENGTH = 8
MIN_KEY_LENGTH = 4
MIN_MEMORY_PER_LANE_KB = 8

# Keeps the longest encoded hash bounded
MAX_SALT_LENGTH = 256
MAX_KEY_LENGTH = 1024

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.yaml")


@dataclass(frozen=True)
class Config:
    """
    Cost parameters for one Argon2id hash.

    Parameters:
        memory_kb (int): KiB of working memory for the derive function
        times (int): Number of passes over memory
        parallelism (int): Number of lanes
        salt_length (int): Salt length in bytes
        key_length (int): Derived key length in bytes

    Invariants:
        - every field is a positive int no larger than 2**32 - 1
        - parallelism <= 255
        - 8 <= salt_length <= 256, 4 <= key_length <= 1024
        - memory_kb >= 8 * parallelism
    """

    memory_kb: int
    times: int
    parallelism: int
    salt_length: int
    key_length: int

    def validate(self) -> "Config":
        """
        Check every field against the Argon2id limits.

        Returns:
            self, so construction and validation can be chained

        Raises:
            ConfigInvalidError: On the first field that is out of range
        """
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigInvalidError(
                    f"{f.name} must be an int, got {type(value).__name__}", field=f.name
                )
            if value <= 0:
                raise ConfigInvalidError(f"{f.name}={value} must be positive", field=f.name)
            if value > MAX_UINT32:
                raise ConfigInvalidError(
                    f"{f.name}={value} exceeds 32-bit limit of {MAX_UINT32}", field=f.name
                )

        if self.parallelism > MAX_PARALLELISM:
            raise ConfigInvalidError(
                f"parallelism={self.parallelism} exceeds limit of {MAX_PARALLELISM}",
                field="parallelism",
            )
        if self.salt_length < MIN_SALT_LENGTH:
            raise ConfigInvalidError(
                f"salt_length={self.salt_length} must be >= {MIN_SALT_LENGTH}",
                field="salt_length",
            )
        if self.key_length < MIN_KEY_LENGTH:
            raise ConfigInvalidError(
                f"key_length={self.key_length} must be >= {MIN_KEY_LENGTH}",
                field="key_length",
            )
        if self.salt_length > MAX_SALT_LENGTH:
            raise ConfigInvalidError(
                f"salt_length={self.salt_length} exceeds limit of {MAX_SALT_LENGTH}",
                field="salt_length",
            )
        if self.key_length > MAX_KEY_LENGTH:
            raise ConfigInvalidError(
                f"key_length={self.key_length} exceeds limit of {MAX_KEY_LENGTH}",
                field="key_length",
            )
        if self.memory_kb < MIN_MEMORY_PER_LANE_KB * self.parallelism:
            raise ConfigInvalidError(
                f"memory_kb={self.memory_kb} must be >= "
                f"{MIN_MEMORY_PER_LANE_KB} * parallelism ({MIN_MEMORY_PER_LANE_KB * self.parallelism})",
                field="memory_kb",
            )
        return self

    def replace(self, **changes) -> "Config":
        """Return a validated copy with the given fields changed."""
        return dataclasses.replace(self, **changes).validate()

    def to_dict(self) -> Dict[str, int]:
        return dataclasses.asdict(self)


DEFAULT_CONFIG = Config(
    memory_kb=64 * 1024,  # 64 MiB
    times=3,
    parallelism=2,
    salt_length=16,
    key_length=32,
).validate()


def resolve_config(cfg: Optional[Config]) -> Config:
    """
    Map an absent config to DEFAULT_CONFIG and validate anything else.

    Raises:
        ConfigInvalidError: If cfg is not a Config or fails validation
    """
    if cfg is None:
        return DEFAULT_CONFIG
    if not isinstance(cfg, Config):
        raise ConfigInvalidError(f"Expected Config, got {type(cfg).__name__}")
    return cfg.validate()


def config_from_dict(data: Dict[str, Any]) -> Config:
    """
    Build a Config from a mapping, filling missing keys from DEFAULT_CONFIG.

    Raises:
        ConfigInvalidError: On unknown keys or invalid values
    """
    if not isinstance(data, dict):
        raise ConfigInvalidError(f"Config section must be a mapping, got {type(data).__name__}")

    known = {f.name for f in dataclasses.fields(Config)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigInvalidError(f"Unknown config keys: {', '.join(map(str, unknown))}")

    values = DEFAULT_CONFIG.to_dict()
    values.update(data)
    return Config(**values).validate()


def load_config(config_path: Optional[str] = None, section: str = "argon2") -> Config:
    """
    Load cost parameters from a YAML file.

    Args:
        config_path: Path to a YAML document. None returns DEFAULT_CONFIG.
        section: Top-level key holding the parameters

    Returns:
        Validated Config

    Raises:
        FileNotFoundError: If config_path does not exist
        ConfigInvalidError: If the document or its values are invalid

    Configuration Schema:
        argon2:
          memory_kb: 65536
          times: 3
          parallelism: 2
          salt_length: 16
          key_length: 32
    """
    if config_path is None:
        return DEFAULT_CONFIG

    with open(config_path, "r") as f:
        try:
            document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigInvalidError(f"Cannot parse {config_path}: {e}") from e

    if not isinstance(document, dict) or section not in document:
        raise ConfigInvalidError(f"Missing '{section}' section in {config_path}")

    cfg = config_from_dict(document[section])
    logger.debug(
        "Loaded config from %s: m=%d, t=%d, p=%d",
        config_path, cfg.memory_kb, cfg.times, cfg.parallelism,
    )
    return cfg
