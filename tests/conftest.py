import pytest

from acrypt import Config


@pytest.fixture
def fast_config():
    """Low-cost parameters so round trips stay fast."""
    return Config(memory_kb=1024, times=1, parallelism=1, salt_length=16, key_length=32)
