# file: tests/test_framing.py

"""
Unit tests for the encoded hash format.

Test coverage:
    - Layout of encoded hashes
    - Decoding of bytes and str input
    - Algorithm and version rejection
    - Malformed, truncated and non-canonical input
    - Interoperability with argon2-cffi's PasswordHasher
"""

import pytest
from argon2 import PasswordHasher

from acrypt import (
    Config,
    IncompatibleVersionError,
    MalformedHashError,
    UnsupportedAlgorithmError,
    compare_hash_and_password,
    decode_hash,
    encode_hash,
    generate_from_password,
)
from acrypt.config import MAX_KEY_LENGTH, MAX_PARALLELISM, MAX_SALT_LENGTH, MAX_UINT32
from acrypt.framing import MAX_ENCODED_SIZE


SALT = b"somesalt"
KEY = bytes(range(32))
CONFIG = Config(memory_kb=65536, times=2, parallelism=1, salt_length=8, key_length=32)

# $argon2id$v=19$m=65536,t=2,p=1$<salt>$<key>
SALT_B64 = "c29tZXNhbHQ"
KEY_B64 = "AAECAwQFBgcICQoLDA0ODxAREhMUFRYXGBkaGxwdHh8"


def make_hash(algorithm="argon2id", version="v=19", params="m=65536,t=2,p=1",
              salt=SALT_B64, key=KEY_B64) -> str:
    return "$".join(["", algorithm, version, params, salt, key])


class TestEncode:
    """Test encode_hash()."""

    def test_layout(self):
        encoded = encode_hash(CONFIG, SALT, KEY)
        assert encoded == make_hash().encode("ascii")

    def test_returns_printable_single_token(self):
        encoded = encode_hash(CONFIG, SALT, KEY)
        assert isinstance(encoded, bytes)
        assert encoded.decode("ascii").isprintable()
        assert b" " not in encoded and b"=" not in encoded.split(b"$")[-1]

    def test_salt_length_mismatch(self):
        with pytest.raises(ValueError, match="Salt is 7 bytes"):
            encode_hash(CONFIG, SALT[:7], KEY)

    def test_key_length_mismatch(self):
        with pytest.raises(ValueError, match="Key is 31 bytes"):
            encode_hash(CONFIG, SALT, KEY[:31])

    def test_longest_hash_decodes(self):
        """The largest valid Config encodes to exactly the size cap."""
        cfg = Config(
            memory_kb=MAX_UINT32,
            times=MAX_UINT32,
            parallelism=MAX_PARALLELISM,
            salt_length=MAX_SALT_LENGTH,
            key_length=MAX_KEY_LENGTH,
        )
        encoded = encode_hash(cfg, b"\x00" * MAX_SALT_LENGTH, b"\x00" * MAX_KEY_LENGTH)

        assert len(encoded) == MAX_ENCODED_SIZE
        assert decode_hash(encoded).config == cfg


class TestDecode:
    """Test decode_hash() on well-formed input."""

    def test_decode_bytes(self):
        decoded = decode_hash(make_hash().encode("ascii"))
        assert decoded.config == CONFIG
        assert decoded.salt == SALT
        assert decoded.key == KEY

    def test_decode_str(self):
        assert decode_hash(make_hash()).config == CONFIG

    def test_lengths_implied_by_segments(self):
        """Salt and key lengths come from the decoded bytes."""
        salt = bytes(range(24))
        key = bytes(range(64))
        cfg = CONFIG.replace(salt_length=24, key_length=64)

        decoded = decode_hash(encode_hash(cfg, salt, key))

        assert decoded.config.salt_length == 24
        assert decoded.config.key_length == 64

    def test_repr_hides_secrets(self):
        decoded = decode_hash(make_hash())
        assert SALT_B64 not in repr(decoded)
        assert "salt=" not in repr(decoded)
        assert "key=" not in repr(decoded)


class TestDecodeRejects:
    """Test decode_hash() failure modes."""

    @pytest.mark.parametrize("algorithm", ["argon2i", "argon2d", "ARGON2ID", "scrypt"])
    def test_unsupported_algorithm(self, algorithm):
        with pytest.raises(UnsupportedAlgorithmError) as excinfo:
            decode_hash(make_hash(algorithm=algorithm))
        assert excinfo.value.algorithm == algorithm

    def test_unsupported_algorithm_is_malformed(self):
        with pytest.raises(MalformedHashError):
            decode_hash(make_hash(algorithm="argon2i"))

    @pytest.mark.parametrize("version", [16, 20, 0])
    def test_incompatible_version(self, version):
        with pytest.raises(IncompatibleVersionError) as excinfo:
            decode_hash(make_hash(version=f"v={version}"))
        assert excinfo.value.version == version

    @pytest.mark.parametrize("version", ["v=", "v=019", "v=+19", "19", "v=19 ", "version=19"])
    def test_bad_version_field(self, version):
        with pytest.raises(MalformedHashError, match="version"):
            decode_hash(make_hash(version=version))

    @pytest.mark.parametrize("params", [
        "t=2,m=65536,p=1",      # wrong order
        "m=65536,t=2",          # missing parallelism
        "m=065536,t=2,p=1",     # leading zero
        "m=-1,t=2,p=1",         # sign
        "m=65536,t=2,p=1,k=32", # extra field
        "m=65536, t=2, p=1",    # whitespace
        "m=６５５３６,t=2,p=1",  # non-ASCII digits
    ])
    def test_bad_parameter_field(self, params):
        with pytest.raises(MalformedHashError):
            decode_hash(make_hash(params=params))

    @pytest.mark.parametrize("params", ["m=0,t=2,p=1", "m=65536,t=0,p=1", "m=65536,t=2,p=0", "m=65536,t=2,p=256"])
    def test_out_of_range_parameters(self, params):
        with pytest.raises(MalformedHashError, match="Invalid parameters"):
            decode_hash(make_hash(params=params))

    def test_empty_salt(self):
        with pytest.raises(MalformedHashError, match="salt_length"):
            decode_hash(make_hash(salt=""))

    def test_empty_key(self):
        with pytest.raises(MalformedHashError, match="key_length"):
            decode_hash(make_hash(key=""))

    @pytest.mark.parametrize("salt", [
        "c29tZXNhbHQ=",  # padding
        "c29tZXNhbHR",   # stray low bits in final character
        "c29t!XNhbHQ",   # character outside the alphabet
        "c29tZ",         # impossible length
        "c29tZXNhbHQ\n", # trailing newline
    ])
    def test_non_canonical_base64(self, salt):
        with pytest.raises(MalformedHashError):
            decode_hash(make_hash(salt=salt))

    def test_urlsafe_alphabet_rejected(self):
        key = "-_" + KEY_B64[2:]
        with pytest.raises(MalformedHashError):
            decode_hash(make_hash(key=key))

    @pytest.mark.parametrize("encoded", [
        "",
        "$",
        "argon2id$v=19$m=65536,t=2,p=1$" + SALT_B64 + "$" + KEY_B64,
        "$argon2id$m=65536,t=2,p=1$" + SALT_B64 + "$" + KEY_B64,
        make_hash() + "$",
        make_hash() + "$extra",
        "$2b$12$R9h/cIPz0gi.URNNX3kh2OPST9/PgBkqquzi.Ss7KIUgO2t0jWMUW",
    ])
    def test_structure(self, encoded):
        with pytest.raises(MalformedHashError):
            decode_hash(encoded)

    def test_truncated(self):
        """Every prefix that cuts into the header or salt is rejected."""
        encoded = make_hash().encode("ascii")
        for n in range(encoded.rindex(b"$") + 1):
            with pytest.raises(MalformedHashError):
                decode_hash(encoded[:n])

    def test_non_ascii_bytes(self):
        with pytest.raises(MalformedHashError, match="non-ASCII"):
            decode_hash(make_hash().encode("ascii") + b"\xff")

    def test_non_ascii_str(self):
        with pytest.raises(MalformedHashError, match="non-ASCII"):
            decode_hash(make_hash(salt="c29tZXNhbHQé"))

    def test_oversized(self):
        with pytest.raises(MalformedHashError, match="too long"):
            decode_hash(make_hash(key="A" * MAX_ENCODED_SIZE))

    @pytest.mark.parametrize("encoded", [None, 42, ["$argon2id"]])
    def test_wrong_type(self, encoded):
        with pytest.raises(MalformedHashError, match="Expected bytes or str"):
            decode_hash(encoded)


class TestInterop:
    """Test exchange of hashes with argon2-cffi."""

    def test_argon2_cffi_verifies_our_hash(self, fast_config):
        encoded = generate_from_password(b"secret", fast_config)
        ph = PasswordHasher()
        assert ph.verify(encoded.decode("ascii"), "secret")

    def test_we_verify_argon2_cffi_hash(self):
        ph = PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1, hash_len=32, salt_len=16)
        encoded = ph.hash("secret")

        compare_hash_and_password(encoded, b"secret")
        assert decode_hash(encoded).config == Config(
            memory_kb=1024, times=1, parallelism=1, salt_length=16, key_length=32
        )
