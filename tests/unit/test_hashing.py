"""
Hashing Unit Tests
Tests for merkle_audit/crypto/hashing.py

Tests:
- sha256 and registry functions match hashlib
- get_hash_function name resolution
- hash_canonical stability for dict key ordering differences
- to_hex/from_hex validation
"""
import hashlib

import pytest
from pydantic import BaseModel

from merkle_audit.crypto.hashing import (
    HASH_FUNCTIONS,
    from_hex,
    get_hash_function,
    hash_canonical,
    hash_concat,
    hash_function_name,
    sha256,
    sha512,
    to_hex,
)
from merkle_audit.schemas.errors import (
    CanonicalizationException,
    ErrorCodes,
    UnsupportedHashAlgorithmException,
)


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_known_value(self):
        """sha256 matches hashlib for a known input."""
        result = sha256(b"hello")

        assert result == hashlib.sha256(b"hello").digest()
        assert result.hex() == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"

    def test_sha256_empty_bytes(self):
        assert sha256(b"") == hashlib.sha256(b"").digest()


class TestHashRegistry:
    """Tests for the named hash function registry."""

    @pytest.mark.parametrize(
        "name, expected_len",
        [("sha256", 32), ("sha512", 64), ("sha3_256", 32), ("blake2b", 64), ("blake2s", 32)],
    )
    def test_registered_digest_sizes(self, name, expected_len):
        """Each registered function has a fixed output length."""
        fn = get_hash_function(name)

        assert len(fn(b"data")) == expected_len
        assert len(fn(b"other data, longer")) == expected_len

    @pytest.mark.parametrize("name", sorted(HASH_FUNCTIONS))
    def test_registered_functions_match_hashlib(self, name):
        """Registry entries are plain hashlib digests."""
        assert get_hash_function(name)(b"abc") == hashlib.new(name, b"abc").digest()

    def test_names_are_normalized(self):
        """Case and dashes are tolerated."""
        assert get_hash_function("SHA256") is sha256
        assert get_hash_function(" sha-512 ") is sha512
        assert get_hash_function("SHA3-256") is HASH_FUNCTIONS["sha3_256"]

    def test_unknown_name_raises(self):
        """Unknown names raise UnsupportedHashAlgorithmException."""
        with pytest.raises(UnsupportedHashAlgorithmException) as exc_info:
            get_hash_function("md5")

        assert exc_info.value.code == ErrorCodes.UNSUPPORTED_HASH_ALGORITHM
        assert exc_info.value.details["algorithm"] == "md5"
        assert "sha256" in exc_info.value.details["supported"]

    @pytest.mark.parametrize("name", sorted(HASH_FUNCTIONS))
    def test_name_lookup_inverts_registry(self, name):
        assert hash_function_name(get_hash_function(name)) == name

    def test_name_lookup_unregistered(self):
        """Callables outside the registry have no name."""
        assert hash_function_name(lambda data: sha256(data)) is None


class TestHashConcat:
    """Tests for hash_concat() function."""

    def test_hash_concat_basic(self):
        left = sha256(b"left")
        right = sha256(b"right")

        assert hash_concat(left, right) == sha256(left + right)

    def test_hash_concat_order_matters(self):
        left = sha256(b"a")
        right = sha256(b"b")

        assert hash_concat(left, right) != hash_concat(right, left)

    def test_hash_concat_custom_function(self):
        assert hash_concat(b"a", b"b", sha512) == sha512(b"ab")


class LeafRecord(BaseModel):
    """Sample model hashed as a leaf."""
    name: str
    value: int
    note: str | None = None


class TestHashCanonical:
    """Tests for hash_canonical() function."""

    def test_bytes_hashed_raw(self):
        assert hash_canonical(b"raw") == sha256(b"raw")

    def test_str_hashed_as_utf8(self):
        assert hash_canonical("héllo") == sha256("héllo".encode("utf-8"))

    def test_stable_for_key_order(self):
        """Dict key insertion order doesn't affect the hash."""
        dict1 = {"zebra": 1, "apple": 2, "mango": 3}
        dict2 = {"apple": 2, "mango": 3, "zebra": 1}

        assert hash_canonical(dict1) == hash_canonical(dict2)

    def test_compact_sorted_encoding(self):
        """Encoding is sorted-key JSON without whitespace."""
        assert hash_canonical({"b": [1, 2], "a": "x"}) == sha256(b'{"a":"x","b":[1,2]}')

    def test_list_preserves_order(self):
        assert hash_canonical({"items": [3, 1, 2]}) != hash_canonical({"items": [1, 2, 3]})

    def test_pydantic_model_drops_none(self):
        """Models hash like their dict form without None fields."""
        record = LeafRecord(name="a", value=1)

        assert hash_canonical(record) == hash_canonical({"name": "a", "value": 1})

    def test_nan_rejected(self):
        """NaN has no canonical encoding."""
        with pytest.raises(CanonicalizationException) as exc_info:
            hash_canonical({"x": float("nan")})

        assert exc_info.value.code == ErrorCodes.CANONICALIZATION_ERROR

    def test_unserializable_rejected(self):
        with pytest.raises(CanonicalizationException, match="object"):
            hash_canonical({"x": object()})

    def test_custom_hash_function(self):
        assert hash_canonical(b"raw", sha512) == sha512(b"raw")


class TestHexConversion:
    """Tests for to_hex() and from_hex() functions."""

    def test_to_hex_format(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_to_hex_empty(self):
        assert to_hex(b"") == "0x"

    def test_from_hex_valid(self):
        assert from_hex("0xdeadbeef") == bytes.fromhex("deadbeef")

    def test_from_hex_missing_prefix(self):
        with pytest.raises(ValueError, match="must start with '0x'"):
            from_hex("deadbeef")

    def test_from_hex_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xgg")

    def test_hex_round_trip_sha256(self):
        hash_value = sha256(b"test data")
        hex_str = to_hex(hash_value)

        assert from_hex(hex_str) == hash_value
        assert len(hex_str) == 2 + 64
