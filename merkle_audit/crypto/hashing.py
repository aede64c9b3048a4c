"""
Crypto - Hashing Utilities
Pluggable hash functions and leaf hashing helpers for Merkle trees.

This module provides:
- SHA-256 (the default) and a small registry of hashlib-backed functions
- Canonical hashing of objects for building leaves from structured data
- Hex encoding/decoding with 0x prefix

The tree never embeds an algorithm of its own: every place that combines
hashes takes a HashFunction, and get_hash_function() resolves the names
accepted by the runtime configuration.

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Canonical encoding sorts keys and uses compact separators
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
import json
from typing import Any, Callable, Optional

from pydantic import BaseModel

from merkle_audit.schemas.errors import (
    CanonicalizationException,
    UnsupportedHashAlgorithmException,
)


HashFunction = Callable[[bytes], bytes]

DEFAULT_HASH_ALGORITHM = "sha256"


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def sha512(data: bytes) -> bytes:
    """Compute the 64-byte SHA-512 digest of raw bytes."""
    return hashlib.sha512(data).digest()


def sha3_256(data: bytes) -> bytes:
    """Compute the 32-byte SHA3-256 digest of raw bytes."""
    return hashlib.sha3_256(data).digest()


def blake2b(data: bytes) -> bytes:
    """Compute the 64-byte BLAKE2b digest of raw bytes."""
    return hashlib.blake2b(data).digest()


def blake2s(data: bytes) -> bytes:
    """Compute the 32-byte BLAKE2s digest of raw bytes."""
    return hashlib.blake2s(data).digest()


HASH_FUNCTIONS: dict[str, HashFunction] = {
    "sha256": sha256,
    "sha512": sha512,
    "sha3_256": sha3_256,
    "blake2b": blake2b,
    "blake2s": blake2s,
}


def get_hash_function(name: str) -> HashFunction:
    """
    Resolve a hash function by its registry name.

    Names are case-insensitive and "-" is accepted in place of "_"
    (so "SHA3-256" resolves to sha3_256).

    Args:
        name: Algorithm name, e.g. "sha256"

    Returns:
        The registered HashFunction

    Raises:
        UnsupportedHashAlgorithmException: If the name is not registered
    """
    key = name.strip().lower().replace("-", "_")
    try:
        return HASH_FUNCTIONS[key]
    except KeyError:
        raise UnsupportedHashAlgorithmException(
            name, supported=sorted(HASH_FUNCTIONS)
        ) from None


def hash_function_name(hash_function: HashFunction) -> Optional[str]:
    """Registry name of hash_function, or None for unregistered callables."""
    for name, registered in HASH_FUNCTIONS.items():
        if registered is hash_function:
            return name
    return None


def hash_concat(left: bytes, right: bytes, hash_function: HashFunction = sha256) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    This is the parent combination rule: parent = H(left + right).
    Order matters; hash_concat(a, b) != hash_concat(b, a).

    Args:
        left: Left child hash
        right: Right child hash
        hash_function: Hash to apply (defaults to SHA-256)

    Returns:
        Digest of the concatenation
    """
    return hash_function(left + right)


def _canonical_bytes(obj: Any) -> bytes:
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj)
    if isinstance(obj, str):
        return obj.encode("utf-8")
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    try:
        encoded = json.dumps(
            obj,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Cannot canonically encode value of type {type(obj).__name__}: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e
    return encoded.encode("utf-8")


def hash_canonical(obj: Any, hash_function: HashFunction = sha256) -> bytes:
    """
    Hash an object into a leaf hash.

    Bytes are hashed as-is and strings as UTF-8. Pydantic models, dicts,
    lists and JSON scalars are first encoded as canonical JSON (sorted keys,
    no whitespace, None fields of models dropped, NaN/Infinity rejected).

    Args:
        obj: Value to hash
        hash_function: Hash to apply (defaults to SHA-256)

    Returns:
        Leaf hash bytes

    Raises:
        CanonicalizationException: If the object cannot be encoded

    Example:
        >>> hash_canonical({"b": 2, "a": 1}) == hash_canonical({"a": 1, "b": 2})
        True
    """
    return hash_function(_canonical_bytes(obj))


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "HashFunction",
    "DEFAULT_HASH_ALGORITHM",
    "HASH_FUNCTIONS",
    "sha256",
    "sha512",
    "sha3_256",
    "blake2b",
    "blake2s",
    "get_hash_function",
    "hash_function_name",
    "hash_concat",
    "hash_canonical",
    "to_hex",
    "from_hex",
]
