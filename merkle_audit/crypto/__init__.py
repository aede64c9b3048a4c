"""
Cryptographic utilities.

Hash functions, the hash registry and leaf hashing helpers.
"""
from .hashing import (
    DEFAULT_HASH_ALGORITHM,
    HASH_FUNCTIONS,
    HashFunction,
    blake2b,
    blake2s,
    from_hex,
    get_hash_function,
    hash_function_name,
    hash_canonical,
    hash_concat,
    sha3_256,
    sha256,
    sha512,
    to_hex,
)

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
