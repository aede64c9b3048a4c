"""
Common test fixtures shared by all modules.

Provides factory functions for Merkle test data:
- Leaf hashes
- Built trees
- Tampered hashes
"""

from typing import Optional

from merkle_audit.config.runtime import RuntimeConfig, TreeConfig
from merkle_audit.crypto.hashing import HashFunction, sha256
from merkle_audit.merkle.merkle_tree import MerkleTree


# =============================================================================
# Leaf Factories
# =============================================================================

def make_leaf_hashes(
    count: int,
    prefix: str = "leaf",
    hash_function: HashFunction = sha256,
) -> list[bytes]:
    """
    Create distinct, deterministic leaf hashes.

    Args:
        count: Number of leaves
        prefix: Seed prefix; leaf i hashes f"{prefix}{i}"
        hash_function: Hash used to derive the leaves

    Returns:
        List of leaf hashes
    """
    return [hash_function(f"{prefix}{i}".encode()) for i in range(count)]


def flip_byte(data: bytes, index: int = 0) -> bytes:
    """Return a copy of data with one byte inverted."""
    tampered = bytearray(data)
    tampered[index] ^= 0xFF
    return bytes(tampered)


# =============================================================================
# Tree Factories
# =============================================================================

def make_tree(
    count: int = 4,
    hash_function: HashFunction = sha256,
    strict_leaf_lookup: bool = True,
    leaves: Optional[list[bytes]] = None,
) -> MerkleTree:
    """
    Build a tree over make_leaf_hashes(count), or over explicit leaves.

    The tree gets explicit settings so tests never depend on the
    process-wide default configuration.
    """
    if leaves is None:
        leaves = make_leaf_hashes(count, hash_function=hash_function)
    return MerkleTree.from_hashes(
        leaves,
        hash_function=hash_function,
        strict_leaf_lookup=strict_leaf_lookup,
    )


def make_runtime_config(
    hash_algorithm: str = "sha256",
    strict_leaf_lookup: bool = True,
) -> RuntimeConfig:
    """Create a RuntimeConfig with the given tree settings."""
    return RuntimeConfig(
        tree=TreeConfig(
            hash_algorithm=hash_algorithm,
            strict_leaf_lookup=strict_leaf_lookup,
        ),
    )
