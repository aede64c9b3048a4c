"""
Merkle - Audit Proofs
Audit trail construction and replay.

This module provides:
- BranchDirection / ProofHash: one audit trail entry
- build_audit_trail: walk parent links from a leaf to the root
- verify_audit: replay a trail against a target hash and compare roots
- AuditProof, AuditProver, AuditVerifier: bundle a trail with its
  target and root for hand-off to a verifier

Trail rules:
- Entries are ordered leaf-to-root
- A carry node (no right child) contributes no entry, since its hash
  equals its only child's hash
- RIGHT_BRANCH: running = H(running + sibling)
- LEFT_BRANCH:  running = H(sibling + running)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Sequence

from merkle_audit.config.runtime import get_default_config
from merkle_audit.crypto.hashing import (
    HashFunction,
    from_hex,
    get_hash_function,
    hash_concat,
    hash_function_name,
    to_hex,
)
from merkle_audit.merkle.node import Node
from merkle_audit.schemas.errors import ParentMismatchException

if TYPE_CHECKING:
    from merkle_audit.merkle.merkle_tree import MerkleTree


logger = logging.getLogger(__name__)


class BranchDirection(str, Enum):
    """Side of the running hash on which a sibling is concatenated."""
    LEFT_BRANCH = "left"
    RIGHT_BRANCH = "right"


@dataclass(frozen=True)
class ProofHash:
    """
    A single audit trail entry.

    Attributes:
        hash: The sibling's hash at one tree level
        direction: Where the sibling goes relative to the running hash
    """
    hash: bytes
    direction: BranchDirection


def build_audit_trail(
    trail: list[ProofHash],
    parent: Optional[Node],
    child: Node,
) -> list[ProofHash]:
    """
    Collect sibling hashes from child up to the root.

    Args:
        trail: Entries accumulated so far (appended to and returned)
        parent: The node expected to be child's parent; None ends the walk
        child: The node whose sibling is recorded at this level

    Returns:
        The trail, ordered leaf-to-root

    Raises:
        ParentMismatchException: If child's parent link does not point at
            parent, or parent does not hold child
    """
    if parent is None:
        return trail

    if child.parent is not parent:
        logger.warning(f"Audit trail walk found a foreign parent link on {child!r}")
        raise ParentMismatchException()

    if parent.left is child:
        sibling = parent.right
        direction = BranchDirection.RIGHT_BRANCH
    elif parent.right is child:
        sibling = parent.left
        direction = BranchDirection.LEFT_BRANCH
    else:
        logger.warning(f"{parent!r} does not hold {child!r} as a child")
        raise ParentMismatchException("Parent does not hold the child node")

    # Carry node: nothing to combine at this level
    if sibling is not None:
        trail.append(ProofHash(hash=sibling.hash, direction=direction))

    return build_audit_trail(trail, parent.parent, parent)


def verify_audit(
    root_hash: bytes,
    target_hash: bytes,
    trail: Sequence[ProofHash],
    hash_function: Optional[HashFunction] = None,
) -> bool:
    """
    Replay an audit trail and compare the result with a root hash.

    Pure function: it needs neither the tree nor any of its nodes.

    Args:
        root_hash: The claimed root
        target_hash: The leaf hash the trail was generated for
        trail: Entries in leaf-to-root order
        hash_function: Must be the function the tree was built with;
            defaults to the configured default algorithm

    Returns:
        True if the recomputed hash is byte-identical to root_hash
    """
    if hash_function is None:
        hash_function = get_default_config().tree.hash_function()

    running = target_hash

    for proof in trail:
        if proof.direction == BranchDirection.RIGHT_BRANCH:
            running = hash_concat(running, proof.hash, hash_function)
        else:
            running = hash_concat(proof.hash, running, hash_function)

    return running == root_hash


@dataclass(frozen=True)
class AuditProof:
    """
    An audit trail together with the hashes it connects.

    Attributes:
        target_hash: The leaf hash being proven
        root_hash: The root the trail leads to
        trail: Sibling entries from leaf to root
        hash_algorithm: Registry name of the tree's hash function, None
            when the tree used an unregistered callable
    """
    target_hash: bytes
    root_hash: bytes
    trail: list[ProofHash] = field(default_factory=list)
    hash_algorithm: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "target_hash": to_hex(self.target_hash),
            "root_hash": to_hex(self.root_hash),
            "hash_algorithm": self.hash_algorithm,
            "trail": [
                {"hash": to_hex(entry.hash), "direction": entry.direction.value}
                for entry in self.trail
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuditProof:
        """
        Rebuild a proof from to_dict() output.

        Raises:
            ValueError: If a hash is not 0x-prefixed hex or a direction
                is not "left"/"right"
            KeyError: If a required field is missing
        """
        trail = [
            ProofHash(hash=from_hex(entry["hash"]), direction=BranchDirection(entry["direction"]))
            for entry in data.get("trail", [])
        ]
        return cls(
            target_hash=from_hex(data["target_hash"]),
            root_hash=from_hex(data["root_hash"]),
            trail=trail,
            hash_algorithm=data.get("hash_algorithm"),
        )

    def resolve_hash_function(self) -> HashFunction:
        """The recorded algorithm, or the configured default when none is recorded."""
        if self.hash_algorithm is not None:
            return get_hash_function(self.hash_algorithm)
        return get_default_config().tree.hash_function()


class AuditProver:
    """
    Convenience class for producing AuditProof bundles from a built tree.

    Example:
        >>> tree = MerkleTree.from_hashes(leaves)
        >>> proof = AuditProver.prove(tree, leaves[1])
        >>> AuditVerifier.verify(proof)
        True
    """

    @staticmethod
    def prove(tree: MerkleTree, target_hash: bytes) -> AuditProof:
        """
        Generate an audit proof for target_hash against tree's own root.

        Raises:
            LeafNotFoundException: If strict lookup is on and no leaf matches
            NoParentException: If the matching leaf is the root
            EmptyInputException: If the tree has not been built
        """
        trail = tree.audit_proof(target_hash)
        return AuditProof(
            target_hash=target_hash,
            root_hash=tree.root_hash,
            trail=trail,
            hash_algorithm=hash_function_name(tree.hash_function),
        )


class AuditVerifier:
    """
    Convenience class for checking AuditProof bundles.

    Without an explicit hash_function the proof's recorded algorithm is
    used, falling back to the configured default.
    """

    @staticmethod
    def verify(proof: AuditProof, hash_function: Optional[HashFunction] = None) -> bool:
        if hash_function is None:
            hash_function = proof.resolve_hash_function()
        return verify_audit(proof.root_hash, proof.target_hash, proof.trail, hash_function)

    @staticmethod
    def verify_against_root(
        proof: AuditProof,
        root_hash: bytes,
        hash_function: Optional[HashFunction] = None,
    ) -> bool:
        """Verify the proof's trail against an independently known root."""
        if hash_function is None:
            hash_function = proof.resolve_hash_function()
        return verify_audit(root_hash, proof.target_hash, proof.trail, hash_function)


__all__ = [
    "BranchDirection",
    "ProofHash",
    "AuditProof",
    "build_audit_trail",
    "verify_audit",
    "AuditProver",
    "AuditVerifier",
]
