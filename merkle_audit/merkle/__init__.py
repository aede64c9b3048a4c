"""
Merkle Tree and Audit Proofs

Tree construction over ordered leaf hashes, audit trail generation and
audit trail replay.

This package provides:
- Node: a tree vertex with owned children and a weak parent link
- MerkleTree: builds the tree and answers audit proof queries
- ProofHash / BranchDirection: audit trail entries
- build_audit_trail / verify_audit: the trail walk and its replay
- AuditProof, AuditProver, AuditVerifier: proof bundles

Canonical Commitment Rules:
1. Parent hashing: H(left + right)
2. Odd layer: trailing node carried upward with its hash unchanged
3. Single leaf: root = leaf
4. Empty input: EmptyInputException

Usage:
    from merkle_audit.merkle import MerkleTree, verify_audit
    from merkle_audit.crypto import sha256

    tree = MerkleTree.from_hashes([sha256(b"a"), sha256(b"b"), sha256(b"c")])
    trail = tree.audit_proof(sha256(b"c"))
    assert verify_audit(tree.root_hash, sha256(b"c"), trail)
"""
from .node import Node

from .merkle_proofs import (
    AuditProof,
    AuditProver,
    AuditVerifier,
    BranchDirection,
    ProofHash,
    build_audit_trail,
    verify_audit,
)

from .merkle_tree import (
    MerkleTree,
    compute_tree_height,
)


__all__ = [
    # Core types
    "Node",
    "MerkleTree",
    "ProofHash",
    "BranchDirection",
    # Core functions
    "build_audit_trail",
    "verify_audit",
    "compute_tree_height",
    # Convenience classes
    "AuditProof",
    "AuditProver",
    "AuditVerifier",
]
