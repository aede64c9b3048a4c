"""
merkle_audit - Merkle trees with audit proofs.

Builds a binary hash tree over an ordered set of leaf hashes and
generates/verifies audit proofs that a leaf is included under a root.
"""
from merkle_audit.crypto.hashing import HashFunction, get_hash_function, sha256
from merkle_audit.merkle import (
    AuditProof,
    AuditProver,
    AuditVerifier,
    BranchDirection,
    MerkleTree,
    Node,
    ProofHash,
    build_audit_trail,
    compute_tree_height,
    verify_audit,
)
from merkle_audit.schemas.errors import (
    EmptyInputException,
    ForeignNodeException,
    InvalidHashException,
    LeafNotFoundException,
    MerkleAuditException,
    NoParentException,
    ParentMismatchException,
)

__version__ = "0.1.0"

__all__ = [
    "MerkleTree",
    "Node",
    "ProofHash",
    "BranchDirection",
    "AuditProof",
    "AuditProver",
    "AuditVerifier",
    "build_audit_trail",
    "verify_audit",
    "compute_tree_height",
    "HashFunction",
    "get_hash_function",
    "sha256",
    "MerkleAuditException",
    "EmptyInputException",
    "InvalidHashException",
    "NoParentException",
    "ParentMismatchException",
    "LeafNotFoundException",
    "ForeignNodeException",
]
