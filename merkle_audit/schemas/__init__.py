"""
Schemas - Error Models and Exceptions

Purpose: Export the public error API for the rest of the package.
"""

from .errors import (
    CanonicalizationException,
    EmptyInputException,
    ErrorCodes,
    ForeignNodeException,
    InvalidHashException,
    LeafNotFoundException,
    MerkleAuditError,
    MerkleAuditException,
    NoParentException,
    ParentMismatchException,
    UnsupportedHashAlgorithmException,
)


__all__ = [
    "ErrorCodes",
    "MerkleAuditError",
    "MerkleAuditException",
    "EmptyInputException",
    "InvalidHashException",
    "ForeignNodeException",
    "NoParentException",
    "ParentMismatchException",
    "LeafNotFoundException",
    "UnsupportedHashAlgorithmException",
    "CanonicalizationException",
]
