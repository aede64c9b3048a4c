"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for tree construction and audit proofs.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the library."""

    # Construction Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    INVALID_HASH = "INVALID_HASH"
    FOREIGN_NODE = "FOREIGN_NODE"

    # Audit Trail Errors
    NO_PARENT = "NO_PARENT"
    PARENT_MISMATCH = "PARENT_MISMATCH"
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"

    # Hashing Errors
    UNSUPPORTED_HASH_ALGORITHM = "UNSUPPORTED_HASH_ALGORITHM"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class MerkleAuditError(BaseModel):
    """
    Error model for structured error communication.

    Lets callers pass failures around as values (for example when
    collecting the outcome of many proofs) instead of raising.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "MerkleAuditException":
        """Convert this error model to a raised exception."""
        return MerkleAuditException(
            message=self.message,
            code=self.code,
            details=dict(self.details),
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleAuditException(Exception):
    """
    Base exception for all merkle_audit errors.

    Carries structured error information and can be converted
    to/from MerkleAuditError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_AUDIT_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleAuditError:
        """Convert this exception to a MerkleAuditError model."""
        return MerkleAuditError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(MerkleAuditException):
    """Raised when a tree build is attempted with zero nodes."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from an empty leaf sequence",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class InvalidHashException(MerkleAuditException):
    """Raised when a leaf hash is empty or not a byte sequence."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_HASH,
            details=details,
            retryable=False,
        )


class ForeignNodeException(MerkleAuditException):
    """Raised when a build is given a node that is wired into another tree."""

    def __init__(
        self,
        message: str = "Node already belongs to another tree",
        node_hash: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if node_hash:
            full_details["node_hash"] = node_hash
        super().__init__(
            message=message,
            code=ErrorCodes.FOREIGN_NODE,
            details=full_details,
            retryable=False,
        )


class NoParentException(MerkleAuditException):
    """Raised when an audit proof is requested for a leaf that is the root."""

    def __init__(
        self,
        message: str = "Expected leaf hash to have a parent hash",
        leaf_hash: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_hash:
            full_details["leaf_hash"] = leaf_hash
        super().__init__(
            message=message,
            code=ErrorCodes.NO_PARENT,
            details=full_details,
            retryable=False,
        )


class ParentMismatchException(MerkleAuditException):
    """Raised when the node graph is inconsistent during a trail walk."""

    def __init__(
        self,
        message: str = "Parent of child is not the expected parent",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PARENT_MISMATCH,
            details=details,
            retryable=False,
        )


class LeafNotFoundException(MerkleAuditException):
    """Raised when no leaf matches the requested target hash."""

    def __init__(
        self,
        message: str = "No leaf matches the target hash",
        target_hash: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if target_hash:
            full_details["target_hash"] = target_hash
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class UnsupportedHashAlgorithmException(MerkleAuditException):
    """Raised when a hash algorithm name is not in the registry."""

    def __init__(
        self,
        algorithm: str,
        supported: list[str] | None = None,
    ) -> None:
        details: dict[str, Any] = {"algorithm": algorithm}
        if supported is not None:
            details["supported"] = supported
        super().__init__(
            message=f"Unsupported hash algorithm: {algorithm!r}",
            code=ErrorCodes.UNSUPPORTED_HASH_ALGORITHM,
            details=details,
            retryable=False,
        )


class CanonicalizationException(MerkleAuditException):
    """Raised when an object cannot be canonically encoded for hashing."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )
