"""
Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy for bloomtree.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Three kinds of failure exist:
- configuration: empty contents, Bloom parameter mismatch, Bloom disabled
- capability: the caller's Content or hash policy raised
- not found: NOT an error; lookups return False / None
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across bloomtree."""

    # Configuration Errors
    NO_CONTENTS = "NO_CONTENTS"
    BLOOM_PARAMETER_MISMATCH = "BLOOM_PARAMETER_MISMATCH"
    BLOOM_DISABLED = "BLOOM_DISABLED"
    UNKNOWN_HASH_ALGORITHM = "UNKNOWN_HASH_ALGORITHM"

    # Capability Errors
    CONTENT_HASH_FAILED = "CONTENT_HASH_FAILED"
    CONTENT_EQUALITY_FAILED = "CONTENT_EQUALITY_FAILED"
    HASH_POLICY_FAILED = "HASH_POLICY_FAILED"

    # Serialization Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    PROOF_FORMAT_INVALID = "PROOF_FORMAT_INVALID"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class BloomTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Used when an error has to cross a boundary (CLI JSON output, logs)
    without being raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.NO_CONTENTS],
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

    def to_exception(self) -> "BloomTreeException":
        """Convert this error model to a raised exception."""
        return BloomTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class BloomTreeException(Exception):
    """
    Base exception for all bloomtree errors.

    Carries structured error information and can be converted
    to/from BloomTreeError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "BLOOMTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> BloomTreeError:
        """Convert this exception to a BloomTreeError model."""
        return BloomTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyContentsException(BloomTreeException):
    """Raised when a tree is built from an empty content sequence."""

    def __init__(self, message: str = "no contents") -> None:
        super().__init__(message=message, code=ErrorCodes.NO_CONTENTS)


class BloomParameterMismatchException(BloomTreeException):
    """Raised when merging Bloom filters with different m or k."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.BLOOM_PARAMETER_MISMATCH,
            details=details,
        )


class BloomDisabledException(BloomTreeException):
    """Raised when a Bloom-only operation is used on a tree without filters."""

    def __init__(self, message: str = "bloom filter is disabled") -> None:
        super().__init__(message=message, code=ErrorCodes.BLOOM_DISABLED)


class UnknownHashAlgorithmException(BloomTreeException):
    """Raised when a hash policy is requested by an unsupported name."""

    def __init__(self, algorithm: str) -> None:
        super().__init__(
            message=f"Unknown hash algorithm: {algorithm}",
            code=ErrorCodes.UNKNOWN_HASH_ALGORITHM,
            details={"algorithm": algorithm},
        )


class ContentHashingException(BloomTreeException):
    """Raised when a Content item fails to produce its digest."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.CONTENT_HASH_FAILED,
            details=full_details,
        )


class ContentEqualityException(BloomTreeException):
    """Raised when a Content equality check fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONTENT_EQUALITY_FAILED,
            details=details,
        )


class HashPolicyException(BloomTreeException):
    """Raised when the hash policy's write or digest step fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.HASH_POLICY_FAILED,
            details=details,
        )


class CanonicalizationException(BloomTreeException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
        )


class ProofFormatException(BloomTreeException):
    """Raised when a serialized multi-proof cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_FORMAT_INVALID,
            details=details,
        )
