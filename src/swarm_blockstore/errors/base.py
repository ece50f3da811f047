"""
Base exception class for the Swarm blockstore client.

All blockstore exceptions inherit from BlockstoreError, which provides
structured error information including an error code, the HTTP status
reported by the Bee node (when there was one) and additional context
details.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class BlockstoreError(Exception):
    """
    Base exception for all Swarm blockstore errors.

    Provides structured error information that can be serialized and logged.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code (e.g., "BEE_API_ERROR").
        status_code: Optional HTTP status code returned by the Bee node.
        details: Optional dictionary with additional error context.

    Example:
        >>> raise BlockstoreError(
        ...     "Upload rejected",
        ...     code="BEE_API_ERROR",
        ...     status_code=402,
        ...     details={"path": "/chunks"}
        ... )
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "BLOCKSTORE_ERROR",
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize BlockstoreError.

        Args:
            message: Human-readable error description.
            code: Machine-readable error code.
            status_code: Optional HTTP status code related to the error.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error message."""
        parts = [f"[{self.code}] {self.message}"]
        if self.status_code is not None:
            parts.append(f"(HTTP {self.status_code})")
        return " ".join(parts)

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"status_code={self.status_code!r}, "
            f"details={self.details!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to a dictionary for JSON serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
        }


class ValidationError(BlockstoreError):
    """
    Raised when a precondition fails before any request is sent.

    Example:
        >>> raise ValidationError("filename is required", field="filename")
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field

        super().__init__(message, code="VALIDATION_ERROR", details=details)
        self.field = field
