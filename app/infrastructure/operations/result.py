"""Operation result dataclass.

Uniform result type returned from backend calls, carrying status, payload and
error information.
"""

from typing import Optional, Any
from dataclasses import dataclass

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Uniform result returned from backend calls.

    Attributes:
        status: OperationStatus -- high-level outcome
        message: str -- human-friendly message for logs/troubleshooting
        data: Optional[Any] -- decoded response payload
        error_code: Optional[str] -- optional machine error code
        status_code: Optional[int] -- HTTP status code when one was received
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def is_success(self) -> bool:
        """True if status is SUCCESS."""
        return self.status == OperationStatus.SUCCESS

    @classmethod
    def success(
        cls,
        data: Optional[Any] = None,
        message: str = "ok",
        status_code: Optional[int] = None,
    ) -> "OperationResult":
        """Create a SUCCESS OperationResult with optional data."""
        return cls(
            status=OperationStatus.SUCCESS,
            message=message,
            data=data,
            status_code=status_code,
        )

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Create an error OperationResult.

        Args:
            status: OperationStatus indicating error type
            message: Human-friendly error message
            error_code: Optional machine error code
            status_code: HTTP status code, if any
            data: Optional payload to include with the error

        Returns:
            OperationResult with specified error status
        """
        return cls(
            status=status,
            message=message,
            error_code=error_code,
            status_code=status_code,
            data=data,
        )

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> "OperationResult":
        """Create a transient (retryable) error result."""
        return cls.error(
            OperationStatus.TRANSIENT_ERROR, message, error_code, status_code
        )

    @classmethod
    def permanent_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> "OperationResult":
        """Create a permanent (non-retryable) error result."""
        return cls.error(
            OperationStatus.PERMANENT_ERROR, message, error_code, status_code
        )
