"""Operation result types and status enums.

Standardized result types for backend calls, including the status enum, the
result dataclass, and classifiers for HTTP responses and transport errors.
"""

from infrastructure.operations.classifiers import (
    classify_http_response,
    classify_request_error,
    is_connection_refused,
)
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "classify_http_response",
    "classify_request_error",
    "is_connection_refused",
]
