"""Operation status enumeration.

Status codes for the outcome of calls made to backend services (Gluon and
friends), used by the command layer to decide what to tell the user.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable error (network, timeout, 5xx)
        PERMANENT_ERROR: Non-retryable error (validation, bad request)
        UNAUTHORIZED: Authentication or authorization failure
        NOT_FOUND: Resource not found
        CONFLICT: Resource already exists
        UNAVAILABLE: Backend could not be reached at all
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"
