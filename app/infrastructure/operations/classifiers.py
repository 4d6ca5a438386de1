"""Error classifiers for backend HTTP calls.

Converts ``requests`` responses and exceptions into standardized
OperationResult objects so callers never branch on raw status codes.

Key Functions:
- classify_http_response(): HTTP response -> OperationResult
- classify_request_error(): requests/transport exceptions -> OperationResult
- is_connection_refused(): detect "backend is down" style failures

Usage:
    from infrastructure.operations.classifiers import (
        classify_http_response,
        classify_request_error,
    )

    try:
        response = session.get(url, timeout=30)
    except Exception as exc:
        return classify_request_error(exc)
    return classify_http_response(response)
"""

import errno
from typing import Any

import requests

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus


def is_connection_refused(exc: BaseException) -> bool:
    """Check whether an exception means a backend service refused the connection.

    Walks the exception chain because requests wraps the socket error
    several levels deep.

    Args:
        exc: Any exception

    Returns:
        True if the failure looks like ECONNREFUSED
    """
    seen = set()
    current: Any = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, ConnectionRefusedError):
            return True
        if getattr(current, "errno", None) == errno.ECONNREFUSED:
            return True
        if getattr(current, "code", None) == "ECONNREFUSED":
            return True
        if isinstance(current, requests.exceptions.ConnectionError) and (
            "Connection refused" in str(current)
        ):
            return True
        current = current.__cause__ or current.__context__ or _first_arg(current)
    return False


def _first_arg(exc: Any) -> Any:
    args = getattr(exc, "args", ())
    if args and isinstance(args[0], BaseException):
        return args[0]
    reason = getattr(exc, "reason", None)
    if isinstance(reason, BaseException):
        return reason
    return None


def classify_request_error(exc: Exception) -> OperationResult:
    """Classify exceptions raised while talking to a backend.

    Mapping:
    - Connection refused / unreachable host -> UNAVAILABLE
    - Timeout -> TRANSIENT_ERROR
    - Other requests exceptions -> TRANSIENT_ERROR
    - Anything else -> PERMANENT_ERROR

    Args:
        exc: Exception raised by requests (or the code around it)

    Returns:
        OperationResult describing the failure
    """
    if is_connection_refused(exc) or isinstance(
        exc, requests.exceptions.ConnectionError
    ):
        return OperationResult.error(
            OperationStatus.UNAVAILABLE,
            f"Connection error: {type(exc).__name__}: {str(exc)}",
            error_code="CONNECTION_ERROR",
        )

    if isinstance(exc, requests.exceptions.Timeout):
        return OperationResult.transient_error(
            f"Request timed out: {str(exc)}",
            error_code="TIMEOUT",
        )

    if isinstance(exc, requests.exceptions.RequestException):
        return OperationResult.transient_error(
            f"Request failed: {type(exc).__name__}: {str(exc)}",
            error_code="REQUEST_ERROR",
        )

    return OperationResult.permanent_error(
        f"Unexpected error: {type(exc).__name__}: {str(exc)}",
        error_code="UNKNOWN_ERROR",
    )


def classify_http_response(response: requests.Response) -> OperationResult:
    """Classify an HTTP response into an OperationResult.

    Status Code Mapping:
    - 2xx: SUCCESS with decoded JSON body (or None)
    - 401/403: UNAUTHORIZED
    - 404: NOT_FOUND
    - 409: CONFLICT
    - 5xx: TRANSIENT_ERROR
    - Other: PERMANENT_ERROR

    Args:
        response: Response returned by requests

    Returns:
        OperationResult with decoded data on success
    """
    status_code = response.status_code

    if 200 <= status_code < 300:
        return OperationResult.success(
            data=_decode_body(response), status_code=status_code
        )

    detail = response.text[:200] if response.text else response.reason

    if status_code in (401, 403):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            f"Not authorized ({status_code}): {detail}",
            error_code="UNAUTHORIZED",
            status_code=status_code,
        )

    if status_code == 404:
        return OperationResult.error(
            OperationStatus.NOT_FOUND,
            f"Resource not found: {response.url}",
            error_code="NOT_FOUND",
            status_code=status_code,
        )

    if status_code == 409:
        return OperationResult.error(
            OperationStatus.CONFLICT,
            f"Resource already exists: {detail}",
            error_code="CONFLICT",
            status_code=status_code,
            data=_decode_body(response),
        )

    if 500 <= status_code < 600:
        return OperationResult.transient_error(
            f"Server error ({status_code}): {detail}",
            error_code="SERVER_ERROR",
            status_code=status_code,
        )

    return OperationResult.permanent_error(
        f"Request rejected ({status_code}): {detail}",
        error_code="HTTP_ERROR",
        status_code=status_code,
    )


def _decode_body(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
