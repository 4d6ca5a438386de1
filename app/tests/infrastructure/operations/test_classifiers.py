from unittest.mock import MagicMock

import pytest
import requests

from infrastructure.operations import OperationStatus
from infrastructure.operations.classifiers import (
    classify_http_response,
    classify_request_error,
    is_connection_refused,
)


def make_response(status_code, json_body=None, text=""):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.url = "http://gluon/teams"
    response.reason = "Reason"
    response.text = text
    response.content = b"x" if (json_body is not None or text) else b""
    if json_body is not None:
        response.json.return_value = json_body
    else:
        response.json.side_effect = ValueError("no json")
    return response


class TestIsConnectionRefused:
    def test_direct(self):
        assert is_connection_refused(ConnectionRefusedError())

    def test_wrapped_in_cause(self):
        try:
            try:
                raise ConnectionRefusedError(111, "refused")
            except ConnectionRefusedError as e:
                raise RuntimeError("wrapped") from e
        except RuntimeError as wrapped:
            assert is_connection_refused(wrapped)

    def test_requests_message(self):
        error = requests.exceptions.ConnectionError(
            "HTTPConnectionPool: Failed to establish a new connection: Connection refused"
        )
        assert is_connection_refused(error)

    def test_code_attribute(self):
        error = Exception("down")
        error.code = "ECONNREFUSED"
        assert is_connection_refused(error)

    def test_other_errors(self):
        assert not is_connection_refused(ValueError("bad"))
        assert not is_connection_refused(requests.exceptions.Timeout("slow"))


class TestClassifyRequestError:
    @pytest.mark.parametrize(
        "error, status, code",
        [
            (requests.exceptions.ConnectionError("x"), OperationStatus.UNAVAILABLE, "CONNECTION_ERROR"),
            (requests.exceptions.Timeout("x"), OperationStatus.TRANSIENT_ERROR, "TIMEOUT"),
            (requests.exceptions.TooManyRedirects("x"), OperationStatus.TRANSIENT_ERROR, "REQUEST_ERROR"),
            (ValueError("x"), OperationStatus.PERMANENT_ERROR, "UNKNOWN_ERROR"),
        ],
    )
    def test_mapping(self, error, status, code):
        result = classify_request_error(error)
        assert result.status == status
        assert result.error_code == code


class TestClassifyHttpResponse:
    def test_success_decodes_json(self):
        result = classify_http_response(make_response(200, {"name": "alpha"}))
        assert result.is_success
        assert result.data == {"name": "alpha"}
        assert result.status_code == 200

    def test_success_without_body(self):
        result = classify_http_response(make_response(202))
        assert result.is_success
        assert result.data is None

    def test_success_with_text_body(self):
        result = classify_http_response(make_response(200, text="plain"))
        assert result.data == "plain"

    @pytest.mark.parametrize(
        "status_code, status",
        [
            (401, OperationStatus.UNAUTHORIZED),
            (403, OperationStatus.UNAUTHORIZED),
            (404, OperationStatus.NOT_FOUND),
            (409, OperationStatus.CONFLICT),
            (500, OperationStatus.TRANSIENT_ERROR),
            (503, OperationStatus.TRANSIENT_ERROR),
            (400, OperationStatus.PERMANENT_ERROR),
        ],
    )
    def test_error_mapping(self, status_code, status):
        result = classify_http_response(make_response(status_code, text="detail"))
        assert result.status == status
        assert result.status_code == status_code
        assert not result.is_success
