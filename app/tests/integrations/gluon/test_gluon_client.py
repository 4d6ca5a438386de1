from unittest.mock import MagicMock, patch

import requests

from integrations.gluon.client import GluonClient
from infrastructure.operations import OperationStatus


def make_response(status_code, json_body=None):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.url = "http://gluon/teams"
    response.reason = "Reason"
    response.text = "body"
    response.content = b"body"
    response.json.return_value = json_body
    return response


@patch("integrations.gluon.client.requests.Session")
class TestGluonClient:
    def test_defaults_from_settings(self, mock_session):
        with patch("core.config.settings.gluon.GLUON_BASE_URL", "http://gluon:8080/api"), patch(
            "core.config.settings.gluon.GLUON_TIMEOUT_SECONDS", 12
        ):
            client = GluonClient()

        assert client.base_url == "http://gluon:8080/api/"
        assert client.timeout == 12

    def test_get_builds_url_and_params(self, mock_session):
        session = mock_session.return_value
        session.request.return_value = make_response(200, {"_embedded": {}})
        client = GluonClient(base_url="http://gluon/api", timeout=5)

        result = client.get("/teams", params={"name": "alpha"})

        assert result.is_success
        session.request.assert_called_once_with(
            method="GET",
            url="http://gluon/api/teams",
            json=None,
            params={"name": "alpha"},
            timeout=5,
        )

    def test_put_sends_json(self, mock_session):
        session = mock_session.return_value
        session.request.return_value = make_response(200, None)
        client = GluonClient(base_url="http://gluon")

        client.put("/teams/1", {"devOpsEnvironment": {"requestedBy": "m1"}})

        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "PUT"
        assert kwargs["json"] == {"devOpsEnvironment": {"requestedBy": "m1"}}

    def test_post(self, mock_session):
        session = mock_session.return_value
        session.request.return_value = make_response(201, {"id": "1"})

        result = GluonClient(base_url="http://gluon").post("/teams", {"name": "alpha"})

        assert result.data == {"id": "1"}
        assert session.request.call_args.kwargs["method"] == "POST"

    def test_http_errors_classified(self, mock_session):
        mock_session.return_value.request.return_value = make_response(409)

        result = GluonClient(base_url="http://gluon").put("/projects/1", {})

        assert result.status == OperationStatus.CONFLICT

    def test_transport_errors_classified(self, mock_session):
        mock_session.return_value.request.side_effect = requests.exceptions.ConnectionError(
            "Connection refused"
        )

        result = GluonClient(base_url="http://gluon").get("/teams")

        assert result.status == OperationStatus.UNAVAILABLE

    def test_session_headers(self, mock_session):
        GluonClient(base_url="http://gluon")
        headers = mock_session.return_value.headers.update.call_args.args[0]
        assert headers["User-Agent"] == "QM-Bot/1.0"
