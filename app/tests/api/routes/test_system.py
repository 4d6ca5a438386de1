from unittest.mock import MagicMock, patch
from fastapi import FastAPI
from fastapi.testclient import TestClient
from api.routes.system import router as system_router

client = TestClient(system_router)


def test_get_version_unkown():
    response = client.get("/version")
    assert response.status_code == 200
    assert response.json() == {"version": "Unknown"}


@patch("core.config.settings.GIT_SHA", "foo")
def test_get_version_known():
    response = client.get("/version")
    assert response.status_code == 200
    assert response.json() == {"version": "foo"}


def test_health_without_app_state():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "slack_connected": False, "commands": 0}


def test_health_reports_bot_and_commands():
    app = FastAPI()
    app.include_router(system_router)
    registry = MagicMock()
    registry.list_commands.return_value = ["help", "list_team_projects"]
    app.state.bot = MagicMock()
    app.state.command_registry = registry

    response = TestClient(app).get("/health")

    assert response.json() == {"status": "ok", "slack_connected": True, "commands": 2}
