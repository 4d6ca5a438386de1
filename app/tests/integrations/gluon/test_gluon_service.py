from unittest.mock import MagicMock

import pytest

from infrastructure.commands.errors import QMError, QMErrorType, ServiceUnavailableError
from infrastructure.operations import OperationResult, OperationStatus
from integrations.gluon.client import GluonClient
from integrations.gluon.service import GluonService, embedded_resources, get_gluon_service


def hal(key, *items):
    return OperationResult.success(data={"_embedded": {key: list(items)}})


EMPTY = OperationResult.success(data={})


@pytest.fixture
def client():
    return MagicMock(spec=GluonClient)


@pytest.fixture
def service(client):
    return GluonService(client)


def test_embedded_resources():
    assert embedded_resources({"_embedded": {"teamResources": [{"name": "a"}]}}, "teamResources") == [
        {"name": "a"}
    ]
    assert embedded_resources({}, "teamResources") == []
    assert embedded_resources(None, "teamResources") == []


def test_get_gluon_service_is_cached():
    get_gluon_service.cache_clear()
    assert get_gluon_service() is get_gluon_service()
    get_gluon_service.cache_clear()


class TestTeams:
    @pytest.mark.asyncio
    async def test_teams_for_slack_user(self, service, client):
        client.get.return_value = hal("teamResources", {"name": "alpha"}, {"name": "beta"})

        teams = await service.teams_for_slack_user("U1")

        assert [t["name"] for t in teams] == ["alpha", "beta"]
        client.get.assert_called_once_with("/teams", {"slackUserId": "U1"})

    @pytest.mark.asyncio
    async def test_teams_for_slack_user_none(self, service, client):
        client.get.return_value = EMPTY
        assert await service.teams_for_slack_user("U1") == []

    @pytest.mark.asyncio
    async def test_team_for_slack_channel(self, service, client):
        client.get.return_value = hal("teamResources", {"name": "alpha"})

        assert (await service.team_for_slack_channel("alpha-team"))["name"] == "alpha"
        client.get.assert_called_once_with("/teams", {"slackTeamChannel": "alpha-team"})

    @pytest.mark.asyncio
    async def test_team_for_slack_channel_missing(self, service, client):
        client.get.return_value = EMPTY
        with pytest.raises(QMError, match="No team associated"):
            await service.team_for_slack_channel("random")

    @pytest.mark.asyncio
    async def test_team_by_name_missing(self, service, client):
        client.get.return_value = EMPTY
        with pytest.raises(QMError, match="valid SubAtomic team"):
            await service.team_by_name("ghost")

    @pytest.mark.asyncio
    async def test_request_devops_environment(self, service, client):
        client.put.return_value = OperationResult.success()

        await service.request_devops_environment("t1", "m1")

        client.put.assert_called_once_with(
            "/teams/t1", {"devOpsEnvironment": {"requestedBy": "m1"}}
        )

    @pytest.mark.asyncio
    async def test_request_devops_environment_conflict(self, service, client):
        client.put.return_value = OperationResult.error(OperationStatus.CONFLICT, "exists")

        with pytest.raises(QMError) as exc_info:
            await service.request_devops_environment("t1", "m1")
        assert exc_info.value.error_type == QMErrorType.CONFLICT

    @pytest.mark.asyncio
    async def test_gluon_unreachable(self, service, client):
        client.get.return_value = OperationResult.error(OperationStatus.UNAVAILABLE, "refused")
        with pytest.raises(ServiceUnavailableError):
            await service.teams_for_slack_user("U1")


class TestProjects:
    @pytest.mark.asyncio
    async def test_projects_for_team(self, service, client):
        client.get.return_value = hal("projectResources", {"name": "web"})

        assert await service.projects_for_team("alpha") == [{"name": "web"}]
        client.get.assert_called_once_with("/projects", {"teamName": "alpha"})

    @pytest.mark.asyncio
    async def test_projects_for_team_empty(self, service, client):
        client.get.return_value = EMPTY
        with pytest.raises(QMError) as exc_info:
            await service.projects_for_team("alpha")
        assert "does not have any projects" in exc_info.value.chat_message

    @pytest.mark.asyncio
    async def test_project_by_name(self, service, client):
        client.get.return_value = hal("projectResources", {"name": "web", "projectId": "p1"})
        assert (await service.project_by_name("web"))["projectId"] == "p1"

    @pytest.mark.asyncio
    async def test_project_by_name_missing(self, service, client):
        client.get.return_value = EMPTY
        with pytest.raises(QMError, match="valid SubAtomic project"):
            await service.project_by_name("ghost")

    @pytest.mark.asyncio
    async def test_request_project_environment(self, service, client):
        client.put.return_value = OperationResult.success()

        await service.request_project_environment("p1", "m1")

        client.put.assert_called_once_with(
            "/projects/p1", {"projectEnvironment": {"requestedBy": "m1"}}
        )

    @pytest.mark.asyncio
    async def test_request_project_environment_failure(self, service, client):
        client.put.return_value = OperationResult.transient_error("Server error (500)")
        with pytest.raises(QMError, match="Unable to request environments for project p1"):
            await service.request_project_environment("p1", "m1")


class TestOtherResources:
    @pytest.mark.asyncio
    async def test_applications_for_project(self, service, client):
        client.get.return_value = hal("applicationResources", {"name": "api"})

        assert await service.applications_for_project("web") == [{"name": "api"}]
        client.get.assert_called_once_with("/applications", {"projectName": "web"})

    @pytest.mark.asyncio
    async def test_tenants(self, service, client):
        client.get.return_value = hal("tenantResources", {"name": "Default"})

        assert await service.tenants() == [{"name": "Default"}]
        client.get.assert_called_once_with("/tenants", None)

    @pytest.mark.asyncio
    async def test_tenant_by_id(self, service, client):
        client.get.return_value = OperationResult.success(data={"tenantId": "t1"})
        assert await service.tenant_by_id("t1") == {"tenantId": "t1"}

    @pytest.mark.asyncio
    async def test_member_by_screen_name(self, service, client):
        client.get.return_value = hal("teamMemberResources", {"memberId": "m1"})

        assert await service.member_by_screen_name("jdoe") == {"memberId": "m1"}
        client.get.assert_called_once_with("/members", {"slackScreenName": "jdoe"})

    @pytest.mark.asyncio
    async def test_member_not_onboarded(self, service, client):
        client.get.return_value = EMPTY
        with pytest.raises(QMError, match="not be onboarded"):
            await service.member_by_screen_name("jdoe")
