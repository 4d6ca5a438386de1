from unittest.mock import patch

import pytest

from infrastructure.commands.errors import QMError
from infrastructure.commands.recursive import RecursiveParameterRequestCommand
from modules.qm import setters


class SetterHost(RecursiveParameterRequestCommand):
    command_name = "host"
    intent = "host"

    def __init__(self, gluon_service, parameters=None):
        self.gluon_service = gluon_service
        super().__init__(parameters)

    async def run_command(self, ctx):
        pass


def menu_of(result):
    return result.message_prompt.actions[0]


class TestSetTeamName:
    @pytest.mark.asyncio
    async def test_team_from_channel(self, ctx, gluon_service):
        gluon_service.team_for_slack_channel.return_value = {"name": "alpha"}
        command = SetterHost(gluon_service)

        result = await setters.set_team_name(ctx, command)

        assert result.setter_success
        assert command.parameters["team_name"] == "alpha"
        gluon_service.team_for_slack_channel.assert_awaited_once_with("general")
        gluon_service.teams_for_slack_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_prompts_with_user_teams(self, ctx, gluon_service):
        gluon_service.team_for_slack_channel.side_effect = QMError("no team")
        gluon_service.teams_for_slack_user.return_value = [{"name": "alpha"}, {"name": "beta"}]
        command = SetterHost(gluon_service, {"x": "1"})

        result = await setters.set_team_name(ctx, command, "Which team?")

        assert not result.setter_success
        assert result.message_prompt.text == "Which team?"
        menu = menu_of(result)
        assert menu.placeholder == "Select Team"
        assert [o.text for o in menu.options] == ["alpha", "beta"]
        assert menu.reference_for(menu.options[1].value).parameters == {
            "x": "1",
            "team_name": "beta",
        }

    @pytest.mark.asyncio
    async def test_user_without_teams(self, ctx, gluon_service):
        gluon_service.team_for_slack_channel.side_effect = QMError("no team")
        gluon_service.teams_for_slack_user.return_value = []

        with pytest.raises(QMError) as exc_info:
            await setters.set_team_name(ctx, SetterHost(gluon_service))
        assert "not a member of any team" in exc_info.value.chat_message

    @pytest.mark.asyncio
    async def test_requires_gluon_service(self, ctx):
        with pytest.raises(QMError, match="gluon_service"):
            await setters.set_team_name(ctx, SetterHost(None))


class TestSetTeamOpenshiftCloud:
    @pytest.mark.asyncio
    async def test_cloud_from_team(self, ctx, gluon_service):
        gluon_service.team_by_name.return_value = {"name": "alpha", "openShiftCloud": "ab-cloud"}
        command = SetterHost(gluon_service, {"team_name": "alpha"})

        result = await setters.set_team_openshift_cloud(ctx, command)

        assert result.setter_success
        assert command.parameters["openshift_cloud"] == "ab-cloud"

    @pytest.mark.asyncio
    async def test_prompts_with_configured_clouds(self, ctx, gluon_service):
        gluon_service.team_by_name.return_value = {"name": "alpha"}
        command = SetterHost(gluon_service, {"team_name": "alpha"})

        with patch(
            "modules.qm.setters.settings.chatops.openshift_clouds",
            {"ab-cloud": {}, "cd-cloud": {}},
        ):
            result = await setters.set_team_openshift_cloud(ctx, command)

        assert [o.text for o in menu_of(result).options] == ["ab-cloud", "cd-cloud"]

    @pytest.mark.asyncio
    async def test_no_clouds_configured(self, ctx, gluon_service):
        command = SetterHost(gluon_service)

        with patch("modules.qm.setters.settings.chatops.openshift_clouds", {}):
            with pytest.raises(QMError, match="No OpenShift clouds"):
                await setters.set_team_openshift_cloud(ctx, command)


class TestSetProjectName:
    @pytest.mark.asyncio
    async def test_prompts_with_team_projects(self, ctx, gluon_service):
        gluon_service.projects_for_team.return_value = [{"name": "web"}, {"name": "api"}]
        command = SetterHost(gluon_service, {"team_name": "alpha"})

        result = await setters.set_project_name(ctx, command)

        gluon_service.projects_for_team.assert_awaited_once_with("alpha")
        assert menu_of(result).placeholder == "Select Project"
        assert [o.text for o in menu_of(result).options] == ["web", "api"]

    @pytest.mark.asyncio
    async def test_requires_team_name(self, ctx, gluon_service):
        with pytest.raises(QMError, match="requires the team_name parameter"):
            await setters.set_project_name(ctx, SetterHost(gluon_service))


class TestSetApplicationName:
    @pytest.mark.asyncio
    async def test_prompts_with_applications(self, ctx, gluon_service):
        gluon_service.applications_for_project.return_value = [{"name": "api"}]
        command = SetterHost(gluon_service, {"project_name": "web"})

        result = await setters.set_application_name(ctx, command)

        assert menu_of(result).placeholder == "Select Application"

    @pytest.mark.asyncio
    async def test_no_applications(self, ctx, gluon_service):
        gluon_service.applications_for_project.return_value = []
        command = SetterHost(gluon_service, {"project_name": "web"})

        with pytest.raises(QMError, match="has no applications"):
            await setters.set_application_name(ctx, command)


class TestSetTenantName:
    @pytest.mark.asyncio
    async def test_default_tenant_first(self, ctx, gluon_service):
        gluon_service.tenants.return_value = [
            {"name": "Zulu"},
            {"name": "Default"},
            {"name": "Alpha"},
        ]

        result = await setters.set_tenant_name(ctx, SetterHost(gluon_service))

        assert [o.text for o in menu_of(result).options] == ["Default", "Alpha", "Zulu"]


class TestSetDeploymentPipelineId:
    @pytest.mark.asyncio
    async def test_single_pipeline_auto_selected(self, ctx, gluon_service):
        gluon_service.project_by_name.return_value = {
            "releaseDeploymentPipelines": [{"name": "default", "pipelineId": "pl1"}]
        }
        command = SetterHost(gluon_service, {"project_name": "web"})

        result = await setters.set_deployment_pipeline_id(ctx, command)

        assert result.setter_success
        assert command.parameters["deployment_pipeline_id"] == "pl1"

    @pytest.mark.asyncio
    async def test_multiple_pipelines_sorted_menu(self, ctx, gluon_service):
        gluon_service.project_by_name.return_value = {
            "releaseDeploymentPipelines": [
                {"name": "uat", "pipelineId": "pl2"},
                {"name": "prod", "pipelineId": "pl1"},
            ]
        }
        command = SetterHost(gluon_service, {"project_name": "web"})

        result = await setters.set_deployment_pipeline_id(ctx, command)

        menu = menu_of(result)
        assert [o.text for o in menu.options] == ["prod", "uat"]
        reference = menu.reference_for(menu.options[0].value)
        assert reference.parameters["deployment_pipeline_id"] == "pl1"

    @pytest.mark.asyncio
    async def test_no_pipelines(self, ctx, gluon_service):
        gluon_service.project_by_name.return_value = {}
        command = SetterHost(gluon_service, {"project_name": "web"})

        with pytest.raises(QMError, match="no release deployment pipelines"):
            await setters.set_deployment_pipeline_id(ctx, command)
