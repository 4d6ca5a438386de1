"""Recursive parameter setters backed by Gluon.

Every setter follows the same contract: fill in the parameter and return
``SetterResult.success()`` when the value can be determined without asking,
otherwise return ``SetterResult.prompt(...)`` with a menu of candidates.
Setters needing Gluon read it from ``command.gluon_service``.
"""

from typing import Optional

from core.config import settings
from core.logging import get_module_logger
from infrastructure.commands.context import CommandContext
from infrastructure.commands.errors import QMError
from infrastructure.commands.menus import create_menu_attachment, create_sorted_menu_attachment
from infrastructure.commands.recursive.parameters import SetterResult
from integrations.gluon.service import GluonService
from modules.qm.menus import (
    menu_attachment_for_applications,
    menu_attachment_for_projects,
    menu_attachment_for_teams,
    menu_attachment_for_tenants,
)

logger = get_module_logger()


def _gluon_service(command, setter_name: str) -> GluonService:
    gluon_service = getattr(command, "gluon_service", None)
    if gluon_service is None:
        raise QMError(f"{setter_name} command requires the gluon_service attribute to be defined")
    return gluon_service


def _require_parameter(command, parameter: str, setter_name: str) -> str:
    if not command.parameters.is_set(parameter):
        raise QMError(f"{setter_name} command requires the {parameter} parameter to be defined")
    return command.parameters[parameter]


async def set_team_name(
    ctx: CommandContext, command, selection_message: Optional[str] = None
) -> SetterResult:
    """Use the team owning the current channel, else prompt with the user's teams."""
    gluon_service = _gluon_service(command, "set_team_name")

    if ctx.channel_name:
        try:
            team = await gluon_service.team_for_slack_channel(ctx.channel_name)
            command.parameters["team_name"] = team["name"]
            return SetterResult.success()
        except QMError:
            logger.info(
                "team_channel_not_linked",
                channel_name=ctx.channel_name,
                user_id=ctx.user_id,
            )

    teams = await gluon_service.teams_for_slack_user(ctx.user_id)
    if not teams:
        raise QMError(
            f"Member {ctx.user_id} is not a member of any team",
            "Unfortunately, you are not a member of any team. "
            "You can either create a new team or apply to join an existing team",
        )
    return SetterResult.prompt(
        menu_attachment_for_teams(teams, command, selection_message or "Please select a team")
    )


async def set_team_openshift_cloud(
    ctx: CommandContext, command, selection_message: Optional[str] = None
) -> SetterResult:
    """Use the cloud of the selected team, else prompt with the configured clouds."""
    gluon_service = _gluon_service(command, "set_team_openshift_cloud")
    message = selection_message or "Please select an OpenShift cloud"

    if command.parameters.is_set("team_name"):
        try:
            team = await gluon_service.team_by_name(command.parameters["team_name"])
        except QMError:
            team = None
        if team and team.get("openShiftCloud"):
            command.parameters["openshift_cloud"] = team["openShiftCloud"]
            return SetterResult.success()

    clouds = list(settings.chatops.openshift_clouds.keys())
    if not clouds:
        raise QMError("No OpenShift clouds are configured")
    return SetterResult.prompt(
        create_menu_attachment(
            [(cloud, cloud) for cloud in clouds],
            command,
            text=message,
            fallback=message,
            selection_message="Select OpenShift Cloud",
            result_variable_name="openshift_cloud",
        )
    )


async def set_project_name(
    ctx: CommandContext, command, selection_message: Optional[str] = None
) -> SetterResult:
    """Prompt with the projects of the selected team."""
    gluon_service = _gluon_service(command, "set_project_name")
    team_name = _require_parameter(command, "team_name", "set_project_name")

    projects = await gluon_service.projects_for_team(team_name)
    return SetterResult.prompt(
        menu_attachment_for_projects(
            projects, command, selection_message or "Please select a project"
        )
    )


async def set_application_name(
    ctx: CommandContext, command, selection_message: Optional[str] = None
) -> SetterResult:
    """Prompt with the applications of the selected project."""
    gluon_service = _gluon_service(command, "set_application_name")
    project_name = _require_parameter(command, "project_name", "set_application_name")

    applications = await gluon_service.applications_for_project(project_name)
    if not applications:
        raise QMError(
            f"Project {project_name} has no applications",
            f"The project *{project_name}* does not have any applications or libraries yet",
        )
    return SetterResult.prompt(
        menu_attachment_for_applications(
            applications, command, selection_message or "Please select an application"
        )
    )


async def set_tenant_name(
    ctx: CommandContext, command, selection_message: Optional[str] = None
) -> SetterResult:
    """Prompt with every tenant, Default first."""
    gluon_service = _gluon_service(command, "set_tenant_name")
    tenants = await gluon_service.tenants()
    return SetterResult.prompt(
        menu_attachment_for_tenants(tenants, command, selection_message or "Please select a tenant")
    )


async def set_deployment_pipeline_id(
    ctx: CommandContext, command, selection_message: Optional[str] = None
) -> SetterResult:
    """Use the project's only release pipeline, else prompt with all of them."""
    gluon_service = _gluon_service(command, "set_deployment_pipeline_id")
    project_name = _require_parameter(command, "project_name", "set_deployment_pipeline_id")
    message = selection_message or "Please select a deployment pipeline"

    project = await gluon_service.project_by_name(project_name)
    pipelines = project.get("releaseDeploymentPipelines") or []
    if not pipelines:
        raise QMError(f"Project {project_name} has no release deployment pipelines")

    if len(pipelines) == 1:
        command.parameters["deployment_pipeline_id"] = pipelines[0]["pipelineId"]
        return SetterResult.success()

    return SetterResult.prompt(
        create_sorted_menu_attachment(
            [(pipeline["name"], pipeline["pipelineId"]) for pipeline in pipelines],
            command,
            text=message,
            fallback=message,
            selection_message="Select Deployment Pipeline",
            result_variable_name="deployment_pipeline_id",
        )
    )
