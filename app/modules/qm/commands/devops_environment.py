"""Request a team's DevOps environment."""

from typing import Optional

from core.logging import get_module_logger
from infrastructure.commands.context import CommandContext
from infrastructure.commands.errors import QMError, QMErrorType
from infrastructure.commands.recursive import RecursiveParameterRequestCommand
from integrations.gluon.service import GluonService, get_gluon_service
from modules.qm.setters import set_team_name, set_team_openshift_cloud

logger = get_module_logger()


class NewDevOpsEnvironment(RecursiveParameterRequestCommand):
    """Ask Gluon to create (or reuse) the OpenShift DevOps environment of a team."""

    command_name = "request_devops_environment"
    intent = "request devops environment"

    def __init__(self, parameters=None, gluon_service: Optional[GluonService] = None):
        self.gluon_service = gluon_service or get_gluon_service()
        super().__init__(parameters)

    def configure_parameters(self) -> None:
        self.add_recursive_parameter(
            "team_name",
            call_order=1,
            setter=set_team_name,
            selection_message="Please select a team you would like to create a DevOps environment for",
        )
        self.add_recursive_parameter(
            "openshift_cloud",
            call_order=2,
            setter=set_team_openshift_cloud,
            selection_message="Please select the OpenShift cloud for the DevOps environment",
        )

    async def run_command(self, ctx: CommandContext) -> None:
        team_name = self.parameters["team_name"]
        await ctx.respond(
            f"Requesting DevOps environment for *{team_name}* team.",
            message_id=self.correlation_id,
        )

        member = await self.gluon_service.member_by_screen_name(ctx.user_name)
        team = await self.gluon_service.team_by_name(team_name)
        logger.info(
            "requesting_devops_environment",
            team_name=team_name,
            openshift_cloud=self.parameters["openshift_cloud"],
        )

        try:
            await self.gluon_service.request_devops_environment(team["teamId"], member["memberId"])
        except QMError as e:
            if e.error_type != QMErrorType.CONFLICT:
                self.fail_command(e.message)
                raise
            logger.info("devops_environment_already_requested", team_name=team_name)

        self.succeed_command(f"DevOps environment requested for {team_name}")
        await ctx.respond(
            f"DevOps environment for *{team_name}* has been requested on "
            f"*{self.parameters['openshift_cloud']}*.",
            message_id=self.correlation_id,
        )
