"""Request the OpenShift environments of a project."""

from typing import Optional

from core.logging import get_module_logger
from infrastructure.commands.context import CommandContext
from infrastructure.commands.errors import handle_qm_error
from infrastructure.commands.menus import button_for_command
from infrastructure.commands.recursive import CORRELATION_ID, RecursiveParameterRequestCommand
from infrastructure.commands.responses.models import (
    Attachment,
    ButtonStyle,
    ChatMessage,
    Colours,
)
from infrastructure.tasks import TaskListMessage, TaskRunner
from integrations.gluon.service import GluonService, get_gluon_service
from modules.qm.setters import set_project_name, set_team_name
from modules.qm.tasks import (
    ProvisioningState,
    RequestProjectEnvironmentsTask,
    VerifyTeamMembershipTask,
)

logger = get_module_logger()


class RequestProjectEnvironments(RecursiveParameterRequestCommand):
    """Verify membership, then request the project's environments from Gluon.

    Progress is shown as a task list replacing the parameter summary. A
    failed run offers a Retry button that starts the command again from
    scratch with the same team and project.
    """

    command_name = "request_project_environments"
    intent = "request project environments"

    def __init__(self, parameters=None, gluon_service: Optional[GluonService] = None):
        self.gluon_service = gluon_service or get_gluon_service()
        super().__init__(parameters)

    def configure_parameters(self) -> None:
        self.add_recursive_parameter(
            "team_name",
            call_order=1,
            setter=set_team_name,
            selection_message="Please select a team associated with the project you wish to provision the environments for",
        )
        self.add_recursive_parameter(
            "project_name",
            call_order=2,
            setter=set_project_name,
            selection_message="Please select the project you wish to provision the environments for",
        )

    def build_task_runner(self, ctx: CommandContext) -> TaskRunner:
        project_name = self.parameters["project_name"]
        state = ProvisioningState()
        task_list = TaskListMessage(
            f"Requesting environments for project *{project_name}*",
            ctx.message_client,
            message_id=self.correlation_id,
        )
        return (
            TaskRunner(task_list)
            .add_task(
                VerifyTeamMembershipTask(
                    self.gluon_service,
                    self.parameters["team_name"],
                    ctx.user_name,
                    state,
                )
            )
            .add_task(RequestProjectEnvironmentsTask(self.gluon_service, project_name, state))
        )

    async def run_command(self, ctx: CommandContext) -> None:
        runner = self.build_task_runner(ctx)
        try:
            succeeded = await runner.execute(ctx)
        except Exception as error:  # pylint: disable=broad-except
            self.fail_command(str(error))
            await handle_qm_error(
                ctx.message_client, error, attachments=[self.retry_attachment()]
            )
            return

        if not succeeded:
            self.fail_command("Project environment request did not complete")
            await ctx.respond(self.retry_message())
            return

        self.succeed_command(f"Environments requested for {self.parameters['project_name']}")
        logger.info(
            "project_environments_requested",
            team_name=self.parameters["team_name"],
            project_name=self.parameters["project_name"],
        )

    def retry_attachment(self) -> Attachment:
        """Button re-running the command from scratch."""
        retry = self.to_reference(exclude=(CORRELATION_ID,))
        return Attachment(
            text="You can retry the request once the issue has been resolved.",
            fallback="Retry the environment request",
            color=Colours.ERROR,
            actions=[button_for_command("Retry", retry, style=ButtonStyle.PRIMARY)],
        )

    def retry_message(self) -> ChatMessage:
        """Failure notice for a task list that stopped without raising."""
        return ChatMessage(
            text=f"❗Requesting environments for *{self.parameters['project_name']}* did not complete.",
            attachments=[self.retry_attachment()],
        )
