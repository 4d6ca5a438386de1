"""List the projects of a team."""

from typing import Optional

from infrastructure.commands.context import CommandContext
from infrastructure.commands.menus import button_for_command
from infrastructure.commands.recursive import RecursiveParameterRequestCommand
from infrastructure.commands.references import CommandReference
from infrastructure.commands.responses.models import Attachment, ChatMessage, Colours
from integrations.gluon.service import GluonService, get_gluon_service
from modules.qm.setters import set_team_name


class ListTeamProjects(RecursiveParameterRequestCommand):
    command_name = "list_team_projects"
    intent = "list projects"

    def __init__(self, parameters=None, gluon_service: Optional[GluonService] = None):
        self.gluon_service = gluon_service or get_gluon_service()
        super().__init__(parameters)

    def configure_parameters(self) -> None:
        self.add_recursive_parameter(
            "team_name",
            call_order=1,
            setter=set_team_name,
            selection_message="Please select the team you would like to list the projects of",
        )

    async def run_command(self, ctx: CommandContext) -> None:
        team_name = self.parameters["team_name"]
        projects = await self.gluon_service.projects_for_team(team_name)

        attachments = []
        for project in sorted(projects, key=lambda p: p["name"]):
            request_environments = CommandReference(
                command="request_project_environments",
                parameters={"team_name": team_name, "project_name": project["name"]},
            )
            attachments.append(
                Attachment(
                    text=f"*{project['name']}*\n{project.get('description') or ''}".rstrip(),
                    fallback=project["name"],
                    color=Colours.NEUTRAL,
                    actions=[button_for_command("Request environments", request_environments)],
                )
            )

        await ctx.respond(
            ChatMessage(text=f"The following projects belong to *{team_name}*:", attachments=attachments),
            message_id=self.correlation_id,
        )
        self.succeed_command()
