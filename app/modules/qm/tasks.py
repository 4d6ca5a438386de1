"""Tasks run by the project environment request command."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from core.logging import get_module_logger
from infrastructure.commands.context import CommandContext
from infrastructure.commands.errors import QMError, QMErrorType
from infrastructure.tasks import Task, TaskListMessage
from integrations.gluon.service import GluonService

logger = get_module_logger()


@dataclass
class ProvisioningState:
    """Values discovered by one task and needed by a later one."""

    member: Optional[Dict[str, Any]] = None
    team: Optional[Dict[str, Any]] = None
    project: Optional[Dict[str, Any]] = None
    details: Dict[str, Any] = field(default_factory=dict)


def is_team_member(member: Dict[str, Any], team: Dict[str, Any]) -> bool:
    """True when ``member`` is listed as a member or owner of ``team``."""
    member_id = member.get("memberId")
    people = list(team.get("members") or []) + list(team.get("owners") or [])
    return any(person.get("memberId") == member_id for person in people)


class VerifyTeamMembershipTask(Task):
    """Check that the requesting user belongs to the team."""

    description = "Verify team membership"

    def __init__(
        self,
        gluon_service: GluonService,
        team_name: str,
        screen_name: str,
        state: ProvisioningState,
    ):
        super().__init__()
        self.gluon_service = gluon_service
        self.team_name = team_name
        self.screen_name = screen_name
        self.state = state

    async def execute_task(self, ctx: CommandContext) -> bool:
        member = await self.gluon_service.member_by_screen_name(self.screen_name)
        team = await self.gluon_service.team_by_name(self.team_name)

        if not is_team_member(member, team):
            raise QMError(
                f"Member {member.get('memberId')} is not a member of team {self.team_name}",
                f"You are not a member of the team *{self.team_name}*. "
                "Please apply to join the team first",
            )

        self.state.member = member
        self.state.team = team
        return True


class RequestProjectEnvironmentsTask(Task):
    """Ask Gluon to provision the environments of a project."""

    description = "Request project environments"

    def __init__(
        self,
        gluon_service: GluonService,
        project_name: str,
        state: ProvisioningState,
    ):
        super().__init__()
        self.gluon_service = gluon_service
        self.project_name = project_name
        self.state = state
        self.find_project_key: Optional[str] = None
        self.submit_request_key: Optional[str] = None

    def configure_task_list_message(self, task_list_message: TaskListMessage) -> None:
        self.find_project_key = task_list_message.add_task(
            f"Find project *{self.project_name}*"
        )
        self.submit_request_key = task_list_message.add_task("Submit environment request")

    async def execute_task(self, ctx: CommandContext) -> bool:
        if self.state.member is None:
            logger.warning("project_environment_request_without_member", project=self.project_name)
            return False

        await self.task_list_message.start_task(self.find_project_key)
        project = await self.gluon_service.project_by_name(self.project_name)
        self.state.project = project
        await self.task_list_message.succeed_task(self.find_project_key)

        await self.task_list_message.start_task(self.submit_request_key)
        try:
            await self.gluon_service.request_project_environment(
                project["projectId"], self.state.member["memberId"]
            )
        except QMError as e:
            if e.error_type != QMErrorType.CONFLICT:
                raise
            logger.info(
                "project_environment_already_requested",
                project=self.project_name,
            )
        await self.task_list_message.succeed_task(self.submit_request_key)
        return True
