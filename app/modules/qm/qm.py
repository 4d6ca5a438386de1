"""QM Module

Registers the ``/qm`` slash command and the interactive action handler that
continues commands when a button or menu option is clicked.
"""

import re

from core.config import settings
from core.logging import get_module_logger
from infrastructure.commands.providers.slack import SlackCommandProvider
from infrastructure.commands.responses.slack_formatter import ACTION_ID_PREFIX
from modules.qm.commands import (
    Help,
    ListTeamProjects,
    NewDevOpsEnvironment,
    RequestProjectEnvironments,
)
from modules.qm.registry import registry

PREFIX = settings.PREFIX

logger = get_module_logger()


def register_commands() -> None:
    """Populate the QM registry; safe to call more than once."""
    if registry.get(Help.command_name) is not None:
        return
    registry.register(Help, description="Help regarding the available commands", category="other")
    registry.register(
        NewDevOpsEnvironment,
        description="Request a DevOps environment for a team",
        category="team",
    )
    registry.register(
        ListTeamProjects,
        description="List the projects belonging to a team",
        category="team",
    )
    registry.register(
        RequestProjectEnvironments,
        description="Request the OpenShift environments of a project",
        category="project",
    )


provider = SlackCommandProvider(registry)


def register(bot):
    register_commands()
    bot.command(f"/{PREFIX}{settings.chatops.COMMAND_PREFIX}")(qm_command)
    bot.action(re.compile(f"^{ACTION_ID_PREFIX}"))(qm_action)


def qm_command(ack, command, client, respond, body):
    logger.info("qm_command_received", text=command.get("text", ""), user_id=command.get("user_id"))
    provider.handle(
        {
            "ack": ack,
            "command": command,
            "client": client,
            "respond": respond,
            "body": body,
        }
    )


def qm_action(ack, body, action, client):
    provider.handle_action({"ack": ack, "body": body, "action": action, "client": client})
