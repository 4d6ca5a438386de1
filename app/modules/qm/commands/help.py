"""Interactive help listing the registered commands by category."""

from typing import Dict, Optional

from core.config import settings
from core.logging import get_module_logger
from infrastructure.commands.context import CommandContext
from infrastructure.commands.menus import button_for_command, create_menu_attachment
from infrastructure.commands.recursive import (
    CORRELATION_ID,
    RecursiveParameterRequestCommand,
    SetterResult,
)
from infrastructure.commands.references import CommandReference
from infrastructure.commands.registry import CommandRegistry
from infrastructure.commands.responses.models import (
    Attachment,
    ButtonStyle,
    ChatMessage,
    Colours,
)

logger = get_module_logger()

ALL_CATEGORIES = "all"

HELP_CATEGORIES: Dict[str, str] = {
    "team": "Team commands allow you to manage your team and its DevOps environment.",
    "project": "Project commands provide management of projects and their environments.",
    "other": "All other general commands.",
    ALL_CATEGORIES: "All commands.",
}


async def set_help_category(
    ctx: CommandContext, command, selection_message: Optional[str] = None
) -> SetterResult:
    """Prompt with the help categories."""
    message = selection_message or "What would you like to do?"
    return SetterResult.prompt(
        create_menu_attachment(
            [(name.capitalize(), name) for name in HELP_CATEGORIES],
            command,
            text=message,
            fallback=message,
            selection_message="Select Category",
            result_variable_name="selected_category",
        )
    )


class Help(RecursiveParameterRequestCommand):
    """Show the commands of a help category with a button to run each one."""

    command_name = "help"
    intent = "help"

    def __init__(self, parameters=None, registry: Optional[CommandRegistry] = None):
        self._registry = registry
        super().__init__(parameters)

    @property
    def registry(self) -> CommandRegistry:
        if self._registry is None:
            # pylint: disable=import-outside-toplevel
            from modules.qm.registry import registry

            self._registry = registry
        return self._registry

    def configure_parameters(self) -> None:
        self.add_recursive_parameter(
            "selected_category",
            call_order=1,
            setter=set_help_category,
            selection_message="What would you like to do?",
        )

    async def run_command(self, ctx: CommandContext) -> None:
        category = self.parameters["selected_category"]
        if category not in HELP_CATEGORIES:
            logger.info("help_category_unknown", category=category)
            category = ALL_CATEGORIES

        registrations = self.registry.list_commands(
            None if category == ALL_CATEGORIES else category
        )
        slash_command = f"/{settings.PREFIX}{settings.chatops.COMMAND_PREFIX}"

        attachments = []
        for registration in registrations:
            if registration.name == self.command_name or not registration.intent:
                continue
            target = CommandReference(
                command=registration.name,
                parameters={CORRELATION_ID: self.correlation_id},
            )
            attachments.append(
                Attachment(
                    text=f"`{slash_command} {registration.intent}` - {registration.description}",
                    fallback=registration.intent,
                    color=Colours.NEUTRAL,
                    actions=[button_for_command("Run Command", target, style=ButtonStyle.PRIMARY)],
                )
            )

        back = CommandReference(
            command=self.command_name,
            parameters={CORRELATION_ID: self.correlation_id},
        )
        attachments.append(
            Attachment(actions=[button_for_command(":arrow_left: Return to categories", back)])
        )

        await ctx.respond(
            ChatMessage(
                text=f"*{category.capitalize()}* commands: {HELP_CATEGORIES[category]}",
                attachments=attachments,
            ),
            message_id=self.correlation_id,
        )
        self.succeed_command()
