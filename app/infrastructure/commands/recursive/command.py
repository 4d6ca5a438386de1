"""Recursive parameter request command.

A command declares its parameters with a call order and a setter. Each time
the command is handled it resolves the first empty parameter: a setter that
can determine the value on its own fills it in and resolution continues in
the same turn, otherwise the user is prompted (in the message identified by
the correlation id) and the turn ends. The next turn arrives as a fresh
command instance rebuilt from a command reference carried by the prompt.
Once every force-set parameter has a value the business method runs once.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Mapping, Optional
from uuid import uuid4

from core.logging import get_module_logger
from infrastructure.commands.context import CommandContext
from infrastructure.commands.errors import QMError, handle_qm_error
from infrastructure.commands.recursive.display import ParameterStatusDisplay
from infrastructure.commands.recursive.parameters import (
    CORRELATION_ID,
    DISPLAY_RESULT_MENU,
    ParameterBag,
    ParameterDisplayType,
    ParameterSetter,
    RecursiveParameter,
    is_empty,
)
from infrastructure.commands.references import CommandReference
from infrastructure.commands.responses.models import Colours

logger = get_module_logger()


class CommandResultStatus(str, Enum):
    """Outcome recorded by a command's business method."""

    UNSET = "unset"
    SUCCESS = "success"
    FAILURE = "failure"


class BaseQMCommand:
    """Base for every chat command, tracking the result of the last run."""

    def __init__(self):
        self.command_result = CommandResultStatus.UNSET
        self.result_message = ""

    def succeed_command(self, message: str = "") -> None:
        self.command_result = CommandResultStatus.SUCCESS
        self.result_message = message

    def fail_command(self, message: str = "") -> None:
        self.command_result = CommandResultStatus.FAILURE
        self.result_message = message


class RecursiveParameterRequestCommand(BaseQMCommand, ABC):
    """Per-invocation state machine resolving parameters one at a time.

    Subclasses set ``command_name`` (the registry key) and ``intent`` (the
    words users type, also used as the display name), register their
    parameters in ``configure_parameters`` and implement ``run_command``.

    Example:
        class ListTeamProjects(RecursiveParameterRequestCommand):
            command_name = "list_team_projects"
            intent = "list projects"

            def configure_parameters(self):
                self.add_recursive_parameter("team_name", 1, set_team_name)

            async def run_command(self, ctx):
                ...
    """

    command_name: str = ""
    intent: str = ""

    def __init__(self, parameters: Optional[Mapping[str, Any]] = None):
        super().__init__()
        self.parameters = ParameterBag()
        self.parameter_status_display = ParameterStatusDisplay()
        self._recursive_parameters: List[RecursiveParameter] = []
        self._setup_done = False
        self.configure_parameters()
        if parameters:
            self.load_parameters(parameters)

    def configure_parameters(self) -> None:
        """Register the command's recursive parameters (hook)."""

    async def setup(self, ctx: CommandContext) -> None:
        """One-time per-instance preparation before the first turn (hook)."""

    @abstractmethod
    async def run_command(self, ctx: CommandContext) -> None:
        """Business method, called once all force-set parameters are set."""

    @property
    def display_name(self) -> str:
        return self.intent or "Unknown Command"

    @property
    def correlation_id(self) -> Optional[str]:
        return self.parameters.get(CORRELATION_ID)

    @property
    def display_result_menu(self) -> ParameterDisplayType:
        return ParameterDisplayType(
            self.parameters.get(DISPLAY_RESULT_MENU) or ParameterDisplayType.SHOW
        )

    @property
    def recursive_parameters(self) -> List[RecursiveParameter]:
        """Registered parameters in ascending call order."""
        return list(self._recursive_parameters)

    def add_recursive_parameter(
        self,
        name: str,
        call_order: int,
        setter: Optional[ParameterSetter] = None,
        force_set: bool = True,
        display: bool = True,
        selection_message: Optional[str] = None,
    ) -> RecursiveParameter:
        """Register a recursive parameter.

        Args:
            name: Parameter name (key in ``self.parameters``)
            call_order: Resolution position; must be unique in the command
            setter: Coroutine function resolving the value or prompting
            force_set: Whether the command needs the value to run
            display: Whether the value appears in the status summary
            selection_message: Prompt text handed to the setter

        Returns:
            The registered parameter

        Raises:
            ValueError: On a duplicate name or call order
        """
        for existing in self._recursive_parameters:
            if existing.name == name:
                raise ValueError(f"Recursive parameter '{name}' already registered")
            if existing.call_order == call_order:
                raise ValueError(
                    f"Call order {call_order} of '{name}' already used by '{existing.name}'"
                )

        parameter = RecursiveParameter(
            name=name,
            call_order=call_order,
            setter=setter,
            force_set=force_set,
            display=display,
            selection_message=selection_message,
        )
        self._recursive_parameters.append(parameter)
        self._recursive_parameters.sort(key=lambda p: p.call_order)
        return parameter

    def load_parameters(self, values: Mapping[str, Any]) -> None:
        """Populate parameter values, e.g. from a command reference."""
        self.parameters.update(values)

    def to_reference(self, exclude: tuple = ()) -> CommandReference:
        """Reference re-creating this command with its current values."""
        return CommandReference(
            command=self.command_name,
            parameters=self.parameters.to_dict(exclude=exclude),
        )

    async def handle(self, ctx: CommandContext) -> None:
        """Run one resolution turn.

        The ``setup`` hook runs first, once per instance, before the
        correlation id and the display mode are defaulted.

        Args:
            ctx: Context of the chat interaction being handled
        """
        try:
            if not self._setup_done:
                self._setup_done = True
                await self.setup(ctx)

            if is_empty(self.correlation_id):
                self.parameters[CORRELATION_ID] = str(uuid4())
            ctx.correlation_id = self.correlation_id

            if is_empty(self.parameters.get(DISPLAY_RESULT_MENU)):
                self.parameters[DISPLAY_RESULT_MENU] = ParameterDisplayType.SHOW.value

            self._update_parameter_status_display()
            if not self._recursive_parameters_are_set():
                await self._request_next_unset_parameter(ctx)
                return

            if self.display_result_menu == ParameterDisplayType.SHOW:
                await ctx.respond(
                    self.parameter_status_display.get_display_message(self.display_name),
                    message_id=self.correlation_id,
                )
            await self.run_command(ctx)
        except Exception as error:  # pylint: disable=broad-except
            await self._handle_error(ctx, error)

    async def _request_next_unset_parameter(self, ctx: CommandContext) -> None:
        for parameter in self._recursive_parameters:
            if not parameter.force_set or self.parameters.is_set(parameter.name):
                continue
            if parameter.setter is None:
                break

            logger.info(
                "setting_recursive_parameter",
                command=self.command_name,
                parameter=parameter.name,
            )
            result = await parameter.setter(ctx, self, parameter.selection_message)

            if result.setter_success:
                if not self.parameters.is_set(parameter.name):
                    raise QMError(
                        f"Setter for '{parameter.name}' reported success without a value. "
                        "This is an implementation fault. Please raise an issue."
                    )
                await self.handle(ctx)
                return

            display_message = self.parameter_status_display.get_display_message(
                self.display_name
            )
            if result.message_prompt is not None:
                result.message_prompt.color = Colours.PROMPT
                display_message.attachments.append(result.message_prompt)
            await ctx.respond(display_message, message_id=self.correlation_id)
            return

        raise QMError(
            "Recursive parameters could not be set correctly. "
            "This is an implementation fault. Please raise an issue."
        )

    def _recursive_parameters_are_set(self) -> bool:
        for parameter in self._recursive_parameters:
            logger.debug(
                "recursive_parameter_details",
                parameter=parameter.name,
                force_set=parameter.force_set,
                value=self.parameters.get(parameter.name),
            )
            if parameter.force_set and not self.parameters.is_set(parameter.name):
                logger.info("recursive_parameter_not_set", parameter=parameter.name)
                return False
        return True

    def _update_parameter_status_display(self) -> None:
        self.parameter_status_display = ParameterStatusDisplay()
        for parameter in self._recursive_parameters:
            if parameter.display and self.parameters.is_set(parameter.name):
                self.parameter_status_display.set_param(
                    parameter.name, self.parameters[parameter.name]
                )

    async def _handle_error(self, ctx: CommandContext, error: Exception) -> None:
        if ctx.message_client is None:
            logger.error("command_error_without_message_client", error=str(error))
            raise error
        await handle_qm_error(ctx.message_client, error, message_id=self.correlation_id)
