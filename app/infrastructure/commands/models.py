"""Command framework data models."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List

if TYPE_CHECKING:
    from infrastructure.commands.recursive.command import RecursiveParameterRequestCommand

CommandFactory = Callable[[], "RecursiveParameterRequestCommand"]


@dataclass
class CommandRegistration:
    """Registered command definition with metadata for help generation.

    Attributes:
        name: Unique command name used in command references
        factory: Zero-argument callable building a fresh command instance
        intent: Words typed after the slash command to start the command
            (e.g., "request devops environment")
        description: Human-readable description
        category: Help category the command is listed under

    Example:
        registry.add(
            name="request_devops_environment",
            factory=NewDevOpsEnvironment,
            intent="request devops environment",
            description="Request a DevOps environment for a team",
            category="team",
        )
    """

    name: str
    factory: CommandFactory
    intent: str = ""
    description: str = ""
    category: str = "general"

    @property
    def intent_words(self) -> List[str]:
        """Intent split into lowercase words."""
        return self.intent.lower().split()

    def create(self, parameters: Dict[str, Any] = None) -> "RecursiveParameterRequestCommand":
        """Build a new command instance pre-populated with parameters.

        Args:
            parameters: Parameter values carried over from a previous turn

        Returns:
            Fresh command instance
        """
        command = self.factory()
        if not command.command_name:
            command.command_name = self.name
        command.load_parameters(parameters or {})
        return command
