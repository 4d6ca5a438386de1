"""Command registry for registration and discovery."""

from typing import Any, Dict, List, Optional, Tuple

from core.logging import get_module_logger
from infrastructure.commands.models import CommandFactory, CommandRegistration

logger = get_module_logger()


class CommandRegistry:
    """Registry for command registration and discovery.

    Commands are registered explicitly by name. The name is what command
    references (button and menu values) carry, so it must stay stable across
    releases.

    Attributes:
        namespace: Module namespace for the registry (e.g., "qm")
        _commands: Dict of registered commands keyed by name

    Example:
        registry = CommandRegistry("qm")
        registry.add(
            name="help",
            factory=Help,
            intent="help",
            description="Show the available commands",
        )
        command = registry.create("help", {"selected_category": "team"})
    """

    def __init__(self, namespace: str):
        """Initialize registry.

        Args:
            namespace: Module namespace for commands
        """
        self.namespace = namespace
        self._commands: Dict[str, CommandRegistration] = {}

    def add(
        self,
        name: str,
        factory: CommandFactory,
        intent: str = "",
        description: str = "",
        category: str = "general",
    ) -> CommandRegistration:
        """Register a command factory.

        Args:
            name: Unique command name
            factory: Callable building a fresh command instance
            intent: Words that start the command from the slash command
            description: Human-readable description
            category: Help category

        Returns:
            The stored registration

        Raises:
            ValueError: If the name or intent is already registered
        """
        if name in self._commands:
            raise ValueError(f"Command '{name}' already registered in {self.namespace}")

        intent_words = intent.lower().split()
        if intent_words and any(
            existing.intent_words == intent_words for existing in self._commands.values()
        ):
            raise ValueError(f"Intent '{intent}' already registered in {self.namespace}")

        registration = CommandRegistration(
            name=name,
            factory=factory,
            intent=intent,
            description=description,
            category=category,
        )
        self._commands[name] = registration
        logger.debug("registered_command", namespace=self.namespace, name=name)
        return registration

    def register(
        self, command_class: type, description: str = "", category: str = "general"
    ) -> CommandRegistration:
        """Register a command class using its ``command_name`` and ``intent``.

        Args:
            command_class: RecursiveParameterRequestCommand subclass
            description: Human-readable description
            category: Help category

        Returns:
            The stored registration
        """
        return self.add(
            name=command_class.command_name,
            factory=command_class,
            intent=command_class.intent,
            description=description,
            category=category,
        )

    def get(self, name: str) -> Optional[CommandRegistration]:
        """Get a registration by command name.

        Args:
            name: Command name

        Returns:
            CommandRegistration or None if not found
        """
        return self._commands.get(name)

    def create(self, name: str, parameters: Dict[str, Any] = None):
        """Build a command instance by name.

        Args:
            name: Command name
            parameters: Values to pre-populate the command with

        Returns:
            New command instance

        Raises:
            KeyError: If the command is not registered
        """
        registration = self._commands.get(name)
        if registration is None:
            raise KeyError(f"Unknown command '{name}' in {self.namespace}")
        return registration.create(parameters)

    def find_by_intent(
        self, words: List[str]
    ) -> Tuple[Optional[CommandRegistration], int]:
        """Find the command whose intent is the longest prefix of ``words``.

        Args:
            words: Words typed after the slash command

        Returns:
            Tuple of (registration or None, number of words consumed)

        Example:
            registry.find_by_intent(["request", "devops", "environment", "x=1"])
            # (<request_devops_environment>, 3)
        """
        lowered = [word.lower() for word in words]
        best: Optional[CommandRegistration] = None
        best_length = 0
        for registration in self._commands.values():
            intent_words = registration.intent_words
            if not intent_words or len(intent_words) <= best_length:
                continue
            if lowered[: len(intent_words)] == intent_words:
                best = registration
                best_length = len(intent_words)
        return best, best_length

    def list_commands(self, category: Optional[str] = None) -> List[CommandRegistration]:
        """Get registered commands, optionally filtered by help category.

        Args:
            category: Only return commands in this category

        Returns:
            List of registrations sorted by intent
        """
        commands = [
            registration
            for registration in self._commands.values()
            if category is None or registration.category == category
        ]
        return sorted(commands, key=lambda registration: registration.intent)

    def categories(self) -> List[str]:
        """Return the sorted distinct help categories."""
        return sorted({registration.category for registration in self._commands.values()})
