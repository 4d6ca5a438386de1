"""Slash command text parsing.

Grammar::

    <intent words> [key=value ...]

The longest registered intent matching the leading words selects the
command; the remaining ``key=value`` tokens pre-populate its parameters.
Values may be quoted (``team_name="Platform Team"``).
"""

import shlex
from dataclasses import dataclass, field
from typing import Any, Dict, List

from core.logging import get_module_logger
from infrastructure.commands.models import CommandRegistration
from infrastructure.commands.recursive.parameters import RESERVED_PARAMETERS
from infrastructure.commands.registry import CommandRegistry

logger = get_module_logger()


class CommandParseError(Exception):
    """Error during command parsing."""

    pass


@dataclass
class ParsedCommand:
    """Result of parsing slash command text.

    Attributes:
        registration: Command selected by the intent words
        parameters: Values given as key=value tokens
        raw_text: Original text
    """

    registration: CommandRegistration
    parameters: Dict[str, Any] = field(default_factory=dict)
    raw_text: str = ""


class CommandParser:
    """Parse slash command text against a registry.

    Example:
        parser = CommandParser(registry)
        parsed = parser.parse('request devops environment team_name="Platform"')
        # ParsedCommand(registration=<request_devops_environment>,
        #               parameters={"team_name": "Platform"})
    """

    def __init__(self, registry: CommandRegistry):
        self.registry = registry

    def parse(self, text: str) -> ParsedCommand:
        """Parse command text.

        Args:
            text: Text typed after the slash command

        Returns:
            ParsedCommand

        Raises:
            CommandParseError: If no intent matches or a token is malformed
        """
        try:
            tokens = shlex.split(text)
        except ValueError as e:
            raise CommandParseError(f"Could not read command: {e}") from e

        words = self._leading_words(tokens)
        registration, consumed = self.registry.find_by_intent(words)
        if registration is None:
            logger.info("command_intent_not_found", raw_text=text)
            raise CommandParseError(f"Unknown command: {text or '(empty)'}")

        parameters = self._parse_parameters(tokens[consumed:])
        return ParsedCommand(registration=registration, parameters=parameters, raw_text=text)

    @staticmethod
    def _leading_words(tokens: List[str]) -> List[str]:
        words = []
        for token in tokens:
            if "=" in token:
                break
            words.append(token)
        return words

    @staticmethod
    def _parse_parameters(tokens: List[str]) -> Dict[str, Any]:
        parameters: Dict[str, Any] = {}
        for token in tokens:
            key, separator, value = token.partition("=")
            key = key.strip()
            if not separator or not key:
                raise CommandParseError(
                    f"Unexpected argument '{token}'. Parameters must be given as key=value"
                )
            if key in RESERVED_PARAMETERS:
                raise CommandParseError(f"Parameter '{key}' cannot be set directly")
            parameters[key] = value
        return parameters
