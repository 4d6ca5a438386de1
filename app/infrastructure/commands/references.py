"""Serialisable command references.

A command reference is what a button or select-menu option carries back to
the bot: the registered command name and the parameter values collected so
far. Decoding one and handing it to the registry rebuilds the command at the
same point of its resolution.
"""

import json
from typing import Any, Dict

from pydantic import BaseModel, Field, ValidationError


class CommandReferenceError(ValueError):
    """Raised when an interaction payload does not hold a command reference."""


class CommandReference(BaseModel):
    """Command name plus pre-populated parameter values."""

    command: str
    parameters: Dict[str, Any] = Field(default_factory=dict)

    def with_parameter(self, name: str, value: Any) -> "CommandReference":
        """Return a copy with one more parameter filled in."""
        parameters = dict(self.parameters)
        parameters[name] = value
        return CommandReference(command=self.command, parameters=parameters)

    def encode(self) -> str:
        """Encode as compact JSON.

        Parameters without a value are dropped to keep the payload under the
        platform's value size limits.
        """
        parameters = {
            key: value
            for key, value in self.parameters.items()
            if value is not None and value != ""
        }
        return json.dumps(
            {"command": self.command, "parameters": parameters},
            separators=(",", ":"),
            sort_keys=True,
        )

    @classmethod
    def decode(cls, value: str) -> "CommandReference":
        """Decode a value produced by :meth:`encode`.

        Raises:
            CommandReferenceError: If the value is not a valid reference
        """
        try:
            return cls.model_validate_json(value)
        except ValidationError as e:
            raise CommandReferenceError(f"Invalid command reference: {value!r}") from e
