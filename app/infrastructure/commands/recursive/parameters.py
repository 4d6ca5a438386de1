"""Recursive parameter definitions and values."""

from collections.abc import MutableMapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, Iterator, Optional

from infrastructure.commands.responses.models import Attachment

if TYPE_CHECKING:
    from infrastructure.commands.context import CommandContext
    from infrastructure.commands.recursive.command import RecursiveParameterRequestCommand

CORRELATION_ID = "message_presentation_correlation_id"
DISPLAY_RESULT_MENU = "display_result_menu"
RESERVED_PARAMETERS = (CORRELATION_ID, DISPLAY_RESULT_MENU)


class ParameterDisplayType(str, Enum):
    """Whether the parameter summary is shown before the command runs."""

    SHOW = "show"
    HIDE = "hide"


@dataclass
class SetterResult:
    """Outcome of a parameter setter.

    Attributes:
        setter_success: True when the setter filled in the parameter itself
        message_prompt: Attachment asking the user for the value when it
            could not be determined automatically
    """

    setter_success: bool
    message_prompt: Optional[Attachment] = None

    @classmethod
    def success(cls) -> "SetterResult":
        """The parameter was set without user input."""
        return cls(setter_success=True)

    @classmethod
    def prompt(cls, message_prompt: Attachment) -> "SetterResult":
        """The user has to pick a value from ``message_prompt``."""
        return cls(setter_success=False, message_prompt=message_prompt)


ParameterSetter = Callable[
    ["CommandContext", "RecursiveParameterRequestCommand", Optional[str]],
    Awaitable[SetterResult],
]


@dataclass
class RecursiveParameter:
    """A parameter resolved one step at a time.

    Attributes:
        name: Key of the value in the command's parameter bag
        call_order: Resolution order, ascending and unique per command
        setter: Coroutine function resolving the value or prompting for it
        force_set: Whether the command refuses to run while the value is empty
        display: Whether the value is listed in the status summary
        selection_message: Text passed to the setter for its prompt
    """

    name: str
    call_order: int
    setter: Optional[ParameterSetter] = None
    force_set: bool = True
    display: bool = True
    selection_message: Optional[str] = None


def is_empty(value: Any) -> bool:
    """Return True for values treated as "not set".

    None, blank strings and empty collections are empty. Numbers and booleans
    are always set.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


class ParameterBag(MutableMapping):
    """Mutable mapping holding the parameter values of one command instance.

    Missing keys read as None through ``get``; ``is_set`` applies the same
    emptiness rule the resolution engine uses.
    """

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._values[key] = value

    def __delitem__(self, key: str) -> None:
        del self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ParameterBag({self._values!r})"

    def is_set(self, key: str) -> bool:
        """True when the value for ``key`` is present and not empty."""
        return not is_empty(self._values.get(key))

    def to_dict(self, exclude: tuple = ()) -> Dict[str, Any]:
        """Copy of the non-empty values, without the ``exclude`` keys."""
        return {
            key: value
            for key, value in self._values.items()
            if key not in exclude and not is_empty(value)
        }
