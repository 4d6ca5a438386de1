"""Platform-agnostic chat message models for command handlers."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from infrastructure.commands.references import CommandReference


class Colours:
    """Accent colours used for message attachments."""

    SUCCESS = "#45B254"
    WARNING = "#ffcc00"
    ERROR = "#D94649"
    PROMPT = "#00a5ff"
    NEUTRAL = "#c000ff"


class ButtonStyle(str, Enum):
    """Button style options.

    Attributes:
        DEFAULT: Default button style.
        PRIMARY: Primary action button style.
        DANGER: Dangerous action button style (destructive).
    """

    DEFAULT = "default"
    PRIMARY = "primary"
    DANGER = "danger"


@dataclass
class Button:
    """Platform-agnostic button representation.

    Attributes:
        text: Button label text displayed to the user.
        value: Value passed back with the click event (an encoded
            command reference for command buttons).
        style: Visual style (default, primary, danger).
        action_id: Optional explicit action id; formatters assign one
            when omitted.
    """

    text: str
    value: Optional[str] = None
    style: ButtonStyle = ButtonStyle.DEFAULT
    action_id: Optional[str] = None


@dataclass
class MenuOption:
    """One entry of a select menu."""

    text: str
    value: str


@dataclass
class Menu:
    """Platform-agnostic select menu.

    A command menu keeps its options short: each option value is just the
    selectable value, while ``reference`` and ``parameter_name`` describe the
    command the selection is fed into.

    Attributes:
        placeholder: Text shown before a selection is made.
        options: Menu entries, rendered in the given order.
        action_id: Optional explicit action id.
        reference: Command re-dispatched when an option is picked.
        parameter_name: Parameter of ``reference`` receiving the selection.
    """

    placeholder: str
    options: List[MenuOption] = field(default_factory=list)
    action_id: Optional[str] = None
    reference: Optional[CommandReference] = None
    parameter_name: Optional[str] = None

    def reference_for(self, value: str) -> CommandReference:
        """Command reference produced by selecting ``value``.

        Raises:
            ValueError: If the menu is not bound to a command
        """
        if self.reference is None or not self.parameter_name:
            raise ValueError("Menu is not bound to a command parameter")
        return self.reference.with_parameter(self.parameter_name, value)


Action = Union[Button, Menu]


@dataclass
class Attachment:
    """Coloured block of text with optional interactive actions.

    Attributes:
        text: Markdown text of the attachment.
        fallback: Plain text used by notifications.
        color: Hex accent colour.
        actions: Buttons and menus rendered under the text.
        thumb_url: Optional thumbnail image.
    """

    text: str = ""
    fallback: str = ""
    color: Optional[str] = None
    actions: List[Action] = field(default_factory=list)
    thumb_url: Optional[str] = None


@dataclass
class ChatMessage:
    """A chat message: a markdown header plus ordered attachments."""

    text: str
    attachments: List[Attachment] = field(default_factory=list)
