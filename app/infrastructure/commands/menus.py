"""Buttons and select menus that re-dispatch a command.

A button carries an encoded command reference: the target command plus its
current parameters with one more value filled in. A menu carries the
reference once, together with the parameter its selection fills, and each
option only holds the selectable value. Clicking either hands the reference
back to the interaction handler, which rebuilds the command and runs its
next resolution turn.
"""

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Tuple, Union

from core.logging import get_module_logger
from infrastructure.commands.references import CommandReference
from infrastructure.commands.responses.models import (
    Attachment,
    Button,
    ButtonStyle,
    Menu,
    MenuOption,
)

if TYPE_CHECKING:
    from infrastructure.commands.recursive.command import RecursiveParameterRequestCommand

logger = get_module_logger()

# Slack rejects static selects with more options than this.
MAX_MENU_OPTIONS = 100

CommandTarget = Union["RecursiveParameterRequestCommand", CommandReference]
OptionInput = Union[MenuOption, Tuple[str, str], Dict[str, str]]


def _reference_for(target: CommandTarget) -> CommandReference:
    if isinstance(target, CommandReference):
        return target
    return target.to_reference()


def _as_option(option: OptionInput) -> MenuOption:
    if isinstance(option, MenuOption):
        return option
    if isinstance(option, dict):
        return MenuOption(text=str(option["text"]), value=str(option["value"]))
    text, value = option
    return MenuOption(text=str(text), value=str(value))


def button_for_command(
    text: str,
    command: CommandTarget,
    parameters: Optional[Dict[str, Any]] = None,
    style: ButtonStyle = ButtonStyle.DEFAULT,
) -> Button:
    """Button running ``command`` with extra parameters.

    Args:
        text: Button label
        command: Command instance or reference to run when clicked
        parameters: Values merged over the command's current parameters
        style: Button style

    Returns:
        Button whose value is the encoded command reference
    """
    reference = _reference_for(command)
    for name, value in (parameters or {}).items():
        reference = reference.with_parameter(name, value)
    return Button(text=text, value=reference.encode(), style=style)


def menu_for_command(
    placeholder: str,
    options: Iterable[OptionInput],
    command: CommandTarget,
    parameter_name: str,
) -> Menu:
    """Select menu where each option fills ``parameter_name`` of ``command``.

    Args:
        placeholder: Text shown before a selection is made
        options: Options as MenuOption, (text, value) tuples or dicts
        command: Command instance or reference to re-dispatch
        parameter_name: Parameter receiving the selected value

    Returns:
        Menu bound to the command reference and parameter
    """
    reference = _reference_for(command)
    menu_options: List[MenuOption] = [_as_option(option) for option in options]

    if len(menu_options) > MAX_MENU_OPTIONS:
        logger.warning(
            "menu_options_truncated",
            command=reference.command,
            parameter=parameter_name,
            total=len(menu_options),
            limit=MAX_MENU_OPTIONS,
        )
        menu_options = menu_options[:MAX_MENU_OPTIONS]

    return Menu(
        placeholder=placeholder,
        options=menu_options,
        reference=reference,
        parameter_name=parameter_name,
    )


def create_menu_attachment(
    options: Iterable[OptionInput],
    command: CommandTarget,
    text: str,
    fallback: str,
    selection_message: str,
    result_variable_name: str,
    thumb_url: Optional[str] = None,
) -> Attachment:
    """Attachment holding a prompt text and a single command menu.

    Args:
        options: Menu options in display order
        command: Command instance or reference to re-dispatch
        text: Prompt text
        fallback: Notification text
        selection_message: Menu placeholder
        result_variable_name: Parameter receiving the selection
        thumb_url: Optional thumbnail

    Returns:
        Attachment usable as a setter prompt
    """
    return Attachment(
        text=text,
        fallback=fallback,
        actions=[menu_for_command(selection_message, options, command, result_variable_name)],
        thumb_url=thumb_url,
    )


def create_sorted_menu_attachment(
    options: Iterable[OptionInput],
    command: CommandTarget,
    text: str,
    fallback: str,
    selection_message: str,
    result_variable_name: str,
    thumb_url: Optional[str] = None,
) -> Attachment:
    """Like create_menu_attachment with options sorted by their text, ignoring case."""
    sorted_options = sorted(
        (_as_option(option) for option in options), key=lambda o: o.text.lower()
    )
    return create_menu_attachment(
        sorted_options,
        command,
        text,
        fallback,
        selection_message,
        result_variable_name,
        thumb_url,
    )
