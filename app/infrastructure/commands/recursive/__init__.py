"""Recursive parameter resolution engine."""

from infrastructure.commands.recursive.command import (
    BaseQMCommand,
    CommandResultStatus,
    RecursiveParameterRequestCommand,
)
from infrastructure.commands.recursive.display import ParameterStatusDisplay
from infrastructure.commands.recursive.parameters import (
    CORRELATION_ID,
    DISPLAY_RESULT_MENU,
    ParameterBag,
    ParameterDisplayType,
    ParameterSetter,
    RecursiveParameter,
    SetterResult,
    is_empty,
)

__all__ = [
    "BaseQMCommand",
    "CommandResultStatus",
    "RecursiveParameterRequestCommand",
    "ParameterStatusDisplay",
    "CORRELATION_ID",
    "DISPLAY_RESULT_MENU",
    "ParameterBag",
    "ParameterDisplayType",
    "ParameterSetter",
    "RecursiveParameter",
    "SetterResult",
    "is_empty",
]
