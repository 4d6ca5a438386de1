from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.commands.context import CommandContext
from infrastructure.commands.recursive import (
    RecursiveParameterRequestCommand,
    SetterResult,
)
from infrastructure.commands.registry import CommandRegistry
from infrastructure.messaging.locator import message_locator
from integrations.gluon.service import GluonService


@pytest.fixture(autouse=True)
def clear_message_locator():
    """Every test starts without remembered Slack message locations."""
    message_locator.clear()
    yield
    message_locator.clear()


@pytest.fixture
def message_client():
    """MessageClient double recording every send."""
    client = MagicMock()
    client.send = AsyncMock()
    return client


@pytest.fixture
def ctx(message_client):
    context = CommandContext(
        platform="slack",
        user_id="U123",
        channel_id="C123",
        user_name="jdoe",
        channel_name="general",
    )
    context._responder = message_client  # pylint: disable=protected-access
    return context


@pytest.fixture
def gluon_service():
    """GluonService double; every coroutine method is an AsyncMock."""
    return MagicMock(spec=GluonService)


class FooCommand(RecursiveParameterRequestCommand):
    """Two-parameter command: ``a`` resolves itself, ``b`` needs a prompt."""

    command_name = "foo"
    intent = "foo"

    def __init__(self, parameters=None):
        self.run_calls = 0
        super().__init__(parameters)

    def configure_parameters(self):
        self.add_recursive_parameter("a", call_order=1, setter=set_a)
        self.add_recursive_parameter("b", call_order=2, setter=prompt_b)

    async def run_command(self, ctx):
        self.run_calls += 1
        self.succeed_command()


async def set_a(ctx, command, selection_message=None):
    command.parameters["a"] = "1"
    return SetterResult.success()


async def prompt_b(ctx, command, selection_message=None):
    from infrastructure.commands.menus import create_menu_attachment

    return SetterResult.prompt(
        create_menu_attachment(
            [("x", "x"), ("y", "y")],
            command,
            text="Pick b",
            fallback="Pick b",
            selection_message="Select b",
            result_variable_name="b",
        )
    )


@pytest.fixture
def foo_command_class():
    return FooCommand


@pytest.fixture
def foo_registry():
    registry = CommandRegistry("test")
    registry.register(FooCommand, description="Foo things", category="other")
    return registry
