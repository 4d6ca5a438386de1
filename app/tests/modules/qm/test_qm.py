from unittest.mock import MagicMock, patch

from modules.qm import qm
from modules.qm.registry import registry


def test_register_commands_is_idempotent():
    qm.register_commands()
    qm.register_commands()

    assert [r.name for r in registry.list_commands()] == [
        "help",
        "list_team_projects",
        "request_devops_environment",
        "request_project_environments",
    ]
    assert registry.categories() == ["other", "project", "team"]


@patch("modules.qm.qm.PREFIX", "dev-")
def test_register_binds_slash_command_and_actions():
    bot = MagicMock()

    qm.register(bot)

    bot.command.assert_called_once_with("/dev-qm")
    bot.command.return_value.assert_called_once_with(qm.qm_command)
    pattern = bot.action.call_args.args[0]
    assert pattern.match("qm_command_0_1")
    assert not pattern.match("other_action")
    bot.action.return_value.assert_called_once_with(qm.qm_action)


@patch("modules.qm.qm.provider")
def test_qm_command_delegates_to_provider(mock_provider):
    ack, client, respond = MagicMock(), MagicMock(), MagicMock()
    command = {"text": "help", "user_id": "U1"}

    qm.qm_command(ack, command, client, respond, {})

    mock_provider.handle.assert_called_once_with(
        {"ack": ack, "command": command, "client": client, "respond": respond, "body": {}}
    )


@patch("modules.qm.qm.provider")
def test_qm_action_delegates_to_provider(mock_provider):
    ack, client = MagicMock(), MagicMock()
    body, action = {"user": {"id": "U1"}}, {"value": "{}"}

    qm.qm_action(ack, body, action, client)

    mock_provider.handle_action.assert_called_once_with(
        {"ack": ack, "body": body, "action": action, "client": client}
    )


def test_provider_uses_module_registry():
    assert qm.provider.registry is registry
