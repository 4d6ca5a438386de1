from infrastructure.commands.references import CommandReference
from modules.qm.menus import (
    menu_attachment_for_applications,
    menu_attachment_for_projects,
    menu_attachment_for_teams,
    menu_attachment_for_tenants,
)

COMMAND = CommandReference(command="request_project_environments", parameters={"a": "1"})


def options(attachment):
    return attachment.actions[0].options


def test_team_menu():
    attachment = menu_attachment_for_teams([{"name": "alpha"}], COMMAND, "Pick a team")

    assert attachment.text == "Pick a team"
    assert attachment.actions[0].placeholder == "Select Team"
    assert attachment.actions[0].reference_for(options(attachment)[0].value).parameters == {
        "a": "1",
        "team_name": "alpha",
    }


def test_project_menu_custom_parameter():
    attachment = menu_attachment_for_projects(
        [{"name": "web"}], COMMAND, parameter_name="source_project"
    )

    assert attachment.text == "Please select a project"
    menu = attachment.actions[0]
    assert menu.parameter_name == "source_project"
    assert menu.reference_for("web").parameters["source_project"] == "web"


def test_application_menu():
    attachment = menu_attachment_for_applications([{"name": "api"}, {"name": "lib"}], COMMAND)
    assert [o.text for o in options(attachment)] == ["api", "lib"]


def test_tenant_menu_default_first():
    attachment = menu_attachment_for_tenants(
        [{"name": "beta"}, {"name": "default"}, {"name": "alpha"}], COMMAND
    )
    assert [o.text for o in options(attachment)] == ["default", "alpha", "beta"]
