"""Prompt attachments listing Gluon entities."""

from typing import Any, Dict, List

from infrastructure.commands.menus import create_menu_attachment
from infrastructure.commands.responses.models import Attachment


def menu_attachment_for_teams(
    teams: List[Dict[str, Any]],
    command,
    message: str = "Please select a team",
    parameter_name: str = "team_name",
) -> Attachment:
    return create_menu_attachment(
        [(team["name"], team["name"]) for team in teams],
        command,
        text=message,
        fallback=message,
        selection_message="Select Team",
        result_variable_name=parameter_name,
    )


def menu_attachment_for_projects(
    projects: List[Dict[str, Any]],
    command,
    message: str = "Please select a project",
    parameter_name: str = "project_name",
) -> Attachment:
    return create_menu_attachment(
        [(project["name"], project["name"]) for project in projects],
        command,
        text=message,
        fallback=message,
        selection_message="Select Project",
        result_variable_name=parameter_name,
    )


def menu_attachment_for_applications(
    applications: List[Dict[str, Any]],
    command,
    message: str = "Please select an application",
    parameter_name: str = "application_name",
) -> Attachment:
    return create_menu_attachment(
        [(application["name"], application["name"]) for application in applications],
        command,
        text=message,
        fallback=message,
        selection_message="Select Application",
        result_variable_name=parameter_name,
    )


def menu_attachment_for_tenants(
    tenants: List[Dict[str, Any]],
    command,
    message: str = "Please select a tenant",
    parameter_name: str = "tenant_name",
) -> Attachment:
    """Tenant menu sorted by name with the Default tenant first."""
    default = [tenant for tenant in tenants if tenant["name"].lower() == "default"]
    others = sorted(
        (tenant for tenant in tenants if tenant["name"].lower() != "default"),
        key=lambda tenant: tenant["name"],
    )
    return create_menu_attachment(
        [(tenant["name"], tenant["name"]) for tenant in default + others],
        command,
        text=message,
        fallback=message,
        selection_message="Select Tenant",
        result_variable_name=parameter_name,
    )
