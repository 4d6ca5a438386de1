"""QM chat commands."""

from modules.qm.commands.devops_environment import NewDevOpsEnvironment
from modules.qm.commands.help import Help
from modules.qm.commands.project_environments import RequestProjectEnvironments
from modules.qm.commands.team_projects import ListTeamProjects

__all__ = [
    "Help",
    "ListTeamProjects",
    "NewDevOpsEnvironment",
    "RequestProjectEnvironments",
]
