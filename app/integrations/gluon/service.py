"""Gluon lookups and requests used by the chat commands.

Gluon answers collection queries with HAL documents
(``{"_embedded": {"teamResources": [...]}}``); an absent ``_embedded`` key
means the query matched nothing.
"""

import asyncio
from functools import lru_cache
from typing import Any, Dict, List, Optional

from core.logging import get_module_logger
from infrastructure.commands.errors import QMError, raise_for_result
from infrastructure.operations import OperationResult
from integrations.gluon.client import GluonClient

logger = get_module_logger()


def embedded_resources(data: Any, resource_key: str) -> List[Dict[str, Any]]:
    """Extract ``_embedded.<resource_key>`` from a HAL collection document."""
    if not isinstance(data, dict):
        return []
    embedded = data.get("_embedded") or {}
    return list(embedded.get(resource_key) or [])


class GluonService:
    """Async facade over GluonClient.

    Blocking HTTP calls run in a worker thread. Failed calls raise QMError
    (or ServiceUnavailableError when Gluon cannot be reached).

    Args:
        client: GluonClient to use, a default one is built when omitted
    """

    def __init__(self, client: Optional[GluonClient] = None):
        self.client = client or GluonClient()

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> OperationResult:
        return await asyncio.to_thread(self.client.get, path, params)

    async def _put(self, path: str, json_data: Dict[str, Any]) -> OperationResult:
        return await asyncio.to_thread(self.client.put, path, json_data)

    # Teams

    async def teams_for_slack_user(self, slack_user_id: str) -> List[Dict[str, Any]]:
        """Teams the Slack user is a member or owner of."""
        result = await self._get("/teams", {"slackUserId": slack_user_id})
        data = raise_for_result(
            result,
            f"Failed to find teams associated to member {slack_user_id}",
            "Failed to find the teams you belong to",
        )
        return embedded_resources(data, "teamResources")

    async def team_for_slack_channel(self, team_channel: str) -> Dict[str, Any]:
        """Team whose Slack channel is ``team_channel``.

        Raises:
            QMError: If no team uses the channel
        """
        result = await self._get("/teams", {"slackTeamChannel": team_channel})
        teams = embedded_resources(
            raise_for_result(result, f"Failed to look up team for channel {team_channel}"),
            "teamResources",
        )
        if not teams:
            raise QMError(f"No team associated with Slack team channel: {team_channel}")
        return teams[0]

    async def team_by_name(self, team_name: str) -> Dict[str, Any]:
        """Team called ``team_name``.

        Raises:
            QMError: If the team does not exist
        """
        result = await self._get("/teams", {"name": team_name})
        teams = embedded_resources(
            raise_for_result(result, f"Failed to look up team {team_name}"),
            "teamResources",
        )
        if not teams:
            logger.error("gluon_team_not_found", team_name=team_name)
            raise QMError(f"Team {team_name} does not appear to be a valid SubAtomic team")
        return teams[0]

    async def request_devops_environment(self, team_id: str, member_id: str) -> None:
        """Ask Gluon to provision the team's DevOps environment."""
        result = await self._put(
            f"/teams/{team_id}",
            {"devOpsEnvironment": {"requestedBy": member_id}},
        )
        raise_for_result(
            result,
            f"Unable to request devops environment for team {team_id}",
            "Unable to request the DevOps environment",
        )

    # Projects

    async def projects_for_team(self, team_name: str) -> List[Dict[str, Any]]:
        """Projects owned by the team.

        Raises:
            QMError: If the team has no projects
        """
        result = await self._get("/projects", {"teamName": team_name})
        projects = embedded_resources(
            raise_for_result(result, f"Failed to list projects of team {team_name}"),
            "projectResources",
        )
        if not projects:
            raise QMError(
                f"No projects associated with team {team_name}",
                f"The team *{team_name}* does not have any projects yet",
            )
        return projects

    async def project_by_name(self, project_name: str) -> Dict[str, Any]:
        """Project called ``project_name``.

        Raises:
            QMError: If the project does not exist
        """
        result = await self._get("/projects", {"name": project_name})
        projects = embedded_resources(
            raise_for_result(result, f"Failed to look up project {project_name}"),
            "projectResources",
        )
        if not projects:
            raise QMError(
                f"Project {project_name} does not appear to be a valid SubAtomic project"
            )
        return projects[0]

    async def request_project_environment(self, project_id: str, member_id: str) -> None:
        """Ask Gluon to provision the project's environments."""
        result = await self._put(
            f"/projects/{project_id}",
            {"projectEnvironment": {"requestedBy": member_id}},
        )
        raise_for_result(
            result,
            f"Unable to request environments for project {project_id}",
            "Unable to request the project environments",
        )

    # Applications

    async def applications_for_project(self, project_name: str) -> List[Dict[str, Any]]:
        """Applications and libraries linked to the project."""
        result = await self._get("/applications", {"projectName": project_name})
        return embedded_resources(
            raise_for_result(result, f"Failed to list applications of project {project_name}"),
            "applicationResources",
        )

    # Tenants

    async def tenants(self) -> List[Dict[str, Any]]:
        """Every tenant known to Gluon."""
        result = await self._get("/tenants")
        return embedded_resources(
            raise_for_result(result, "Failed to list tenants"),
            "tenantResources",
        )

    async def tenant_by_id(self, tenant_id: str) -> Dict[str, Any]:
        result = await self._get(f"/tenants/{tenant_id}")
        return raise_for_result(result, f"Failed to look up tenant {tenant_id}")

    # Members

    async def member_by_screen_name(self, screen_name: str) -> Dict[str, Any]:
        """Member onboarded with the given Slack screen name.

        Raises:
            QMError: If the member is not onboarded
        """
        result = await self._get("/members", {"slackScreenName": screen_name})
        members = embedded_resources(
            raise_for_result(result, f"Failed to look up member {screen_name}"),
            "teamMemberResources",
        )
        if not members:
            raise QMError(
                f"Member {screen_name} appears to not be onboarded",
                "You do not seem to have been onboarded to Subatomic. "
                "Please retry once you have been onboarded",
            )
        return members[0]


@lru_cache
def get_gluon_service() -> GluonService:
    """Application-scoped GluonService singleton."""
    return GluonService()
