from fastapi import APIRouter, Request
from core.config import settings
from api.dependencies.rate_limits import get_limiter

router = APIRouter(tags=["System"])
limiter = get_limiter()


# Load balancer and uptime checks poll these endpoints frequently, hence the generous limit.
@router.get("/version")
@limiter.limit("50/minute")
def get_version(request: Request):  # pylint: disable=unused-argument
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
@limiter.limit("50/minute")
def get_health(request: Request):
    """Healthcheck endpoint.

    Reports whether the Slack bot is connected and how many QM commands
    are registered.
    """
    state = getattr(request.scope.get("app"), "state", None)
    registry = getattr(state, "command_registry", None)
    return {
        "status": "ok",
        "slack_connected": getattr(state, "bot", None) is not None,
        "commands": len(registry.list_commands()) if registry is not None else 0,
    }
