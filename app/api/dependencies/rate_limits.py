from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.logging import get_module_logger

logger = get_module_logger()

limiter = Limiter(
    key_func=get_remote_address,
)


async def rate_limit_handler(request: Request, exc: Exception):
    """Return a 429 with a short error body when a client exceeds its limit."""
    if isinstance(exc, RateLimitExceeded):
        logger.warning(
            "rate_limit_exceeded",
            path=request.url.path,
            client=get_remote_address(request),
            limit=str(getattr(exc, "detail", "")),
        )
        return JSONResponse(
            status_code=429,
            content={"message": "Rate limit exceeded"},
        )
    raise exc


def setup_rate_limiter(app: FastAPI):
    """Attach the shared limiter and its 429 handler to the application."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


def get_limiter():
    """
    Returns the limiter instance.
    """
    return limiter
