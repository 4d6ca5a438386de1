from unittest.mock import Mock, patch
import pytest
import httpx
from fastapi import Request, FastAPI
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from api.dependencies import rate_limits
from api.routes.system import router as system_router


@pytest.mark.asyncio
async def test_rate_limit_handler():
    mock_request = Mock(spec=Request)
    mock_exception = Mock(spec=RateLimitExceeded)

    with patch("api.dependencies.rate_limits.get_remote_address", return_value="10.0.0.1"):
        response = await rate_limits.rate_limit_handler(mock_request, mock_exception)

    assert isinstance(response, JSONResponse)
    assert response.status_code == 429
    assert response.body.decode("utf-8") == '{"message":"Rate limit exceeded"}'


@pytest.mark.asyncio
async def test_rate_limit_handler_reraises_other_errors():
    with pytest.raises(ValueError):
        await rate_limits.rate_limit_handler(Mock(spec=Request), ValueError("boom"))


def test_setup_rate_limiter():
    app = FastAPI()
    rate_limits.setup_rate_limiter(app)
    assert app.state.limiter is rate_limits.get_limiter()
    assert RateLimitExceeded in app.exception_handlers


@pytest.mark.asyncio
async def test_system_endpoint_rate_limiting():
    """Integration Test to ensure the rate limiting is enforced on the system endpoint, using the /version route as an example."""
    rate_limits.get_limiter().reset()
    app = FastAPI()
    rate_limits.setup_rate_limiter(app)
    app.include_router(system_router)

    transport = httpx.ASGITransport(app=app)

    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        # Make requests up to the limit
        for _ in range(50):
            response = await client.get("/version")
            assert response.status_code == 200

        # Verify rate limit is enforced
        response = await client.get("/version")
        assert response.status_code == 429
        assert response.json() == {"message": "Rate limit exceeded"}
