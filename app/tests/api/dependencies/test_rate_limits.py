from unittest.mock import Mock

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from api.dependencies import rate_limits
from api.routes.system import router as system_router


@pytest.mark.asyncio
async def test_rate_limit_handler():
    mock_request = Mock(spec=Request)
    mock_exception = Mock(spec=RateLimitExceeded)

    response = await rate_limits.rate_limit_handler(mock_request, mock_exception)

    assert isinstance(response, JSONResponse)
    assert response.status_code == 429
    assert response.body.decode("utf-8") == '{"message":"Rate limit exceeded"}'


def test_setup_rate_limiter_registers_limiter():
    app = FastAPI()
    rate_limits.setup_rate_limiter(app)
    assert app.state.limiter is rate_limits.get_limiter()
    assert RateLimitExceeded in app.exception_handlers


@pytest.mark.asyncio
async def test_system_endpoint_rate_limiting():
    """The /health route rejects requests past its per-minute limit."""
    app = FastAPI()
    rate_limits.setup_rate_limiter(app)
    app.include_router(system_router)

    transport = httpx.ASGITransport(app=app)

    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        for _ in range(50):
            response = await client.get("/health")
            assert response.status_code == 200

        response = await client.get("/health")
        assert response.status_code == 429
        assert response.json() == {"message": "Rate limit exceeded"}


def test_client_address_prefers_forwarded_for():
    mock_request = Mock(spec=Request)
    mock_request.headers = {"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}

    assert rate_limits.client_address(mock_request) == "203.0.113.7"


def test_client_address_falls_back_to_peer():
    mock_request = Mock(spec=Request)
    mock_request.headers = {}
    mock_request.client.host = "192.168.1.1"

    assert rate_limits.client_address(mock_request) == "192.168.1.1"
