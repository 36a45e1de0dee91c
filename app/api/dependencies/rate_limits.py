from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

FORWARDED_FOR_HEADER = "X-Forwarded-For"


def client_address(request: Request) -> str:
    """Rate limit key: the original client behind the load balancer.

    The first address of ``X-Forwarded-For`` when present, the socket peer
    otherwise.
    """
    forwarded = request.headers.get(FORWARDED_FOR_HEADER, "")
    first = forwarded.split(",")[0].strip()
    if first:
        return first
    return get_remote_address(request)


limiter = Limiter(key_func=client_address)


async def rate_limit_handler(_request: Request, exc: Exception):
    """Answer 429 with a JSON body like every other API error."""
    if isinstance(exc, RateLimitExceeded):
        return JSONResponse(
            status_code=429,
            content={"message": "Rate limit exceeded"},
        )


def setup_rate_limiter(app: FastAPI):
    """Attach the shared limiter and its 429 handler to ``app``."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


def get_limiter():
    return limiter
