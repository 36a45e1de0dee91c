import pytest

from api.dependencies import rate_limits


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every API test with empty rate limit counters."""
    rate_limits.limiter.reset()
    yield
    rate_limits.limiter.reset()
