"""Fixtures for tracker endpoint tests."""

import pytest

from tracker_api.middleware import RateLimitMiddleware


@pytest.fixture(autouse=True)
def _reset_rate_limiter() -> None:
    """Start every test with an empty parse-endpoint hit log."""
    from tracker_api.main import app

    layer = getattr(app, "middleware_stack", None)
    while layer is not None:
        if isinstance(layer, RateLimitMiddleware):
            layer._hits.clear()
            return
        layer = getattr(layer, "app", None)
