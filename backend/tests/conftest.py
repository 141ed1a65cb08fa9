from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from gateway_hooks.core.config import Settings, get_settings
from gateway_hooks.main import app


@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def override_settings():
    """
    Swap the settings the webhook route sees for the duration of a test.

    The route path and the middleware's Content-Length limit are bound when
    ``gateway_hooks.main`` is imported, so ``webhook_path`` cannot be
    overridden here.
    """
    original = app.state.settings

    def _override(**values) -> Settings:
        if "webhook_path" in values:
            pytest.fail("webhook_path is bound at import time")
        overridden = Settings(**values)
        app.state.settings = overridden
        return overridden

    yield _override
    app.state.settings = original


@pytest.fixture
def webhook_url(settings: Settings) -> str:
    return settings.webhook_path
