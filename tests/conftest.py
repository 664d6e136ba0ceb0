"""Shared test fixtures and configuration for all tests.

Provides settings, a deterministic cipher and token caches used across
unit and integration tests.
"""

import pytest

from luis_router.config import LuisApp, Settings
from luis_router.persistence.token_cache import InMemoryTokenCache

ROUTER_URL = "https://r.test"
ENCRYPTION_KEY = "0123456789abcdef0123456789abcdef"  # 32 chars


class FakeEncryptor:
    """Deterministic stand-in for AesEcbEncryptor.

    Records every call so tests can inspect the plaintext that would
    have been encrypted.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def encrypt(self, plaintext: str, key: str) -> str:
        self.calls.append((plaintext, key))
        return f"enc[{key}]:{plaintext}"


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults.

    Settings are frozen; build a copy for variations:
        custom = test_settings.model_copy(update={"MAX_RETRIES": 1})
    """
    return Settings(
        APP_NAME="LUIS Router (Test)",
        ENVIRONMENT="development",
        LOG_LEVEL="DEBUG",
        LUIS_ROUTER_URL=ROUTER_URL,
        BING_SPELL_CHECK_SUBSCRIPTION_KEY=None,
        ENABLE_LUIS_TELEMETRY=False,
        LUIS_APPLICATIONS=[
            LuisApp(
                name="flights",
                app_id="11111111-1111-1111-1111-111111111111",
                authoring_key="flights-key",
                endpoint="https://westus.api.cognitive.microsoft.com",
            ),
            LuisApp(
                name="hotels",
                app_id="22222222-2222-2222-2222-222222222222",
                authoring_key="hotels-key",
                endpoint="https://westus.api.cognitive.microsoft.com",
            ),
        ],
        LUIS_ROUTER_APPLICATION_CODE="APP1",
        LUIS_ROUTER_ENCRYPTION_KEY=ENCRYPTION_KEY,
        LUIS_ROUTER_TIMEOUT=5.0,
        MAX_RETRIES=3,
        RETRY_DELAY_SECONDS=0.1,
        TOKEN_CACHE_BACKEND="memory",
        REDIS_URL="redis://localhost:6379/15",
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def router_url() -> str:
    return ROUTER_URL


@pytest.fixture
def encryption_key() -> str:
    return ENCRYPTION_KEY


@pytest.fixture
def session_id() -> str:
    return "session-42"


@pytest.fixture
def fake_encryptor() -> FakeEncryptor:
    return FakeEncryptor()


@pytest.fixture
def token_cache() -> InMemoryTokenCache:
    return InMemoryTokenCache()
