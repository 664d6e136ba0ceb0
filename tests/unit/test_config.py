"""
Unit tests for settings loading and layering.
"""

import json

import pytest
from pydantic import ValidationError

from luis_router.config import LuisApp, Settings, load_settings, settings_from_environment


@pytest.fixture
def content_root(tmp_path, monkeypatch):
    """Empty content root used as cwd so no stray .env is read."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "MAX_RETRIES",
        "LUIS_ROUTER_URL",
        "ENVIRONMENT",
        "RETRY_DELAY_SECONDS",
        "ENABLE_LUIS_TELEMETRY",
        "LUIS_APPLICATIONS",
        "LUIS_ROUTER_ENCRYPTION_KEY",
        "CONTENT_ROOT",
    ):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def write_json(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_defaults(content_root):
    settings = load_settings(content_root=content_root)

    assert settings.MAX_RETRIES == 3
    assert settings.RETRY_DELAY_SECONDS == 0.1
    assert settings.LUIS_ROUTER_VERIFY_TLS is True
    assert settings.TOKEN_CACHE_BACKEND == "memory"
    assert settings.LUIS_APPLICATIONS == []


def test_base_json_file_is_read(content_root):
    write_json(
        content_root / "appsettings.json",
        {
            "LUIS_ROUTER_URL": "https://router.example.com/",
            "LUIS_APPLICATIONS": [
                {
                    "name": "flights",
                    "app_id": "app-1",
                    "authoring_key": "key-1",
                    "endpoint": "https://westus.api.cognitive.microsoft.com",
                }
            ],
        },
    )

    settings = load_settings(content_root=content_root)

    assert settings.LUIS_ROUTER_URL == "https://router.example.com"
    assert settings.LUIS_APPLICATIONS == [
        LuisApp(
            name="flights",
            app_id="app-1",
            authoring_key="key-1",
            endpoint="https://westus.api.cognitive.microsoft.com",
        )
    ]


def test_environment_file_overrides_base(content_root):
    write_json(content_root / "appsettings.json", {"MAX_RETRIES": 3, "LOG_LEVEL": "INFO"})
    write_json(content_root / "appsettings.Staging.json", {"MAX_RETRIES": 5})

    settings = load_settings(environment="Staging", content_root=content_root)

    assert settings.MAX_RETRIES == 5
    assert settings.LOG_LEVEL == "INFO"
    assert settings.ENVIRONMENT == "Staging"


def test_missing_environment_file_is_ignored(content_root):
    write_json(content_root / "appsettings.json", {"MAX_RETRIES": 2})

    settings = load_settings(environment="Production", content_root=content_root)

    assert settings.MAX_RETRIES == 2


def test_environment_variable_overrides_json(content_root, monkeypatch):
    write_json(content_root / "appsettings.json", {"MAX_RETRIES": 2})
    monkeypatch.setenv("MAX_RETRIES", "7")

    settings = load_settings(content_root=content_root)

    assert settings.MAX_RETRIES == 7


def test_explicit_overrides_win(content_root, monkeypatch):
    monkeypatch.setenv("MAX_RETRIES", "7")

    settings = load_settings(content_root=content_root, MAX_RETRIES=1, ENVIRONMENT="Test")

    assert settings.MAX_RETRIES == 1
    assert settings.ENVIRONMENT == "Test"


def test_negative_retries_rejected(content_root):
    with pytest.raises(ValidationError):
        Settings(MAX_RETRIES=-1)


def test_negative_delay_rejected(content_root):
    with pytest.raises(ValidationError):
        Settings(RETRY_DELAY_SECONDS=-0.5)


@pytest.mark.parametrize("url", ["", "   ", "/"])
def test_empty_router_url_rejected(content_root, url):
    with pytest.raises(ValidationError):
        Settings(LUIS_ROUTER_URL=url)


def test_unknown_cache_backend_rejected(content_root):
    with pytest.raises(ValidationError):
        Settings(TOKEN_CACHE_BACKEND="memcached")


def test_settings_are_frozen(test_settings):
    with pytest.raises(ValidationError):
        test_settings.MAX_RETRIES = 10


@pytest.mark.parametrize("key", ["short", "0123456789abcdef0123456789abcdef!"])
def test_encryption_key_of_wrong_length_rejected(content_root, key):
    with pytest.raises(ValidationError, match="LUIS_ROUTER_ENCRYPTION_KEY"):
        Settings(LUIS_ROUTER_ENCRYPTION_KEY=key)


@pytest.mark.parametrize("key", ["", "0123456789abcdef0123456789abcdef"])
def test_encryption_key_empty_or_full_length_accepted(content_root, key):
    assert Settings(LUIS_ROUTER_ENCRYPTION_KEY=key).LUIS_ROUTER_ENCRYPTION_KEY == key


def test_bad_encryption_key_in_json_fails_at_load(content_root):
    write_json(content_root / "appsettings.json", {"LUIS_ROUTER_ENCRYPTION_KEY": "short"})

    with pytest.raises(ValidationError):
        load_settings(content_root=content_root)


def test_luis_router_config_section(content_root):
    """The bot's own appsettings layout is read without renaming keys."""
    write_json(
        content_root / "appsettings.json",
        {
            "Logging": {"LogLevel": {"Default": "Warning"}},
            "LuisRouterConfig": {
                "LuisRouterUrl": "https://r.test/",
                "BingSpellCheckSubscriptionKey": "bing-key",
                "EnableLuisTelemetry": True,
                "LuisApplications": [
                    {
                        "Name": "flights",
                        "AppId": "app-1",
                        "AuthoringKey": "key-1",
                        "Endpoint": "https://westus.api.cognitive.microsoft.com",
                    }
                ],
            },
        },
    )

    settings = load_settings(content_root=content_root)

    assert settings.LUIS_ROUTER_URL == "https://r.test"
    assert settings.BING_SPELL_CHECK_SUBSCRIPTION_KEY == "bing-key"
    assert settings.ENABLE_LUIS_TELEMETRY is True
    assert settings.LUIS_APPLICATIONS == [
        LuisApp(
            name="flights",
            app_id="app-1",
            authoring_key="key-1",
            endpoint="https://westus.api.cognitive.microsoft.com",
        )
    ]


def test_luis_router_config_section_keys_case_insensitive(content_root):
    write_json(
        content_root / "appsettings.json",
        {
            "luisRouterConfig": {
                "luisRouterUrl": "https://lower.test",
                "luisApplications": [
                    {"name": "hotels", "appId": "app-2", "authoringKey": "k", "endpoint": "https://e"}
                ],
            }
        },
    )

    settings = load_settings(content_root=content_root)

    assert settings.LUIS_ROUTER_URL == "https://lower.test"
    assert settings.LUIS_APPLICATIONS[0].app_id == "app-2"


def test_luis_router_config_section_overlaid_by_environment_file(content_root):
    write_json(
        content_root / "appsettings.json",
        {"LuisRouterConfig": {"LuisRouterUrl": "https://base.test", "EnableLuisTelemetry": True}},
    )
    write_json(
        content_root / "appsettings.Production.json",
        {"LuisRouterConfig": {"LuisRouterUrl": "https://prod.test"}},
    )

    settings = load_settings(environment="Production", content_root=content_root)

    assert settings.LUIS_ROUTER_URL == "https://prod.test"
    assert settings.ENABLE_LUIS_TELEMETRY is True


def test_flat_key_wins_over_section(content_root):
    write_json(
        content_root / "appsettings.json",
        {
            "LUIS_ROUTER_URL": "https://flat.test",
            "LuisRouterConfig": {"LuisRouterUrl": "https://section.test"},
        },
    )

    assert load_settings(content_root=content_root).LUIS_ROUTER_URL == "https://flat.test"


def test_environment_variable_wins_over_section(content_root, monkeypatch):
    write_json(
        content_root / "appsettings.json",
        {"LuisRouterConfig": {"LuisRouterUrl": "https://section.test"}},
    )
    monkeypatch.setenv("LUIS_ROUTER_URL", "https://env.test")

    assert load_settings(content_root=content_root).LUIS_ROUTER_URL == "https://env.test"


def test_settings_from_environment_reads_content_root(content_root, monkeypatch):
    write_json(
        content_root / "appsettings.json",
        {"LuisRouterConfig": {"LuisRouterUrl": "https://base.test"}},
    )
    write_json(
        content_root / "appsettings.Staging.json",
        {"LuisRouterConfig": {"LuisRouterUrl": "https://staging.test"}},
    )
    monkeypatch.setenv("CONTENT_ROOT", str(content_root))
    monkeypatch.setenv("ENVIRONMENT", "Staging")

    settings = settings_from_environment()

    assert settings.LUIS_ROUTER_URL == "https://staging.test"
    assert settings.ENVIRONMENT == "Staging"


def test_settings_from_environment_defaults_to_cwd(content_root):
    write_json(content_root / "appsettings.json", {"MAX_RETRIES": 6})

    assert settings_from_environment().MAX_RETRIES == 6
