"""
Configuration settings for the LUIS router client.

Settings are layered, highest precedence first:
    init kwargs > environment variables > .env > appsettings.{env}.json > appsettings.json

Each appsettings file may carry the flat upper-case keys below or the
bot's own ``LuisRouterConfig`` section (``LuisRouterUrl``,
``LuisApplications`` ...). A flat key from any appsettings file wins
over the section.

Use load_settings() to pick up the JSON files; the plain Settings()
constructor only reads the environment and .env. The module-level
``settings`` is built by settings_from_environment(), which reads
ENVIRONMENT and CONTENT_ROOT to locate the files.
"""

import json
import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from luis_router.security.cipher import KEY_LENGTH

LUIS_ROUTER_SECTION = "LuisRouterConfig"


class LuisApp(BaseModel):
    """A LUIS application registered with this bot."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., alias="Name", min_length=1, description="Name used as the recognizer key")
    app_id: str = Field(..., alias="AppId", min_length=1, description="LUIS application id")
    authoring_key: str = Field(..., alias="AuthoringKey", description="LUIS authoring/subscription key")
    endpoint: str = Field(..., alias="Endpoint", description="LUIS endpoint URL")


# LuisRouterConfig key (lowercased) -> settings field
_SECTION_FIELDS = {
    "luisrouterurl": "LUIS_ROUTER_URL",
    "bingspellchecksubscriptionkey": "BING_SPELL_CHECK_SUBSCRIPTION_KEY",
    "enableluistelemetry": "ENABLE_LUIS_TELEMETRY",
    "luisapplications": "LUIS_APPLICATIONS",
}
_APP_FIELDS = {
    "name": "Name",
    "appid": "AppId",
    "authoringkey": "AuthoringKey",
    "endpoint": "Endpoint",
}


class LuisRouterSectionSource(PydanticBaseSettingsSource):
    """
    Read the ``LuisRouterConfig`` section of the appsettings files.

    Keys are matched case-insensitively and unknown keys are skipped. When
    several files carry the section, a later file replaces the keys it
    sets.
    """

    def __init__(self, settings_cls: type[BaseSettings], json_file=None):
        super().__init__(settings_cls)
        if json_file is None:
            json_file = self.config.get("json_file")
        if json_file is None:
            paths = []
        elif isinstance(json_file, (str, Path)):
            paths = [json_file]
        else:
            paths = list(json_file)

        encoding = self.config.get("json_file_encoding") or "utf-8"
        self._values: dict[str, Any] = {}
        for path in map(Path, paths):
            if path.is_file():
                with path.open(encoding=encoding) as f:
                    self._values.update(self._read_section(json.load(f)))

    @staticmethod
    def _read_section(document: Any) -> dict[str, Any]:
        if not isinstance(document, dict):
            return {}
        section = next(
            (value for key, value in document.items() if key.lower() == LUIS_ROUTER_SECTION.lower()),
            None,
        )
        if not isinstance(section, dict):
            return {}

        values: dict[str, Any] = {}
        for key, value in section.items():
            field_name = _SECTION_FIELDS.get(key.lower())
            if field_name is None:
                continue
            if field_name == "LUIS_APPLICATIONS" and isinstance(value, list):
                value = [
                    {_APP_FIELDS.get(k.lower(), k): v for k, v in app.items()}
                    if isinstance(app, dict) else app
                    for app in value
                ]
            values[field_name] = value
        return values

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self._values.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._values)


class Settings(BaseSettings):
    """Application settings loaded from environment variables and JSON files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # === Application ===
    APP_NAME: str = "LUIS Router"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # === Router ===
    LUIS_ROUTER_URL: str = "https://localhost:5001"
    BING_SPELL_CHECK_SUBSCRIPTION_KEY: Optional[str] = None
    ENABLE_LUIS_TELEMETRY: bool = False
    LUIS_APPLICATIONS: list[LuisApp] = []

    # === Identity ===
    LUIS_ROUTER_APPLICATION_CODE: str = ""
    LUIS_ROUTER_ENCRYPTION_KEY: str = ""  # empty or 32 chars, AES-256

    # === Transport ===
    LUIS_ROUTER_TIMEOUT: float = 30.0  # seconds, per request
    LUIS_ROUTER_VERIFY_TLS: bool = True

    # === Retry ===
    MAX_RETRIES: int = Field(default=3, ge=0)  # total attempts = MAX_RETRIES + 1
    RETRY_DELAY_SECONDS: float = Field(default=0.1, ge=0.0)

    # === Token cache ===
    TOKEN_CACHE_BACKEND: Literal["memory", "redis"] = "memory"
    REDIS_URL: str = "redis://redis:6379/0"
    REDIS_MAX_CONNECTIONS: int = 50
    TOKEN_CACHE_TTL_SECONDS: int = Field(default=0, ge=0)  # 0 = keep until overwritten

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True

    @field_validator("LUIS_ROUTER_URL")
    @classmethod
    def _strip_router_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("LUIS_ROUTER_URL must not be empty")
        return value

    @field_validator("LUIS_ROUTER_ENCRYPTION_KEY")
    @classmethod
    def _check_encryption_key(cls, value: str) -> str:
        if value and len(value) != KEY_LENGTH:
            raise ValueError(f"LUIS_ROUTER_ENCRYPTION_KEY must be empty or {KEY_LENGTH} characters")
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls),
            LuisRouterSectionSource(settings_cls),
            file_secret_settings,
        )


def load_settings(
    environment: Optional[str] = None,
    content_root: str | Path = ".",
    **overrides,
) -> Settings:
    """
    Load settings from layered JSON files plus environment overrides.

    Reads ``appsettings.json`` then ``appsettings.{environment}.json``
    from ``content_root``; both are optional. The environment-specific
    file wins over the base file, and environment variables win over both.

    Args:
        environment: Environment name (e.g. "Development", "Production")
        content_root: Directory holding the appsettings files
        **overrides: Explicit values, highest precedence

    Returns:
        Settings instance
    """
    root = Path(content_root)
    json_files = [root / "appsettings.json"]
    if environment:
        json_files.append(root / f"appsettings.{environment}.json")
    json_files = [path for path in json_files if path.is_file()]

    class LayeredSettings(Settings):
        model_config = SettingsConfigDict(json_file=json_files or None)

    if environment and "ENVIRONMENT" not in overrides:
        overrides["ENVIRONMENT"] = environment
    return LayeredSettings(**overrides)


def settings_from_environment() -> Settings:
    """Settings for a host process, located by ENVIRONMENT and CONTENT_ROOT."""
    return load_settings(os.getenv("ENVIRONMENT"), os.getenv("CONTENT_ROOT", "."))


# Global settings instance
settings = settings_from_environment()
