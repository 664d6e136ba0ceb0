"""
Wire models for the LUIS router HTTP API.

Field aliases follow the router's JSON contract (PascalCase for the
discovery endpoint, lowercase for identity). Python attribute names
stay snake_case.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IdentityRequest(BaseModel):
    """
    Plaintext identity payload.

    Serialized to JSON and encrypted before it leaves the process; never
    persisted.
    """
    model_config = ConfigDict(frozen=True)

    appcode: str = Field(..., description="Application code issued by the router")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="UTC instant the request was built",
    )


class IdentityEnvelope(BaseModel):
    """Body of POST /identity."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    app_identity: str = Field(..., alias="AppIdentity", description="Encrypted IdentityRequest")


class IdentityResponse(BaseModel):
    """Successful /identity response."""
    model_config = ConfigDict(extra="ignore")

    token: str


class DiscoveryRequest(BaseModel):
    """Body of POST /luisdiscovery."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(..., alias="Text")
    bing_spell_check_subscription_key: Optional[str] = Field(
        default=None, alias="BingSpellCheckSubscriptionKey"
    )
    enable_luis_telemetry: bool = Field(default=False, alias="EnableLuisTelemetry")


class LuisAppDetail(BaseModel):
    """
    A candidate LUIS application returned by discovery.

    The router may send more metadata than the fields declared here;
    unknown fields are kept so callers see the payload unchanged.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    app_id: Optional[str] = Field(default=None, alias="AppId")
    name: Optional[str] = Field(default=None, alias="Name")
    intent: Optional[str] = Field(default=None, alias="Intent")
    score: Optional[float] = Field(default=None, alias="Score")

    def to_wire(self) -> dict:
        """Return the detail with router field names; null fields are dropped."""
        return self.model_dump(by_alias=True, exclude_none=True)


class DiscoveryResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    luis_app_details: list[LuisAppDetail] = Field(default_factory=list, alias="LuisAppDetails")

    @field_validator("luis_app_details", mode="before")
    @classmethod
    def _null_means_empty(cls, value):
        return [] if value is None else value


class DiscoveryResponse(BaseModel):
    """Successful /luisdiscovery response: ``{"Result": {"LuisAppDetails": [...]}}``."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    result: DiscoveryResult = Field(..., alias="Result")
