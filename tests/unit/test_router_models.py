"""
Unit tests for router wire models and discovery outcomes.
"""

from datetime import timezone

import pytest
from pydantic import ValidationError

from luis_router.models.outcomes import (
    DiscoveryFailure,
    DiscoveryOutcomeKind,
    DiscoverySuccess,
    DiscoveryUnauthorized,
)
from luis_router.models.router_models import (
    DiscoveryRequest,
    DiscoveryResponse,
    IdentityEnvelope,
    IdentityRequest,
    LuisAppDetail,
)


def test_identity_request_timestamp_is_utc():
    request = IdentityRequest(appcode="APP1")

    assert request.timestamp.tzinfo is not None
    assert request.timestamp.utcoffset() == timezone.utc.utcoffset(None)


def test_identity_envelope_alias():
    envelope = IdentityEnvelope(app_identity="cipher")

    assert envelope.model_dump(by_alias=True) == {"AppIdentity": "cipher"}


def test_discovery_request_aliases():
    request = DiscoveryRequest(
        text="hello",
        bing_spell_check_subscription_key=None,
        enable_luis_telemetry=True,
    )

    assert request.model_dump(by_alias=True) == {
        "Text": "hello",
        "BingSpellCheckSubscriptionKey": None,
        "EnableLuisTelemetry": True,
    }


def test_discovery_response_keeps_order():
    response = DiscoveryResponse.model_validate(
        {"Result": {"LuisAppDetails": [{"Name": "b"}, {"Name": "a"}]}}
    )

    assert [app.name for app in response.result.luis_app_details] == ["b", "a"]


def test_discovery_response_missing_details_is_empty():
    response = DiscoveryResponse.model_validate({"Result": {}})

    assert response.result.luis_app_details == []


def test_discovery_response_requires_result():
    with pytest.raises(ValidationError):
        DiscoveryResponse.model_validate({"LuisAppDetails": []})


def test_app_detail_round_trips_unknown_fields():
    payload = {"AppId": "app-1", "Score": 0.9, "Region": "westus", "Tags": ["x"]}

    assert LuisAppDetail.model_validate(payload).to_wire() == payload


def test_outcome_kinds():
    assert DiscoverySuccess().kind is DiscoveryOutcomeKind.SUCCESS
    assert DiscoverySuccess().apps == []
    assert DiscoveryUnauthorized().kind is DiscoveryOutcomeKind.UNAUTHORIZED

    failure = DiscoveryFailure(status_code=503)
    assert failure.kind is DiscoveryOutcomeKind.FAILURE
    assert failure.status_code == 503
