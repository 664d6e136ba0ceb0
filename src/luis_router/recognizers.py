"""
Recognizer definitions for the registered LUIS applications.

The host bot turns each LuisRecognizer into a live recognizer with its
own SDK; this module only decides what each one is configured with.
Prediction options are attached only when spell checking or telemetry
is switched on.
"""

from dataclasses import dataclass
from typing import Any, Optional

import structlog

from luis_router.config import Settings
from luis_router.exceptions import RouterConfigurationError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LuisApplication:
    app_id: str
    endpoint_key: str
    endpoint: str


@dataclass(frozen=True)
class LuisPredictionOptions:
    telemetry_client: Any = None
    log: bool = False
    log_personal_information: bool = False
    bing_spell_check_subscription_key: Optional[str] = None
    spell_check: bool = False
    include_all_intents: bool = False


@dataclass(frozen=True)
class LuisRecognizer:
    name: str
    application: LuisApplication
    prediction_options: Optional[LuisPredictionOptions] = None


def build_prediction_options(
    settings: Settings, telemetry_client: Any = None
) -> Optional[LuisPredictionOptions]:
    """Return prediction options, or None when neither feature is enabled."""
    spell_check_key = settings.BING_SPELL_CHECK_SUBSCRIPTION_KEY
    telemetry = settings.ENABLE_LUIS_TELEMETRY

    if not spell_check_key and not telemetry:
        return None

    options: dict[str, Any] = {}
    if telemetry:
        options.update(
            telemetry_client=telemetry_client,
            log=True,
            log_personal_information=True,
        )
    if spell_check_key:
        options.update(
            bing_spell_check_subscription_key=spell_check_key,
            spell_check=True,
            include_all_intents=True,
        )
    return LuisPredictionOptions(**options)


def build_recognizers(
    settings: Settings, telemetry_client: Any = None
) -> dict[str, LuisRecognizer]:
    """
    Build one recognizer per configured LUIS application, keyed by name.

    Args:
        settings: Application settings (LUIS_APPLICATIONS and options)
        telemetry_client: Passed through to prediction options when
            ENABLE_LUIS_TELEMETRY is set

    Returns:
        Mapping of application name to LuisRecognizer

    Raises:
        RouterConfigurationError: Two applications share a name
    """
    prediction_options = build_prediction_options(settings, telemetry_client)
    recognizers: dict[str, LuisRecognizer] = {}

    for app in settings.LUIS_APPLICATIONS:
        if app.name in recognizers:
            raise RouterConfigurationError(
                f"Duplicate LUIS application name: {app.name}",
                details={"name": app.name},
            )
        recognizers[app.name] = LuisRecognizer(
            name=app.name,
            application=LuisApplication(
                app_id=app.app_id,
                endpoint_key=app.authoring_key,
                endpoint=app.endpoint,
            ),
            prediction_options=prediction_options,
        )

    logger.info(
        "Built LUIS recognizers",
        count=len(recognizers),
        names=list(recognizers),
        spell_check=bool(settings.BING_SPELL_CHECK_SUBSCRIPTION_KEY),
        telemetry=settings.ENABLE_LUIS_TELEMETRY,
    )
    return recognizers
