"""
Exceptions for the router client layer.

The retry orchestrator only recovers from RouterTransportError and its
subclasses; anything else is treated as a programming or configuration
error and propagates.
"""


class RouterClientError(Exception):
    """
    Base exception for all router client errors.

    Carries a human-readable message plus a details dict for structured
    logging.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class RouterTransportError(RouterClientError):
    """
    Raised when a call to the router could not complete.

    Covers DNS failures, refused or reset connections and TLS errors.
    Triggers a fixed-delay retry in the orchestrator.
    """
    pass


class RouterTimeoutError(RouterTransportError):
    """Raised when the router does not answer within the request timeout."""
    pass


class RouterResponseError(RouterTransportError):
    """
    Raised when the router answers 2xx with a body we cannot decode.

    Examples:
    - Body is not JSON
    - JSON lacks the ``token`` field on /identity
    - JSON lacks ``Result.LuisAppDetails`` on /luisdiscovery
    """
    pass


class RouterConfigurationError(RouterClientError):
    """
    Raised at startup when configuration is unusable.

    Examples: duplicate LUIS application names, an encryption key of the
    wrong length.
    """
    pass
