"""
LUIS router client.

Finds the LUIS application that should handle an utterance by asking a
remote router service. The router is protected by short-lived bearer
tokens obtained through an encrypted identity exchange; the client
refreshes the token on 401 and retries, with a fixed backoff on network
failures.

Architecture: RetryOrchestrator -> DiscoveryClient / IdentityClient
(httpx) -> session TokenCache (memory or Redis), optional FastAPI host.
"""

__version__ = "0.1.0"
