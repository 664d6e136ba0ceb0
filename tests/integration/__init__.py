"""
Integration tests for the LUIS router client.

Run the real clients, cipher and token cache together against a
respx-mocked router. Redis-backed tests need a local Redis.
"""
