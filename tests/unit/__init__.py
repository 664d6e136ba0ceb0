"""
Unit tests for the LUIS router client.

Test individual components in isolation:
- Wire models and discovery outcomes
- Identity and discovery clients (respx-mocked router)
- Retry orchestrator (mocked clients, patched sleep)
- Token cache backends, cipher, settings, recognizers
- API endpoints (dependency overrides)
"""
