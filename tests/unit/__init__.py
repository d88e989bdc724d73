"""
Unit tests for the Casting Director backend.

Test individual components in isolation:
- Backoff policy and retry engine (attempt cap, delays, terminal errors)
- Gemini client against an httpx MockTransport
- Response envelope decoding and prompt rendering
- Actor fee cache (normalization, TTL boundary, store faults)
- Services and HTTP routes with fakes
"""
