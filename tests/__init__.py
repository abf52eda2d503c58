"""
Quote-of-the-Day worker test suite

Structure:
- unit/: wrapping, quote client, rendering, PNG encoding, config, logging
- integration/: the HTTP surface through FastAPI's TestClient
"""
