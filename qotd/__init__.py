"""
Quote-of-the-Day worker

- Fetches today's quote from ZenQuotes (https://zenquotes.io/api/today)
- Renders it onto a 296x128 RGB canvas with Pillow (red header, author, wrapped text)
- Serves the PNG at /image; a static demo graphic at /demo
- Plain-text endpoints: / (greeting), /worker-version

Run:
    uvicorn qotd.server:app --port 8787
"""
__version__ = "0.3.0"
