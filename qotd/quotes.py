from __future__ import annotations

"""
ZenQuotes client.

Usage:
    svc = ZenQuotesService()
    quote = svc.get_quote()          # today's quote
    quote = svc.get_quote("random")  # a random one

The API answers with a JSON array of objects
    [{"q": "<text>", "a": "<author>", "h": "<html>"}]
but labels the body as text/html without a charset, so the raw bytes are
handed to json.loads (UTF-8) and the Content-Type is never consulted.
"""

import json
import logging
from typing import Any, List, Optional, Union

import requests

from common.types import Quote
from qotd.errors import QuoteDecodeError, QuoteFetchError


log = logging.getLogger(__name__)

MODES = ("today", "random")
USER_AGENT = "qotd-worker/0.3"


class ZenQuotesService:
    def __init__(
        self,
        base_url: str = "https://zenquotes.io/api",
        session: Optional[requests.Session] = None,
        timeout: float = 8.0,
    ):
        """
        Params:
            base_url: API root; the mode is appended as the last path segment
            session: optional requests.Session for connection reuse
            timeout: per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = float(timeout)

    # ----------------------------
    # Public API
    # ----------------------------
    def build_url(self, mode: str = "today") -> str:
        if mode not in MODES:
            raise ValueError(f"unknown quote mode {mode!r}; expected one of {MODES}")
        return f"{self.base_url}/{mode}"

    def get_quote(self, mode: str = "today") -> Quote:
        """
        Fetch and decode the first quote of the response.

        Raises:
            QuoteFetchError: transport failure, non-200 status or empty body
            QuoteDecodeError: body is not JSON or not a non-empty array of quotes
        """
        url = self.build_url(mode)
        try:
            r = self.session.get(
                url,
                headers={"Accept": "application/json", "User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.warning("ZenQuotes request failed: %s", e)
            raise QuoteFetchError(repr(e)) from e

        if r.status_code != 200 or not r.content:
            log.warning("ZenQuotes request failed: %s %s", r.status_code, r.text[:200])
            raise QuoteFetchError(f"upstream status {r.status_code}")

        return self.parse(r.content)

    # ----------------------------
    # Decoding
    # ----------------------------
    @staticmethod
    def parse(body: Union[bytes, str]) -> Quote:
        try:
            data: Any = json.loads(body)
        except ValueError as e:
            raise QuoteDecodeError(str(e)) from e
        if not isinstance(data, list):
            raise QuoteDecodeError(f"expected a JSON array, got {type(data).__name__}")
        items: List[Any] = data
        if not items:
            raise QuoteDecodeError("empty quote list")
        try:
            return Quote.from_api(items[0])
        except (TypeError, ValueError) as e:
            raise QuoteDecodeError(str(e)) from e
