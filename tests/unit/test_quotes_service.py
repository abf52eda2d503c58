"""
Unit tests for the ZenQuotes client
"""

import pytest
import os
import sys
from unittest.mock import Mock

import requests
from requests.utils import get_encoding_from_headers

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(project_root)

from common.types import Quote
from qotd.errors import QuoteDecodeError, QuoteFetchError
from qotd.quotes import ZenQuotesService

BODY = '[{"q":"Well begun is half done.","a":"Aristotle","h":"<blockquote>...</blockquote>"}]'


def _response(status_code=200, text=BODY, content_type="text/html; charset=UTF-8"):
    r = Mock()
    r.status_code = status_code
    r.text = text
    r.content = text.encode("utf-8")
    r.headers = {"Content-Type": content_type}
    return r


def _service(response=None, side_effect=None):
    session = Mock()
    session.get.return_value = response
    if side_effect is not None:
        session.get.side_effect = side_effect
    return ZenQuotesService(session=session, timeout=2.0), session


class TestZenQuotesService:
    """Test cases for ZenQuotesService"""

    def test_build_url(self):
        svc = ZenQuotesService(base_url="https://zenquotes.io/api/", session=Mock())
        assert svc.build_url() == "https://zenquotes.io/api/today"
        assert svc.build_url("random") == "https://zenquotes.io/api/random"

    def test_build_url_unknown_mode(self):
        svc = ZenQuotesService(session=Mock())
        with pytest.raises(ValueError):
            svc.build_url("yesterday")

    def test_get_quote_success(self):
        """First array element becomes the quote, html field ignored"""
        svc, session = _service(_response())
        quote = svc.get_quote()

        assert quote == Quote(text="Well begun is half done.", author="Aristotle")
        args, kwargs = session.get.call_args
        assert args[0] == "https://zenquotes.io/api/today"
        assert kwargs["timeout"] == 2.0
        assert "User-Agent" in kwargs["headers"]

    def test_get_quote_ignores_content_type(self):
        """The API mislabels JSON as text/plain; it is decoded anyway"""
        svc, _ = _service(_response(content_type="text/plain"))
        assert svc.get_quote().author == "Aristotle"

    def test_transport_failure(self):
        svc, _ = _service(side_effect=requests.ConnectionError("network down"))
        with pytest.raises(QuoteFetchError) as ei:
            svc.get_quote()
        assert ei.value.status_code == 503
        assert ei.value.detail.startswith("no quotes available:")

    def test_non_200(self):
        svc, _ = _service(_response(status_code=429, text="Too many requests"))
        with pytest.raises(QuoteFetchError, match="429"):
            svc.get_quote()

    def test_empty_body(self):
        svc, _ = _service(_response(text=""))
        with pytest.raises(QuoteFetchError):
            svc.get_quote()

    def test_not_json(self):
        svc, _ = _service(_response(text="<html>maintenance</html>"))
        with pytest.raises(QuoteDecodeError) as ei:
            svc.get_quote()
        assert ei.value.status_code == 503
        assert ei.value.detail.startswith("no JSON quotes available:")

    @pytest.mark.parametrize(
        "body",
        [
            "[]",
            '{"q": "x", "a": "y"}',
            '[{"q": "only text"}]',
            '[{"q": 1, "a": "y"}]',
            '["just a string"]',
        ],
    )
    def test_bad_shapes(self, body):
        svc, _ = _service(_response(text=body))
        with pytest.raises(QuoteDecodeError):
            svc.get_quote()

    @pytest.mark.parametrize("content_type", ["text/html", "text/plain"])
    def test_utf8_body_with_charsetless_label(self, content_type):
        """Non-ASCII quotes survive a Content-Type that implies ISO-8859-1"""
        r = requests.Response()
        r.status_code = 200
        r.headers["Content-Type"] = content_type
        r._content = '[{"q":"Don’t wait.","a":"Zoë"}]'.encode("utf-8")
        r.encoding = get_encoding_from_headers(r.headers)
        assert r.encoding == "ISO-8859-1"

        svc, _ = _service(r)
        assert svc.get_quote() == Quote(text="Don’t wait.", author="Zoë")

    def test_parse_accepts_bytes_and_str(self):
        assert ZenQuotesService.parse(BODY.encode("utf-8")) == ZenQuotesService.parse(BODY)

    def test_parse_invalid_utf8(self):
        with pytest.raises(QuoteDecodeError):
            ZenQuotesService.parse(b'[{"q":"\xff","a":"x"}]')
