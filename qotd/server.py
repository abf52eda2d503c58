from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

import uvicorn
from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from common.logging_setup import get_logger
from common.types import Layout
from common.utils import iso_now_ms, timer_ms
from qotd import __version__
from qotd.config import load_config
from qotd.errors import BadModeError, WorkerError
from qotd.png import encode_png
from qotd.quotes import MODES, ZenQuotesService
from qotd.render import Fonts, load_fonts, new_canvas, render_demo, render_quote


log = get_logger("qotd.server")

P = load_config()

layout = Layout.from_dict(P.get("layout"))
quotes_cfg = P.get("quotes", {})
QUOTE_MODE = str(quotes_cfg.get("mode", "today"))
COMPRESS_LEVEL = int(P.get("png", {}).get("compress_level", 9))

quotes = ZenQuotesService(
    base_url=quotes_cfg.get("base_url", "https://zenquotes.io/api"),
    timeout=float(quotes_cfg.get("timeout_s", 8.0)),
)

# Font loading problems surface per request as 400s, not at import time
_fonts: Optional[Fonts] = None


def _get_fonts() -> Fonts:
    global _fonts
    if _fonts is None:
        _fonts = load_fonts(layout, P.get("fonts"))
    return _fonts


def _location(req: Request) -> Tuple[Tuple[float, float], str]:
    """Client coordinates and region from edge headers, with defaults."""
    try:
        coords = (
            float(req.headers.get("cf-iplatitude", 0.0)),
            float(req.headers.get("cf-iplongitude", 0.0)),
        )
    except ValueError:
        coords = (0.0, 0.0)
    return coords, req.headers.get("cf-region") or "unknown region"


def _png_response(png: bytes) -> Response:
    return Response(content=png, media_type="image/png", headers={"Cache-Control": "no-store"})


app = FastAPI(title="Quote-of-the-Day Worker", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_request(request: Request, call_next):
    coords, region = _location(request)
    log.info(
        "%s - [%s], located at: %s, within: %s",
        iso_now_ms(),
        request.url.path,
        coords,
        region,
    )
    return await call_next(request)


@app.exception_handler(WorkerError)
async def worker_error_handler(request: Request, exc: WorkerError):
    log.warning(
        "request failed",
        extra={"extra": {"path": request.url.path, "status": exc.status_code, "error": exc.error}},
    )
    return JSONResponse({"error": exc.error, "detail": exc.detail}, status_code=exc.status_code)


@app.get("/", response_class=PlainTextResponse)
def home():
    return "Hello from the quote worker!"


@timer_ms
def _build_quote_png(mode: str) -> bytes:
    quote = quotes.get_quote(mode)
    image = render_quote(new_canvas(layout), quote, layout, _get_fonts())
    return encode_png(image, COMPRESS_LEVEL)


@app.get("/image")
def image(mode: Optional[str] = Query(None)):
    """
    Return today's quote as a PNG card.

    Errors:
      503  upstream unreachable or answer not decodable
      400  unknown mode or rendering failed
      500  PNG encoding failed
    """
    mode = mode or QUOTE_MODE
    if mode not in MODES:
        raise BadModeError(mode, MODES)
    png, dt_ms = _build_quote_png(mode)
    log.info("quote card rendered", extra={"extra": {"bytes": len(png), "ms": round(dt_ms, 1), "mode": mode}})
    return _png_response(png)


@app.get("/demo")
def demo():
    """Return the static demo graphic as a PNG."""
    return _png_response(encode_png(render_demo(layout, _get_fonts()), COMPRESS_LEVEL))


@app.get("/worker-version", response_class=PlainTextResponse)
def worker_version():
    return os.environ.get("WORKER_VERSION") or __version__


@app.get("/health")
def health() -> Dict:
    return {
        "status": "ok",
        "version": __version__,
        "quotes": {"url": quotes.build_url(QUOTE_MODE), "timeout_s": quotes.timeout},
        "layout": {"width": layout.width, "height": layout.height, "max_line": layout.max_line},
    }


# -------- local dev entrypoint --------
def main() -> None:
    server_cfg = P.get("server", {})
    uvicorn.run(app, host=server_cfg.get("host", "0.0.0.0"), port=int(server_cfg.get("port", 8787)))


if __name__ == "__main__":
    main()
