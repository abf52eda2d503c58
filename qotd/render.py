from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from common.logging_setup import get_logger
from common.types import Layout, Quote
from qotd.errors import RenderError
from qotd.wrap import wrap_words


log = get_logger("qotd.render")

Font = Union[ImageFont.ImageFont, ImageFont.FreeTypeFont]


@dataclass(frozen=True)
class Fonts:
    header: Font
    author: Font
    quote: Font


def _load_font(path: Optional[str], size: int) -> Font:
    if path:
        if not Path(path).is_file():
            raise RenderError(f"font not found: {path}")
        try:
            return ImageFont.truetype(path, size)
        except OSError as e:
            raise RenderError(f"cannot load font {path}: {e}") from e
    return ImageFont.load_default(size=size)


def load_fonts(layout: Layout, paths: Optional[Mapping[str, Optional[str]]] = None) -> Fonts:
    """
    TrueType fonts from `paths` (keys header_path/author_path/quote_path),
    falling back to Pillow's built-in font at the layout's sizes.
    """
    paths = paths or {}
    return Fonts(
        header=_load_font(paths.get("header_path"), layout.header_font_size),
        author=_load_font(paths.get("author_path"), layout.author_font_size),
        quote=_load_font(paths.get("quote_path"), layout.quote_font_size),
    )


def new_canvas(layout: Layout) -> Image.Image:
    return Image.new("RGB", layout.size, layout.background)


def _text(draw: ImageDraw.ImageDraw, xy: Tuple[float, float], text: str, font: Font, fill, anchor: str) -> None:
    """
    Draw with a Pillow text anchor. Bitmap fonts do not support anchors, so
    their offset is computed from the text bbox instead.
    """
    if isinstance(font, ImageFont.FreeTypeFont):
        draw.text(xy, text, font=font, fill=fill, anchor=anchor)
        return
    x, y = xy
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    if anchor[0] == "m":
        x -= (right - left) / 2.0
    if anchor[1] in ("s", "b"):
        y -= bottom
    draw.text((x, y), text, font=font, fill=fill)


# -------------------- QUOTE CARD --------------------

def _header(draw: ImageDraw.ImageDraw, layout: Layout, fonts: Fonts) -> None:
    draw.rectangle((0, 0, layout.width - 1, layout.header_h - 1), fill=layout.highlight)
    _text(
        draw,
        (layout.width / 2.0, layout.header_font_h),
        layout.header_title,
        fonts.header,
        layout.header_fg,
        anchor="ms",
    )


def render_quote(image: Image.Image, quote: Quote, layout: Layout, fonts: Fonts) -> Image.Image:
    """
    Draw the quote card onto `image` (cleared first):

        +--------------------------------+
        |        Quote of the Day        |  red band, height/4
        +--------------------------------+
        | Author                         |
        | wrapped quote text, one line   |
        | per max_line characters ...    |
        +--------------------------------+

    Lines whose cell would reach past the bottom edge are dropped (and logged).
    Any drawing failure is raised as RenderError.
    """
    if image.size != layout.size:
        raise RenderError(f"canvas is {image.size}, layout expects {layout.size}")
    try:
        draw = ImageDraw.Draw(image)
        draw.rectangle((0, 0, layout.width - 1, layout.height - 1), fill=layout.background)
        _header(draw, layout, fonts)

        pad = layout.pad
        _text(draw, (pad, layout.header_h + pad), quote.author, fonts.author, layout.foreground, anchor="lt")

        lines = wrap_words(quote.text, layout.max_line)
        drawn = 0
        for i, line in enumerate(lines):
            top = layout.quote_line_top(i)
            if top + layout.quote_font_h > layout.height:
                break
            _text(draw, (pad, top), line, fonts.quote, layout.foreground, anchor="lt")
            drawn += 1
    except RenderError:
        raise
    except (OSError, ValueError, TypeError) as e:
        log.exception("render failed")
        raise RenderError(str(e)) from e

    if drawn < len(lines):
        log.warning(
            "quote clipped",
            extra={"extra": {"lines": len(lines), "drawn": drawn, "author": quote.author}},
        )
    return image


# -------------------- DEMO --------------------

def render_demo(layout: Layout, fonts: Fonts, greeting: str = "Hello World!") -> Image.Image:
    """
    Static demo scene: outlined circle, filled triangle, filled square and a
    greeting line, all scaled to the canvas height.
    """
    image = new_canvas(layout)
    try:
        draw = ImageDraw.Draw(image)
        s = max(8, layout.height // 3)  # shape size
        y0 = layout.pad * 2
        x = layout.pad * 2

        draw.ellipse((x, y0, x + s, y0 + s), outline=layout.foreground, width=1)
        x += s + 2 * layout.pad

        draw.polygon(
            [(x + s // 2, y0), (x, y0 + s), (x + s, y0 + s)],
            fill=layout.highlight,
        )
        x += s + 2 * layout.pad

        draw.rectangle((x, y0, x + s, y0 + s), fill=layout.foreground)

        _text(
            draw,
            (layout.width / 2.0, layout.height - 2 * layout.pad),
            greeting,
            fonts.quote,
            layout.foreground,
            anchor="ms",
        )
    except (OSError, ValueError, TypeError) as e:
        log.exception("demo render failed")
        raise RenderError(str(e)) from e
    return image
