from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Mapping, Optional, Tuple


RGB = Tuple[int, int, int]

WHITE: RGB = (255, 255, 255)
BLACK: RGB = (0, 0, 0)
RED: RGB = (255, 0, 0)


def _as_rgb(x) -> RGB:
    if len(x) != 3:
        raise ValueError("color must have 3 components")
    r, g, b = (int(c) for c in x)
    for c in (r, g, b):
        if not 0 <= c <= 255:
            raise ValueError("color components must be in 0..255")
    return (r, g, b)


@dataclass(frozen=True, slots=True)
class Quote:
    """
    A single quote as served by ZenQuotes.

    Attributes:
        text: quote body (API field `q`).
        author: attribution (API field `a`).
    """
    text: str
    author: str

    @classmethod
    def from_api(cls, item: Mapping[str, Any]) -> "Quote":
        """Build from one element of the ZenQuotes JSON array; raises on a bad shape."""
        if not isinstance(item, Mapping):
            raise TypeError(f"expected an object, got {type(item).__name__}")
        q = item.get("q")
        a = item.get("a")
        if not isinstance(q, str) or not isinstance(a, str):
            raise ValueError("quote object needs string fields 'q' and 'a'")
        return cls(text=q.strip(), author=a.strip())

    def to_dict(self) -> Dict[str, str]:
        return {"q": self.text, "a": self.author}


@dataclass(frozen=True, slots=True)
class Layout:
    """
    Canvas geometry and typography for the quote card (pixels).

    Glyph metrics are used for layout only; the real fonts may be slightly
    smaller or larger.
    """
    width: int = 296
    height: int = 128
    pad: int = 3
    header_title: str = "Quote of the Day"
    header_font_size: int = 20
    header_font_h: int = 20
    author_font_size: int = 13
    author_font_h: int = 7
    quote_font_size: int = 20
    quote_font_w: int = 10
    quote_font_h: int = 14
    background: RGB = WHITE
    foreground: RGB = BLACK
    highlight: RGB = RED
    header_fg: RGB = WHITE

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("canvas width/height must be > 0")
        if self.pad < 0:
            raise ValueError("pad must be >= 0")
        if self.quote_font_w <= 0 or self.quote_font_h <= 0:
            raise ValueError("quote glyph metrics must be > 0")
        for name in ("background", "foreground", "highlight", "header_fg"):
            object.__setattr__(self, name, _as_rgb(getattr(self, name)))

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def header_h(self) -> int:
        return self.height // 4

    @property
    def max_line(self) -> int:
        """Characters per quote line."""
        return max(1, (self.width - 2 * self.pad) // self.quote_font_w)

    def quote_line_top(self, i: int) -> int:
        """Top edge of the i-th (0-based) wrapped quote line."""
        return (
            self.header_h
            + self.pad
            + self.author_font_h
            + 3 * self.pad
            + i * (self.pad + self.quote_font_h)
        )

    @classmethod
    def from_dict(cls, d: Optional[Mapping[str, Any]]) -> "Layout":
        """Build from a config mapping; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        kwargs = {k: (tuple(v) if isinstance(v, list) else v) for k, v in (d or {}).items() if k in known}
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
