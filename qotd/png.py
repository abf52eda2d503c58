from __future__ import annotations

import io

from PIL import Image

from common.utils import clamp
from qotd.errors import EncodeError


def encode_png(image: Image.Image, compress_level: int = 9) -> bytes:
    """
    Encode an RGB canvas as PNG (8-bit RGB). Level 9 is the smallest output.
    Failures are raised as EncodeError with the buffer dimensions attached.
    """
    buf = io.BytesIO()
    try:
        rgb = image if image.mode == "RGB" else image.convert("RGB")
        rgb.save(buf, format="PNG", compress_level=clamp(compress_level, 0, 9))
    except (OSError, ValueError) as e:
        raise EncodeError(repr(e), dims=image.size) from e
    return buf.getvalue()


def decode_png(data: bytes) -> Image.Image:
    """Decode PNG bytes into a fully loaded Pillow image."""
    img = Image.open(io.BytesIO(data))
    if img.format != "PNG":
        raise ValueError(f"not a PNG: {img.format}")
    img.load()
    return img
