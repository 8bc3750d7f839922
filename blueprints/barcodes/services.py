# blueprints/barcodes/services.py
"""Display tokens for laundry bags and their bitmap rendering.

The image is a visual stand-in, not a real symbology: bar heights and
presence are derived from each character code so the same text always
produces the same picture.
"""
from __future__ import annotations
import io
import re
import secrets
import time

from PIL import Image, ImageDraw, ImageFont

DEFAULT_PREFIX = "LDY"
TOKEN_DIGITS = 8

WIDTH = 300
HEIGHT = 120
MARGIN = 20
BAR_WIDTH = 3
BARS_PER_CHAR = 3
BAR_TOP = 20
TEXT_Y = 98

def token_pattern(prefix: str = DEFAULT_PREFIX) -> re.Pattern:
    return re.compile(rf"^{re.escape(prefix)}\d{{{TOKEN_DIGITS}}}$")

def generate_token(now_ms: int | None = None, prefix: str = DEFAULT_PREFIX) -> str:
    """prefix + the last 8 digits of the millisecond clock."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"{prefix}{now_ms % 10 ** TOKEN_DIGITS:0{TOKEN_DIGITS}d}"

def random_token(prefix: str = DEFAULT_PREFIX) -> str:
    return f"{prefix}{secrets.randbelow(10 ** TOKEN_DIGITS):0{TOKEN_DIGITS}d}"

def _canvas_width(text: str) -> int:
    per_char = BARS_PER_CHAR * (BAR_WIDTH + 1) + 2
    return max(WIDTH, 2 * MARGIN + per_char * len(text))

def render_image(text: str) -> Image.Image:
    if not text:
        raise ValueError("text_required")
    img = Image.new("RGB", (_canvas_width(text), HEIGHT), "white")
    draw = ImageDraw.Draw(img)

    x = MARGIN
    for ch in text:
        code = ord(ch)
        height = 60 + (code % 20)
        for j in range(BARS_PER_CHAR):
            if (code + j) % 2 == 0:
                draw.rectangle([x, BAR_TOP, x + BAR_WIDTH - 1, BAR_TOP + height - 1], fill="black")
            x += BAR_WIDTH + 1
        x += 2

    font = ImageFont.load_default()
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    text_x = (img.width - (right - left)) // 2
    draw.text((text_x, TEXT_Y), text, fill="black", font=font)
    return img

def render_png(text: str) -> bytes:
    buf = io.BytesIO()
    render_image(text).save(buf, format="PNG")
    return buf.getvalue()
