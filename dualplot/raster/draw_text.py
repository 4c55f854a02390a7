from __future__ import annotations

import numpy as np
from PIL import Image, ImageDraw

from dualplot.fonts import Font
from dualplot.styles import Color


def render_mask(text: str, font: Font) -> np.ndarray:
    """8-bit glyph coverage cropped to the ink box of `text`."""
    if not text:
        return np.zeros((0, 0), dtype=np.uint8)
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


def blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: Color) -> None:
    if mask.size == 0:
        return
    h, w = mask.shape
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    if not np.any(cov > 0):
        return
    patch = dst[y0:y1, x0:x1]
    src = np.asarray(color, dtype=np.float32).reshape(1, 1, 3)
    out = src * cov[:, :, None] + patch.astype(np.float32) * (1.0 - cov[:, :, None])
    patch[:, :, :] = np.clip(np.rint(out), 0, 255).astype(np.uint8)
