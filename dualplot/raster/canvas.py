from __future__ import annotations

from typing import Sequence

import numpy as np
from PIL import Image

from dualplot.config import check_margin
from dualplot.fonts import Font, FontCache, sized_font
from dualplot.layout import grid_positions
from dualplot.raster.draw_lines import line_points
from dualplot.raster.draw_text import blend_mask, render_mask
from dualplot.styles import Color, LineType


class PixelCanvas:
    """RGB pixel buffer with a margin reserved for axis decoration.

    Coordinates are `(x, y)` with the origin at the top-left; anything
    outside the buffer is clipped without error.
    """

    def __init__(
        self,
        width: int,
        height: int,
        margin: int,
        background: Color = (255, 255, 255),
        font_cache: FontCache | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        check_margin(width, height, margin)
        self.width = width
        self.height = height
        self.margin = margin
        self.font_cache = font_cache
        self.pixels = np.zeros((height, width, 3), dtype=np.uint8)
        self.pixels[:, :] = background

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def draw_pixel(self, x: int, y: int, color: Color) -> None:
        if not self.in_bounds(x, y):
            return
        self.pixels[y, x] = color

    def get_pixel(self, x: int, y: int) -> Color:
        if not self.in_bounds(x, y):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} canvas")
        r, g, b = self.pixels[y, x]
        return (int(r), int(g), int(b))

    def draw_line(
        self,
        x1: int,
        y1: int,
        x2: int,
        y2: int,
        color: Color,
        style: LineType = LineType.SOLID,
    ) -> None:
        for step, (x, y) in enumerate(line_points(int(x1), int(y1), int(x2), int(y2))):
            if style.is_on(step):
                self.draw_pixel(x, y, color)

    def draw_rect(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        if w <= 0 or h <= 0:
            return
        x0 = max(0, x)
        y0 = max(0, y)
        x1 = min(self.width, x + w)
        y1 = min(self.height, y + h)
        if x1 <= x0 or y1 <= y0:
            return
        self.pixels[y0:y1, x0:x1] = color

    def draw_circle(self, cx: int, cy: int, radius: int, color: Color) -> None:
        if radius <= 0:
            self.draw_pixel(cx, cy, color)
            return
        r2 = radius * radius
        for yy in range(max(0, cy - radius), min(self.height, cy + radius + 1)):
            dy2 = (yy - cy) * (yy - cy)
            span = int((r2 - dy2) ** 0.5)
            x0 = max(0, cx - span)
            x1 = min(self.width, cx + span + 1)
            if x1 > x0:
                self.pixels[yy, x0:x1] = color

    def draw_grid(self, counts: Sequence[int], color: Color) -> None:
        """Draw `counts[0]` horizontal and `counts[1]` vertical grid lines.

        Lines sit strictly inside the plot area; see `grid_positions` for
        how leftover pixels are distributed.
        """
        num_horizontal, num_vertical = counts
        left = self.margin
        right = self.width - self.margin - 1
        top = self.margin
        bottom = self.height - self.margin - 1
        plot_w = self.width - 2 * self.margin
        plot_h = self.height - 2 * self.margin

        for y in grid_positions(top, plot_h, num_horizontal):
            self.pixels[y, left : right + 1] = color
        for x in grid_positions(left, plot_w, num_vertical):
            self.pixels[top : bottom + 1, x] = color

    def draw_text(self, x: int, y: int, text: str, color: Color, font: Font, scale: float) -> None:
        """Composite `text` with the top-left of its ink box at `(x, y)`."""
        mask = render_mask(text, sized_font(font, scale))
        blend_mask(self.pixels, int(x), int(y), mask, color)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels.copy())

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()
