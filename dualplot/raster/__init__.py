from .canvas import PixelCanvas
from .draw_lines import line_points
from .draw_text import blend_mask, render_mask

__all__ = [
    "PixelCanvas",
    "blend_mask",
    "line_points",
    "render_mask",
]
