from __future__ import annotations

from typing import Iterable
import xml.etree.ElementTree as ET

from dualplot.config import check_margin
from dualplot.fonts import FontCache
from dualplot.vector.shapes import SvgCircle, SvgLine, SvgPolyline, SvgRect, SvgShape, SvgText, fmt_number

SVG_NS = "http://www.w3.org/2000/svg"


class SvgCanvas:
    """Append-only list of shape records serialized to an SVG document.

    Coordinates are used as given; the document keeps shapes in the order
    they were drawn, so later shapes paint over earlier ones.
    """

    def __init__(self, width: int, height: int, margin: int, font_cache: FontCache | None = None) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        check_margin(width, height, margin)
        self.width = width
        self.height = height
        self.margin = margin
        self.font_cache = font_cache
        self.shapes: list[SvgShape] = []

    def draw_rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        fill_color: str,
        stroke_color: str,
        stroke_width: float,
        opacity: float,
    ) -> None:
        self.shapes.append(SvgRect(x, y, w, h, fill_color, stroke_color, stroke_width, opacity))

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        stroke_color: str,
        stroke_width: float = 1.0,
        dasharray: str | None = None,
        linecap: str | None = None,
    ) -> None:
        self.shapes.append(SvgLine(x1, y1, x2, y2, stroke_color, stroke_width, dasharray, linecap))

    def draw_circle(self, cx: float, cy: float, r: float, fill_color: str) -> None:
        self.shapes.append(SvgCircle(cx, cy, r, fill_color))

    def draw_polyline(self, points: Iterable[tuple[float, float]], stroke_color: str, stroke_width: float = 1.0) -> None:
        pts = tuple((float(x), float(y)) for x, y in points)
        if len(pts) < 2:
            return
        self.shapes.append(SvgPolyline(pts, stroke_color, stroke_width))

    def draw_text(self, x: float, y: float, text: str, fill_color: str, font_family: str, font_size: float) -> None:
        self.shapes.append(SvgText(x, y, text, fill_color, font_family, font_size))

    def to_element(self) -> ET.Element:
        root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "width": fmt_number(self.width),
                "height": fmt_number(self.height),
                "viewBox": f"0 0 {fmt_number(self.width)} {fmt_number(self.height)}",
            },
        )
        for shape in self.shapes:
            root.append(shape.to_element())
        return root

    def serialize(self) -> str:
        return ET.tostring(self.to_element(), encoding="unicode")
