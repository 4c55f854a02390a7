from __future__ import annotations

from dataclasses import dataclass
import xml.etree.ElementTree as ET


def fmt_number(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


@dataclass(frozen=True)
class SvgRect:
    x: float
    y: float
    width: float
    height: float
    fill: str
    stroke: str
    stroke_width: float
    opacity: float = 1.0

    def to_element(self) -> ET.Element:
        return ET.Element(
            "rect",
            {
                "x": fmt_number(self.x),
                "y": fmt_number(self.y),
                "width": fmt_number(self.width),
                "height": fmt_number(self.height),
                "fill": self.fill,
                "stroke": self.stroke,
                "stroke-width": fmt_number(self.stroke_width),
                "opacity": fmt_number(self.opacity),
            },
        )


@dataclass(frozen=True)
class SvgLine:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float
    dasharray: str | None = None
    linecap: str | None = None

    def to_element(self) -> ET.Element:
        attrib = {
            "x1": fmt_number(self.x1),
            "y1": fmt_number(self.y1),
            "x2": fmt_number(self.x2),
            "y2": fmt_number(self.y2),
            "stroke": self.stroke,
            "stroke-width": fmt_number(self.stroke_width),
        }
        if self.dasharray:
            attrib["stroke-dasharray"] = self.dasharray
        if self.linecap:
            attrib["stroke-linecap"] = self.linecap
        return ET.Element("line", attrib)


@dataclass(frozen=True)
class SvgCircle:
    cx: float
    cy: float
    r: float
    fill: str

    def to_element(self) -> ET.Element:
        return ET.Element(
            "circle",
            {"cx": fmt_number(self.cx), "cy": fmt_number(self.cy), "r": fmt_number(self.r), "fill": self.fill},
        )


@dataclass(frozen=True)
class SvgPolyline:
    points: tuple[tuple[float, float], ...]
    stroke: str
    stroke_width: float

    def to_element(self) -> ET.Element:
        return ET.Element(
            "polyline",
            {
                "points": " ".join(f"{fmt_number(x)},{fmt_number(y)}" for x, y in self.points),
                "fill": "none",
                "stroke": self.stroke,
                "stroke-width": fmt_number(self.stroke_width),
            },
        )


@dataclass(frozen=True)
class SvgText:
    """Text anchored at its baseline origin, as SVG expects."""

    x: float
    y: float
    text: str
    fill: str
    font_family: str
    font_size: float

    def to_element(self) -> ET.Element:
        elem = ET.Element(
            "text",
            {
                "x": fmt_number(self.x),
                "y": fmt_number(self.y),
                "fill": self.fill,
                "font-family": self.font_family,
                "font-size": fmt_number(self.font_size),
            },
        )
        elem.text = self.text
        return elem


SvgShape = SvgRect | SvgLine | SvgCircle | SvgPolyline | SvgText
