from .canvas import SvgCanvas
from .shapes import SvgCircle, SvgLine, SvgPolyline, SvgRect, SvgShape, SvgText

__all__ = [
    "SvgCanvas",
    "SvgCircle",
    "SvgLine",
    "SvgPolyline",
    "SvgRect",
    "SvgShape",
    "SvgText",
]
