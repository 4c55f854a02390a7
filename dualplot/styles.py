from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

from dualplot.errors import FigureConfigError


Color = tuple[int, int, int]


class AxisType(Enum):
    AXIS_X = "x"
    AXIS_Y = "y"


class LineType(Enum):
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"

    @property
    def pattern(self) -> tuple[int, int] | None:
        """(on, off) run lengths in pixels, or None for an unbroken stroke."""
        return _LINE_PATTERNS[self]

    @property
    def dasharray(self) -> str | None:
        pattern = self.pattern
        if pattern is None:
            return None
        return f"{pattern[0]},{pattern[1]}"

    def is_on(self, step: int) -> bool:
        pattern = self.pattern
        if pattern is None:
            return True
        on, off = pattern
        return step % (on + off) < on


_LINE_PATTERNS: dict[LineType, tuple[int, int] | None] = {
    LineType.SOLID: None,
    LineType.DASHED: (6, 4),
    LineType.DOTTED: (1, 2),
}


def rgb_to_svg_color(color: Sequence[int]) -> str:
    return f"rgb({color[0]},{color[1]},{color[2]})"


def validate_color(name: str, value: Any) -> Color:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or len(value) != 3:
        raise FigureConfigError(f"`{name}` must be an (r, g, b) triple")
    out: list[int] = []
    for component in value:
        if isinstance(component, bool) or not isinstance(component, int):
            raise FigureConfigError(f"`{name}` components must be integers")
        if component < 0 or component > 255:
            raise FigureConfigError(f"`{name}` components must be in [0, 255]")
        out.append(component)
    return (out[0], out[1], out[2])
