from __future__ import annotations

import logging

from dualplot.styles import AxisType

LOGGER = logging.getLogger(__name__)


def saturating_sub(a: int, b: int) -> int:
    return max(0, a - b)


def center_anchor(x: int, y: int, w: int, h: int) -> tuple[int, int]:
    """Top-left anchor that centers a `w` x `h` box on `(x, y)`, floored at the origin."""
    return (saturating_sub(x, w // 2), saturating_sub(y, h // 2))


def axis_value_anchor(x: int, y: int, w: int, h: int, axis: AxisType) -> tuple[int, int]:
    """Top-left anchor of a tick value label for a tick at `(x, y)`.

    X-axis values are centered horizontally and pushed one text height below
    the tick. Y-axis values are right-aligned to the tick and centered
    vertically.
    """
    if axis is AxisType.AXIS_X:
        return (saturating_sub(x, w // 2), y + h)
    if axis is AxisType.AXIS_Y:
        return (saturating_sub(x, w), saturating_sub(y, h // 2))
    raise ValueError(f"unknown axis type: {axis!r}")


def grid_positions(start: int, extent: int, count: int) -> list[int]:
    """Evenly spaced interior line positions within `[start, start + extent)`.

    Spacing is `extent // (count + 1)`; the leftover pixels widen the last
    interval, between the final line and the far edge.
    """
    if count <= 0:
        return []
    step = extent // (count + 1)
    if step < 1:
        LOGGER.debug("extent %d too small for %d grid lines", extent, count)
        return []
    return [start + i * step for i in range(1, count + 1)]


def plot_rect(width: int, height: int, margin: int) -> tuple[int, int, int, int]:
    """Half-open `(x0, y0, x1, y1)` plot area inside the margin."""
    return (margin, margin, width - margin, height - margin)
