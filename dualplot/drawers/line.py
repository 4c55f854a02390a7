from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Any, Sequence

import numpy as np

from dualplot.config import FigureConfig
from dualplot.drawers.drawer import Drawer
from dualplot.layout import grid_positions, plot_rect
from dualplot.raster import PixelCanvas
from dualplot.styles import AxisType, Color, LineType
from dualplot.vector import SvgCanvas

TICK_LEN = 4
LEGEND_SWATCH = 12
LEGEND_PAD = 8


@dataclass(frozen=True, eq=False)
class Series:
    xs: np.ndarray
    ys: np.ndarray
    name: str | None = None
    color: Color = (31, 119, 180)
    style: LineType = LineType.SOLID

    def __post_init__(self) -> None:
        x = np.asarray(self.xs, dtype=np.float64).reshape(-1)
        y = np.asarray(self.ys, dtype=np.float64).reshape(-1)
        if x.size != y.size:
            raise ValueError("xs and ys must have the same length")
        object.__setattr__(self, "xs", x)
        object.__setattr__(self, "ys", y)

    @classmethod
    def from_values(
        cls,
        xs: Sequence[float] | np.ndarray,
        ys: Sequence[float] | np.ndarray,
        *,
        name: str | None = None,
        color: Color = (31, 119, 180),
        style: LineType = LineType.SOLID,
    ) -> "Series":
        return cls(xs=xs, ys=ys, name=name, color=color, style=style)


@dataclass(frozen=True)
class DataLimits:
    xmin: float
    xmax: float
    ymin: float
    ymax: float


def _span(lo: float, hi: float) -> tuple[float, float]:
    if hi - lo <= 1e-12:
        return (lo - 0.5, hi + 0.5)
    return (lo, hi)


def format_tick(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


@dataclass(eq=False)
class LineChart(Drawer):
    """Reference line chart: one polyline per series over a shared axis pair."""

    config: FigureConfig
    series: list[Series] = field(default_factory=list)
    title: str = ""
    x_label: str = ""
    y_label: str = ""
    _limits: DataLimits | None = None

    @property
    def figure_config(self) -> FigureConfig:
        return self.config

    def add_series(self, xs: Any, ys: Any, **kwargs: Any) -> "LineChart":
        self.series.append(Series.from_values(xs, ys, **kwargs))
        self._limits = None
        return self

    def limits(self) -> DataLimits:
        if self._limits is None:
            self._limits = self._compute_limits()
        return self._limits

    def _compute_limits(self) -> DataLimits:
        finite_x: list[np.ndarray] = []
        finite_y: list[np.ndarray] = []
        for s in self.series:
            mask = np.isfinite(s.xs) & np.isfinite(s.ys)
            finite_x.append(s.xs[mask])
            finite_y.append(s.ys[mask])
        xs = np.concatenate(finite_x) if finite_x else np.empty(0)
        ys = np.concatenate(finite_y) if finite_y else np.empty(0)
        if xs.size == 0:
            return DataLimits(0.0, 1.0, 0.0, 1.0)
        xmin, xmax = _span(float(xs.min()), float(xs.max()))
        ymin, ymax = _span(float(ys.min()), float(ys.max()))
        return DataLimits(xmin, xmax, ymin, ymax)

    def _plot_box(self, width: int, height: int, margin: int) -> tuple[int, int, int, int]:
        # inclusive pixel bounds of the plot area
        x0, y0, x1, y1 = plot_rect(width, height, margin)
        return (x0, y0, x1 - 1, y1 - 1)

    def _to_pixels(self, x: float, y: float, box: tuple[int, int, int, int]) -> tuple[int, int]:
        lim = self.limits()
        x0, y0, x1, y1 = box
        px = x0 + (x - lim.xmin) / (lim.xmax - lim.xmin) * (x1 - x0)
        py = y1 - (y - lim.ymin) / (lim.ymax - lim.ymin) * (y1 - y0)
        return (int(round(px)), int(round(py)))

    def _ticks(self, box: tuple[int, int, int, int]) -> tuple[list[tuple[int, str]], list[tuple[int, str]]]:
        lim = self.limits()
        x0, y0, x1, y1 = box
        cfg = self.config
        xs = [x0] + grid_positions(x0, x1 - x0 + 1, cfg.num_grid_vertical) + [x1]
        ys = [y1] + grid_positions(y0, y1 - y0 + 1, cfg.num_grid_horizontal)[::-1] + [y0]
        x_ticks = [(px, format_tick(lim.xmin + (px - x0) / max(1, x1 - x0) * (lim.xmax - lim.xmin))) for px in xs]
        y_ticks = [(py, format_tick(lim.ymin + (y1 - py) / max(1, y1 - y0) * (lim.ymax - lim.ymin))) for py in ys]
        return x_ticks, y_ticks

    def _polylines(self, box: tuple[int, int, int, int]) -> list[tuple[Series, list[tuple[int, int]]]]:
        out: list[tuple[Series, list[tuple[int, int]]]] = []
        for s in self.series:
            run: list[tuple[int, int]] = []
            for x, y in zip(s.xs.tolist(), s.ys.tolist()):
                if not (math.isfinite(x) and math.isfinite(y)):
                    if run:
                        out.append((s, run))
                    run = []
                    continue
                run.append(self._to_pixels(x, y, box))
            if run:
                out.append((s, run))
        return out

    def draw(self, canvas: PixelCanvas) -> None:
        cfg = self.config
        box = self._plot_box(canvas.width, canvas.height, canvas.margin)
        x0, y0, x1, y1 = box

        self.fill_raster_background(canvas, cfg)
        self.draw_grid(canvas, cfg)
        self.draw_axis(canvas, cfg, x0, y0, x0, y1)
        self.draw_axis(canvas, cfg, x0, y1, x1, y1)
        if self.title:
            self.draw_title(canvas, cfg, canvas.width // 2, canvas.margin // 2, self.title)
        if self.x_label:
            self.draw_label(canvas, cfg, canvas.width // 2, canvas.height - canvas.margin // 4, self.x_label)
        if self.y_label:
            self.draw_label(canvas, cfg, canvas.margin // 4, canvas.height // 2, self.y_label)

        x_ticks, y_ticks = self._ticks(box)
        for px, text in x_ticks:
            self.draw_axis(canvas, cfg, px, y1, px, y1 + TICK_LEN)
            self.draw_axis_value(canvas, cfg, px, y1 + TICK_LEN, text, AxisType.AXIS_X)
        for py, text in y_ticks:
            self.draw_axis(canvas, cfg, x0 - TICK_LEN, py, x0, py)
            self.draw_axis_value(canvas, cfg, x0 - TICK_LEN - 2, py, text, AxisType.AXIS_Y)

        for s, points in self._polylines(box):
            if len(points) == 1:
                canvas.draw_pixel(points[0][0], points[0][1], s.color)
            for (ax, ay), (bx, by) in zip(points, points[1:]):
                canvas.draw_line(ax, ay, bx, by, s.color, s.style)

    def draw_legend(self, canvas: PixelCanvas) -> None:
        entries = [s for s in self.series if s.name]
        if not entries:
            return
        cfg = self.config
        font = self._font(canvas, cfg.font_label, cfg.font_size_axis, role="label")
        sizes = [self.metrics.measure(font, cfg.font_size_axis, s.name or "") for s in entries]
        row_h = max(LEGEND_SWATCH, max(h for _, h in sizes)) + 4
        text_w = max(w for w, _ in sizes)
        left = canvas.width - canvas.margin - LEGEND_PAD - text_w - LEGEND_SWATCH - 6
        top = canvas.margin + LEGEND_PAD
        for i, (s, (_, h)) in enumerate(zip(entries, sizes)):
            row_y = top + i * row_h
            canvas.draw_rect(left, row_y, LEGEND_SWATCH, LEGEND_SWATCH, s.color)
            canvas.draw_text(left + LEGEND_SWATCH + 6, row_y + (LEGEND_SWATCH - h) // 2, s.name or "", cfg.color_axis, font, cfg.font_size_axis)

    def draw_svg(self, svg_canvas: SvgCanvas) -> None:
        cfg = self.config
        box = self._plot_box(svg_canvas.width, svg_canvas.height, svg_canvas.margin)
        x0, y0, x1, y1 = box

        self.fill_vector_background(svg_canvas, cfg)
        self.draw_svg_grid(svg_canvas, cfg)
        self.draw_svg_axis(svg_canvas, cfg, x0, y0, x0, y1)
        self.draw_svg_axis(svg_canvas, cfg, x0, y1, x1, y1)
        if self.title:
            self.draw_svg_title(svg_canvas, cfg, svg_canvas.width // 2, svg_canvas.margin // 2, self.title)
        if self.x_label:
            self.draw_svg_label(svg_canvas, cfg, svg_canvas.width // 2, svg_canvas.height - svg_canvas.margin // 4, self.x_label)
        if self.y_label:
            self.draw_svg_label(svg_canvas, cfg, svg_canvas.margin // 4, svg_canvas.height // 2, self.y_label)

        x_ticks, y_ticks = self._ticks(box)
        for px, text in x_ticks:
            self.draw_svg_axis(svg_canvas, cfg, px, y1, px, y1 + TICK_LEN)
            self.draw_svg_axis_value(svg_canvas, cfg, px, y1 + TICK_LEN, text, AxisType.AXIS_X)
        for py, text in y_ticks:
            self.draw_svg_axis(svg_canvas, cfg, x0 - TICK_LEN, py, x0, py)
            self.draw_svg_axis_value(svg_canvas, cfg, x0 - TICK_LEN - 2, py, text, AxisType.AXIS_Y)

        for s, points in self._polylines(box):
            color = self.rgb_to_markup_color(s.color)
            if len(points) == 1:
                svg_canvas.draw_circle(points[0][0] + 0.5, points[0][1] + 0.5, 0.5, color)
                continue
            centered = [(x + 0.5, y + 0.5) for x, y in points]
            if s.style is LineType.SOLID:
                svg_canvas.draw_polyline(centered, color, 1.0)
            else:
                for (ax, ay), (bx, by) in zip(centered, centered[1:]):
                    svg_canvas.draw_line(ax, ay, bx, by, color, 1.0, s.style.dasharray)

        self._draw_svg_legend(svg_canvas)

    def _draw_svg_legend(self, svg_canvas: SvgCanvas) -> None:
        entries = [s for s in self.series if s.name]
        if not entries:
            return
        cfg = self.config
        font = self._font(svg_canvas, cfg.font_label, cfg.font_size_axis, role="label")
        sizes = [self.metrics.measure(font, cfg.font_size_axis, s.name or "") for s in entries]
        row_h = max(LEGEND_SWATCH, max(h for _, h in sizes)) + 4
        text_w = max(w for w, _ in sizes)
        left = svg_canvas.width - svg_canvas.margin - LEGEND_PAD - text_w - LEGEND_SWATCH - 6
        top = svg_canvas.margin + LEGEND_PAD
        for i, (s, (_, h)) in enumerate(zip(entries, sizes)):
            row_y = top + i * row_h
            color = self.rgb_to_markup_color(s.color)
            svg_canvas.draw_rect(left, row_y, LEGEND_SWATCH, LEGEND_SWATCH, color, "none", 0.0, 1.0)
            self._svg_text(svg_canvas, font, cfg.font_size_axis, left + LEGEND_SWATCH + 6, row_y + (LEGEND_SWATCH - h) // 2, s.name or "", cfg.color_axis)
