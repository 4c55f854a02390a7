from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from dualplot.config import FigureConfig
from dualplot.fonts import PILLOW_METRICS, Font, FontMetrics, font_family, font_px, load_font, svg_baseline
from dualplot.layout import axis_value_anchor, center_anchor, grid_positions
from dualplot.raster import PixelCanvas
from dualplot.styles import AxisType, Color, LineType, rgb_to_svg_color
from dualplot.vector import SvgCanvas


class Drawer(ABC):
    """Rendering contract shared by every chart type.

    Subclasses supply the three backend-specific entry points; backgrounds,
    grids, axes, titles, labels and tick values are drawn by the defaults
    below so both backends place them identically.
    """

    metrics: FontMetrics = PILLOW_METRICS

    @property
    @abstractmethod
    def figure_config(self) -> FigureConfig:
        ...

    @abstractmethod
    def draw(self, canvas: PixelCanvas) -> None:
        """Draw the chart content onto a raster canvas."""

    @abstractmethod
    def draw_legend(self, canvas: PixelCanvas) -> None:
        ...

    @abstractmethod
    def draw_svg(self, svg_canvas: SvgCanvas) -> None:
        """Draw the chart content onto a vector canvas."""

    def rgb_to_markup_color(self, color: Sequence[int]) -> str:
        return rgb_to_svg_color(color)

    # raster defaults

    def fill_raster_background(self, canvas: PixelCanvas, config: FigureConfig) -> None:
        m = canvas.margin
        canvas.pixels[m : canvas.height - m, m : canvas.width - m] = config.color_background

    def draw_grid(self, canvas: PixelCanvas, config: FigureConfig) -> None:
        canvas.draw_grid((config.num_grid_horizontal, config.num_grid_vertical), config.color_grid)

    def draw_axis(self, canvas: PixelCanvas, config: FigureConfig, x1: int, y1: int, x2: int, y2: int) -> None:
        canvas.draw_line(x1, y1, x2, y2, config.color_axis, LineType.SOLID)

    def draw_label(self, canvas: PixelCanvas, config: FigureConfig, x: int, y: int, text: str) -> None:
        font = self._font(canvas, config.font_label, config.font_size_label, role="label")
        w, h = self.metrics.measure(font, config.font_size_label, text)
        ax, ay = center_anchor(x, y, w, h)
        canvas.draw_text(ax, ay, text, config.color_axis, font, config.font_size_label)

    def draw_title(self, canvas: PixelCanvas, config: FigureConfig, x: int, y: int, text: str) -> None:
        font = self._font(canvas, config.font_title, config.font_size_title, role="title")
        w, h = self.metrics.measure(font, config.font_size_title, text)
        ax, ay = center_anchor(x, y, w, h)
        canvas.draw_text(ax, ay, text, config.color_title, font, config.font_size_title)

    def draw_axis_value(
        self,
        canvas: PixelCanvas,
        config: FigureConfig,
        x: int,
        y: int,
        text: str,
        axis: AxisType,
    ) -> None:
        font = self._font(canvas, config.font_label, config.font_size_axis, role="label")
        w, h = self.metrics.measure(font, config.font_size_axis, text)
        ax, ay = axis_value_anchor(x, y, w, h, axis)
        canvas.draw_text(ax, ay, text, config.color_axis, font, config.font_size_axis)

    # vector defaults

    def fill_vector_background(self, svg_canvas: SvgCanvas, config: FigureConfig) -> None:
        margin = float(svg_canvas.margin)
        svg_canvas.draw_rect(
            margin,
            margin,
            svg_canvas.width - 2.0 * margin,
            svg_canvas.height - 2.0 * margin,
            self.rgb_to_markup_color(config.color_background),
            "none",
            0.0,
            1.0,
        )

    def draw_svg_grid(self, svg_canvas: SvgCanvas, config: FigureConfig) -> None:
        m = svg_canvas.margin
        plot_w = svg_canvas.width - 2 * m
        plot_h = svg_canvas.height - 2 * m
        color = self.rgb_to_markup_color(config.color_grid)
        # +0.5 puts a 1-unit stroke on the same pixel row/column the raster grid fills
        for y in grid_positions(m, plot_h, config.num_grid_horizontal):
            svg_canvas.draw_line(m, y + 0.5, m + plot_w, y + 0.5, color, 1.0)
        for x in grid_positions(m, plot_w, config.num_grid_vertical):
            svg_canvas.draw_line(x + 0.5, m, x + 0.5, m + plot_h, color, 1.0)

    def draw_svg_axis(self, svg_canvas: SvgCanvas, config: FigureConfig, x1: int, y1: int, x2: int, y2: int) -> None:
        # square caps cover both endpoint pixels, as the raster line does
        svg_canvas.draw_line(
            x1 + 0.5,
            y1 + 0.5,
            x2 + 0.5,
            y2 + 0.5,
            self.rgb_to_markup_color(config.color_axis),
            1.0,
            LineType.SOLID.dasharray,
            "square",
        )

    def draw_svg_label(self, svg_canvas: SvgCanvas, config: FigureConfig, x: int, y: int, text: str) -> None:
        font = self._font(svg_canvas, config.font_label, config.font_size_label, role="label")
        w, h = self.metrics.measure(font, config.font_size_label, text)
        ax, ay = center_anchor(x, y, w, h)
        self._svg_text(svg_canvas, font, config.font_size_label, ax, ay, text, config.color_axis)

    def draw_svg_title(self, svg_canvas: SvgCanvas, config: FigureConfig, x: int, y: int, text: str) -> None:
        font = self._font(svg_canvas, config.font_title, config.font_size_title, role="title")
        w, h = self.metrics.measure(font, config.font_size_title, text)
        ax, ay = center_anchor(x, y, w, h)
        self._svg_text(svg_canvas, font, config.font_size_title, ax, ay, text, config.color_title)

    def draw_svg_axis_value(
        self,
        svg_canvas: SvgCanvas,
        config: FigureConfig,
        x: int,
        y: int,
        text: str,
        axis: AxisType,
    ) -> None:
        font = self._font(svg_canvas, config.font_label, config.font_size_axis, role="label")
        w, h = self.metrics.measure(font, config.font_size_axis, text)
        ax, ay = axis_value_anchor(x, y, w, h, axis)
        self._svg_text(svg_canvas, font, config.font_size_axis, ax, ay, text, config.color_axis)

    def _svg_text(
        self,
        svg_canvas: SvgCanvas,
        font: Font,
        scale: float,
        x: int,
        y: int,
        text: str,
        color: Color,
    ) -> None:
        bx, by = svg_baseline(font, scale, text, x, y)
        svg_canvas.draw_text(bx, by, text, self.rgb_to_markup_color(color), font_family(font), font_px(scale))

    def _font(self, canvas: PixelCanvas | SvgCanvas, path: str | Path | None, size: float, *, role: str) -> Font:
        cache = getattr(canvas, "font_cache", None)
        if cache is not None:
            return cache.get(path, size, role=role)
        return load_font(path, size, role=role)
