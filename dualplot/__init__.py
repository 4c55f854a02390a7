from dualplot.config import DEFAULT_FIGURE_CONFIG, FigureConfig, load_figure_config, validate_figure_config
from dualplot.drawers import Drawer, LineChart, Series
from dualplot.errors import FigureConfigError, FigureRenderError, FontLoadError, MissingFontError
from dualplot.fonts import FontCache, load_font, text_size
from dualplot.raster import PixelCanvas
from dualplot.render import render_raster, render_raster_canvas, render_svg
from dualplot.styles import AxisType, Color, LineType, rgb_to_svg_color
from dualplot.vector import SvgCanvas

__all__ = [
    "AxisType",
    "Color",
    "DEFAULT_FIGURE_CONFIG",
    "Drawer",
    "FigureConfig",
    "FigureConfigError",
    "FigureRenderError",
    "FontCache",
    "FontLoadError",
    "LineChart",
    "LineType",
    "MissingFontError",
    "PixelCanvas",
    "Series",
    "SvgCanvas",
    "load_figure_config",
    "load_font",
    "render_raster",
    "render_raster_canvas",
    "render_svg",
    "rgb_to_svg_color",
    "text_size",
    "validate_figure_config",
]
