from __future__ import annotations

import logging

from PIL import Image

from dualplot.drawers import Drawer
from dualplot.fonts import FontCache
from dualplot.raster import PixelCanvas
from dualplot.vector import SvgCanvas

LOGGER = logging.getLogger(__name__)


def new_pixel_canvas(drawer: Drawer, font_cache: FontCache | None = None) -> PixelCanvas:
    cfg = drawer.figure_config
    return PixelCanvas(cfg.width, cfg.height, cfg.margin, font_cache=font_cache)


def new_svg_canvas(drawer: Drawer, font_cache: FontCache | None = None) -> SvgCanvas:
    cfg = drawer.figure_config
    return SvgCanvas(cfg.width, cfg.height, cfg.margin, font_cache=font_cache)


def render_raster_canvas(drawer: Drawer) -> PixelCanvas:
    """Run one raster pass (content, then legend) on a fresh canvas."""
    canvas = new_pixel_canvas(drawer, FontCache())
    LOGGER.debug("raster pass start: %s %dx%d", type(drawer).__name__, canvas.width, canvas.height)
    try:
        drawer.draw(canvas)
        drawer.draw_legend(canvas)
    except Exception:
        LOGGER.error("raster pass aborted: %s", type(drawer).__name__, exc_info=True)
        raise
    finally:
        # fonts never outlive the pass that loaded them
        if canvas.font_cache is not None:
            canvas.font_cache.clear()
        canvas.font_cache = None
    LOGGER.debug("raster pass done: %s", type(drawer).__name__)
    return canvas


def render_raster(drawer: Drawer) -> Image.Image:
    return render_raster_canvas(drawer).to_image()


def render_svg(drawer: Drawer) -> str:
    """Run one vector pass and return the serialized SVG document."""
    svg_canvas = new_svg_canvas(drawer, FontCache())
    LOGGER.debug("svg pass start: %s %dx%d", type(drawer).__name__, svg_canvas.width, svg_canvas.height)
    try:
        drawer.draw_svg(svg_canvas)
    except Exception:
        LOGGER.error("svg pass aborted: %s", type(drawer).__name__, exc_info=True)
        raise
    finally:
        if svg_canvas.font_cache is not None:
            svg_canvas.font_cache.clear()
        svg_canvas.font_cache = None
    document = svg_canvas.serialize()
    LOGGER.debug("svg pass done: %s shapes=%d", type(drawer).__name__, len(svg_canvas.shapes))
    return document
