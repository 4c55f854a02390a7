from __future__ import annotations


class FigureConfigError(ValueError):
    pass


class FigureRenderError(RuntimeError):
    """Fatal error that aborts a render pass; no partial figure is produced."""


class MissingFontError(FigureRenderError):
    pass


class FontLoadError(FigureRenderError):
    pass
