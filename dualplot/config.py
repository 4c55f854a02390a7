from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace as dc_replace
import math
from pathlib import Path
import tomllib
from typing import Any, Mapping

from dualplot.errors import FigureConfigError
from dualplot.styles import Color, validate_color

_COLOR_FIELDS = ("color_background", "color_axis", "color_title", "color_grid")
_FONT_SIZE_FIELDS = ("font_size_title", "font_size_label", "font_size_axis")


def check_margin(width: int, height: int, margin: int) -> None:
    if margin < 0:
        raise FigureConfigError("margin must be >= 0")
    if 2 * margin >= width or 2 * margin >= height:
        raise FigureConfigError("margin must be smaller than half of width and height")


@dataclass(frozen=True)
class FigureConfig:
    """Read-only styling and layout snapshot shared by every render pass.

    Font paths are optional here; a drawing operation that needs a missing
    font raises `MissingFontError` when it runs.
    """

    width: int = 800
    height: int = 600
    margin: int = 60
    color_background: Color = (255, 255, 255)
    color_axis: Color = (0, 0, 0)
    color_title: Color = (0, 0, 0)
    color_grid: Color = (220, 220, 220)
    num_grid_horizontal: int = 5
    num_grid_vertical: int = 5
    font_title: str | None = None
    font_label: str | None = None
    font_size_title: float = 24.0
    font_size_label: float = 16.0
    font_size_axis: float = 12.0

    def __post_init__(self) -> None:
        for name in ("width", "height", "margin", "num_grid_horizontal", "num_grid_vertical"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise FigureConfigError(f"`{name}` must be an integer")
        if self.width <= 0 or self.height <= 0:
            raise FigureConfigError("width and height must be > 0")
        check_margin(self.width, self.height, self.margin)
        if self.num_grid_horizontal < 0 or self.num_grid_vertical < 0:
            raise FigureConfigError("grid line counts must be >= 0")
        for name in _COLOR_FIELDS:
            # tuples from TOML arrays arrive as lists
            object.__setattr__(self, name, validate_color(name, getattr(self, name)))
        for name in _FONT_SIZE_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
                raise FigureConfigError(f"`{name}` must be a positive number")
            object.__setattr__(self, name, float(value))
        for name in ("font_title", "font_label"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, (str, Path)):
                raise FigureConfigError(f"`{name}` must be a path or None")
            if isinstance(value, Path):
                object.__setattr__(self, name, str(value))

    def replace(self, **overrides: Any) -> "FigureConfig":
        _reject_unknown(overrides)
        return dc_replace(self, **overrides)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


DEFAULT_FIGURE_CONFIG = FigureConfig()


def validate_figure_config(overrides: Mapping[str, Any] | None = None) -> FigureConfig:
    """Merge overrides into the defaults, rejecting unknown keys."""

    if not overrides:
        return DEFAULT_FIGURE_CONFIG
    _reject_unknown(overrides)
    return dc_replace(DEFAULT_FIGURE_CONFIG, **dict(overrides))


def load_figure_config(path: str | Path) -> FigureConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"figure config not found: {config_path}")
    with config_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise FigureConfigError(f"invalid TOML in {config_path}: {exc}") from exc
    table = raw.get("figure", raw)
    if not isinstance(table, dict):
        raise FigureConfigError("`figure` must be a table")
    return validate_figure_config(table)


def _reject_unknown(overrides: Mapping[str, Any]) -> None:
    known = {f.name for f in fields(FigureConfig)}
    for key in overrides:
        if key not in known:
            raise FigureConfigError(f"Unknown figure config key: {key}")
