from __future__ import annotations

from io import BytesIO
import logging
from pathlib import Path
from typing import Protocol

from PIL import ImageFont

from dualplot.errors import FontLoadError, MissingFontError

LOGGER = logging.getLogger(__name__)

Font = ImageFont.FreeTypeFont


def font_px(scale: float) -> int:
    return max(1, int(round(scale)))


def read_font_bytes(path: str | Path | None, *, role: str = "font") -> bytes:
    if path is None or not str(path).strip():
        raise MissingFontError(f"{role} font path is not set")
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise FontLoadError(f"failed to read font file {path}: {exc}") from exc


def parse_font(data: bytes, size: float, *, source: str = "<bytes>") -> Font:
    try:
        return ImageFont.truetype(BytesIO(data), size=font_px(size))
    except (OSError, ValueError) as exc:
        raise FontLoadError(f"failed to parse font {source}: {exc}") from exc


def load_font(path: str | Path | None, size: float, *, role: str = "font") -> Font:
    """Read and parse a font file from scratch; no caching."""
    data = read_font_bytes(path, role=role)
    return parse_font(data, size, source=str(path))


class FontCache:
    """Fonts loaded during a single render pass.

    Create one per pass; a cache outliving its pass could serve a font file
    that has since changed on disk.
    """

    def __init__(self) -> None:
        self._bytes: dict[str, bytes] = {}
        self._fonts: dict[tuple[str, int], Font] = {}

    def __len__(self) -> int:
        return len(self._fonts)

    def get(self, path: str | Path | None, size: float, *, role: str = "font") -> Font:
        if path is None or not str(path).strip():
            raise MissingFontError(f"{role} font path is not set")
        key = (str(path), font_px(size))
        font = self._fonts.get(key)
        if font is not None:
            LOGGER.debug("font cache hit %s@%d", key[0], key[1])
            return font
        data = self._bytes.get(key[0])
        if data is None:
            data = read_font_bytes(path, role=role)
            self._bytes[key[0]] = data
        font = parse_font(data, key[1], source=key[0])
        self._fonts[key] = font
        return font

    def clear(self) -> None:
        self._bytes.clear()
        self._fonts.clear()


def sized_font(font: Font, scale: float) -> Font:
    size = font_px(scale)
    if getattr(font, "size", None) == size:
        return font
    return font.font_variant(size=size)


def text_size(font: Font, scale: float, text: str) -> tuple[int, int]:
    """Width and height of the ink box of `text` in pixels."""
    font = sized_font(font, scale)
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    return (max(0, int(right - left)), max(1, int(bottom - top)))


def svg_baseline(font: Font, scale: float, text: str, x: int, y: int) -> tuple[int, int]:
    """Map a top-left ink anchor to the SVG `<text>` baseline origin."""
    font = sized_font(font, scale)
    if not text:
        return (x, y + font.getmetrics()[0])
    left, top, _, _ = font.getbbox(text)
    ascent, _ = font.getmetrics()
    return (int(x - left), int(y - top + ascent))


def font_family(font: Font) -> str:
    family, _ = font.getname()
    return family or "sans-serif"


class FontMetrics(Protocol):
    def measure(self, font: Font, scale: float, text: str) -> tuple[int, int]:
        ...


class PillowFontMetrics:
    def measure(self, font: Font, scale: float, text: str) -> tuple[int, int]:
        return text_size(font, scale, text)


PILLOW_METRICS = PillowFontMetrics()
