"""
Module: builder.layout.metrics

Purpose:
    Deterministic text measurement and line wrapping for the layout
    engine. Heights of wrapped text are fixed here, at build time, so
    that pagination never depends on a renderer.

Key Classes:
    - TextMeasurer: Abstract measurer with greedy word wrapping
    - FixedWidthMeasurer: Pure, font-independent character metrics
    - PillowTextMeasurer: Metrics from Pillow TrueType fonts

Key Functions:
    - load_font(): Cached Pillow font lookup shared with the drawing surface

Dependencies:
    - PIL: ImageFont (PillowTextMeasurer only)
    - unicodedata (std): East Asian width classes

Used By:
    - builder.layout.elements: Wrapping text boxes
    - builder.output.surface: Font loading for drawing
"""

from __future__ import annotations

import logging
import unicodedata
from abc import ABC, abstractmethod
from functools import lru_cache

from PIL import ImageFont

from .models import Style

logger = logging.getLogger(__name__)

# Average advance of a Latin glyph, as a fraction of the font size
NARROW_ADVANCE = 0.6
WIDE_ADVANCE = 1.0

REGULAR_FONTS = [
    "NotoSansKR-Regular.ttf",
    "NotoSansCJK-Regular.ttc",
    "arial.ttf",        # Windows
    "Arial.ttf",        # Mac
    "DejaVuSans.ttf",
]

BOLD_FONTS = [
    "NotoSansKR-Bold.ttf",
    "NotoSansCJK-Bold.ttc",
    "arialbd.ttf",
    "Arial Bold.ttf",
    "DejaVuSans-Bold.ttf",
]


@lru_cache(maxsize=64)
def load_font(size: int, bold: bool = False):
    """
    Load a TrueType font for measuring and drawing.

    Tries bold variants first when `bold` is set, then the regular list.
    Falls back to Pillow's built-in font if none are installed.

    Args:
        size: Font size in pixels
        bold: Prefer a bold face

    Returns:
        Font object
    """
    font_options = (BOLD_FONTS + REGULAR_FONTS) if bold else REGULAR_FONTS
    for font_name in font_options:
        try:
            return ImageFont.truetype(font_name, size)
        except (IOError, OSError):
            continue

    logger.warning("Could not load TrueType font, using default")
    return ImageFont.load_default(size=size)


class TextMeasurer(ABC):
    """
    Measures text and wraps it to a width.

    Subclasses only provide `text_width`; wrapping is greedy by words,
    honours explicit newlines and breaks words wider than the line.
    """

    @abstractmethod
    def text_width(self, text: str, style: Style) -> float:
        """Advance width of a single line of text."""

    def line_height(self, style: Style) -> float:
        return style.font_size * style.line_height

    def wrap(self, text: str, width: float, style: Style) -> tuple[str, ...]:
        """
        Wrap text into lines no wider than `width`.

        Example:
            >>> FixedWidthMeasurer().wrap("aaa bbb", 25, Style(font_size=10))
            ('aaa', 'bbb')
        """
        if not text:
            return ()
        lines: list[str] = []
        for paragraph in text.split("\n"):
            lines.extend(self._wrap_paragraph(paragraph, width, style))
        return tuple(lines)

    def wrapped_height(self, lines: tuple[str, ...], style: Style) -> float:
        return len(lines) * self.line_height(style)

    def _wrap_paragraph(self, paragraph: str, width: float, style: Style) -> list[str]:
        words = paragraph.split()
        if not words:
            return [""]

        lines: list[str] = []
        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if self.text_width(candidate, style) <= width:
                current = candidate
                continue
            if current:
                lines.append(current)
            # Word alone is too wide: break it by characters
            pieces = self._break_word(word, width, style)
            lines.extend(pieces[:-1])
            current = pieces[-1]
        lines.append(current)
        return lines

    def _break_word(self, word: str, width: float, style: Style) -> list[str]:
        pieces: list[str] = []
        current = ""
        for char in word:
            if current and self.text_width(current + char, style) > width:
                pieces.append(current)
                current = char
            else:
                current += char
        pieces.append(current)
        return pieces


class FixedWidthMeasurer(TextMeasurer):
    """
    Font-independent metrics: every glyph has a fixed advance.

    Wide and fullwidth East Asian characters advance a full em, the
    rest 0.6 em. Results are identical on every machine.
    """

    def text_width(self, text: str, style: Style) -> float:
        size = style.font_size
        return sum(
            size * (WIDE_ADVANCE if unicodedata.east_asian_width(c) in ("W", "F") else NARROW_ADVANCE)
            for c in text
        )


class PillowTextMeasurer(TextMeasurer):
    """Metrics from the fonts the Pillow drawing surface actually uses."""

    def __init__(self, scale: float = 1.0):
        self.scale = scale

    def text_width(self, text: str, style: Style) -> float:
        if not text:
            return 0.0
        font = load_font(max(1, round(style.font_size * self.scale)), style.bold)
        return font.getlength(text) / self.scale
