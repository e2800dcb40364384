"""
Module: builder.output.surface

Purpose:
    Drawing surface abstraction for the raster adapter. The adapter only
    knows the DrawingSurface interface; PillowSurface is the default
    implementation and is injected, so tests can record calls instead.

Key Classes:
    - DrawingSurface: Abstract page canvas
    - PillowSurface: Pillow-backed canvas serializing to PNG

Dependencies:
    - PIL: Image, ImageDraw
    - builder.layout.metrics: Font loading

Used By:
    - builder.output.raster: RasterRenderer
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from typing import Optional

from PIL import Image, ImageDraw

from worksheet_toolkit.builder.layout.metrics import load_font
from worksheet_toolkit.builder.layout.models import (
    ImagePlaceholder,
    Line,
    Rect,
    TextBox,
    TextRun,
)
from worksheet_toolkit.builder.layout.styles import PLACEHOLDER_FILL, RULE_COLOR

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 2.0  # pixels per point


class DrawingSurface(ABC):
    """Page canvas that accepts leaf layout primitives."""

    @abstractmethod
    def clear(self, width: float, height: float) -> None:
        """Start a blank page of the given size (points)."""

    @abstractmethod
    def add(self, primitive, dx: float = 0, dy: float = 0) -> None:
        """Draw a leaf primitive offset by (dx, dy)."""

    @abstractmethod
    def paste_image(self, image: Image.Image, x: float, y: float, w: float, h: float) -> None:
        """Draw a fetched image into a reserved area."""

    @abstractmethod
    def to_png(self) -> bytes:
        """Serialize the current page."""


class PillowSurface(DrawingSurface):
    """
    Pillow canvas rendering at `scale` pixels per point.

    Example:
        >>> surface = PillowSurface(scale=1.0)
        >>> surface.clear(595, 842)
        >>> surface.add(TextRun("1.", 54, 72, Style()))
        >>> png = surface.to_png()
    """

    def __init__(self, scale: float = DEFAULT_SCALE, background: str = "white"):
        self.scale = scale
        self.background = background
        self._image: Optional[Image.Image] = None
        self._draw: Optional[ImageDraw.ImageDraw] = None

    @property
    def image(self) -> Image.Image:
        if self._image is None:
            raise RuntimeError("Surface has no page; call clear() first")
        return self._image

    def clear(self, width: float, height: float) -> None:
        size = (max(1, round(width * self.scale)), max(1, round(height * self.scale)))
        self._image = Image.new("RGB", size, self.background)
        self._draw = ImageDraw.Draw(self._image)

    def _pt(self, value: float) -> int:
        return round(value * self.scale)

    def add(self, primitive, dx: float = 0, dy: float = 0) -> None:
        if self._draw is None:
            raise RuntimeError("Surface has no page; call clear() first")

        if isinstance(primitive, TextRun):
            self._text(primitive.text, dx + primitive.left, dy + primitive.y, primitive.style)
        elif isinstance(primitive, TextBox):
            line_height = primitive.style.font_size * primitive.style.line_height
            for i, line in enumerate(primitive.lines):
                self._text(line, dx + primitive.x, dy + primitive.y + i * line_height, primitive.style)
        elif isinstance(primitive, Line):
            self._line(
                (dx + primitive.x1, dy + primitive.y1),
                (dx + primitive.x2, dy + primitive.y2),
                primitive.style.stroke or "#000000",
                primitive.style.stroke_width,
                primitive.style.dash,
            )
        elif isinstance(primitive, Rect):
            self._rect(dx + primitive.x, dy + primitive.y, primitive.w, primitive.h, primitive.style)
        elif isinstance(primitive, ImagePlaceholder):
            box = [
                self._pt(dx + primitive.x),
                self._pt(dy + primitive.y),
                self._pt(dx + primitive.x + primitive.w),
                self._pt(dy + primitive.y + primitive.h),
            ]
            self._draw.rectangle(
                box,
                fill=primitive.style.background or PLACEHOLDER_FILL,
                outline=primitive.style.stroke or RULE_COLOR,
            )
        else:
            logger.debug(f"Ignoring unsupported primitive {type(primitive).__name__}")

    def paste_image(self, image: Image.Image, x: float, y: float, w: float, h: float) -> None:
        fitted = image.convert("RGB")
        fitted.thumbnail((self._pt(w), self._pt(h)))
        self.image.paste(fitted, (self._pt(x), self._pt(y)))

    def to_png(self) -> bytes:
        buf = io.BytesIO()
        self.image.save(buf, format="PNG")
        return buf.getvalue()

    # ─────────────────────────────────────────────────────────────────────────
    # Drawing helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _text(self, text: str, x: float, y: float, style) -> None:
        if not text:
            return
        font = load_font(max(1, self._pt(style.font_size)), style.bold)
        self._draw.text((self._pt(x), self._pt(y)), text, fill=style.color, font=font)

    def _line(self, start, end, color: str, width: float, dash) -> None:
        stroke = max(1, self._pt(width))
        if not dash:
            self._draw.line([self._pt(v) for v in (*start, *end)], fill=color, width=stroke)
            return

        # Dashes along the segment; only axis-aligned segments are drawn dashed
        on, off = dash
        (x1, y1), (x2, y2) = start, end
        length = abs(x2 - x1) + abs(y2 - y1)
        horizontal = y1 == y2
        pos = 0.0
        while pos < length:
            seg_end = min(pos + on, length)
            if horizontal:
                a, b = (x1 + pos, y1), (x1 + seg_end, y1)
            else:
                a, b = (x1, y1 + pos), (x1, y1 + seg_end)
            self._draw.line([self._pt(v) for v in (*a, *b)], fill=color, width=stroke)
            pos += on + off

    def _rect(self, x: float, y: float, w: float, h: float, style) -> None:
        box = [self._pt(x), self._pt(y), self._pt(x + w), self._pt(y + h)]
        if style.dash:
            if style.background:
                self._draw.rectangle(box, fill=style.background)
            color = style.stroke or "#000000"
            corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
            for i in range(4):
                a, b = corners[i], corners[(i + 1) % 4]
                # Dashes run left-to-right / top-to-bottom
                start, end = min(a, b), max(a, b)
                self._line(start, end, color, style.stroke_width, style.dash)
            return

        stroke = max(1, self._pt(style.stroke_width)) if style.stroke else 0
        if style.radius:
            self._draw.rounded_rectangle(
                box, radius=self._pt(style.radius), fill=style.background, outline=style.stroke, width=stroke
            )
        else:
            self._draw.rectangle(box, fill=style.background, outline=style.stroke, width=stroke)
