"""
Module: builder.layout.config

Purpose:
    Configuration for the page layout engine.
    Defines paper sizes, margins, font sizes, spacing and column geometry.

Key Classes:
    - LayoutConfig: Immutable page geometry

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.paginator: Column and page arrangement
    - builder.layout.elements: Content widths
    - builder.layout.auxiliary: Header and answer-key placement
"""

from __future__ import annotations

from dataclasses import dataclass

from worksheet_toolkit.builder.config import FormatOptions

# Paper sizes in points (width, height)
PAPER_SIZES = {
    "A4": (595, 842),
    "A3": (842, 1191),
    "B4": (729, 1032),
    "B3": (1032, 1460),
}

MARGINS = {"top": 72, "bottom": 72, "left": 54, "right": 54}

FONT_SIZES = {
    "small": 10,
    "medium": 12,
    "large": 14,
    "title": 18,
    "subtitle": 16,
}

QUESTION_SPACING = {"narrow": 10, "normal": 20, "wide": 40}

# Fixed content width per column count, independent of paper size
CONTENT_WIDTHS = {1: 500, 2: 250}

COLUMN_GAP = 20


@dataclass(frozen=True)
class LayoutConfig:
    """
    Page geometry for one layout run (immutable).

    The column gap sits outside each column's share of the work width,
    so with two columns the second column's right edge extends past the
    right margin by the gap.

    Attributes:
        page_width: Page width in points
        page_height: Page height in points
        columns: Column count
        margin_top: Top margin
        margin_bottom: Bottom margin
        margin_left: Left margin
        margin_right: Right margin
        column_gap: Horizontal gap between columns

    Example:
        >>> config = LayoutConfig.from_options(FormatOptions(columns=2))
        >>> config.column_width
        243.5
        >>> config.column_x(1)
        317.5
    """

    page_width: int = PAPER_SIZES["A4"][0]
    page_height: int = PAPER_SIZES["A4"][1]
    columns: int = 1

    margin_top: int = MARGINS["top"]
    margin_bottom: int = MARGINS["bottom"]
    margin_left: int = MARGINS["left"]
    margin_right: int = MARGINS["right"]

    column_gap: int = COLUMN_GAP

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.columns < 1:
            raise ValueError(f"columns must be at least 1: {self.columns}")
        if self.available_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.available_height <= 0:
            raise ValueError("Margins exceed page height")

    @classmethod
    def from_options(cls, options: FormatOptions) -> LayoutConfig:
        width, height = PAPER_SIZES[options.page_size]
        return cls(page_width=width, page_height=height, columns=options.columns)

    @property
    def available_width(self) -> int:
        """Width available for content (excluding margins)."""
        return self.page_width - self.margin_left - self.margin_right

    @property
    def available_height(self) -> int:
        """Height available for content (excluding margins)."""
        return self.page_height - self.margin_top - self.margin_bottom

    @property
    def column_width(self) -> float:
        """Each column's share of the work width."""
        return self.available_width / self.columns

    @property
    def page_bottom(self) -> int:
        """Lowest y a block may reach before it overflows."""
        return self.page_height - self.margin_bottom

    def column_x(self, index: int) -> float:
        """Left edge of column `index` (0-based)."""
        return self.margin_left + index * (self.column_width + self.column_gap)


def content_width(columns: int) -> int:
    """Fixed text width for a column count."""
    return CONTENT_WIDTHS.get(columns, CONTENT_WIDTHS[1])
