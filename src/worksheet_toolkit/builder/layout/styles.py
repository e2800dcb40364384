"""
Module: builder.layout.styles

Purpose:
    Resolve the visual style of a block from its type and the format
    options. Pure lookup, never raises.

Key Functions:
    - resolve_style(): BlockType + FormatOptions -> Style
    - title_style(): Style for header/answer-key titles
"""

from __future__ import annotations

from worksheet_toolkit.builder.config import FormatOptions
from worksheet_toolkit.core.models import BlockType

from .config import FONT_SIZES
from .models import Style

ACCENT_COLOR = "#1a73e8"
MUTED_COLOR = "#666666"
FAINT_COLOR = "#999999"
RULE_COLOR = "#cccccc"
PLACEHOLDER_FILL = "#f0f0f0"
PASSAGE_BACKGROUND = "#f5f5f5"


def base_style(options: FormatOptions) -> Style:
    return Style(font_size=FONT_SIZES[options.font_size])


def resolve_style(block_type: BlockType, options: FormatOptions) -> Style:
    """
    Style for a block type.

    Args:
        block_type: Kind of block
        options: Format options (font size)

    Returns:
        Passage: dark grey on a light background with padding.
        Concept: bold accent color.
        Explanation: two points smaller, italic, muted.
        Anything else: the base style.
    """
    style = base_style(options)

    if block_type is BlockType.PASSAGE:
        return style.derive(color="#333333", background=PASSAGE_BACKGROUND, padding=10)
    if block_type is BlockType.CONCEPT:
        return style.derive(bold=True, color=ACCENT_COLOR)
    if block_type is BlockType.EXPLANATION:
        return style.derive(
            font_size=style.font_size - 2, italic=True, color=MUTED_COLOR
        )
    return style


def title_style(size: int = FONT_SIZES["title"]) -> Style:
    return Style(font_size=size, bold=True)
