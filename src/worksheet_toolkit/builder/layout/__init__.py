"""
Layout Module

Turns numbered blocks into pages of positioned drawing primitives.
"""

from .auxiliary import build_answer_key, build_header
from .config import LayoutConfig, PAPER_SIZES
from .elements import ElementFactory
from .metrics import FixedWidthMeasurer, PillowTextMeasurer, TextMeasurer
from .models import (
    Document,
    Element,
    Group,
    ImagePlaceholder,
    LayoutNode,
    Line,
    Page,
    Rect,
    Role,
    Style,
    TextBox,
    TextRun,
)
from .numbering import assign_numbers
from .paginator import PaginationState, paginate
from .styles import resolve_style

__all__ = [
    "build_answer_key",
    "build_header",
    "LayoutConfig",
    "PAPER_SIZES",
    "ElementFactory",
    "FixedWidthMeasurer",
    "PillowTextMeasurer",
    "TextMeasurer",
    "Document",
    "Element",
    "Group",
    "ImagePlaceholder",
    "LayoutNode",
    "Line",
    "Page",
    "Rect",
    "Role",
    "Style",
    "TextBox",
    "TextRun",
    "assign_numbers",
    "PaginationState",
    "paginate",
    "resolve_style",
]
