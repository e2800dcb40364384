"""
Module: builder.layout.auxiliary

Purpose:
    Build the primitive lists for the optional test header page and
    the answer key page. Both are positioned in absolute page
    coordinates.

Key Functions:
    - build_header(): Title, metadata line, name box, instructions, divider
    - build_answer_key(): Two-column list of question answers

Dependencies:
    - builder.labels: Localized strings
    - builder.layout.metrics: Text widths for centering

Used By:
    - builder.controller: compute_layout
    - builder.output.raster: Header and answer-key pages
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from worksheet_toolkit.builder.config import FormatOptions
from worksheet_toolkit.builder.labels import answer_text, get_labels, info_line
from worksheet_toolkit.core.models import Block, ExamInfo

from .config import MARGINS, PAPER_SIZES
from .metrics import FixedWidthMeasurer, TextMeasurer
from .models import Line, Rect, Role, Style, TextRun

logger = logging.getLogger(__name__)

HEADER_TITLE_SIZE = 20
HEADER_TITLE_Y = 30
HEADER_INFO_SIZE = 12
HEADER_INFO_Y = 60
NAME_BOX = (200, 25)
INSTRUCTIONS_SIZE = 11
INSTRUCTIONS_Y = 100
DIVIDER_Y = 120

ANSWER_TITLE_SIZE = 18
ANSWER_START_Y = 80
ANSWER_COLUMN_STEP = 250
ANSWER_ROW_STEP = 25


def _page_width(page_size: str) -> int:
    return PAPER_SIZES.get(page_size, PAPER_SIZES["A4"])[0]


def _run(text: str, x: float, y: float, style: Style, role: Role, measurer: TextMeasurer, anchor: str = "left") -> TextRun:
    return TextRun(
        text=text,
        x=x,
        y=y,
        style=style,
        width=measurer.text_width(text, style),
        anchor=anchor,
        role=role,
    )


def build_header(
    info: Optional[ExamInfo],
    page_size: str = "A4",
    locale: str = "en",
    measurer: Optional[TextMeasurer] = None,
) -> tuple:
    """
    Build the test header primitives.

    Args:
        info: Test metadata (None -> defaults only)
        page_size: Paper size name
        locale: Label language
        measurer: Text measurer for centering

    Returns:
        Tuple of primitives in page coordinates
    """
    info = info or ExamInfo()
    labels = get_labels(locale)
    measurer = measurer or FixedWidthMeasurer()
    page_width = _page_width(page_size)
    center = page_width / 2
    left, right = MARGINS["left"], page_width - MARGINS["right"]

    primitives: list = [
        _run(
            info.title or labels.test,
            center,
            HEADER_TITLE_Y,
            Style(font_size=HEADER_TITLE_SIZE, bold=True),
            Role.TITLE,
            measurer,
            anchor="center",
        ),
    ]

    meta = info_line(info, labels)
    if meta:
        primitives.append(_run(
            meta, center, HEADER_INFO_Y, Style(font_size=HEADER_INFO_SIZE), Role.META, measurer, anchor="center"
        ))

    box_w, box_h = NAME_BOX
    box_x = right - box_w
    primitives.append(Rect(x=box_x, y=HEADER_TITLE_Y, w=box_w, h=box_h, style=Style(stroke="#000000")))
    primitives.append(_run(
        labels.name, box_x + 10, HEADER_TITLE_Y + 5, Style(font_size=HEADER_INFO_SIZE), Role.LABEL, measurer
    ))

    primitives.append(_run(
        info.instructions or labels.instructions,
        left,
        INSTRUCTIONS_Y,
        Style(font_size=INSTRUCTIONS_SIZE),
        Role.INSTRUCTIONS,
        measurer,
    ))
    primitives.append(Line(x1=left, y1=DIVIDER_Y, x2=right, y2=DIVIDER_Y, style=Style(stroke="#000000")))

    return tuple(primitives)


def build_answer_key(
    blocks: Iterable[Block],
    page_size: str = "A4",
    options: Optional[FormatOptions] = None,
    measurer: Optional[TextMeasurer] = None,
) -> tuple:
    """
    Build the answer key primitives.

    Only question blocks are listed, two per row, in the order given.
    A question without a correct answer shows the undetermined marker.

    Args:
        blocks: Numbered blocks
        page_size: Paper size name
        options: Format options (locale)
        measurer: Text measurer for centering

    Returns:
        Tuple of primitives in page coordinates

    Example:
        >>> key = build_answer_key(assign_numbers(blocks))
        >>> [p.text for p in key if p.role is Role.ANSWER]
        ['1. B', '2. Undetermined', '3. 42']
    """
    options = options or FormatOptions()
    labels = get_labels(options.locale)
    measurer = measurer or FixedWidthMeasurer()
    page_width = _page_width(page_size)

    primitives: list = [
        _run(
            labels.answer_key,
            page_width / 2,
            HEADER_TITLE_Y,
            Style(font_size=ANSWER_TITLE_SIZE, bold=True),
            Role.TITLE,
            measurer,
            anchor="center",
        ),
    ]

    entry_style = Style(font_size=HEADER_INFO_SIZE)
    y = ANSWER_START_Y
    questions = [b for b in blocks if b.is_question]
    for i, block in enumerate(questions):
        number = block.display_number if block.display_number is not None else i + 1
        x = MARGINS["left"] + (i % 2) * ANSWER_COLUMN_STEP
        primitives.append(_run(answer_text(block, number, labels), x, y, entry_style, Role.ANSWER, measurer))
        if i % 2 == 1:
            y += ANSWER_ROW_STEP

    logger.debug(f"Answer key lists {len(questions)} questions")
    return tuple(primitives)
