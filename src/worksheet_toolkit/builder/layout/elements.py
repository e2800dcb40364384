"""
Module: builder.layout.elements

Purpose:
    Turn one block into a group of positioned drawing primitives and
    report the vertical space it consumes. One builder per block type,
    selected from a table that covers every BlockType member.

Key Classes:
    - ElementFactory: Builds Elements for blocks

Algorithm (question):
    label "{n}." -> wrapped content (indent 30) -> image placeholder ->
    difficulty -> options (indent 40) -> ruled answer lines -> source
    citation -> trailing question spacing. A vertical cursor runs down
    the group; every child is positioned relative to the group origin.

Dependencies:
    - builder.layout.metrics: Wrapping and text widths
    - builder.layout.styles: Per-type styles
    - builder.labels: Localized strings

Used By:
    - builder.layout.paginator: One element per block
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from worksheet_toolkit.builder.config import FormatOptions
from worksheet_toolkit.builder.labels import difficulty_text, get_labels, source_text
from worksheet_toolkit.core.models import Block, BlockType

from .config import QUESTION_SPACING, LayoutConfig, content_width
from .metrics import FixedWidthMeasurer, TextMeasurer
from .models import (
    Element,
    Group,
    ImagePlaceholder,
    Line,
    Rect,
    Role,
    Style,
    TextBox,
    TextRun,
)
from .styles import (
    ACCENT_COLOR,
    FAINT_COLOR,
    MUTED_COLOR,
    PLACEHOLDER_FILL,
    RULE_COLOR,
    resolve_style,
)

logger = logging.getLogger(__name__)

# Question geometry
CONTENT_INDENT = 30
OPTION_INDENT = 40
CONTENT_GAP = 10
IMAGE_HEIGHT = 200
IMAGE_ADVANCE = 210
DIFFICULTY_ADVANCE = 20
OPTION_ADVANCE = 25
ANSWER_LINE_ADVANCE = 20
SOURCE_ADVANCE = 20

# Block decorations
PASSAGE_RADIUS = 5
CONCEPT_CONTENT_TOP = 30
EXPLANATION_DASH = (5, 5)
EXPLANATION_CONTENT = (5, 25)
OTHER_GAP = 10

# BlockType -> builder method; must stay exhaustive
_BUILDERS = {
    BlockType.QUESTION: "_build_question",
    BlockType.PASSAGE: "_build_passage",
    BlockType.CONCEPT: "_build_concept",
    BlockType.EXPLANATION: "_build_explanation",
    BlockType.OTHER: "_build_other",
}


class ElementFactory:
    """
    Builds layout elements for blocks.

    Args:
        options: Format options
        measurer: Text measurer (FixedWidthMeasurer by default)
        column_width: Width of the target column (derived from options)
        skip_empty: Preview context; drop non-question blocks that have
            neither content nor an image

    Example:
        >>> factory = ElementFactory(FormatOptions())
        >>> element = factory.build(Block(id="1", type=BlockType.OTHER, content="Hi"))
        >>> element.height
        29.2
    """

    def __init__(
        self,
        options: FormatOptions,
        measurer: Optional[TextMeasurer] = None,
        column_width: Optional[float] = None,
        *,
        skip_empty: bool = False,
    ):
        self.options = options
        self.measurer = measurer or FixedWidthMeasurer()
        if column_width is None:
            column_width = LayoutConfig.from_options(options).column_width
        self.column_width = column_width
        self.content_width = content_width(options.columns)
        self.skip_empty = skip_empty
        self.labels = get_labels(options.locale)

    def wrap_width(self, indent: float = 0) -> float:
        """Usable text width at an indent, never past the column edge."""
        return min(self.content_width, self.column_width - indent)

    def build(
        self,
        block: Block,
        style: Optional[Style] = None,
        position: Tuple[float, float] = (0, 0),
    ) -> Optional[Element]:
        """
        Build the element for a block.

        Args:
            block: Block to lay out
            style: Style override (resolved from the block type by default)
            position: Group origin

        Returns:
            Element, or None when `skip_empty` drops an empty block
        """
        if self.skip_empty and not block.is_question and not block.has_content and not block.image_ref:
            logger.debug(f"Skipping empty {block.type.value} block {block.id}")
            return None

        style = style or resolve_style(block.type, self.options)
        builder = getattr(self, _BUILDERS[block.type])
        children, height = builder(block, style)
        return Element(group=Group(children=tuple(children), x=position[0], y=position[1]), height=height)

    # ─────────────────────────────────────────────────────────────────────────
    # Builders: (block, style) -> (children, consumed height)
    # ─────────────────────────────────────────────────────────────────────────

    def _text_box(self, text: str, x: float, y: float, width: float, style: Style, role: Role) -> TextBox:
        lines = self.measurer.wrap(text, width, style)
        return TextBox(
            text=text,
            x=x,
            y=y,
            width=width,
            style=style,
            lines=lines,
            height=self.measurer.wrapped_height(lines, style),
            role=role,
        )

    def _build_question(self, block: Block, style: Style):
        children: list = []
        label_style = style.derive(bold=True)
        if block.display_number is not None:
            label = f"{block.display_number}."
            children.append(TextRun(
                text=label,
                x=0,
                y=0,
                style=label_style,
                width=self.measurer.text_width(label, label_style),
                role=Role.NUMBER,
            ))

        cursor = 0.0
        body_width = self.wrap_width(CONTENT_INDENT)
        if block.has_content:
            box = self._text_box(block.content, CONTENT_INDENT, 0, body_width, style, Role.CONTENT)
            children.append(box)
            cursor += box.height + CONTENT_GAP
        else:
            cursor += self.measurer.line_height(label_style)

        if block.image_ref:
            children.append(ImagePlaceholder(
                x=CONTENT_INDENT,
                y=cursor,
                w=body_width,
                h=IMAGE_HEIGHT,
                image_ref=block.image_ref,
                style=Style(background=PLACEHOLDER_FILL, stroke=RULE_COLOR),
            ))
            cursor += IMAGE_ADVANCE

        small = style.derive(font_size=style.font_size - 2, color=MUTED_COLOR)
        difficulty = difficulty_text(block, self.options.show_difficulty, self.labels)
        if difficulty:
            children.append(TextRun(
                text=difficulty,
                x=CONTENT_INDENT,
                y=cursor,
                style=small,
                width=self.measurer.text_width(difficulty, small),
                role=Role.DIFFICULTY,
            ))
            cursor += DIFFICULTY_ADVANCE

        option_width = self.wrap_width(OPTION_INDENT)
        for i, option in enumerate(block.choice_options, start=1):
            box = self._text_box(f"{i}) {option}", OPTION_INDENT, cursor, option_width, style, Role.OPTION)
            children.append(box)
            cursor += max(OPTION_ADVANCE, box.height)

        rule = Style(stroke=RULE_COLOR)
        for _ in range(block.answer_line_count):
            cursor += ANSWER_LINE_ADVANCE
            children.append(Line(
                x1=CONTENT_INDENT,
                y1=cursor,
                x2=CONTENT_INDENT + body_width,
                y2=cursor,
                style=rule,
                role=Role.ANSWER_LINE,
            ))

        citation = source_text(block, self.labels) if self.options.show_sources else None
        if citation:
            source_style = small.derive(color=FAINT_COLOR)
            width = self.measurer.text_width(citation, source_style)
            if self.options.source_position == "right":
                x, anchor = CONTENT_INDENT + body_width, "right"
            else:
                x, anchor = CONTENT_INDENT, "left"
            children.append(TextRun(
                text=citation,
                x=x,
                y=cursor,
                style=source_style,
                width=width,
                anchor=anchor,
                role=Role.SOURCE,
            ))
            cursor += SOURCE_ADVANCE

        cursor += QUESTION_SPACING[self.options.question_spacing]
        return children, cursor

    def _build_passage(self, block: Block, style: Style):
        pad = style.padding
        width = self.wrap_width(2 * pad)
        box = self._text_box(block.content, pad, pad, width, style.derive(background=None), Role.CONTENT)
        background = Rect(
            x=0,
            y=0,
            w=width + 2 * pad,
            h=box.height + 2 * pad,
            style=Style(background=style.background, radius=PASSAGE_RADIUS),
        )
        return [background, box], background.h + 20

    def _build_concept(self, block: Block, style: Style):
        label_style = style.derive(font_size=style.font_size + 2)
        label = TextRun(
            text=self.labels.concept,
            x=0,
            y=0,
            style=label_style,
            width=self.measurer.text_width(self.labels.concept, label_style),
            role=Role.LABEL,
        )
        box = self._text_box(
            block.content, 0, CONCEPT_CONTENT_TOP, self.wrap_width(), style, Role.CONTENT
        )
        return [label, box], box.height + 50

    def _build_explanation(self, block: Block, style: Style):
        x, y = EXPLANATION_CONTENT
        width = self.wrap_width(2 * x)
        box = self._text_box(block.content, x, y, width, style, Role.CONTENT)
        border = Rect(
            x=0,
            y=10,
            w=width + 2 * x,
            h=box.height + 30,
            style=Style(stroke=ACCENT_COLOR, dash=EXPLANATION_DASH),
        )
        label_style = style.derive(italic=False, bold=True, color=ACCENT_COLOR)
        label_width = self.measurer.text_width(self.labels.explanation, label_style)
        badge = Rect(x=10, y=0, w=label_width + 10, h=20, style=Style(background="#ffffff"))
        label = TextRun(
            text=self.labels.explanation,
            x=15,
            y=2,
            style=label_style,
            width=label_width,
            role=Role.LABEL,
        )
        return [border, badge, label, box], box.height + 60

    def _build_other(self, block: Block, style: Style):
        box = self._text_box(block.content, 0, 0, self.wrap_width(), style, Role.CONTENT)
        return [box], box.height + OTHER_GAP
