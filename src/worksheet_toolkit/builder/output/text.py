"""
Module: builder.output.text

Purpose:
    Line-oriented plain-text export. Also the fallback target of the
    Word adapter when python-docx is unavailable.

Key Classes:
    - PlainTextRenderer: Document -> UTF-8 text artifact

Used By:
    - builder.output.word: Fallback rendering
    - builder.controller: render_to_plain_text
"""

from __future__ import annotations

import logging
from typing import Optional

from worksheet_toolkit.builder.labels import get_labels, info_line
from worksheet_toolkit.builder.layout.models import Document
from worksheet_toolkit.core.models import BlockType, ExamInfo

from .artifact import TEXT_MEDIA_TYPE, Artifact
from .reading import NodeView, answer_entries, read_document

logger = logging.getLogger(__name__)

SEPARATOR = "=" * 60
RULED_LINE = "_" * 60
INDENT = "   "


class PlainTextRenderer:
    """
    Renders documents as plain text.

    Example:
        >>> artifact = PlainTextRenderer().render(document, ExamInfo(title="Quiz"))
        >>> artifact.data.decode().splitlines()[0]
        'Quiz'
    """

    def render(
        self,
        document: Document,
        exam_info: Optional[ExamInfo] = None,
        *,
        include_answer_key: bool = False,
    ) -> Artifact:
        text = self.render_text(document, exam_info, include_answer_key=include_answer_key)
        return Artifact(data=text.encode("utf-8"), extension=".txt", media_type=TEXT_MEDIA_TYPE)

    def render_text(
        self,
        document: Document,
        exam_info: Optional[ExamInfo] = None,
        *,
        include_answer_key: bool = False,
    ) -> str:
        info = exam_info or ExamInfo()
        labels = get_labels(document.options.locale)

        lines = [info.title or labels.document]
        meta = info_line(info, labels)
        if meta:
            lines.append(meta)
        if info.instructions:
            lines.append(info.instructions)
        lines.append(SEPARATOR)
        lines.append("")

        for view in read_document(document):
            lines.extend(self._block_lines(view, labels))
            lines.append("")

        if include_answer_key:
            lines.append(SEPARATOR)
            lines.append(labels.answer_key)
            lines.append("")
            lines.extend(answer_entries(document, labels))
            lines.append("")

        logger.debug(f"Plain text export: {len(lines)} lines")
        return "\n".join(lines)

    def _block_lines(self, view: NodeView, labels) -> list[str]:
        if view.block_type is BlockType.PASSAGE:
            return [f"[{labels.passage}]", view.content]
        if view.block_type is BlockType.CONCEPT:
            return [f"[{labels.concept}]", view.content]
        if view.block_type is BlockType.EXPLANATION:
            return [f"[{labels.explanation}]", view.content]
        if not view.is_question:
            return [view.content]

        lines = [view.heading]
        if view.difficulty:
            lines.append(f"{INDENT}{view.difficulty}")
        lines.extend(f"{INDENT}{option}" for option in view.options)
        lines.extend(f"{INDENT}{RULED_LINE}" for _ in range(view.answer_lines))
        if view.source:
            if view.source_anchor == "right":
                lines.append(view.source.rjust(len(INDENT) + len(RULED_LINE)))
            else:
                lines.append(f"{INDENT}{view.source}")
        return lines
