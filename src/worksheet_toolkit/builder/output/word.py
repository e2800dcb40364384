"""
Module: builder.output.word

Purpose:
    Word-processor (.docx) export using python-docx.

    Whether python-docx can be used is decided once, when the renderer
    is constructed, and kept as a value (Available / Unavailable). When
    it is unavailable the renderer produces the plain-text export
    instead and the artifact extension becomes ".txt"; the export never
    fails for this reason.

Key Classes:
    - Available, Unavailable: python-docx capability
    - WordRenderer: Document -> .docx artifact (or .txt fallback)

Key Functions:
    - resolve_docx_capability(): Probe python-docx

Dependencies:
    - python-docx: Document generation
    - builder.output.text: Fallback rendering

Used By:
    - builder.controller: render_to_word_document
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from worksheet_toolkit.builder.labels import get_labels, info_line
from worksheet_toolkit.builder.layout.models import Document
from worksheet_toolkit.builder.layout.styles import ACCENT_COLOR, FAINT_COLOR, MUTED_COLOR, PASSAGE_BACKGROUND
from worksheet_toolkit.core.models import BlockType, ExamInfo

from .artifact import DOCX_MEDIA_TYPE, Artifact
from .reading import NodeView, answer_entries, read_document
from .text import PlainTextRenderer

logger = logging.getLogger(__name__)

RULED_LINE = "_" * 80
OPTION_INDENT_PT = 18


@dataclass(frozen=True)
class Available:
    """python-docx is importable; `docx` is the module."""

    docx: Any


@dataclass(frozen=True)
class Unavailable:
    """python-docx cannot be used."""

    reason: str


DocxCapability = Union[Available, Unavailable]


def resolve_docx_capability() -> DocxCapability:
    """Probe python-docx once."""
    try:
        import docx
        import docx.enum.text  # noqa: F401
        import docx.oxml  # noqa: F401
        import docx.oxml.ns  # noqa: F401
        import docx.shared  # noqa: F401
    except ImportError as e:
        return Unavailable(reason=str(e))
    return Available(docx=docx)


def _rgb(docx, hex_color: str):
    return docx.shared.RGBColor.from_string(hex_color.lstrip("#").upper())


class WordRenderer:
    """
    Renders documents with python-docx.

    Args:
        capability: Pre-resolved capability (probed when omitted)

    Example:
        >>> artifact = WordRenderer(Unavailable("no docx")).render(document)
        >>> artifact.extension
        '.txt'
    """

    def __init__(self, capability: Optional[DocxCapability] = None):
        self.capability = capability if capability is not None else resolve_docx_capability()
        self.fallback = PlainTextRenderer()

    def render(
        self,
        document: Document,
        exam_info: Optional[ExamInfo] = None,
        *,
        include_answer_key: bool = False,
    ) -> Artifact:
        if isinstance(self.capability, Unavailable):
            logger.warning(
                f"Word export unavailable ({self.capability.reason}), writing plain text instead"
            )
            return self.fallback.render(document, exam_info, include_answer_key=include_answer_key)

        data = self._render_docx(self.capability.docx, document, exam_info or ExamInfo(), include_answer_key)
        return Artifact(data=data, extension=".docx", media_type=DOCX_MEDIA_TYPE)

    # ─────────────────────────────────────────────────────────────────────────
    # python-docx rendering
    # ─────────────────────────────────────────────────────────────────────────

    def _render_docx(self, docx, document: Document, info: ExamInfo, include_answer_key: bool) -> bytes:
        center = docx.enum.text.WD_ALIGN_PARAGRAPH.CENTER
        labels = get_labels(document.options.locale)
        doc = docx.Document()

        title = doc.add_heading(info.title or labels.document, level=1)
        title.alignment = center

        meta = info_line(info, labels)
        if meta:
            p = doc.add_paragraph(meta)
            p.alignment = center
        if info.instructions:
            doc.add_paragraph(info.instructions)

        for view in read_document(document):
            self._add_block(docx, doc, view, labels)

        if include_answer_key:
            doc.add_page_break()
            doc.add_heading(labels.answer_key, level=2)
            for entry in answer_entries(document, labels):
                doc.add_paragraph(entry)

        buf = io.BytesIO()
        doc.save(buf)
        logger.debug(f"Word export: {len(doc.paragraphs)} paragraphs")
        return buf.getvalue()

    def _add_block(self, docx, doc, view: NodeView, labels) -> None:
        Pt = docx.shared.Pt

        if view.block_type is BlockType.PASSAGE:
            doc.add_paragraph(f"[{labels.passage}]")
            p = doc.add_paragraph(view.content)
            self._shade(docx, p, PASSAGE_BACKGROUND)
            return
        if view.block_type is BlockType.CONCEPT:
            run = doc.add_paragraph().add_run(f"[{labels.concept}]")
            run.bold = True
            run.font.color.rgb = _rgb(docx, ACCENT_COLOR)
            doc.add_paragraph(view.content)
            return
        if view.block_type is BlockType.EXPLANATION:
            doc.add_paragraph(f"[{labels.explanation}]")
            run = doc.add_paragraph().add_run(view.content)
            run.italic = True
            run.font.color.rgb = _rgb(docx, MUTED_COLOR)
            return
        if not view.is_question:
            doc.add_paragraph(view.content)
            return

        p = doc.add_paragraph()
        if view.number:
            p.add_run(view.number).bold = True
            if view.content:
                p.add_run(" ")
        if view.content:
            p.add_run(view.content)

        if view.difficulty:
            run = doc.add_paragraph().add_run(view.difficulty)
            run.font.size = Pt(9)
            run.font.color.rgb = _rgb(docx, MUTED_COLOR)

        for option in view.options:
            p = doc.add_paragraph(option)
            p.paragraph_format.left_indent = Pt(OPTION_INDENT_PT)

        for _ in range(view.answer_lines):
            doc.add_paragraph(RULED_LINE)

        if view.source:
            p = doc.add_paragraph()
            run = p.add_run(view.source)
            run.font.size = Pt(9)
            run.font.color.rgb = _rgb(docx, FAINT_COLOR)
            if view.source_anchor == "right":
                p.alignment = docx.enum.text.WD_ALIGN_PARAGRAPH.RIGHT

        doc.add_paragraph("")

    def _shade(self, docx, paragraph, hex_color: str) -> None:
        """Paragraph background through a w:shd element."""
        shd = docx.oxml.OxmlElement("w:shd")
        shd.set(docx.oxml.ns.qn("w:val"), "clear")
        shd.set(docx.oxml.ns.qn("w:color"), "auto")
        shd.set(docx.oxml.ns.qn("w:fill"), hex_color.lstrip("#").upper())
        paragraph._p.get_or_add_pPr().append(shd)
