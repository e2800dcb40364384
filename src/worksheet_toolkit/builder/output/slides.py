"""
Module: builder.output.slides

Purpose:
    Self-contained HTML slide deck export. A title slide comes first;
    questions are batched up to three per slide, and every non-question
    block closes the open batch and gets a slide of its own.

Key Classes:
    - HtmlSlideRenderer: Document -> HTML artifact

Key Functions:
    - batch_slides(): Group node views into slides

Used By:
    - builder.controller: render_to_html_slides
"""

from __future__ import annotations

import html
import logging
from typing import Optional

from worksheet_toolkit.builder.labels import get_labels, info_line
from worksheet_toolkit.builder.layout.models import Document
from worksheet_toolkit.core.models import BlockType, ExamInfo

from .artifact import HTML_MEDIA_TYPE, Artifact
from .reading import NodeView, read_document

logger = logging.getLogger(__name__)

QUESTIONS_PER_SLIDE = 3

SLIDE_CSS = """
body { margin: 0; background: #e0e0e0; font-family: 'Noto Sans KR', sans-serif; }
.slide { width: 1024px; height: 768px; padding: 50px; margin: 20px auto; box-sizing: border-box;
         background: #ffffff; box-shadow: 0 2px 8px rgba(0, 0, 0, 0.2); overflow: hidden;
         page-break-after: always; }
.title-slide { display: flex; flex-direction: column; justify-content: center; align-items: center; }
.title-slide h1 { font-size: 48px; margin: 0 0 20px; }
.title-slide .meta { font-size: 20px; color: #666666; }
.question { margin-bottom: 30px; font-size: 22px; }
.question-number { font-weight: bold; margin-right: 8px; }
.difficulty { font-size: 16px; color: #666666; margin: 6px 0 0 30px; }
.options { list-style: none; margin: 10px 0 0 40px; padding: 0; }
.options li { margin-bottom: 6px; }
.source { font-size: 14px; color: #999999; margin-top: 6px; }
.source.right { text-align: right; }
.passage { background: #f5f5f5; padding: 20px; border-radius: 5px; font-size: 22px; color: #333333; }
.concept { font-size: 24px; }
.concept .label { font-weight: bold; color: #1a73e8; margin-bottom: 12px; }
.explanation { border: 2px dashed #1a73e8; padding: 20px; font-style: italic; color: #666666; }
.explanation .label { font-style: normal; font-weight: bold; color: #1a73e8; margin-bottom: 12px; }
.content { white-space: pre-wrap; }
"""


def batch_slides(views: list[NodeView], per_slide: int = QUESTIONS_PER_SLIDE) -> list[list[NodeView]]:
    """
    Group views into content slides.

    Example:
        >>> [len(s) for s in batch_slides([q, q, q, q, passage, q])]
        [3, 1, 1, 1]
    """
    slides: list[list[NodeView]] = []
    batch: list[NodeView] = []
    for view in views:
        if view.is_question:
            batch.append(view)
            if len(batch) == per_slide:
                slides.append(batch)
                batch = []
            continue
        if batch:
            slides.append(batch)
            batch = []
        slides.append([view])
    if batch:
        slides.append(batch)
    return slides


def _esc(text: Optional[str]) -> str:
    return html.escape(text or "")


class HtmlSlideRenderer:
    """Renders documents as an HTML slide deck."""

    def __init__(self, questions_per_slide: int = QUESTIONS_PER_SLIDE):
        self.questions_per_slide = questions_per_slide

    def render(self, document: Document, exam_info: Optional[ExamInfo] = None) -> Artifact:
        info = exam_info or ExamInfo()
        labels = get_labels(document.options.locale)
        title = info.title or labels.presentation

        slides = [self._title_slide(title, info_line(info, labels))]
        for batch in batch_slides(read_document(document), self.questions_per_slide):
            body = "\n".join(self._block_html(view, labels) for view in batch)
            slides.append(f'<div class="slide">\n{body}\n</div>')

        html_content = f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{_esc(title)}</title>
<style>{SLIDE_CSS}</style>
</head>
<body>
{chr(10).join(slides)}
</body>
</html>
"""
        logger.debug(f"HTML export: {len(slides)} slides")
        return Artifact(data=html_content.encode("utf-8"), extension=".html", media_type=HTML_MEDIA_TYPE)

    def _title_slide(self, title: str, meta: str) -> str:
        meta_html = f'\n<div class="meta">{_esc(meta)}</div>' if meta else ""
        return f'<div class="slide title-slide">\n<h1>{_esc(title)}</h1>{meta_html}\n</div>'

    def _block_html(self, view: NodeView, labels) -> str:
        content = f'<div class="content">{_esc(view.content)}</div>'
        if view.block_type is BlockType.PASSAGE:
            return f'<div class="passage">{content}</div>'
        if view.block_type is BlockType.CONCEPT:
            return f'<div class="concept"><div class="label">{_esc(labels.concept)}</div>{content}</div>'
        if view.block_type is BlockType.EXPLANATION:
            return f'<div class="explanation"><div class="label">{_esc(labels.explanation)}</div>{content}</div>'
        if not view.is_question:
            return f'<div class="other">{content}</div>'

        parts = ['<div class="question">']
        number = f'<span class="question-number">{_esc(view.number)}</span>' if view.number else ""
        parts.append(f"<div>{number}{_esc(view.content)}</div>")
        if view.difficulty:
            parts.append(f'<div class="difficulty">{_esc(view.difficulty)}</div>')
        if view.options:
            items = "".join(f"<li>{_esc(option)}</li>" for option in view.options)
            parts.append(f'<ul class="options">{items}</ul>')
        if view.source:
            anchor = " right" if view.source_anchor == "right" else ""
            parts.append(f'<div class="source{anchor}">{_esc(view.source)}</div>')
        parts.append("</div>")
        return "".join(parts)
