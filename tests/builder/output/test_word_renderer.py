"""
Unit tests for the Word (.docx) export and its plain-text fallback.
"""

import io

import pytest
from docx import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH

from worksheet_toolkit.builder.config import FormatOptions
from worksheet_toolkit.builder.controller import compute_layout
from worksheet_toolkit.builder.output.word import (
    RULED_LINE,
    Available,
    Unavailable,
    WordRenderer,
    resolve_docx_capability,
)


def _paragraphs(artifact):
    return DocxDocument(io.BytesIO(artifact.data)).paragraphs


@pytest.fixture
def renderer():
    return WordRenderer()


class TestCapability:
    def test_resolve_docx_capability_when_installed_then_available(self):
        assert isinstance(resolve_docx_capability(), Available)

    def test_render_when_unavailable_then_plain_text_fallback(self, mixed_blocks, caplog):
        # Arrange
        document = compute_layout(mixed_blocks, FormatOptions())

        # Act
        artifact = WordRenderer(Unavailable("python-docx missing")).render(document)

        # Assert
        assert artifact.extension == ".txt"
        assert "1. What is 2 + 2?" in artifact.data.decode("utf-8")
        assert "python-docx missing" in caplog.text


class TestWordRenderer:
    """Tests for WordRenderer with python-docx installed."""

    def test_render_when_called_then_docx_artifact(self, renderer, mixed_blocks):
        artifact = renderer.render(compute_layout(mixed_blocks, FormatOptions()))

        assert artifact.extension == ".docx"
        assert artifact.data[:2] == b"PK"

    def test_render_when_exam_info_then_centered_heading_and_meta(self, renderer, mixed_blocks, exam_info):
        paragraphs = _paragraphs(renderer.render(compute_layout(mixed_blocks, FormatOptions()), exam_info))

        assert paragraphs[0].text == "Unit Test"
        assert paragraphs[0].style.name == "Heading 1"
        assert paragraphs[0].alignment == WD_ALIGN_PARAGRAPH.CENTER
        assert paragraphs[1].text == "Subject: Science | Grade: 7 | Date: 2026-03-02 | 40 min"

    def test_render_when_questions_then_bold_numbers_and_options(self, renderer, mixed_blocks):
        # Act
        paragraphs = _paragraphs(renderer.render(compute_layout(mixed_blocks, FormatOptions())))

        # Assert
        texts = [p.text for p in paragraphs]
        first = texts.index("1. What is 2 + 2?")
        assert paragraphs[first].runs[0].text == "1."
        assert paragraphs[first].runs[0].bold
        assert texts[first + 1:first + 4] == ["1) 3", "2) 4", "3) 5"]
        assert paragraphs[first + 1].paragraph_format.left_indent is not None
        assert "3. Discuss the causes of the French Revolution." in texts

    def test_render_when_written_answers_then_ruled_paragraphs(self, renderer, mixed_blocks):
        paragraphs = _paragraphs(renderer.render(compute_layout(mixed_blocks, FormatOptions())))

        assert [p.text for p in paragraphs].count(RULED_LINE) == 2 + 5

    def test_render_when_passage_then_shaded(self, renderer, mixed_blocks):
        paragraphs = _paragraphs(renderer.render(compute_layout(mixed_blocks, FormatOptions())))

        passage = next(p for p in paragraphs if p.text == "Read the following passage carefully.")
        assert b"w:shd" in passage._p.xml.encode("utf-8")

    def test_render_when_source_right_then_right_aligned(self, renderer, mc_question):
        options = FormatOptions(show_sources=True, source_position="right")

        paragraphs = _paragraphs(renderer.render(compute_layout([mc_question], options)))

        source = next(p for p in paragraphs if p.text == "[Source: Cell Biology]")
        assert source.alignment == WD_ALIGN_PARAGRAPH.RIGHT

    def test_render_when_answer_key_then_heading_and_entries(self, renderer, mixed_blocks):
        paragraphs = _paragraphs(
            renderer.render(compute_layout(mixed_blocks, FormatOptions()), include_answer_key=True)
        )

        texts = [p.text for p in paragraphs]
        start = texts.index("Answer Key")
        assert paragraphs[start].style.name == "Heading 2"
        assert texts[start + 1:start + 4] == ["1. 2", "2. Paris", "3. Undetermined"]

    def test_render_when_no_answer_key_then_absent(self, renderer, mixed_blocks):
        paragraphs = _paragraphs(renderer.render(compute_layout(mixed_blocks, FormatOptions())))

        assert "Answer Key" not in [p.text for p in paragraphs]
