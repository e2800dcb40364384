"""
Unit tests for the plain-text export.
"""

import pytest

from worksheet_toolkit.builder.config import FormatOptions
from worksheet_toolkit.builder.controller import compute_layout
from worksheet_toolkit.builder.output.text import RULED_LINE, SEPARATOR, PlainTextRenderer
from worksheet_toolkit.core.models import Block, BlockType, Difficulty, ExamInfo


def _render(blocks, options=None, info=None, **kwargs):
    document = compute_layout(blocks, options or FormatOptions())
    artifact = PlainTextRenderer().render(document, info, **kwargs)
    return artifact, artifact.data.decode("utf-8").splitlines()


class TestPlainTextRenderer:
    """Tests for PlainTextRenderer."""

    def test_render_when_called_then_txt_artifact(self, mixed_blocks):
        artifact, _ = _render(mixed_blocks)

        assert artifact.extension == ".txt"
        assert artifact.media_type.startswith("text/plain")

    def test_render_when_exam_info_then_title_meta_and_separator(self, mixed_blocks, exam_info):
        _, lines = _render(mixed_blocks, info=exam_info)

        assert lines[:3] == [
            "Unit Test",
            "Subject: Science | Grade: 7 | Date: 2026-03-02 | 40 min",
            SEPARATOR,
        ]
        assert len(SEPARATOR) == 60

    def test_render_when_no_info_then_default_title(self, mixed_blocks):
        _, lines = _render(mixed_blocks)

        assert lines[0] == "Document"
        assert lines[1] == SEPARATOR

    def test_render_when_questions_then_numbered_in_order_with_options(self, mixed_blocks):
        # Act
        _, lines = _render(mixed_blocks)

        # Assert
        assert "1. What is 2 + 2?" in lines
        assert "2. Name the capital of France." in lines
        assert "3. Discuss the causes of the French Revolution." in lines
        first = lines.index("1. What is 2 + 2?")
        assert lines[first + 1:first + 4] == ["   1) 3", "   2) 4", "   3) 5"]
        assert lines.index("2. Name the capital of France.") < lines.index("[Passage]")

    def test_render_when_answer_lines_then_indented_rules(self, mixed_blocks):
        _, lines = _render(mixed_blocks)

        assert lines.count(f"   {RULED_LINE}") == 2 + 5

    def test_render_when_passage_and_concept_then_labelled(self, mixed_blocks):
        _, lines = _render(mixed_blocks)

        passage = lines.index("[Passage]")
        assert lines[passage + 1] == "Read the following passage carefully."
        assert "[Core Concept]" in lines

    def test_render_when_difficulty_and_sources_then_included(self, mc_question):
        options = FormatOptions(show_difficulty="stars", show_sources=True)

        _, lines = _render([mc_question], options)

        assert "   ★★★☆☆" in lines
        assert "   [Source: Cell Biology]" in lines

    def test_render_when_source_right_then_right_justified(self, mc_question):
        options = FormatOptions(show_sources=True, source_position="right")

        _, lines = _render([mc_question], options)

        source = next(line for line in lines if "[Source:" in line)
        assert source.endswith("[Source: Cell Biology]")
        assert len(source) == 63

    def test_render_when_answer_key_then_appended(self, mixed_blocks):
        _, lines = _render(mixed_blocks, include_answer_key=True)

        start = lines.index("Answer Key")
        assert lines[start - 1] == SEPARATOR
        assert lines[start + 2:start + 5] == ["1. 2", "2. Paris", "3. Undetermined"]

    def test_render_when_korean_locale_then_korean_labels(self):
        blocks = [Block(id="1", type=BlockType.EXPLANATION, content="설명")]

        _, lines = _render(blocks, FormatOptions(locale="ko"), ExamInfo(time="30"))

        assert lines[0] == "문서"
        assert lines[1] == "30분"
        assert "[해설]" in lines

    @pytest.mark.parametrize("columns", [1, 2])
    def test_render_when_columns_change_then_text_unchanged(self, mixed_blocks, columns):
        _, baseline = _render(mixed_blocks, FormatOptions(columns=1))
        _, lines = _render(mixed_blocks, FormatOptions(columns=columns))

        assert lines == baseline

    def test_render_when_difficulty_text_then_localized_line(self):
        block = Block(id="1", type=BlockType.QUESTION, content="Q", difficulty=Difficulty.VERY_EASY)

        _, lines = _render([block], FormatOptions(show_difficulty="text"))

        assert "   Difficulty: Very easy" in lines
