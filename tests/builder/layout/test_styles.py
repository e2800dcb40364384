"""
Unit tests for style resolution.
"""

import pytest

from worksheet_toolkit.builder.config import FormatOptions
from worksheet_toolkit.builder.layout.styles import resolve_style
from worksheet_toolkit.core.models import BlockType


class TestResolveStyle:
    @pytest.mark.parametrize("font_size,expected", [("small", 10), ("medium", 12), ("large", 14)])
    def test_resolve_style_when_font_size_then_base_size(self, font_size, expected):
        style = resolve_style(BlockType.QUESTION, FormatOptions(font_size=font_size))

        assert style.font_size == expected
        assert style.color == "#000000"
        assert style.line_height == 1.6
        assert style.font_family == "Noto Sans KR, sans-serif"

    def test_resolve_style_when_passage_then_background_and_padding(self):
        style = resolve_style(BlockType.PASSAGE, FormatOptions())

        assert style.color == "#333333"
        assert style.background == "#f5f5f5"
        assert style.padding == 10

    def test_resolve_style_when_concept_then_bold_accent(self):
        style = resolve_style(BlockType.CONCEPT, FormatOptions())

        assert style.bold
        assert style.color == "#1a73e8"

    def test_resolve_style_when_explanation_then_smaller_italic_muted(self):
        style = resolve_style(BlockType.EXPLANATION, FormatOptions(font_size="large"))

        assert style.font_size == 12
        assert style.italic
        assert style.color == "#666666"

    def test_resolve_style_when_other_then_base_style(self):
        options = FormatOptions()
        assert resolve_style(BlockType.OTHER, options) == resolve_style(BlockType.QUESTION, options)
