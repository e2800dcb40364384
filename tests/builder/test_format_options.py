"""
Unit tests for FormatOptions normalization and localized labels.
"""

import logging

import pytest

from worksheet_toolkit.builder.config import FormatOptions
from worksheet_toolkit.builder.labels import difficulty_text, get_labels, info_line, source_text
from worksheet_toolkit.core.models import Block, BlockType, Difficulty, ExamInfo


class TestFormatOptions:
    """Tests for option defaults and fallback."""

    def test_defaults_when_constructed_empty_then_documented_values(self):
        options = FormatOptions()

        assert options.page_size == "A4"
        assert options.columns == 1
        assert options.font_size == "medium"
        assert options.show_difficulty == "none"
        assert options.show_sources is False
        assert options.source_position == "left"
        assert options.question_spacing == "normal"
        assert options.locale == "en"

    @pytest.mark.parametrize("field,value,expected", [
        ("page_size", "Letter", "A4"),
        ("columns", 3, 1),
        ("columns", "two", 1),
        ("font_size", "huge", "medium"),
        ("show_difficulty", "emoji", "none"),
        ("source_position", "center", "left"),
        ("question_spacing", "tight", "normal"),
        ("locale", "fr", "en"),
    ])
    def test_invalid_value_when_constructed_then_falls_back_to_default(self, field, value, expected):
        options = FormatOptions(**{field: value})
        assert getattr(options, field) == expected

    def test_invalid_value_when_constructed_then_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            FormatOptions(page_size="Letter")

        assert "page_size" in caplog.text

    def test_page_size_when_lowercase_then_normalized(self):
        assert FormatOptions(page_size="b4").page_size == "B4"

    def test_columns_when_numeric_string_then_converted(self):
        assert FormatOptions(columns="2").columns == 2

    def test_from_dict_when_camel_case_then_maps_fields(self):
        # Arrange
        data = {
            "pageSize": "A3",
            "columns": 2,
            "fontSize": "large",
            "showDifficulty": "stars",
            "showSources": True,
            "sourcePosition": "right",
            "questionSpacing": "wide",
            "unknownKey": 1,
        }

        # Act
        options = FormatOptions.from_dict(data)

        # Assert
        assert options == FormatOptions(
            page_size="A3",
            columns=2,
            font_size="large",
            show_difficulty="stars",
            show_sources=True,
            source_position="right",
            question_spacing="wide",
        )

    def test_from_dict_when_legacy_boolean_difficulty_then_text_mode(self):
        assert FormatOptions.from_dict({"showDifficulty": True}).show_difficulty == "text"
        assert FormatOptions.from_dict({"showDifficulty": False}).show_difficulty == "none"

    def test_from_dict_when_none_then_defaults(self):
        assert FormatOptions.from_dict(None) == FormatOptions()


class TestLabels:
    """Tests for the shared label formatters."""

    def test_difficulty_text_when_text_mode_then_localized_label(self):
        block = Block(id="1", type=BlockType.QUESTION, difficulty=Difficulty.MEDIUM)

        assert difficulty_text(block, "text", get_labels("en")) == "Difficulty: Medium"
        assert difficulty_text(block, "text", get_labels("ko")) == "난이도: 보통"

    def test_difficulty_text_when_stars_mode_then_five_glyph_scale(self):
        block = Block(id="1", type=BlockType.QUESTION, difficulty=Difficulty.HARD)

        assert difficulty_text(block, "stars", get_labels("en")) == "★★★★☆"

    def test_difficulty_text_when_mode_none_or_unrated_then_none(self):
        rated = Block(id="1", type=BlockType.QUESTION, difficulty=Difficulty.EASY)
        unrated = Block(id="2", type=BlockType.QUESTION)

        assert difficulty_text(rated, "none", get_labels("en")) is None
        assert difficulty_text(unrated, "stars", get_labels("en")) is None

    def test_info_line_when_partial_info_then_joins_present_parts(self):
        info = ExamInfo(subject="Math", time="50")

        assert info_line(info, get_labels("en")) == "Subject: Math | 50 min"
        assert info_line(info, get_labels("ko")) == "과목: Math | 50분"

    def test_source_text_when_title_present_then_bracketed(self):
        block = Block(id="1", type=BlockType.QUESTION, material_title="Unit 2")

        assert source_text(block, get_labels("en")) == "[Source: Unit 2]"
        assert source_text(block, get_labels("ko")) == "[출처: Unit 2]"
