"""
Unit tests for block record validation.
"""

import pytest

from worksheet_toolkit.core.schemas import ValidationError, validate_block


class TestValidateBlock:
    """Tests for validate_block()."""

    def test_validate_block_when_minimal_record_then_passes(self):
        validate_block({"id": "1", "type": "question"})

    def test_validate_block_when_not_a_dict_then_raises(self):
        with pytest.raises(ValidationError, match="must be an object"):
            validate_block(["id", "type"])

    def test_validate_block_when_missing_type_then_lists_missing_field(self):
        # Act
        with pytest.raises(ValidationError) as exc_info:
            validate_block({"id": "1"})

        # Assert
        assert exc_info.value.errors == ["Missing field: type"]

    def test_validate_block_when_options_not_list_then_raises_with_path(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_block({"id": "1", "type": "question", "options": "A,B"})

        assert exc_info.value.path == "options"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("content", 5),
            ("content", ["a"]),
            ("materialTitle", {"t": 1}),
            ("image_ref", True),
            ("correctAnswer", ["A"]),
        ],
    )
    def test_validate_block_when_field_has_wrong_type_then_raises_with_path(self, field, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_block({"id": "1", "type": "question", field: value})

        assert exc_info.value.path == field

    def test_validate_block_when_config_not_object_then_raises(self):
        with pytest.raises(ValidationError, match="config must be an object"):
            validate_block({"id": "1", "type": "question", "config": "x.png"})

    def test_validate_block_when_config_image_url_not_text_then_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_block({"id": "1", "type": "question", "config": {"imageUrl": 3}})

        assert exc_info.value.path == "config.imageUrl"

    def test_validate_block_when_numeric_answer_then_passes(self):
        validate_block({"id": "1", "type": "question", "correctAnswer": 2, "content": None})

    def test_validate_block_when_unknown_type_then_accepted(self):
        validate_block({"id": "1", "type": "video"}, strict=True)

    def test_validate_block_when_strict_and_bad_difficulty_then_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_block({"id": "1", "type": "question", "difficulty": "extreme"}, strict=True)

        assert exc_info.value.path == "difficulty"

    def test_validate_block_when_lenient_and_bad_difficulty_then_passes(self):
        validate_block({"id": "1", "type": "question", "difficulty": "extreme"})

    def test_validate_block_when_strict_and_full_record_then_passes(self):
        validate_block(
            {
                "id": "q1",
                "type": "question",
                "subtype": "multiple_choice",
                "content": "Pick",
                "options": ["A", "B"],
                "correctAnswer": "A",
                "difficulty": "easy",
                "config": {"imageUrl": "x.png"},
            },
            strict=True,
        )
