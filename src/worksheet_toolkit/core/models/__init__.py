"""
Core Models Package

Immutable, validated data models that serve as the single source of truth
for the layout engine and every export adapter.

| Record field (data service) | Model field |
|-----------------------------|-------------|
| `type` | `Block.type` (`BlockType`) |
| `correct_answer` / `correctAnswer` | `Block.correct_answer` |
| `config.imageUrl` / `imageRef` | `Block.image_ref` |
| `material_title` / `materialTitle` | `Block.material_title` |
"""

from .blocks import Block, BlockType, QuestionSubtype, Difficulty
from .exam_info import ExamInfo

__all__ = [
    "Block",
    "BlockType",
    "QuestionSubtype",
    "Difficulty",
    "ExamInfo",
]
