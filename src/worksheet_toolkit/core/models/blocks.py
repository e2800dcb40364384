"""
Module: blocks

Purpose:
    Provides the Block dataclass - the atomic content unit placed by the
    layout engine. Blocks are supplied per invocation by the caller and are
    never mutated; numbering produces new instances.

Key Classes:
    - BlockType: Closed set of block kinds
    - QuestionSubtype: Answer format of a question block
    - Difficulty: Five-step difficulty scale
    - Block: Immutable content unit

Key Functions:
    - Block.from_dict(data): Build from a data-service record
    - Block.to_dict(): Serialize for JSON storage

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - builder.layout.numbering: assigns display_number
    - builder.layout.elements: per-type element builders
    - builder.loading.loader: record loading
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)


class BlockType(str, Enum):
    """
    Kind of content unit.

    The set is closed: anything the data service sends that is not listed
    here is loaded as OTHER and rendered as plain text.
    """

    QUESTION = "question"
    PASSAGE = "passage"
    CONCEPT = "concept"
    EXPLANATION = "explanation"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> BlockType:
        """Map a raw type tag to a BlockType, falling back to OTHER."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.debug(f"Unknown block type {value!r}, treating as plain text")
            return cls.OTHER


class QuestionSubtype(str, Enum):
    """Answer format of a question block."""

    MULTIPLE_CHOICE = "multiple_choice"
    SHORT_ANSWER = "short_answer"
    ESSAY = "essay"
    TRUE_FALSE = "true_false"


class Difficulty(str, Enum):
    """Five-step difficulty scale, easiest first."""

    VERY_EASY = "very_easy"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    VERY_HARD = "very_hard"

    @property
    def level(self) -> int:
        """1-based position on the scale (VERY_EASY=1 ... VERY_HARD=5)."""
        return list(Difficulty).index(self) + 1


def _parse_optional(enum_cls, value: Any):
    if value is None or value == "":
        return None
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        logger.debug(f"Ignoring unknown {enum_cls.__name__} value {value!r}")
        return None


@dataclass(frozen=True)
class Block:
    """
    Educational content unit (immutable).

    Attributes:
        id: Identifier from the data service
        type: Block kind
        content: Body text (may be empty)
        subtype: Answer format (questions only)
        options: Ordered option texts (multiple choice only)
        correct_answer: Answer shown in the answer key
        difficulty: Difficulty level, if rated
        image_ref: Opaque reference resolved by the storage collaborator
        material_title: Title of the source material, used for citations
        display_number: Sequential question number assigned by the engine

    Invariants:
        - display_number is None until numbering runs
        - only QUESTION blocks ever receive a display_number

    Example:
        >>> block = Block(id="b1", type=BlockType.QUESTION, content="2 + 2 = ?")
        >>> block.is_question
        True
        >>> block.with_number(3).display_number
        3
    """

    id: str
    type: BlockType
    content: str = ""
    subtype: Optional[QuestionSubtype] = None
    options: tuple[str, ...] = ()
    correct_answer: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    image_ref: Optional[str] = None
    material_title: Optional[str] = None
    display_number: Optional[int] = None

    @property
    def is_question(self) -> bool:
        return self.type is BlockType.QUESTION

    @property
    def has_content(self) -> bool:
        return bool(self.content and self.content.strip())

    @property
    def answer_line_count(self) -> int:
        """Ruled answer lines reserved below the question (essay=5, short answer=2)."""
        if self.subtype is QuestionSubtype.ESSAY:
            return 5
        if self.subtype is QuestionSubtype.SHORT_ANSWER:
            return 2
        return 0

    @property
    def choice_options(self) -> tuple[str, ...]:
        """Options that are actually rendered (multiple choice only)."""
        if self.subtype is QuestionSubtype.MULTIPLE_CHOICE:
            return self.options
        return ()

    def with_number(self, number: int) -> Block:
        """Return a copy carrying the given display number."""
        return replace(self, display_number=number)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        Note: display_number is NOT stored - it is recomputed per layout run.
        """
        d: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "content": self.content,
        }
        if self.subtype is not None:
            d["subtype"] = self.subtype.value
        if self.options:
            d["options"] = list(self.options)
        if self.correct_answer is not None:
            d["correct_answer"] = self.correct_answer
        if self.difficulty is not None:
            d["difficulty"] = self.difficulty.value
        if self.image_ref is not None:
            d["image_ref"] = self.image_ref
        if self.material_title is not None:
            d["material_title"] = self.material_title
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Block:
        """
        Deserialize from a data-service record.

        Accepts both snake_case and camelCase keys, and the legacy
        `config.imageUrl` location for the image reference.

        Args:
            data: Record dictionary

        Returns:
            Block instance
        """
        config = data.get("config") or {}
        image_ref = data.get("image_ref") or data.get("imageRef") or config.get("imageUrl")
        correct = data.get("correct_answer", data.get("correctAnswer"))
        title = data.get("material_title", data.get("materialTitle"))
        options = data.get("options") or ()

        return cls(
            id=str(data.get("id", "")),
            type=BlockType.parse(data.get("type")),
            content=data.get("content") or "",
            subtype=_parse_optional(QuestionSubtype, data.get("subtype")),
            options=tuple(str(o) for o in options),
            correct_answer=str(correct) if correct not in (None, "") else None,
            difficulty=_parse_optional(Difficulty, data.get("difficulty")),
            image_ref=image_ref or None,
            material_title=title or None,
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        number = f", #{self.display_number}" if self.display_number is not None else ""
        return f"Block({self.id!r}, {self.type.value}{number})"
