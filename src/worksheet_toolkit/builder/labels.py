"""
Module: builder.labels

Purpose:
    Localized label tables and the small text formatters shared by the
    element builders and the export adapters, so every output format
    prints identical strings.

Key Functions:
    - get_labels(): Label table for a locale
    - difficulty_text(): Difficulty indicator for a block
    - info_line(): Joined subject/grade/date/time metadata line
    - source_text(): Citation text for a block

Used By:
    - builder.layout.elements, builder.layout.auxiliary
    - builder.output.text, builder.output.word, builder.output.slides
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from worksheet_toolkit.core.models import Block, Difficulty, ExamInfo

INFO_SEPARATOR = " | "

# Fixed 5-glyph scale; one filled star per difficulty level
STAR_SCALE = {
    Difficulty.VERY_EASY: "★☆☆☆☆",
    Difficulty.EASY: "★★☆☆☆",
    Difficulty.MEDIUM: "★★★☆☆",
    Difficulty.HARD: "★★★★☆",
    Difficulty.VERY_HARD: "★★★★★",
}


@dataclass(frozen=True)
class Labels:
    """Localized strings for one locale."""

    document: str
    test: str
    presentation: str
    answer_key: str
    undetermined: str
    name: str
    instructions: str
    difficulty: str
    source: str
    subject: str
    grade: str
    date: str
    time: str  # format string, receives the minutes
    passage: str
    concept: str
    explanation: str
    difficulty_levels: dict


_LABELS = {
    "en": Labels(
        document="Document",
        test="Test",
        presentation="Presentation",
        answer_key="Answer Key",
        undetermined="Undetermined",
        name="Name:",
        instructions="※ Read each question carefully and write your answers.",
        difficulty="Difficulty",
        source="Source",
        subject="Subject",
        grade="Grade",
        date="Date",
        time="{} min",
        passage="Passage",
        concept="Core Concept",
        explanation="Explanation",
        difficulty_levels={
            Difficulty.VERY_EASY: "Very easy",
            Difficulty.EASY: "Easy",
            Difficulty.MEDIUM: "Medium",
            Difficulty.HARD: "Hard",
            Difficulty.VERY_HARD: "Very hard",
        },
    ),
    "ko": Labels(
        document="문서",
        test="시험지",
        presentation="프레젠테이션",
        answer_key="정답지",
        undetermined="미정",
        name="이름:",
        instructions="※ 문제를 잘 읽고 답안을 작성하시오.",
        difficulty="난이도",
        source="출처",
        subject="과목",
        grade="학년",
        date="일시",
        time="{}분",
        passage="지문",
        concept="핵심 개념",
        explanation="해설",
        difficulty_levels={
            Difficulty.VERY_EASY: "매우 쉬움",
            Difficulty.EASY: "쉬움",
            Difficulty.MEDIUM: "보통",
            Difficulty.HARD: "어려움",
            Difficulty.VERY_HARD: "매우 어려움",
        },
    ),
}


def get_labels(locale: str = "en") -> Labels:
    """Label table for a locale (English when unknown)."""
    return _LABELS.get(locale, _LABELS["en"])


def difficulty_text(block: Block, mode: str, labels: Labels) -> Optional[str]:
    """
    Difficulty indicator for a block, or None when nothing is shown.

    Args:
        block: Block to describe
        mode: "none", "text" or "stars"
        labels: Localized labels

    Returns:
        "Difficulty: Medium" in text mode, "★★★☆☆" in stars mode
    """
    if mode == "none" or block.difficulty is None:
        return None
    if mode == "stars":
        return STAR_SCALE[block.difficulty]
    return f"{labels.difficulty}: {labels.difficulty_levels[block.difficulty]}"


def source_text(block: Block, labels: Labels) -> Optional[str]:
    if not block.material_title:
        return None
    return f"[{labels.source}: {block.material_title}]"


def info_line(info: ExamInfo, labels: Labels) -> str:
    """Join whichever of subject/grade/date/time are present."""
    parts = []
    if info.subject:
        parts.append(f"{labels.subject}: {info.subject}")
    if info.grade:
        parts.append(f"{labels.grade}: {info.grade}")
    if info.date:
        parts.append(f"{labels.date}: {info.date}")
    if info.time:
        parts.append(labels.time.format(info.time))
    return INFO_SEPARATOR.join(parts)


def answer_text(block: Block, number: int, labels: Labels) -> str:
    """Answer key entry: "3. B" (or the undetermined marker)."""
    return f"{number}. {block.correct_answer or labels.undetermined}"
