"""
Module: exam_info

Purpose:
    Auxiliary metadata printed in the test header and document title.

Key Classes:
    - ExamInfo: Immutable header metadata

Used By:
    - builder.layout.auxiliary: header primitives
    - builder.output: title/metadata paragraphs and slides
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ExamInfo:
    """
    Header metadata for one export (immutable).

    Every field is optional; generators substitute localized defaults
    for the title and instructions.

    Attributes:
        title: Document title
        subject: Subject name
        grade: Grade or year group
        date: Exam date (free text)
        time: Duration in minutes
        instructions: Instruction line printed under the header
    """

    title: Optional[str] = None
    subject: Optional[str] = None
    grade: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    instructions: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> ExamInfo:
        data = data or {}

        def _text(key: str) -> Optional[str]:
            value = data.get(key)
            return str(value) if value not in (None, "") else None

        return cls(
            title=_text("title"),
            subject=_text("subject"),
            grade=_text("grade"),
            date=_text("date"),
            time=_text("time"),
            instructions=_text("instructions"),
        )
