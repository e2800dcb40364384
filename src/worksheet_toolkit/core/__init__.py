"""
Worksheet Toolkit Core Package

Shared data models for everything downstream of the data service.

**DESIGN NOTES:**

1. **Immutable Blocks**
   - Blocks arrive from the caller and are never mutated.
   - The only engine-assigned field (`display_number`) is attached by
     creating a new instance with `dataclasses.replace`.

2. **Closed Block Types**
   - `BlockType` is a closed enum. Unknown record types are mapped to
     `BlockType.OTHER` at load time, so the layout engine never sees an
     unrecognized tag.
"""

from .models import Block, BlockType, QuestionSubtype, Difficulty, ExamInfo

__all__ = [
    "Block",
    "BlockType",
    "QuestionSubtype",
    "Difficulty",
    "ExamInfo",
]
