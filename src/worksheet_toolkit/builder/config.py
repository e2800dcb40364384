"""
Module: builder.config

Purpose:
    Configuration dataclass for one layout/export run. Immutable
    configuration normalized on construction: invalid caller input falls
    back to defaults instead of failing the export.

Key Classes:
    - FormatOptions: User-configurable formatting options

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout: geometry, styles and element builders
    - builder.output: all export adapters
    - builder.controller: public entry points
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Optional

logger = logging.getLogger(__name__)

PAGE_SIZES = ("A4", "A3", "B4", "B3")
COLUMN_COUNTS = (1, 2)
FONT_SIZE_NAMES = ("small", "medium", "large")
DIFFICULTY_MODES = ("none", "text", "stars")
SOURCE_POSITIONS = ("left", "right")
SPACING_NAMES = ("narrow", "normal", "wide")
LOCALES = ("en", "ko")

# camelCase keys sent by the editor UI
_CAMEL_KEYS = {
    "pageSize": "page_size",
    "fontSize": "font_size",
    "showDifficulty": "show_difficulty",
    "showSources": "show_sources",
    "sourcePosition": "source_position",
    "questionSpacing": "question_spacing",
}


@dataclass(frozen=True)
class FormatOptions:
    """
    Formatting options for one export (immutable).

    Unlike the layout geometry, nothing here ever raises: an unknown
    value is logged and replaced by the field default.

    Attributes:
        page_size: Paper size ("A4", "A3", "B4", "B3")
        columns: Column count (1 or 2)
        font_size: Body font size name ("small", "medium", "large")
        show_difficulty: Difficulty indicator ("none", "text", "stars")
        show_sources: Whether to print source citations
        source_position: Citation anchor ("left", "right")
        question_spacing: Gap after each question ("narrow", "normal", "wide")
        locale: Label language ("en", "ko")

    Example:
        >>> FormatOptions(page_size="Letter", columns=3)
        FormatOptions(page_size='A4', columns=1, ...)
    """

    page_size: str = "A4"
    columns: int = 1
    font_size: str = "medium"
    show_difficulty: str = "none"
    show_sources: bool = False
    source_position: str = "left"
    question_spacing: str = "normal"
    locale: str = "en"

    def __post_init__(self) -> None:
        """Normalize options on construction."""
        page_size = str(self.page_size).upper() if self.page_size else self.page_size
        self._coerce("page_size", page_size, PAGE_SIZES, "A4")
        try:
            columns: Any = int(self.columns)
        except (TypeError, ValueError):
            columns = self.columns
        self._coerce("columns", columns, COLUMN_COUNTS, 1)
        self._coerce("font_size", self.font_size, FONT_SIZE_NAMES, "medium")
        self._coerce("show_difficulty", self.show_difficulty, DIFFICULTY_MODES, "none")
        self._coerce("source_position", self.source_position, SOURCE_POSITIONS, "left")
        self._coerce("question_spacing", self.question_spacing, SPACING_NAMES, "normal")
        self._coerce("locale", self.locale, LOCALES, "en")
        object.__setattr__(self, "show_sources", bool(self.show_sources))

    def _coerce(self, name: str, value: Any, allowed: tuple, default: Any) -> None:
        if value not in allowed:
            logger.warning(f"Invalid {name} {value!r}, using {default!r}")
            value = default
        object.__setattr__(self, name, value)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> FormatOptions:
        """
        Build options from a settings dictionary.

        Accepts the editor's camelCase keys as well as snake_case.
        A legacy `showDifficulty: true` is read as "text".
        Unknown keys are ignored.
        """
        data = data or {}
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_KEYS.get(key, key)
            if name in known:
                kwargs[name] = value

        difficulty = kwargs.get("show_difficulty")
        if difficulty is True:
            kwargs["show_difficulty"] = "text"
        elif difficulty is False or difficulty is None and "show_difficulty" in kwargs:
            kwargs["show_difficulty"] = "none"

        return cls(**kwargs)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
