"""
Module: builder.loading.loader

Purpose:
    Load block records exported by the data service and turn them into
    Block objects, validating each record on the way.

Supported layouts:
    - JSON array of records
    - JSON object with a "blocks" array (optionally "testInfo"/"options")
    - JSONL, one record per line

Key Functions:
    - load_blocks(): Load Blocks from a file
    - load_material(): Load Blocks plus embedded ExamInfo/options
    - load_options(): Load FormatOptions from a JSON file

Key Classes:
    - LoaderError: Exception for loading failures
    - Material: Blocks with their embedded metadata

Dependencies:
    - core.models: Block, ExamInfo
    - core.schemas.validator: Record validation

Used By:
    - worksheet_toolkit.cli: Command-line export
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from worksheet_toolkit.builder.config import FormatOptions
from worksheet_toolkit.core.models import Block, ExamInfo
from worksheet_toolkit.core.schemas import ValidationError, validate_block

logger = logging.getLogger(__name__)


class LoaderError(Exception):
    """Error loading blocks or options from disk."""
    pass


@dataclass(frozen=True)
class Material:
    """
    Loaded material.

    Attributes:
        blocks: Blocks in file order
        exam_info: Embedded test metadata, if any
        options: Embedded format settings, if any
    """

    blocks: tuple[Block, ...]
    exam_info: Optional[ExamInfo] = None
    options: Optional[FormatOptions] = None


def _read_records(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoaderError(f"Cannot read {path}: {e}") from e

    if path.suffix.lower() == ".jsonl":
        records = []
        for line_no, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise LoaderError(f"Invalid JSON on line {line_no} of {path}: {e}") from e
        return records

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise LoaderError(f"Invalid JSON in {path}: {e}") from e


def load_material(path: Path, *, strict: bool = False) -> Material:
    """
    Load blocks and any embedded metadata.

    Args:
        path: JSON or JSONL file
        strict: Validate every record against the JSON schema

    Returns:
        Material

    Raises:
        LoaderError: If the file is missing, unreadable or a record is invalid

    Example:
        >>> material = load_material(Path("unit3.json"))
        >>> len(material.blocks)
        12
    """
    path = Path(path)
    if not path.exists():
        raise LoaderError(f"Blocks file does not exist: {path}")

    data = _read_records(path)
    exam_info = options = None
    if isinstance(data, dict):
        if "testInfo" in data or "test_info" in data:
            exam_info = ExamInfo.from_dict(data.get("testInfo") or data.get("test_info") or {})
        if "options" in data:
            options = FormatOptions.from_dict(data.get("options"))
        data = data.get("blocks")

    if not isinstance(data, list):
        raise LoaderError(f"Expected a list of block records in {path}")

    blocks: List[Block] = []
    for i, record in enumerate(data):
        try:
            validate_block(record, strict=strict)
        except ValidationError as e:
            where = f"{i}.{e.path}" if e.path else str(i)
            raise LoaderError(f"Invalid block record at {where} in {path}: {e}") from e
        try:
            blocks.append(Block.from_dict(record))
        except (TypeError, ValueError, AttributeError) as e:
            raise LoaderError(f"Invalid block record at {i} in {path}: {e}") from e

    logger.info(f"Loaded {len(blocks)} blocks from {path}")
    return Material(blocks=tuple(blocks), exam_info=exam_info, options=options)


def load_blocks(path: Path, *, strict: bool = False) -> List[Block]:
    """
    Load blocks from a file.

    Raises:
        LoaderError: See load_material()
    """
    return list(load_material(path, strict=strict).blocks)


def load_options(path: Path) -> FormatOptions:
    """
    Load format options from a JSON settings file.

    Raises:
        LoaderError: If the file cannot be read or is not a JSON object
    """
    path = Path(path)
    if not path.exists():
        raise LoaderError(f"Options file does not exist: {path}")
    data = _read_records(path)
    if not isinstance(data, dict):
        raise LoaderError(f"Options file must contain a JSON object: {path}")
    return FormatOptions.from_dict(data)
