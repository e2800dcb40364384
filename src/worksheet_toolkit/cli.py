"""
Command-line export trigger.

Usage:
    worksheet-toolkit blocks.json --format pdf docx --output out/
    python -m worksheet_toolkit blocks.jsonl --columns 2 --answer-key -v

Exit codes: 0 on success, 1 when the export fails, 2 when the blocks or
options file cannot be loaded.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from worksheet_toolkit import __version__
from worksheet_toolkit.builder.config import (
    DIFFICULTY_MODES,
    FONT_SIZE_NAMES,
    LOCALES,
    PAGE_SIZES,
    SOURCE_POSITIONS,
    SPACING_NAMES,
    FormatOptions,
)
from worksheet_toolkit.builder.controller import SUPPORTED_FORMATS, ExportError, export_material
from worksheet_toolkit.builder.loading import LoaderError, load_material, load_options
from worksheet_toolkit.builder.output import FileImageLoader
from worksheet_toolkit.core.models import ExamInfo

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_EXPORT_FAILED = 1
EXIT_LOAD_FAILED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="worksheet-toolkit",
        description="Lay out question blocks and export them as PDF, Word, text or HTML slides",
    )
    parser.add_argument("blocks", type=Path, help="JSON/JSONL file of block records")
    parser.add_argument(
        "--format", "-f",
        nargs="+",
        choices=SUPPORTED_FORMATS,
        default=["pdf"],
        dest="formats",
        help="Export formats (default: pdf)",
    )
    parser.add_argument("--output", "-o", type=Path, default=Path("output"), help="Output directory")
    parser.add_argument("--stem", default="worksheet", help="Output file name without extension")
    parser.add_argument("--options", type=Path, help="JSON file of format options")

    layout = parser.add_argument_group("format options (override --options)")
    layout.add_argument("--page-size", choices=PAGE_SIZES)
    layout.add_argument("--columns", type=int, choices=(1, 2))
    layout.add_argument("--font-size", choices=FONT_SIZE_NAMES)
    layout.add_argument("--show-difficulty", choices=DIFFICULTY_MODES)
    layout.add_argument("--show-sources", action="store_true", default=None)
    layout.add_argument("--source-position", choices=SOURCE_POSITIONS)
    layout.add_argument("--question-spacing", choices=SPACING_NAMES)
    layout.add_argument("--locale", choices=LOCALES)

    info = parser.add_argument_group("test header")
    info.add_argument("--title")
    info.add_argument("--subject")
    info.add_argument("--grade")
    info.add_argument("--date")
    info.add_argument("--time", help="Duration in minutes")
    info.add_argument("--instructions")

    parser.add_argument("--answer-key", action="store_true", help="Append an answer key")
    parser.add_argument("--images", type=Path, help="Directory that image references resolve against")
    parser.add_argument("--strict", action="store_true", help="Validate records against the JSON schema")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _merge_options(base: FormatOptions, args: argparse.Namespace) -> FormatOptions:
    overrides = {
        name: getattr(args, name)
        for name in (
            "page_size",
            "columns",
            "font_size",
            "show_difficulty",
            "show_sources",
            "source_position",
            "question_spacing",
            "locale",
        )
        if getattr(args, name) is not None
    }
    return replace(base, **overrides) if overrides else base


def _merge_info(base: Optional[ExamInfo], args: argparse.Namespace) -> Optional[ExamInfo]:
    overrides = {
        name: getattr(args, name)
        for name in ("title", "subject", "grade", "date", "time", "instructions")
        if getattr(args, name)
    }
    if not overrides:
        return base
    return replace(base or ExamInfo(), **overrides)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        material = load_material(args.blocks, strict=args.strict)
        if args.options:
            base_options = load_options(args.options)
        else:
            base_options = material.options or FormatOptions()
    except LoaderError as e:
        logger.error(str(e))
        return EXIT_LOAD_FAILED

    options = _merge_options(base_options, args)
    exam_info = _merge_info(material.exam_info, args)

    try:
        result = export_material(
            material.blocks,
            options,
            exam_info,
            formats=args.formats,
            output_dir=args.output,
            include_answer_key=args.answer_key,
            image_loader=FileImageLoader(args.images) if args.images else None,
            stem=args.stem,
        )
    except ExportError as e:
        logger.error(str(e))
        return EXIT_EXPORT_FAILED

    for warning in result.warnings:
        logger.warning(warning)
    for fmt, path in result.files.items():
        print(f"[OK] {fmt}: {path}")
    print(f"[OK] {result.question_count} questions on {result.page_count} pages")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
