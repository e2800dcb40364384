"""
Module: builder.controller

Purpose:
    Orchestrate the worksheet pipeline.
    Number -> Paginate -> (Header / Answer key) -> Render -> Write

Key Functions:
    - compute_layout(): Blocks -> Document
    - render_to_word_document(), render_to_plain_text(),
      render_to_html_slides(): Blocks -> Artifact
    - export_material(): Render several formats into an output directory

Key Classes:
    - ExportResult: Complete export result
    - ExportError: Exception for export failures

Dependencies:
    - builder.layout: Numbering, pagination, auxiliary primitives
    - builder.output: Export adapters

Used By:
    - worksheet_toolkit.cli: Command-line export
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

from worksheet_toolkit.core.models import Block, ExamInfo

from .config import FormatOptions
from .layout import (
    Document,
    ElementFactory,
    LayoutConfig,
    TextMeasurer,
    assign_numbers,
    build_answer_key,
    build_header,
    paginate,
)
from .layout.metrics import FixedWidthMeasurer
from .output import (
    Artifact,
    DrawingSurface,
    HtmlSlideRenderer,
    ImageLoader,
    PlainTextRenderer,
    WordRenderer,
    pack_pdf,
    render_to_paged_images,
)
from .output.word import DocxCapability

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("pdf", "docx", "txt", "html")
METADATA_FILE = "export_metadata.json"


class ExportError(Exception):
    """Error during export pipeline."""
    pass


@dataclass(frozen=True)
class ExportResult:
    """
    Complete export result (immutable).

    Attributes:
        output_dir: Directory the artifacts were written to
        files: Requested format -> written file
        page_count: Number of layout pages
        question_count: Number of numbered questions
        metadata: Export metadata dictionary
        warnings: Degradations that occurred during export

    Example:
        >>> result = export_material(blocks, formats=["pdf", "html"], output_dir=Path("out"))
        >>> sorted(result.files)
        ['html', 'pdf']
    """

    output_dir: Path
    files: Dict[str, Path]
    page_count: int
    question_count: int
    metadata: dict
    warnings: tuple[str, ...] = ()


def compute_layout(
    blocks: Iterable[Block],
    options: Optional[FormatOptions] = None,
    *,
    measurer: Optional[TextMeasurer] = None,
    exam_info: Optional[ExamInfo] = None,
    include_answer_key: bool = False,
) -> Document:
    """
    Compute the layout shared by every export target.

    Pure function of (blocks, options, measurer): the same inputs always
    produce an identical Document.

    Args:
        blocks: Blocks in document order
        options: Format options (defaults when omitted)
        measurer: Text measurer (FixedWidthMeasurer by default)
        exam_info: Test metadata; when given a header is built
        include_answer_key: Build answer key primitives

    Returns:
        Document
    """
    options = options or FormatOptions()
    measurer = measurer or FixedWidthMeasurer()
    config = LayoutConfig.from_options(options)

    numbered = assign_numbers(blocks)
    factory = ElementFactory(options, measurer, column_width=config.column_width)
    pages = paginate(numbered, options, factory, config=config)

    header = build_header(exam_info, options.page_size, options.locale, measurer) if exam_info else None
    answer_key = (
        build_answer_key(numbered, options.page_size, options, measurer) if include_answer_key else None
    )

    return Document(
        pages=pages,
        blocks=numbered,
        options=options,
        page_width=config.page_width,
        page_height=config.page_height,
        header=header,
        answer_key=answer_key,
    )


def render_to_word_document(
    blocks: Iterable[Block],
    options: Optional[FormatOptions] = None,
    exam_info: Optional[ExamInfo] = None,
    *,
    capability: Optional[DocxCapability] = None,
    include_answer_key: bool = False,
) -> Artifact:
    """
    Render blocks to a .docx artifact.

    Falls back to plain text (".txt") when python-docx is unavailable.
    """
    document = compute_layout(blocks, options)
    return WordRenderer(capability).render(document, exam_info, include_answer_key=include_answer_key)


def render_to_plain_text(
    blocks: Iterable[Block],
    options: Optional[FormatOptions] = None,
    exam_info: Optional[ExamInfo] = None,
    *,
    include_answer_key: bool = False,
) -> Artifact:
    document = compute_layout(blocks, options)
    return PlainTextRenderer().render(document, exam_info, include_answer_key=include_answer_key)


def render_to_html_slides(
    blocks: Iterable[Block],
    options: Optional[FormatOptions] = None,
    exam_info: Optional[ExamInfo] = None,
) -> Artifact:
    document = compute_layout(blocks, options)
    return HtmlSlideRenderer().render(document, exam_info)


def export_material(
    blocks: Iterable[Block],
    options: Optional[FormatOptions] = None,
    exam_info: Optional[ExamInfo] = None,
    *,
    formats: Sequence[str] = ("pdf",),
    output_dir: Path,
    include_answer_key: bool = False,
    image_loader: Optional[ImageLoader] = None,
    surface: Optional[DrawingSurface] = None,
    capability: Optional[DocxCapability] = None,
    stem: str = "worksheet",
) -> ExportResult:
    """
    Export blocks to one or more formats.

    Pipeline:
    1. Compute the layout once
    2. Render each requested format from that layout
    3. Write artifacts and export_metadata.json to output_dir

    Args:
        blocks: Blocks in document order
        options: Format options
        exam_info: Test metadata
        formats: Any of "pdf", "docx", "txt", "html"
        output_dir: Directory to write into (created if needed)
        include_answer_key: Append answer keys
        image_loader: Storage collaborator for images (PDF only)
        surface: Drawing surface for the PDF pages
        capability: python-docx capability override
        stem: Artifact file name without extension

    Returns:
        ExportResult with paths and metadata

    Raises:
        ExportError: If a format is unknown or a file cannot be written
    """
    start_time = time.perf_counter()
    unknown = [f for f in formats if f not in SUPPORTED_FORMATS]
    if unknown:
        raise ExportError(f"Unsupported formats: {unknown} (expected {list(SUPPORTED_FORMATS)})")

    options = options or FormatOptions()
    document = compute_layout(
        blocks, options, exam_info=exam_info, include_answer_key=include_answer_key
    )
    logger.info(f"Exporting {len(document.blocks)} blocks on {document.page_count} pages as {list(formats)}")

    warnings: list[str] = []
    artifacts: Dict[str, Artifact] = {}
    for fmt in dict.fromkeys(formats):
        if fmt == "pdf":
            pages = render_to_paged_images(
                document, surface, include_answer_key=include_answer_key, image_loader=image_loader
            )
            artifacts[fmt] = pack_pdf(pages)
        elif fmt == "docx":
            artifact = WordRenderer(capability).render(document, exam_info, include_answer_key=include_answer_key)
            if artifact.extension != ".docx":
                warnings.append("Word export unavailable, wrote plain text instead")
            artifacts[fmt] = artifact
        elif fmt == "txt":
            artifacts[fmt] = PlainTextRenderer().render(document, exam_info, include_answer_key=include_answer_key)
        else:
            artifacts[fmt] = HtmlSlideRenderer().render(document, exam_info)

    output_dir = Path(output_dir)
    files: Dict[str, Path] = {}
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for fmt, artifact in artifacts.items():
            path = output_dir / artifact.file_name(stem)
            path.write_bytes(artifact.data)
            files[fmt] = path
            logger.info(f"Wrote {fmt} export: {path}")
    except OSError as e:
        raise ExportError(f"Failed to write export to {output_dir}: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(f"Export completed in {elapsed:.2f}s")

    metadata = _build_metadata(document, exam_info, files, warnings)
    _write_metadata(output_dir, metadata)

    return ExportResult(
        output_dir=output_dir,
        files=files,
        page_count=document.page_count,
        question_count=sum(1 for b in document.blocks if b.is_question),
        metadata=metadata,
        warnings=tuple(warnings),
    )


def _build_metadata(
    document: Document,
    exam_info: Optional[ExamInfo],
    files: Dict[str, Path],
    warnings: list[str],
) -> dict:
    """
    Build metadata dictionary for an export.

    Contains the options used, the written files and a manifest of
    where every block was placed.
    """
    from worksheet_toolkit import __version__

    numbers = {b.id: b.display_number for b in document.blocks}
    manifest = [
        {
            "page": node.page_index + 1,  # 1-indexed for humans
            "column": node.column_index + 1,
            "block_id": node.block_id,
            "type": node.block_type.value,
            "number": numbers.get(node.block_id),
        }
        for node in document.nodes
    ]

    return {
        "generated_at": datetime.now().isoformat(),
        "version": __version__,
        "title": exam_info.title if exam_info else None,
        "options": document.options.to_dict(),
        "block_count": len(document.blocks),
        "question_count": sum(1 for b in document.blocks if b.is_question),
        "page_count": document.page_count,
        "files": {fmt: path.name for fmt, path in files.items()},
        "warnings": list(warnings),
        "manifest": manifest,
    }


def _write_metadata(output_dir: Path, metadata: dict) -> None:
    """
    Write metadata JSON file to output directory.

    Raises:
        ExportError: If writing fails
    """
    metadata_path = output_dir / METADATA_FILE
    try:
        with open(metadata_path, "w", encoding="utf-8") as f:
            json.dump(metadata, f, indent=2, ensure_ascii=False)
        logger.debug(f"Wrote metadata to {metadata_path}")
    except OSError as e:
        raise ExportError(f"Failed to write metadata: {e}") from e
