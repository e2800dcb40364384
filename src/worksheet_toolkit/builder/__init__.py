"""
Module: builder

Purpose:
    Layout and export pipeline for worksheets and tests. Numbers the
    questions, paginates blocks into columns and pages, and renders the
    one shared layout into PDF, Word, plain text and HTML slides.

Key Functions:
    - compute_layout(): Blocks -> Document
    - render_to_paged_images(): Document -> page images
    - render_to_word_document(), render_to_plain_text(),
      render_to_html_slides(): Blocks -> Artifact
    - export_material(): Main entry point for file exports
    - load_blocks(): Load block records from disk

Key Classes:
    - FormatOptions: User-facing format settings
    - ExportResult, ExportError: Export outcome and failure
    - LoaderError: Loading failure

Dependencies:
    - PIL: Raster drawing and text metrics
    - reportlab: PDF packing
    - python-docx: Word export
    - worksheet_toolkit.core.models: Block, ExamInfo

Used By:
    - worksheet_toolkit.cli: Command-line export
"""

from .config import FormatOptions
from .controller import (
    ExportError,
    ExportResult,
    compute_layout,
    export_material,
    render_to_html_slides,
    render_to_plain_text,
    render_to_word_document,
)
from .layout import build_answer_key, build_header
from .loading import LoaderError, load_blocks
from .output import FileImageLoader, render_to_paged_images

__all__ = [
    # Config
    "FormatOptions",
    # Controller
    "compute_layout",
    "export_material",
    "render_to_html_slides",
    "render_to_plain_text",
    "render_to_word_document",
    "render_to_paged_images",
    "ExportError",
    "ExportResult",
    # Auxiliary
    "build_answer_key",
    "build_header",
    # Loading
    "load_blocks",
    "LoaderError",
    "FileImageLoader",
]
