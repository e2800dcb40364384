"""
Module: builder.output

Purpose:
    Export adapters. Each one turns the shared layout Document into an
    Artifact: page images packed into a PDF, a Word document (with a
    plain-text fallback), plain text, or an HTML slide deck.

Key Functions:
    - render_to_paged_images(): Document -> PageImages
    - pack_pdf(), write_pdf(): PageImages -> PDF

Key Classes:
    - RasterRenderer, WordRenderer, PlainTextRenderer, HtmlSlideRenderer
    - Artifact: Adapter output
    - DrawingSurface, PillowSurface: Injected raster canvas

Dependencies:
    - reportlab: PDF packing
    - PIL: Raster drawing
    - python-docx: Word export

Used By:
    - builder.controller: Pipeline orchestration
"""

from .artifact import Artifact
from .images import FileImageLoader, ImageLoader, ImageNotFoundError, resolve_images
from .raster import PageImage, RasterRenderer, pack_pdf, render_to_paged_images, write_pdf
from .slides import HtmlSlideRenderer
from .surface import DrawingSurface, PillowSurface
from .text import PlainTextRenderer
from .word import Available, Unavailable, WordRenderer, resolve_docx_capability

__all__ = [
    "Artifact",
    "FileImageLoader",
    "ImageLoader",
    "ImageNotFoundError",
    "resolve_images",
    "PageImage",
    "RasterRenderer",
    "pack_pdf",
    "render_to_paged_images",
    "write_pdf",
    "HtmlSlideRenderer",
    "DrawingSurface",
    "PillowSurface",
    "PlainTextRenderer",
    "Available",
    "Unavailable",
    "WordRenderer",
    "resolve_docx_capability",
]
