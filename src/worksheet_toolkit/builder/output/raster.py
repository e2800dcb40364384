"""
Module: builder.output.raster

Purpose:
    Render a Document to one PNG image per page and pack the images
    into a PDF using ReportLab, one fixed-size PDF page per image.

Key Classes:
    - PageImage: One rendered page
    - RasterRenderer: Document -> PageImages through a DrawingSurface

Key Functions:
    - render_to_paged_images(): Convenience wrapper around RasterRenderer
    - pack_pdf(): PageImages -> PDF bytes
    - write_pdf(): PageImages -> PDF file

Page order:
    optional header page, then each layout page, then optional
    answer-key page.

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling (through the surface)
    - builder.output.images: Image resolution after layout

Used By:
    - builder.controller: export_material
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from worksheet_toolkit.builder.layout.models import Document, ImagePlaceholder

from .artifact import PDF_MEDIA_TYPE, Artifact
from .images import ImageLoader, resolve_images
from .surface import DrawingSurface, PillowSurface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageImage:
    """
    Rendered page.

    Attributes:
        png: PNG bytes
        width: Page width in points
        height: Page height in points
        kind: "header", "content" or "answer_key"
    """

    png: bytes
    width: float
    height: float
    kind: str = "content"


class RasterRenderer:
    """
    Draws documents page by page onto an injected surface.

    Args:
        surface: Drawing surface (PillowSurface by default)
        image_loader: Storage collaborator for image placeholders
    """

    def __init__(
        self,
        surface: Optional[DrawingSurface] = None,
        image_loader: Optional[ImageLoader] = None,
    ):
        self.surface = surface or PillowSurface()
        self.image_loader = image_loader

    def render(
        self,
        document: Document,
        *,
        include_answer_key: bool = False,
        answer_key_primitives: Optional[Sequence] = None,
    ) -> list[PageImage]:
        """
        Render a document.

        Args:
            document: Computed layout
            include_answer_key: Append an answer-key page
            answer_key_primitives: Answer key to draw (document.answer_key by default)

        Returns:
            PageImages in print order
        """
        width, height = document.page_width, document.page_height
        refs = [
            leaf.image_ref
            for node in document.nodes
            for leaf, _, _ in node.flatten()
            if isinstance(leaf, ImagePlaceholder)
        ]
        images = resolve_images(refs, self.image_loader)

        pages: list[PageImage] = []
        if document.header:
            pages.append(self._render_flat(document.header, width, height, "header"))

        for page in document.pages:
            self.surface.clear(width, height)
            for node in page.nodes:
                for leaf, dx, dy in node.flatten():
                    self.surface.add(leaf, dx, dy)
                    if isinstance(leaf, ImagePlaceholder) and leaf.image_ref in images:
                        self.surface.paste_image(
                            images[leaf.image_ref], dx + leaf.x, dy + leaf.y, leaf.w, leaf.h
                        )
            pages.append(PageImage(png=self.surface.to_png(), width=width, height=height))

        if include_answer_key:
            key = answer_key_primitives if answer_key_primitives is not None else document.answer_key
            if key:
                pages.append(self._render_flat(key, width, height, "answer_key"))
            else:
                logger.warning("Answer key requested but none was computed")

        logger.info(f"Rendered {len(pages)} page images")
        return pages

    def _render_flat(self, primitives: Iterable, width: float, height: float, kind: str) -> PageImage:
        self.surface.clear(width, height)
        for primitive in primitives:
            self.surface.add(primitive)
        return PageImage(png=self.surface.to_png(), width=width, height=height, kind=kind)


def render_to_paged_images(
    document: Document,
    surface: Optional[DrawingSurface] = None,
    *,
    include_answer_key: bool = False,
    answer_key_primitives: Optional[Sequence] = None,
    image_loader: Optional[ImageLoader] = None,
) -> list[PageImage]:
    """Render a document to page images (see RasterRenderer.render)."""
    renderer = RasterRenderer(surface, image_loader)
    return renderer.render(
        document,
        include_answer_key=include_answer_key,
        answer_key_primitives=answer_key_primitives,
    )


def _draw_pages(c: canvas.Canvas, pages: Sequence[PageImage]) -> None:
    for page in pages:
        c.setPageSize((page.width, page.height))
        c.drawImage(ImageReader(io.BytesIO(page.png)), 0, 0, width=page.width, height=page.height)
        c.showPage()


def pack_pdf(pages: Sequence[PageImage]) -> Artifact:
    """
    Pack page images into a PDF, one image per page.

    Returns:
        PDF artifact
    """
    if not pages:
        logger.warning("No pages to pack, creating empty PDF")
    buf = io.BytesIO()
    c = canvas.Canvas(buf)
    _draw_pages(c, pages)
    c.save()
    return Artifact(data=buf.getvalue(), extension=".pdf", media_type=PDF_MEDIA_TYPE)


def write_pdf(pages: Sequence[PageImage], output_path: Path) -> Path:
    """
    Write page images to a PDF file.

    Raises:
        IOError: If PDF cannot be written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(pack_pdf(pages).data)
    logger.info(f"Wrote {len(pages)} pages to {output_path}")
    return output_path
