"""
Module: builder.output.images

Purpose:
    Resolve image references through the storage collaborator. Images
    are fetched only after layout, and a failed fetch never fails the
    export: the placeholder simply stays unfilled.

Key Classes:
    - FileImageLoader: Reads references relative to a local directory
    - ImageNotFoundError: Raised by loaders for missing references

Key Functions:
    - resolve_images(): Parallel fetch of many references

Dependencies:
    - PIL: Decoding fetched bytes
    - concurrent.futures (std): Parallel fetching

Used By:
    - builder.output.raster: Filling image placeholders
"""

from __future__ import annotations

import io
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

from PIL import Image

logger = logging.getLogger(__name__)

ImageLoader = Callable[[str], bytes]

DEFAULT_WORKERS = 4


class ImageNotFoundError(Exception):
    """Raised when an image reference cannot be resolved."""
    pass


class FileImageLoader:
    """
    Image loader backed by a local directory.

    References are paths relative to `root`; absolute references and
    references escaping the root are rejected.

    Example:
        >>> loader = FileImageLoader(Path("assets"))
        >>> data = loader("figures/cell.png")
    """

    def __init__(self, root: Path):
        self.root = Path(root).resolve()

    def __call__(self, ref: str) -> bytes:
        path = (self.root / ref).resolve()
        if self.root not in path.parents:
            raise ImageNotFoundError(f"Image reference outside {self.root}: {ref}")
        if not path.is_file():
            raise ImageNotFoundError(f"Image not found: {path}")
        return path.read_bytes()


def _fetch(ref: str, loader: ImageLoader) -> Optional[Image.Image]:
    # The loader is an injected storage client; any failure leaves the
    # placeholder unfilled
    try:
        data = loader(ref)
        image = Image.open(io.BytesIO(data))
        image.load()
        return image
    except Exception as e:
        logger.warning(f"Skipping image {ref!r}: {type(e).__name__}: {e}")
        return None


def resolve_images(
    refs: Iterable[str],
    loader: Optional[ImageLoader],
    *,
    max_workers: int = DEFAULT_WORKERS,
) -> Dict[str, Image.Image]:
    """
    Fetch and decode image references in parallel.

    Args:
        refs: Image references (duplicates fetched once)
        loader: Storage collaborator; None resolves nothing
        max_workers: Thread pool size

    Returns:
        Mapping of reference to decoded image; failed references are absent
    """
    unique = list(dict.fromkeys(r for r in refs if r))
    if not unique or loader is None:
        return {}

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        results = list(executor.map(lambda ref: _fetch(ref, loader), unique))

    images = {ref: image for ref, image in zip(unique, results) if image is not None}
    logger.info(f"Resolved {len(images)}/{len(unique)} images")
    return images
