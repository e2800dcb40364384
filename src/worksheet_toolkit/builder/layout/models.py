"""
Module: builder.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses for styles, drawing primitives, placed nodes,
    pages and the finished document.

Key Classes:
    - Style: Resolved text/shape appearance
    - Role: Semantic tag carried by every primitive
    - TextRun, TextBox, Line, Rect, ImagePlaceholder, Group: Primitives
    - Element: A built block (group + consumed height)
    - LayoutNode: A block placed on a page
    - Page: Ordered nodes on one page
    - Document: Final layout output

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.elements: Creates primitives
    - builder.layout.paginator: Creates LayoutNodes and Pages
    - builder.output: Reads primitives back by role
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Optional, Tuple, Union

from worksheet_toolkit.builder.config import FormatOptions
from worksheet_toolkit.core.models import Block, BlockType

Bounds = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Style:
    """
    Resolved appearance for text and shapes.

    Colors are hex strings ("#rrggbb"). `dash` is an on/off pattern for
    stroked shapes, `radius` rounds rectangle corners.
    """

    font_family: str = "Noto Sans KR, sans-serif"
    font_size: int = 12
    color: str = "#000000"
    bold: bool = False
    italic: bool = False
    line_height: float = 1.6
    background: Optional[str] = None
    padding: int = 0
    stroke: Optional[str] = None
    stroke_width: float = 1.0
    dash: Optional[Tuple[int, int]] = None
    radius: int = 0

    def derive(self, **changes) -> Style:
        """Return a copy with some fields replaced."""
        return replace(self, **changes)


class Role(str, Enum):
    """Semantic tag for a primitive; adapters select content by role."""

    NUMBER = "number"
    CONTENT = "content"
    IMAGE = "image"
    DIFFICULTY = "difficulty"
    OPTION = "option"
    ANSWER_LINE = "answer_line"
    SOURCE = "source"
    LABEL = "label"
    TITLE = "title"
    META = "meta"
    INSTRUCTIONS = "instructions"
    ANSWER = "answer"
    DECORATION = "decoration"


# ─────────────────────────────────────────────────────────────────────────────
# Primitives
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TextRun:
    """
    Single unwrapped line of text.

    `width` is the measured text width. With anchor="right" the text is
    drawn so that it ends at `x`, with anchor="center" it is centered on `x`.
    """

    text: str
    x: float
    y: float
    style: Style
    width: float = 0
    anchor: str = "left"
    role: Role = Role.CONTENT

    @property
    def left(self) -> float:
        if self.anchor == "right":
            return self.x - self.width
        if self.anchor == "center":
            return self.x - self.width / 2
        return self.x

    def bounds(self) -> Bounds:
        height = self.style.font_size * self.style.line_height
        return (self.left, self.y, self.left + self.width, self.y + height)


@dataclass(frozen=True)
class TextBox:
    """Wrapped text: `lines` and `height` are fixed by the measurer at build time."""

    text: str
    x: float
    y: float
    width: float
    style: Style
    lines: Tuple[str, ...] = ()
    height: float = 0
    role: Role = Role.CONTENT

    def bounds(self) -> Bounds:
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    style: Style
    role: Role = Role.DECORATION

    def bounds(self) -> Bounds:
        return (
            min(self.x1, self.x2),
            min(self.y1, self.y2),
            max(self.x1, self.x2),
            max(self.y1, self.y2),
        )


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float
    style: Style
    role: Role = Role.DECORATION

    def bounds(self) -> Bounds:
        return (self.x, self.y, self.x + self.w, self.y + self.h)


@dataclass(frozen=True)
class ImagePlaceholder:
    """Reserved image area; the reference is resolved only at render time."""

    x: float
    y: float
    w: float
    h: float
    image_ref: str
    style: Style = field(default_factory=Style)
    role: Role = Role.IMAGE

    def bounds(self) -> Bounds:
        return (self.x, self.y, self.x + self.w, self.y + self.h)


@dataclass(frozen=True)
class Group:
    """
    Container positioning its children relative to (x, y).

    Example:
        >>> g = Group(children=(Rect(0, 0, 10, 40, Style()),), x=5, y=100)
        >>> g.height
        40
    """

    children: Tuple["Primitive", ...]
    x: float = 0
    y: float = 0

    @property
    def height(self) -> float:
        """Maximum vertical extent of the children."""
        if not self.children:
            return 0
        return max(child.bounds()[3] for child in self.children)

    def bounds(self) -> Bounds:
        if not self.children:
            return (self.x, self.y, self.x, self.y)
        boxes = [child.bounds() for child in self.children]
        return (
            self.x + min(b[0] for b in boxes),
            self.y + min(b[1] for b in boxes),
            self.x + max(b[2] for b in boxes),
            self.y + max(b[3] for b in boxes),
        )

    def absolute(self) -> Iterator[Tuple["Primitive", float, float]]:
        """Yield (leaf primitive, absolute dx, absolute dy) depth-first."""
        for child in self.children:
            if isinstance(child, Group):
                for leaf, dx, dy in child.absolute():
                    yield leaf, dx + self.x, dy + self.y
            else:
                yield child, self.x, self.y


Primitive = Union[TextRun, TextBox, Line, Rect, ImagePlaceholder, Group]


def iter_text(primitives, role: Optional[Role] = None) -> Iterator[str]:
    """Text of every text primitive (optionally of one role), in order."""
    for primitive in primitives:
        if isinstance(primitive, Group):
            yield from iter_text(primitive.children, role)
        elif isinstance(primitive, (TextRun, TextBox)):
            if role is None or primitive.role is role:
                yield primitive.text


# ─────────────────────────────────────────────────────────────────────────────
# Placement results
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Element:
    """A built block: its primitive group and the vertical space it consumes."""

    group: Group
    height: float


@dataclass(frozen=True)
class LayoutNode:
    """
    A block placed on a page.

    `primitives` holds one Group anchored at `origin`; children are
    group-relative.
    """

    block_id: str
    block_type: BlockType
    page_index: int
    column_index: int
    origin: Tuple[float, float]
    height: float
    primitives: Tuple[Group, ...]

    @property
    def bottom(self) -> float:
        return self.origin[1] + self.height

    def flatten(self) -> list:
        """Leaf primitives with their absolute offsets."""
        leaves = []
        for group in self.primitives:
            leaves.extend(group.absolute())
        return leaves

    def texts(self, role: Optional[Role] = None) -> list[str]:
        return list(iter_text(self.primitives, role))


@dataclass(frozen=True)
class Page:
    """
    Layout of a single page.

    Attributes:
        index: Page number (0-indexed)
        nodes: Placed nodes in input order
    """

    index: int
    nodes: Tuple[LayoutNode, ...]

    @property
    def is_empty(self) -> bool:
        return not self.nodes


@dataclass(frozen=True)
class Document:
    """
    Final layout output shared by every export adapter.

    Attributes:
        pages: Pages in order
        blocks: Numbered blocks in input order
        options: Options the layout was computed with
        page_width: Page width in points
        page_height: Page height in points
        header: Test header primitives (None when not requested)
        answer_key: Answer key primitives (None when not requested)
    """

    pages: Tuple[Page, ...]
    blocks: Tuple[Block, ...]
    options: FormatOptions
    page_width: int
    page_height: int
    header: Optional[Tuple[Primitive, ...]] = None
    answer_key: Optional[Tuple[Primitive, ...]] = None

    @property
    def page_count(self) -> int:
        """Number of pages in layout."""
        return len(self.pages)

    @property
    def nodes(self) -> list[LayoutNode]:
        """All nodes across pages, in placement order."""
        return [node for page in self.pages for node in page.nodes]
