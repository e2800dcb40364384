"""
Module: builder.output.reading

Purpose:
    Read placed layout nodes back into flat per-block views. The
    document-style adapters (plain text, Word, HTML slides) all go
    through here, so they show exactly what the layout placed: same
    order, same numbers, same options and citations.

Key Classes:
    - NodeView: Texts of one node grouped by role

Key Functions:
    - read_node(): LayoutNode -> NodeView
    - answer_entries(): Answer key lines for a document
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from worksheet_toolkit.builder.labels import Labels, answer_text
from worksheet_toolkit.builder.layout.models import (
    Document,
    ImagePlaceholder,
    LayoutNode,
    Line,
    Role,
    TextRun,
)
from worksheet_toolkit.core.models import BlockType


@dataclass(frozen=True)
class NodeView:
    """Flat view of one placed block."""

    block_id: str
    block_type: BlockType
    number: Optional[str]
    content: str
    label: Optional[str] = None
    difficulty: Optional[str] = None
    options: tuple[str, ...] = ()
    answer_lines: int = 0
    source: Optional[str] = None
    source_anchor: str = "left"
    image_refs: tuple[str, ...] = ()

    @property
    def is_question(self) -> bool:
        return self.block_type is BlockType.QUESTION

    @property
    def heading(self) -> str:
        """Number and content on one line ("3. What is ...")."""
        if self.number and self.content:
            return f"{self.number} {self.content}"
        return self.number or self.content


def _first(texts: list[str]) -> Optional[str]:
    return texts[0] if texts else None


def read_node(node: LayoutNode) -> NodeView:
    leaves = [leaf for leaf, _, _ in node.flatten()]
    source = next(
        (leaf for leaf in leaves if isinstance(leaf, TextRun) and leaf.role is Role.SOURCE),
        None,
    )
    return NodeView(
        block_id=node.block_id,
        block_type=node.block_type,
        number=_first(node.texts(Role.NUMBER)),
        content="\n".join(node.texts(Role.CONTENT)),
        label=_first(node.texts(Role.LABEL)),
        difficulty=_first(node.texts(Role.DIFFICULTY)),
        options=tuple(node.texts(Role.OPTION)),
        answer_lines=sum(1 for leaf in leaves if isinstance(leaf, Line) and leaf.role is Role.ANSWER_LINE),
        source=source.text if source else None,
        source_anchor=source.anchor if source else "left",
        image_refs=tuple(leaf.image_ref for leaf in leaves if isinstance(leaf, ImagePlaceholder)),
    )


def read_document(document: Document) -> list[NodeView]:
    return [read_node(node) for node in document.nodes]


def answer_entries(document: Document, labels: Labels) -> list[str]:
    """Answer key lines ("1. B") for the document's questions."""
    return [
        answer_text(block, block.display_number, labels)
        for block in document.blocks
        if block.is_question and block.display_number is not None
    ]
