"""
Module: builder.layout.paginator

Purpose:
    Arrange built elements into columns and pages.
    Blocks are atomic: an element is never split across columns or pages.

Key Functions:
    - paginate(): Main pagination function

Algorithm:
    A fold over the block sequence with an immutable accumulator
    (cursor, finished pages, nodes of the open page):
    1. Build the element for the block (None -> skipped, no space used)
    2. If it fits below the cursor, place it (FILLING)
    3. Otherwise move to the next column (COLUMN_FULL) or, after the
       last column, to a new page (PAGE_FULL)
    4. A column that is still empty never transitions: an oversized
       element is placed there and overflows
    5. A final DONE step flushes the open page

Dependencies:
    - builder.layout.elements: ElementFactory
    - builder.layout.config: LayoutConfig

Used By:
    - builder.controller: compute_layout
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from functools import reduce
from typing import Iterable, Optional, Tuple

from worksheet_toolkit.builder.config import FormatOptions
from worksheet_toolkit.core.models import Block

from .config import LayoutConfig
from .elements import ElementFactory
from .models import LayoutNode, Page

logger = logging.getLogger(__name__)


class PaginationState(str, Enum):
    """Outcome of placing one element."""

    FILLING = "filling"
    COLUMN_FULL = "column_full"
    PAGE_FULL = "page_full"
    DONE = "done"


@dataclass(frozen=True)
class _Cursor:
    page_index: int
    column: int
    y: float
    column_used: bool = False


@dataclass(frozen=True)
class _State:
    cursor: _Cursor
    pages: Tuple[Page, ...] = ()
    nodes: Tuple[LayoutNode, ...] = ()
    status: PaginationState = PaginationState.FILLING


def _next_position(
    cursor: _Cursor, height: float, config: LayoutConfig
) -> Tuple[PaginationState, _Cursor]:
    """
    Decide where an element of `height` goes.

    Returns:
        (state, cursor at which the element is placed)
    """
    fits = cursor.y + height <= config.page_bottom
    if fits or not cursor.column_used:
        return PaginationState.FILLING, cursor
    if cursor.column + 1 < config.columns:
        return PaginationState.COLUMN_FULL, _Cursor(
            page_index=cursor.page_index,
            column=cursor.column + 1,
            y=config.margin_top,
        )
    return PaginationState.PAGE_FULL, _Cursor(
        page_index=cursor.page_index + 1,
        column=0,
        y=config.margin_top,
    )


def _flush(state: _State) -> Tuple[Page, ...]:
    if not state.nodes:
        return state.pages
    return state.pages + (Page(index=len(state.pages), nodes=state.nodes),)


def paginate(
    blocks: Iterable[Block],
    options: FormatOptions,
    factory: Optional[ElementFactory] = None,
    *,
    config: Optional[LayoutConfig] = None,
) -> Tuple[Page, ...]:
    """
    Place blocks onto pages.

    Args:
        blocks: Numbered blocks in document order
        options: Format options
        factory: Element factory (built from options by default)
        config: Page geometry (derived from options by default)

    Returns:
        Pages in order; empty for no blocks

    Example:
        >>> pages = paginate(assign_numbers(blocks), FormatOptions(columns=2))
        >>> [node.column_index for node in pages[0].nodes]
        [0, 0, 1]
    """
    config = config or LayoutConfig.from_options(options)
    factory = factory or ElementFactory(options, column_width=config.column_width)

    def step(state: _State, block: Block) -> _State:
        element = factory.build(block)
        if element is None:
            return state

        status, cursor = _next_position(state.cursor, element.height, config)
        pages, nodes = state.pages, state.nodes
        if status is PaginationState.PAGE_FULL:
            pages, nodes = _flush(state), ()

        if cursor.y + element.height > config.page_bottom:
            logger.warning(
                f"Block {block.id} overflows page {cursor.page_index}: "
                f"{element.height:.0f}pt needed, "
                f"{config.page_bottom - cursor.y:.0f}pt available"
            )

        origin = (config.column_x(cursor.column), cursor.y)
        node = LayoutNode(
            block_id=block.id,
            block_type=block.type,
            page_index=cursor.page_index,
            column_index=cursor.column,
            origin=origin,
            height=element.height,
            primitives=(replace(element.group, x=origin[0], y=origin[1]),),
        )
        logger.debug(
            f"Placed {block.type.value} {block.id} on page {cursor.page_index} "
            f"column {cursor.column} at y={cursor.y:.0f} ({status.value})"
        )
        return _State(
            cursor=replace(cursor, y=cursor.y + element.height, column_used=True),
            pages=pages,
            nodes=nodes + (node,),
            status=status,
        )

    initial = _State(cursor=_Cursor(page_index=0, column=0, y=config.margin_top))
    final = reduce(step, blocks, initial)
    done = replace(final, pages=_flush(final), nodes=(), status=PaginationState.DONE)

    logger.info(f"Paginated {sum(len(p.nodes) for p in done.pages)} blocks onto {len(done.pages)} pages")
    return done.pages
