"""
Module: builder.layout.numbering

Purpose:
    Assign sequential display numbers to question blocks before
    pagination. Non-question blocks never consume a number, so numbering
    is independent of where passages or concepts are interleaved.

Key Functions:
    - assign_numbers(): One left-to-right numbering pass

Used By:
    - builder.controller: Before layout and before every export
"""

from __future__ import annotations

import logging
from typing import Iterable

from worksheet_toolkit.core.models import Block

logger = logging.getLogger(__name__)


def assign_numbers(blocks: Iterable[Block], start: int = 1) -> tuple[Block, ...]:
    """
    Number question blocks in input order.

    Existing numbers are overwritten and non-question blocks are cleared,
    so the result only depends on the block sequence.

    Args:
        blocks: Blocks in document order
        start: First question number

    Returns:
        New Block instances; the inputs are untouched

    Example:
        >>> numbered = assign_numbers([q1, passage, q2])
        >>> [b.display_number for b in numbered]
        [1, None, 2]
    """
    numbered = []
    next_number = start
    for block in blocks:
        if block.is_question:
            numbered.append(block.with_number(next_number))
            next_number += 1
        elif block.display_number is not None:
            numbered.append(block.with_number(None))
        else:
            numbered.append(block)

    logger.debug(f"Numbered {next_number - start} questions in {len(numbered)} blocks")
    return tuple(numbered)
