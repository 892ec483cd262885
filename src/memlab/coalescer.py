from __future__ import annotations

from typing import Iterable, List, Optional

from .block import Block
from .errors import TableInvariantViolation


def coalesce(blocks: Iterable[Block]) -> List[Block]:
    """
    Merge every maximal run of adjacent free blocks into a single free block.

    The input is not modified. Addresses of the result are re-derived from 0 as
    the pass walks the blocks, and each source block must start exactly where
    the previous one ended; any drift means an earlier split or merge lost
    track of the address space and raises TableInvariantViolation.
    """
    merged: List[Block] = []
    current: Optional[Block] = None
    cursor = 0
    for block in blocks:
        if block.size <= 0:
            raise TableInvariantViolation(f"Block {block} has non-positive size")
        if block.start != cursor:
            raise TableInvariantViolation(
                f"Block {block} starts at {block.start}, expected {cursor}"
            )
        if current is not None and current.is_free and block.is_free:
            current.size += block.size
        else:
            if current is not None:
                merged.append(current)
            current = Block(start=cursor, size=block.size, owner=block.owner)
        cursor += block.size
    if current is not None:
        merged.append(current)
    return merged
