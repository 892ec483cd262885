from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from .block import Block
from .coalescer import coalesce
from .errors import InvalidCapacity, TableInvariantViolation


class BlockTable:
    """
    Ordered partition of ``[0, capacity)`` into free and owned blocks.

    Blocks are kept in a plain list sorted by address. Splits and merges are
    expressed as slice replacements through ``replace`` so the table never
    holds linked nodes.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise InvalidCapacity(f"Capacity must be a positive integer, got {capacity}")
        self.capacity = capacity
        self._blocks: List[Block] = [Block(0, capacity)]

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks)

    def __getitem__(self, index: int) -> Block:
        return self._blocks[index]

    @property
    def blocks(self) -> List[Block]:
        """Return a copy of the current block list for inspection."""
        return list(self._blocks)

    def free_blocks(self) -> List[Block]:
        return [block for block in self._blocks if block.is_free]

    def owned_blocks(self) -> List[Block]:
        return [block for block in self._blocks if not block.is_free]

    def find_owner(self, name: str) -> Optional[int]:
        """Index of the lowest-address block owned by ``name``."""
        for index, block in enumerate(self._blocks):
            if block.owner == name:
                return index
        return None

    def replace(self, index: int, count: int, new_blocks: Sequence[Block]) -> None:
        """Remove ``count`` blocks at ``index`` and insert ``new_blocks`` in their place."""
        self._blocks[index : index + count] = list(new_blocks)

    def coalesce(self) -> None:
        self._blocks = coalesce(self._blocks)

    def snapshot(self) -> List[Tuple[Optional[str], int, int]]:
        """Expose (owner, start, size) tuples for diagnostics."""
        return [block.as_tuple() for block in self._blocks]

    def check_invariants(self, *, require_coalesced: bool = True) -> None:
        if not self._blocks:
            raise TableInvariantViolation("Block table is empty")
        if self._blocks[0].start != 0:
            raise TableInvariantViolation(
                f"First block starts at {self._blocks[0].start}, expected 0"
            )
        previous: Optional[Block] = None
        for block in self._blocks:
            if block.size <= 0:
                raise TableInvariantViolation(f"Block {block} has non-positive size")
            if previous is not None:
                if previous.end != block.start:
                    raise TableInvariantViolation(
                        f"Gap or overlap between {previous} and {block}"
                    )
                if require_coalesced and previous.is_free and block.is_free:
                    raise TableInvariantViolation(
                        f"Adjacent free blocks {previous} and {block} were not merged"
                    )
            previous = block
        if self._blocks[-1].end != self.capacity:
            raise TableInvariantViolation(
                f"Last block ends at {self._blocks[-1].end}, expected {self.capacity}"
            )
