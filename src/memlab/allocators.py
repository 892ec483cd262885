from __future__ import annotations

from abc import ABC, abstractmethod

from .block_table import BlockTable
from .errors import AllocationFailed
from .outcomes import AllocationOutcome


class Allocator(ABC):
    """Abstract allocation strategy."""

    @abstractmethod
    def allocate(self, table: BlockTable, name: str, size: int) -> AllocationOutcome:
        ...


class FirstFitAllocator(Allocator):
    """
    First-fit allocator: traverse the table in address order and take the first
    free block that fits. A later, tighter block is never considered.
    """

    def allocate(self, table: BlockTable, name: str, size: int) -> AllocationOutcome:
        if not name:
            raise ValueError("Allocation requires a non-empty owner name")
        if size <= 0:
            raise ValueError(f"Allocation size must be positive, got {size}")
        for index, block in enumerate(table):
            if not block.is_free or block.size < size:
                continue
            head, remainder = block.split(size)
            head.owner = name
            if remainder:
                table.replace(index, 1, [head, remainder])
            else:
                table.replace(index, 1, [head])
            return AllocationOutcome(name=name, size=size, start=head.start)
        largest = max((block.size for block in table.free_blocks()), default=0)
        return AllocationOutcome(name=name, size=size, error=AllocationFailed(name, size, largest))
