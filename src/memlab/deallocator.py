from __future__ import annotations

from .block import Block
from .block_table import BlockTable
from .errors import ProcessNotFound
from .outcomes import FreeOutcome


class Deallocator:
    """Release the lowest-address block owned by a name and merge free neighbours."""

    def free(self, table: BlockTable, name: str) -> FreeOutcome:
        index = table.find_owner(name)
        if index is None:
            return FreeOutcome(name=name, error=ProcessNotFound(name))
        block = table[index]
        table.replace(index, 1, [Block(block.start, block.size)])
        table.coalesce()
        return FreeOutcome(name=name, start=block.start, size=block.size)
