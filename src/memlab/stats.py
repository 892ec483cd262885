from __future__ import annotations

from dataclasses import asdict, dataclass
from fractions import Fraction
from typing import Dict, List

from .block_table import BlockTable


@dataclass
class SimulationReport:
    capacity: int
    total_free: int
    largest_free_block: int
    free_blocks: int
    external_fragmentation: Fraction
    alloc_success: int
    alloc_failure: int

    def as_dict(self) -> Dict[str, object]:
        record = asdict(self)
        record["external_fragmentation"] = round(float(self.external_fragmentation), 2)
        return record

    def format_lines(self) -> List[str]:
        return [
            "===== FINAL STATS =====",
            f"Total memory: {self.capacity}",
            f"Total free: {self.total_free}",
            f"Largest free block: {self.largest_free_block}",
            f"External fragmentation: {float(self.external_fragmentation):.2f}%",
            f"Alloc success: {self.alloc_success}, failures: {self.alloc_failure}",
            "========================",
        ]


class StatsReporter:
    """Read-only queries over a block table."""

    def __init__(self, table: BlockTable) -> None:
        self.table = table

    @property
    def capacity(self) -> int:
        return self.table.capacity

    def total_free(self) -> int:
        return sum(block.size for block in self.table.free_blocks())

    def allocated(self) -> int:
        return self.capacity - self.total_free()

    def largest_free_block(self) -> int:
        return max((block.size for block in self.table.free_blocks()), default=0)

    def free_block_count(self) -> int:
        return len(self.table.free_blocks())

    def external_fragmentation(self) -> Fraction:
        """
        Percentage of capacity that is free but outside the largest free block.

        Returned as an exact Fraction; callers format it to two decimals.
        """
        free = self.total_free()
        if free == 0:
            return Fraction(0)
        return Fraction(free - self.largest_free_block(), self.capacity) * 100

    def render(self) -> List[str]:
        return [str(block) for block in self.table]

    def summary(self, alloc_success: int, alloc_failure: int) -> SimulationReport:
        return SimulationReport(
            capacity=self.capacity,
            total_free=self.total_free(),
            largest_free_block=self.largest_free_block(),
            free_blocks=self.free_block_count(),
            external_fragmentation=self.external_fragmentation(),
            alloc_success=alloc_success,
            alloc_failure=alloc_failure,
        )
