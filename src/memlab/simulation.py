from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from .allocators import Allocator, FirstFitAllocator
from .block_table import BlockTable
from .deallocator import Deallocator
from .errors import MalformedRequest
from .outcomes import AllocationOutcome, FreeOutcome, MalformedOutcome, RequestOutcome
from .request import AllocateRequest, FreeRequest, Request
from .stats import SimulationReport, StatsReporter

if TYPE_CHECKING:
    from experiments.instrumentation import SimulationProfiler


class Simulation:
    """
    High-level facade over one block table.

    Requests are applied one at a time, each running to completion before the
    next. Counters belong to the instance, so a fresh Simulation is a fresh run.
    """

    def __init__(
        self,
        capacity: int,
        *,
        allocator: Optional[Allocator] = None,
        profiler: Optional["SimulationProfiler"] = None,
        check_invariants: bool = True,
    ) -> None:
        self.table = BlockTable(capacity)
        self.allocator = allocator or FirstFitAllocator()
        self.deallocator = Deallocator()
        self.stats = StatsReporter(self.table)
        self.profiler = profiler
        self._check_invariants = check_invariants
        self.alloc_success_count = 0
        self.alloc_failure_count = 0

    @property
    def capacity(self) -> int:
        return self.table.capacity

    # -- Requests ------------------------------------------------------------------
    def allocate(self, name: str, size: int) -> AllocationOutcome:
        outcome = self.allocator.allocate(self.table, name, size)
        if outcome.success:
            self.alloc_success_count += 1
        else:
            self.alloc_failure_count += 1
        self._verify()
        self._record(
            "allocate",
            {
                "name": name,
                "size": size,
                "success": outcome.success,
                "start": outcome.start,
                "strategy": type(self.allocator).__name__,
            },
        )
        return outcome

    def free(self, name: str) -> FreeOutcome:
        outcome = self.deallocator.free(self.table, name)
        self._verify()
        self._record(
            "free",
            {
                "name": name,
                "success": outcome.success,
                "start": outcome.start,
                "size": outcome.size,
            },
        )
        return outcome

    def apply(self, request: Request) -> RequestOutcome:
        if isinstance(request, AllocateRequest):
            return self.allocate(request.name, request.size)
        if isinstance(request, FreeRequest):
            return self.free(request.name)
        if isinstance(request, MalformedRequest):
            self._record(
                "malformed",
                {"line_number": request.line_number, "line": request.line, "reason": request.reason},
            )
            return MalformedOutcome(error=request)
        raise TypeError(f"Unsupported request {request!r}")

    def run(self, requests: List[Request]) -> List[RequestOutcome]:
        return [self.apply(request) for request in requests]

    # -- Introspection -------------------------------------------------------------
    def render(self) -> List[str]:
        return self.stats.render()

    def report(self) -> SimulationReport:
        return self.stats.summary(self.alloc_success_count, self.alloc_failure_count)

    def snapshot(self) -> List[Tuple[Optional[str], int, int]]:
        return self.table.snapshot()

    def debug_snapshot(self) -> Dict[str, Any]:
        return {
            "capacity": self.capacity,
            "blocks": self.snapshot(),
            "alloc_success": self.alloc_success_count,
            "alloc_failure": self.alloc_failure_count,
        }

    def _verify(self) -> None:
        if self._check_invariants:
            self.table.check_invariants()

    def _record(self, event_type: str, payload: Dict[str, Any]) -> None:
        if not self.profiler:
            return
        self.profiler.record_event(
            event_type,
            {
                **payload,
                "heap_used": self.stats.allocated(),
                "heap_free": self.stats.total_free(),
                "largest_free": self.stats.largest_free_block(),
            },
        )
