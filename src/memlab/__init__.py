"""
First-fit memory allocation lab.

Expose the engine classes for driving simulations from traces or tests.
"""

from .allocators import Allocator, FirstFitAllocator
from .block import Block
from .block_table import BlockTable
from .coalescer import coalesce
from .deallocator import Deallocator
from .errors import (
    AllocationFailed,
    InvalidCapacity,
    MalformedRequest,
    MemlabError,
    ProcessNotFound,
    TableInvariantViolation,
)
from .outcomes import AllocationOutcome, FreeOutcome, MalformedOutcome
from .request import AllocateRequest, FreeRequest
from .simulation import Simulation
from .stats import SimulationReport, StatsReporter

__all__ = [
    "Allocator",
    "FirstFitAllocator",
    "Block",
    "BlockTable",
    "coalesce",
    "Deallocator",
    "AllocationFailed",
    "InvalidCapacity",
    "MalformedRequest",
    "MemlabError",
    "ProcessNotFound",
    "TableInvariantViolation",
    "AllocationOutcome",
    "FreeOutcome",
    "MalformedOutcome",
    "AllocateRequest",
    "FreeRequest",
    "Simulation",
    "SimulationReport",
    "StatsReporter",
]
