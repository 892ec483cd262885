from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional

from memlab.request import AllocateRequest, FreeRequest, Request


@dataclass
class WorkloadConfig:
    capacity: int = 1024
    steps: int = 200
    min_size: int = 8
    max_size: int = 256
    free_probability: float = 0.4
    ghost_free_probability: float = 0.05
    duplicate_name_probability: float = 0.05


class SyntheticWorkload:
    """
    Generate allocate/free request streams that emulate processes coming and going.

    Each step either allocates a block of random size for a new process or
    frees a live one. A small share of frees target unknown names and a small
    share of allocations reuse a live name, so the failure paths of the
    simulator get exercised too.
    """

    def __init__(self, config: Optional[WorkloadConfig] = None, seed: Optional[int] = None) -> None:
        self.config = config or WorkloadConfig()
        self.random = random.Random(seed)
        self._live: List[str] = []
        self._next_id = 1

    def next_request(self) -> Request:
        cfg = self.config
        roll = self.random.random()
        if roll < cfg.ghost_free_probability:
            return FreeRequest(name=f"ghost{self.random.randint(1, 99)}")
        if self._live and roll < cfg.free_probability:
            name = self._live.pop(self.random.randrange(len(self._live)))
            return FreeRequest(name=name)
        if self._live and self.random.random() < cfg.duplicate_name_probability:
            name = self.random.choice(self._live)
        else:
            name = f"P{self._next_id}"
            self._next_id += 1
        self._live.append(name)
        size = self.random.randint(cfg.min_size, cfg.max_size)
        return AllocateRequest(name=name, size=size)

    def generate(self, steps: Optional[int] = None) -> List[Request]:
        count = self.config.steps if steps is None else steps
        return [self.next_request() for _ in range(count)]

    def to_trace_lines(self, requests: List[Request]) -> List[str]:
        """Render requests in trace-file syntax, capacity line first."""
        lines = [str(self.config.capacity)]
        for request in requests:
            if isinstance(request, AllocateRequest):
                lines.append(f"{request.name} {request.size}")
            elif isinstance(request, FreeRequest):
                lines.append(f"FREE {request.name}")
        return lines
