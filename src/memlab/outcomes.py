from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .errors import AllocationFailed, MalformedRequest, ProcessNotFound


@dataclass
class AllocationOutcome:
    name: str
    size: int
    start: Optional[int] = None
    error: Optional[AllocationFailed] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class FreeOutcome:
    name: str
    start: Optional[int] = None
    size: Optional[int] = None
    error: Optional[ProcessNotFound] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class MalformedOutcome:
    error: MalformedRequest

    @property
    def success(self) -> bool:
        return False


RequestOutcome = Union[AllocationOutcome, FreeOutcome, MalformedOutcome]
