from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .errors import MalformedRequest


@dataclass(frozen=True)
class AllocateRequest:
    name: str
    size: int
    line_number: int = 0


@dataclass(frozen=True)
class FreeRequest:
    name: str
    line_number: int = 0


Request = Union[AllocateRequest, FreeRequest, MalformedRequest]
