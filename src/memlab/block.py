from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(slots=True)
class Block:
    start: int
    size: int
    owner: Optional[str] = None

    @property
    def end(self) -> int:
        return self.start + self.size

    @property
    def is_free(self) -> bool:
        return self.owner is None

    def split(self, size: int) -> Tuple["Block", Optional["Block"]]:
        """Return the head of ``size`` bytes plus the free remainder, if any."""
        head = Block(start=self.start, size=size, owner=self.owner)
        remainder_size = self.size - size
        if remainder_size <= 0:
            return head, None
        remainder = Block(start=self.start + size, size=remainder_size)
        return head, remainder

    def as_tuple(self) -> Tuple[Optional[str], int, int]:
        return (self.owner, self.start, self.size)

    def __str__(self) -> str:
        if self.is_free:
            return f"[Free  start={self.start} size={self.size}]"
        return f"[{self.owner} start={self.start} size={self.size}]"
