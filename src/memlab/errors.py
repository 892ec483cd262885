from __future__ import annotations


class MemlabError(Exception):
    """Base class for simulator errors."""


class AllocationFailed(MemlabError):
    """No single free block is large enough for the request."""

    def __init__(self, name: str, size: int, largest_free: int) -> None:
        super().__init__(
            f"Unable to allocate {size} bytes for {name}: largest free block is {largest_free}"
        )
        self.name = name
        self.size = size
        self.largest_free = largest_free


class ProcessNotFound(MemlabError):
    def __init__(self, name: str) -> None:
        super().__init__(f"No live allocation owned by {name}")
        self.name = name


class MalformedRequest(MemlabError):
    """A trace line that could not be parsed into a request."""

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        super().__init__(f"line {line_number}: {reason}: {line!r}")
        self.line_number = line_number
        self.line = line
        self.reason = reason


class InvalidCapacity(MemlabError, ValueError):
    """The capacity is missing or not a positive integer. Fatal for a run."""


class TableInvariantViolation(MemlabError, AssertionError):
    """The block table lost contiguity, coverage or coalescing. Indicates a bug."""
