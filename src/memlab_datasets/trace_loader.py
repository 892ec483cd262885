from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from memlab.errors import InvalidCapacity, MalformedRequest
from memlab.request import AllocateRequest, FreeRequest, Request

FREE_KEYWORDS = frozenset({"FREE", "D", "DEALLOC", "RELEASE"})
COMMENT_MARKER = "#"
INTEGER_TOKEN = re.compile(r"[+-]?[0-9]+")


@dataclass
class Trace:
    capacity: int
    requests: List[Request] = field(default_factory=list)
    source: Optional[str] = None

    def malformed(self) -> List[MalformedRequest]:
        return [request for request in self.requests if isinstance(request, MalformedRequest)]


def decode_line(raw: Union[str, bytes]) -> Tuple[str, bool]:
    """Return the text of a line and whether it decoded cleanly as UTF-8."""
    if isinstance(raw, str):
        return raw, True
    try:
        return raw.decode("utf-8"), True
    except UnicodeDecodeError:
        return raw.decode("utf-8", errors="replace"), False


def meaningful_lines(lines: Iterable[Union[str, bytes]]) -> Iterator[Tuple[int, str, bool]]:
    """Yield (line_number, stripped_line, decoded), skipping blanks and comments."""
    for line_number, raw in enumerate(lines, start=1):
        text, decoded = decode_line(raw)
        line = text.strip()
        if not line or line.startswith(COMMENT_MARKER):
            continue
        yield line_number, line, decoded


def parse_int(token: str) -> Optional[int]:
    # ASCII digits with an optional sign only; no underscores or other scripts
    if not INTEGER_TOKEN.fullmatch(token):
        return None
    return int(token)


def parse_capacity(line: str) -> int:
    capacity = parse_int(line.split()[0])
    if capacity is None:
        raise InvalidCapacity(
            f"First meaningful line must be an integer total memory. Found: {line}"
        )
    if capacity <= 0:
        raise InvalidCapacity(f"Total memory must be positive. Found: {line}")
    return capacity


def parse_request(line: str, line_number: int = 0) -> Request:
    """
    Parse one request line.

    Accepted forms are ``<keyword> <name>`` and ``<name> <keyword>`` for frees
    (keyword case-insensitive) and ``<name> <size>`` for allocations. Tokens
    past the second are ignored. Unusable lines come back as MalformedRequest
    rather than being raised, so the caller can report and skip them.
    """
    tokens = line.split()
    if len(tokens) < 2:
        return MalformedRequest(line_number, line, "expected two tokens")
    first, second = tokens[0], tokens[1]
    if first.upper() in FREE_KEYWORDS:
        return FreeRequest(name=second, line_number=line_number)
    size = parse_int(second)
    if size is None:
        if second.upper() in FREE_KEYWORDS:
            return FreeRequest(name=first, line_number=line_number)
        return MalformedRequest(line_number, line, "unrecognized request")
    if size <= 0:
        return MalformedRequest(line_number, line, "size must be positive")
    return AllocateRequest(name=first, size=size, line_number=line_number)


def parse_trace(lines: Iterable[Union[str, bytes]], *, source: Optional[str] = None) -> Trace:
    """
    Parse trace lines given as text or raw bytes.

    Byte lines that are not valid UTF-8 become MalformedRequest entries; an
    undecodable capacity line is fatal like any other bad capacity.
    """
    entries = meaningful_lines(lines)
    first = next(entries, None)
    if first is None:
        raise InvalidCapacity("Empty input or no valid total memory line.")
    _, capacity_line, decoded = first
    if not decoded:
        raise InvalidCapacity(f"Total memory line is not valid UTF-8. Found: {capacity_line}")
    trace = Trace(capacity=parse_capacity(capacity_line), source=source)
    for line_number, line, decoded in entries:
        if decoded:
            trace.requests.append(parse_request(line, line_number))
        else:
            trace.requests.append(MalformedRequest(line_number, line, "invalid encoding"))
    return trace


def load_trace(path: str) -> Trace:
    """
    Read a trace file: a capacity line followed by one request per line.

    The file is read as bytes and decoded line by line, so one corrupt line
    is reported on its own instead of aborting the whole trace.

    Args:
        path: path to the trace file.
    """
    trace_path = Path(path)
    if not trace_path.exists():
        raise FileNotFoundError(f"Trace file not found at {path}")
    with trace_path.open("rb") as handle:
        return parse_trace(handle, source=str(trace_path))
