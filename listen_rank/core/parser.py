from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Iterable, Iterator, Union


_DATE_RE = re.compile(r"\s*→\s*(.*?)\s*")
_ENTRY_RE = re.compile(r"\s*(.+?)\s*(?:\(([0-9]+)x\))?\s*")


class ListenLogError(ValueError):
    pass


class MalformedLineError(ListenLogError):
    def __init__(self, line: str, reason: str = "matches neither a date nor an entry", line_number: int | None = None):
        self.line = line
        self.reason = reason
        self.line_number = line_number
        where = f"line {line_number}" if line_number is not None else "line"
        super().__init__(f"Failed to parse {where}: {line!r} ({reason})")


@dataclass(frozen=True)
class DateMarker:
    label: str


@dataclass(frozen=True)
class CountedEntry:
    value: str
    count: int = 1

    def __str__(self) -> str:
        return f"{self.value} (x{self.count})"


ClassifiedLine = Union[DateMarker, CountedEntry]


def classify_line(line: str) -> ClassifiedLine:
    """Classify one log line as a date marker or a counted entry.

    A line that looks like a date is never treated as an entry.
    """
    date_match = _DATE_RE.fullmatch(line)
    if date_match:
        return DateMarker(date_match.group(1))

    entry_match = _ENTRY_RE.fullmatch(line)
    if not entry_match:
        raise MalformedLineError(line)

    value, raw_count = entry_match.groups()
    if raw_count is None:
        return CountedEntry(value)
    try:
        count = int(raw_count)
    except ValueError as exc:
        raise MalformedLineError(line, reason=f"bad repeat count {raw_count!r}") from exc
    if count < 1:
        raise MalformedLineError(line, reason="repeat count must be at least 1")
    return CountedEntry(value, count)


def iter_nonblank_lines(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield `(line_number, stripped_line)` for every non-blank line, numbering from 1."""
    for number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        yield number, line


def iter_classified_lines(lines: Iterable[str]) -> Iterator[ClassifiedLine]:
    for number, line in iter_nonblank_lines(lines):
        try:
            yield classify_line(line)
        except MalformedLineError as exc:
            raise MalformedLineError(exc.line, reason=exc.reason, line_number=number) from None
