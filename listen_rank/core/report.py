from __future__ import annotations

import sys
from typing import Callable, Optional, Sequence, TextIO

from .ranking import RankedEntry


SummaryFormatter = Callable[[int, int], str]
# Returns True/False for a yes/no answer and None when the answer wasn't understood.
ConfirmCallback = Callable[[int], Optional[bool]]

_YES = {"y", "yes"}
_NO = {"n", "no"}


def index_width(count: int) -> int:
    return len(str(count)) if count > 0 else 1


def format_ranked_entry(entry: RankedEntry, width: int) -> str:
    return f"#{entry.index + 1:0{width}d} {entry.rank}. {entry.value} (x{entry.freq})"


def parse_yes_no(answer: str) -> bool | None:
    normalized = answer.strip().lower()
    if normalized in _YES:
        return True
    if normalized in _NO:
        return False
    return None


def present_report(
    ranked: Sequence[RankedEntry],
    *,
    cutoff: int,
    summary: SummaryFormatter,
    confirm: ConfirmCallback,
    out: TextIO | None = None,
) -> int:
    """Print the top `cutoff` entries and a summary line, then offer the rest.

    `confirm` receives the number of hidden entries and is asked again for as
    long as it returns None. Returns the number of entries printed.
    """
    if cutoff < 0:
        raise ValueError("cutoff must be >= 0")
    if out is None:
        out = sys.stdout
    width = index_width(len(ranked))
    head, rest = ranked[:cutoff], ranked[cutoff:]

    for entry in head:
        print(format_ranked_entry(entry, width), file=out)
    print(summary(len(ranked), sum(entry.freq for entry in ranked)), file=out)

    if not rest:
        return len(head)

    answer = confirm(len(rest))
    while answer is None:
        answer = confirm(len(rest))
    if not answer:
        return len(head)

    for entry in rest:
        print(format_ranked_entry(entry, width), file=out)
    return len(ranked)
