from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterable, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class FrequencyEntry(Generic[T]):
    value: T
    freq: int

    def sort_key(self) -> tuple[int, Any]:
        return (-self.freq, self.value)


@dataclass(frozen=True)
class RankedEntry(Generic[T]):
    value: T
    freq: int
    index: int
    rank: int


def rank_entries(entries: Iterable[FrequencyEntry[T]]) -> list[RankedEntry[T]]:
    """Sort by descending frequency (ties by value) and assign competition ranks.

    Equal frequencies share a rank; the rank goes up by one each time the
    frequency drops. `index` is the zero-based position in the result.
    """
    ranked: list[RankedEntry[T]] = []
    rank = 0
    last_freq: int | None = None
    for index, entry in enumerate(sorted(entries, key=FrequencyEntry.sort_key)):
        if entry.freq != last_freq:
            rank += 1
            last_freq = entry.freq
        ranked.append(RankedEntry(value=entry.value, freq=entry.freq, index=index, rank=rank))
    return ranked
