from __future__ import annotations

from typing import Generic, Hashable, Iterable, TypeVar

from .parser import CountedEntry
from .ranking import FrequencyEntry


T = TypeVar("T", bound=Hashable)


class FrequencyCounter(Generic[T]):
    """Running totals per distinct value.

    `add` takes a frequency rather than a single hit so already-aggregated
    counts (album totals feeding artist totals) can be folded in directly.
    """

    def __init__(self, pairs: Iterable[tuple[T, int]] = ()) -> None:
        self._totals: dict[T, int] = {}
        self.update(pairs)

    def add(self, value: T, freq: int = 1) -> None:
        self._totals[value] = self._totals.get(value, 0) + freq

    def update(self, pairs: Iterable[tuple[T, int]]) -> None:
        for value, freq in pairs:
            self.add(value, freq)

    def __len__(self) -> int:
        return len(self._totals)

    @property
    def total(self) -> int:
        return sum(self._totals.values())

    def to_frequency_entries(self) -> list[FrequencyEntry[T]]:
        return [FrequencyEntry(value, freq) for value, freq in self._totals.items()]


def album_frequencies(entries: Iterable[CountedEntry]) -> FrequencyCounter[str]:
    return FrequencyCounter((entry.value, entry.count) for entry in entries)
