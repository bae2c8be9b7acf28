from __future__ import annotations

import itertools
import logging
from typing import Iterable, Iterator

from .parser import ClassifiedLine, CountedEntry, DateMarker, iter_classified_lines


logger = logging.getLogger(__name__)


class ListenLog:
    """Entries grouped under the date marker that precedes them.

    Entries seen before the first date marker belong to no day and are dropped.
    """

    def __init__(self) -> None:
        self._buckets: dict[str, list[CountedEntry]] = {}
        self.current_date: str | None = None
        self.dropped = 0

    def feed(self, line: ClassifiedLine) -> None:
        if isinstance(line, DateMarker):
            self.current_date = line.label
            return

        if self.current_date is None:
            logger.debug("Skipping entry before first date: %s", line)
            self.dropped += 1
            return
        self._buckets.setdefault(self.current_date, []).append(line)

    @property
    def dates(self) -> list[str]:
        return list(self._buckets)

    def entries(self) -> Iterator[CountedEntry]:
        return itertools.chain.from_iterable(self._buckets.values())

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())


def build_log(lines: Iterable[str]) -> ListenLog:
    log = ListenLog()
    for line in iter_classified_lines(lines):
        log.feed(line)
    if log.dropped:
        logger.info("Dropped %d entries that appeared before any date", log.dropped)
    logger.debug("Built log with %d entries across %d dates", len(log), len(log.dates))
    return log
