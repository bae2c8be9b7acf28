from __future__ import annotations

import logging
import re
from typing import Iterable

from .counter import FrequencyCounter
from .ranking import FrequencyEntry


logger = logging.getLogger(__name__)

_ALBUM_SPLIT_RE = re.compile(r"\s*–\s*")
_ARTIST_JOIN_RE = re.compile(r"\s*/\s*")


def extract_artists(value: str) -> list[str]:
    """Return the artists credited in an `<artists> – <album>` string.

    Collaborations are written `A / B – Album`. Without the en dash
    separator there is nobody to credit and the result is empty.
    """
    parts = _ALBUM_SPLIT_RE.split(value, maxsplit=1)
    if len(parts) != 2:
        return []
    return [name for name in (n.strip() for n in _ARTIST_JOIN_RE.split(parts[0])) if name]


def artist_frequencies(albums: Iterable[FrequencyEntry[str]]) -> FrequencyCounter[str]:
    # Every co-artist gets the album's full count.
    counter: FrequencyCounter[str] = FrequencyCounter()
    for album in albums:
        artists = extract_artists(album.value)
        if not artists:
            logger.debug("No artist found in %r", album.value)
            continue
        for artist in artists:
            counter.add(artist, album.freq)
    return counter
