from __future__ import annotations

import argparse
from dataclasses import dataclass
import logging
from pathlib import Path
import sys
from typing import Callable, Optional

from listen_rank.core.artists import artist_frequencies
from listen_rank.core.counter import album_frequencies
from listen_rank.core.log import build_log
from listen_rank.core.ranking import RankedEntry, rank_entries
from listen_rank.core.report import ConfirmCallback, parse_yes_no, present_report


DEFAULT_CUTOFF = 20
REPORT_CHOICES = ("albums", "artists", "both")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportSettings:
    cutoff: int = DEFAULT_CUTOFF
    reports: str = "both"
    show_all: bool = False

    @property
    def show_albums(self) -> bool:
        return self.reports in {"albums", "both"}

    @property
    def show_artists(self) -> bool:
        return self.reports in {"artists", "both"}


@dataclass(frozen=True)
class Rankings:
    albums: list[RankedEntry[str]]
    artists: list[RankedEntry[str]]


def configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logging.basicConfig(level=level, handlers=[handler], force=True)


def _read_lines(path: Path) -> list[str]:
    # Line ends are \n, \r or \r\n only, never \x85 or \u2028.
    with path.open("r", encoding="utf-8") as f:
        return [line.rstrip("\r\n") for line in f]


def compute_rankings(lines: list[str]) -> Rankings:
    log = build_log(lines)
    albums = album_frequencies(log.entries())
    album_entries = albums.to_frequency_entries()
    artists = artist_frequencies(album_entries)
    logger.info("Counted %d albums and %d artists from %d listens", len(albums), len(artists), albums.total)
    return Rankings(albums=rank_entries(album_entries), artists=rank_entries(artists.to_frequency_entries()))


def _prompt_show_more(input_fn: Callable[[str], str] = input) -> ConfirmCallback:
    def confirm(remaining: int) -> Optional[bool]:
        try:
            resp = input_fn(f"Show {remaining} more? [y/n]: ")
        except EOFError:
            return False
        answer = parse_yes_no(resp)
        if answer is None:
            print("Please answer y or n.")
        return answer

    return confirm


def _always_show(remaining: int) -> bool:
    return True


def print_reports(rankings: Rankings, settings: ReportSettings, confirm: ConfirmCallback) -> None:
    if settings.show_all:
        confirm = _always_show
    if settings.show_albums:
        print("Top albums:")
        present_report(
            rankings.albums,
            cutoff=settings.cutoff,
            summary=lambda count, total: f"{count} unique albums, {total} listens in total.",
            confirm=confirm,
        )
    if settings.show_albums and settings.show_artists:
        print("")
    if settings.show_artists:
        print("Top artists:")
        present_report(
            rankings.artists,
            cutoff=settings.cutoff,
            summary=lambda count, total: f"{count} unique artists, {total} artist credits in total.",
            confirm=confirm,
        )


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a whole number: {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="listen-rank",
        description="Rank the albums and artists in a plain-text listening log.",
    )
    parser.add_argument("path", nargs="*", help="Path to the listening log (.txt, UTF-8)")
    parser.add_argument(
        "--top",
        type=_non_negative_int,
        default=DEFAULT_CUTOFF,
        help=f"Entries to show before asking to show more (default: {DEFAULT_CUTOFF})",
    )
    parser.add_argument("--report", choices=REPORT_CHOICES, default="both", help="Which rankings to print (default: both)")
    parser.add_argument("--all", dest="show_all", action="store_true", help="Print every entry without asking")
    parser.add_argument("--verbose", action="store_true", help="Enable informational logging.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: list[str], input_fn: Callable[[str], str] = input) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if len(args.path) != 1:
        parser.print_usage(sys.stderr)
        return 0

    configure_logging(verbose=args.verbose, debug=args.debug)
    settings = ReportSettings(cutoff=args.top, reports=args.report, show_all=args.show_all)

    path = Path(args.path[0]).expanduser()
    rankings = compute_rankings(_read_lines(path))
    print_reports(rankings, settings, _prompt_show_more(input_fn))
    return 0


def run() -> None:
    try:
        raise SystemExit(main(sys.argv[1:]))
    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        raise SystemExit(130)
    except Exception as exc:
        msg = str(exc).rstrip() or repr(exc)
        if "\n" in msg:
            first, rest = msg.split("\n", 1)
            print(f"ERROR: {first}", file=sys.stderr)
            print(rest, file=sys.stderr)
        else:
            print(f"ERROR: {msg}", file=sys.stderr)
        raise SystemExit(2)


if __name__ == "__main__":
    run()
