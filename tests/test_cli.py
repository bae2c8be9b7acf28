from pathlib import Path
import sys

import pytest

from listen_rank import cli
from listen_rank.core.parser import MalformedLineError


EXAMPLE_LOG = "\n".join(
    [
        "→ 2024-01-01",
        "Artist A – Album X",
        "Artist A – Album X",
        "",
        "→ 2024-01-02",
        "Artist B – Album Y (3x)",
    ]
)


def _write_log(tmp_path: Path, text: str = EXAMPLE_LOG) -> Path:
    path = tmp_path / "log.txt"
    path.write_text(text, encoding="utf-8")
    return path


def _no_input(prompt):
    raise AssertionError(f"unexpected prompt: {prompt}")


def test_compute_rankings_end_to_end():
    rankings = cli.compute_rankings(EXAMPLE_LOG.splitlines())
    assert [(e.rank, e.value, e.freq) for e in rankings.albums] == [
        (1, "Artist B – Album Y", 3),
        (2, "Artist A – Album X", 2),
    ]
    assert [(e.rank, e.value, e.freq) for e in rankings.artists] == [
        (1, "Artist B", 3),
        (2, "Artist A", 2),
    ]


def test_main_prints_both_reports(tmp_path, capsys):
    path = _write_log(tmp_path)
    assert cli.main([str(path)], input_fn=_no_input) == 0
    assert capsys.readouterr().out.splitlines() == [
        "Top albums:",
        "#1 1. Artist B – Album Y (x3)",
        "#2 2. Artist A – Album X (x2)",
        "2 unique albums, 5 listens in total.",
        "",
        "Top artists:",
        "#1 1. Artist B (x3)",
        "#2 2. Artist A (x2)",
        "2 unique artists, 5 artist credits in total.",
    ]


def test_main_prompts_for_more_and_reasks(tmp_path, capsys):
    path = _write_log(tmp_path)
    answers = iter(["maybe", "y", "n"])
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        return next(answers)

    assert cli.main(["--top", "1", str(path)], input_fn=fake_input) == 0
    out = capsys.readouterr().out
    assert prompts == ["Show 1 more? [y/n]: "] * 3
    assert "Please answer y or n." in out
    assert "#2 2. Artist A – Album X (x2)" in out
    assert "#2 2. Artist A (x2)" not in out


def test_main_eof_at_prompt_means_no(tmp_path, capsys):
    path = _write_log(tmp_path)

    def eof_input(prompt):
        raise EOFError

    assert cli.main(["--top", "0", "--report", "artists", str(path)], input_fn=eof_input) == 0
    out = capsys.readouterr().out
    assert "Top albums:" not in out
    assert out.splitlines() == ["Top artists:", "2 unique artists, 5 artist credits in total."]


def test_main_all_skips_prompt(tmp_path, capsys):
    path = _write_log(tmp_path)
    assert cli.main(["--all", "--top", "0", "--report", "albums", str(path)], input_fn=_no_input) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[-2:] == ["#1 1. Artist B – Album Y (x3)", "#2 2. Artist A – Album X (x2)"]


def test_main_without_path_prints_usage(capsys):
    assert cli.main([], input_fn=_no_input) == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "usage:" in captured.err


def test_main_with_two_paths_prints_usage(tmp_path, capsys):
    path = _write_log(tmp_path)
    assert cli.main([str(path), str(path)], input_fn=_no_input) == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "usage:" in captured.err


def test_read_lines_splits_only_on_newlines(tmp_path):
    path = tmp_path / "log.txt"
    path.write_bytes("→ d\r\nSigur Rós – Ágætis byrjun\x85Remaster\nA – B\u2028C\n".encode("utf-8"))
    assert cli._read_lines(path) == ["→ d", "Sigur Rós – Ágætis byrjun\x85Remaster", "A – B\u2028C"]


def test_unicode_line_separator_does_not_split_an_entry(tmp_path, capsys):
    path = _write_log(tmp_path, "→ d\nSigur Rós – Ágætis byrjun\x85Remaster (2x)\n")
    assert cli.main(["--report", "albums", str(path)], input_fn=_no_input) == 0
    assert capsys.readouterr().out.split("\n")[1:] == [
        "#1 1. Sigur Rós – Ágætis byrjun\x85Remaster (x2)",
        "1 unique albums, 2 listens in total.",
        "",
    ]


def test_main_missing_file_is_fatal(tmp_path):
    with pytest.raises(FileNotFoundError):
        cli.main([str(tmp_path / "nope.txt")], input_fn=_no_input)


def test_main_malformed_line_prints_nothing(tmp_path, capsys):
    path = _write_log(tmp_path, "→ d\nA – X\nB – Y (0x)\n")
    with pytest.raises(MalformedLineError):
        cli.main([str(path)], input_fn=_no_input)
    assert capsys.readouterr().out == ""


def test_run_reports_errors_and_exits_2(tmp_path, monkeypatch, capsys):
    path = _write_log(tmp_path, "→ d\nB – Y (0x)\n")
    monkeypatch.setattr(sys, "argv", ["listen-rank", str(path)])
    with pytest.raises(SystemExit) as excinfo:
        cli.run()
    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert err.startswith("ERROR: Failed to parse line 2")


def test_negative_top_is_rejected(capsys):
    with pytest.raises(SystemExit):
        cli.main(["--top", "-1", "log.txt"], input_fn=_no_input)
    assert "must be >= 0" in capsys.readouterr().err
