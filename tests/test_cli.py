import logging

from click.utils import strip_ansi
from rich.logging import RichHandler
from textual.logging import TextualHandler
from typer.testing import CliRunner

import fuzzy_align.__main__ as entrypoint
from fuzzy_align import __version__


def test_help_lists_commands() -> None:
    runner = CliRunner()

    result = runner.invoke(entrypoint.cli, ["--help"])
    output = strip_ansi(result.output)

    assert result.exit_code == 0
    assert "match" in output
    assert "browse" in output
    assert "--version" in output


def test_version_flag_prints_version_and_exits() -> None:
    runner = CliRunner()

    result = runner.invoke(entrypoint.cli, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == f"fuzzy-align {__version__}"


def test_match_prints_decorated_target() -> None:
    runner = CliRunner()

    result = runner.invoke(
        entrypoint.cli,
        [
            "match",
            "something",
            "some search thing",
            "--before",
            "<span>",
            "--after",
            "</span>",
            "--score",
        ],
    )

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "<span>some</span> search <span>thing</span>",
        "score: 240",
    ]


def test_match_uses_default_markers() -> None:
    runner = CliRunner()

    result = runner.invoke(entrypoint.cli, ["match", "scc", "SoccerCartoonController"])

    assert result.exit_code == 0
    assert result.output.strip() == "<S>occer<C>artoon<C>ontroller"


def test_match_applies_preset_and_overrides() -> None:
    runner = CliRunner()

    result = runner.invoke(
        entrypoint.cli,
        [
            "match",
            "scc",
            "SoccerCartoonController",
            "--preset",
            "runs",
            "--penalty-distance",
            "0",
            "-s",
        ],
    )

    assert result.exit_code == 0
    assert result.output.splitlines() == ["<S>o<cc>erCartoonController", "score: 24"]


def test_match_reports_no_match() -> None:
    runner = CliRunner()

    result = runner.invoke(entrypoint.cli, ["match", "xyz", "some search thing"])

    assert result.exit_code == 1
    assert result.output.strip() == "No match"


def test_match_case_sensitive_flag() -> None:
    runner = CliRunner()

    result = runner.invoke(
        entrypoint.cli, ["match", "--case-sensitive", "sc", "SoccerCartoon"]
    )

    assert result.exit_code == 1
    assert result.output.strip() == "No match"


def test_match_rejects_unknown_preset() -> None:
    runner = CliRunner()

    result = runner.invoke(
        entrypoint.cli, ["match", "--preset", "bogus", "a", "abc"]
    )
    output = " ".join(strip_ansi(result.output).replace("│", " ").split())

    assert result.exit_code == 2
    assert "bogus" in output
    assert "default, distance, runs, word-starts" in output


def test_browse_passes_candidates_and_prints_selection(tmp_path, monkeypatch) -> None:
    runner = CliRunner()
    captured: dict[str, object] = {}
    candidates_file = tmp_path / "candidates.txt"
    candidates_file.write_text("alpha\n\nbeta\ngamma\n", encoding="utf-8")

    class _FakeTui:
        def __init__(self, candidates, *, scoring, case_sensitive) -> None:
            captured["candidates"] = list(candidates)
            captured["scoring"] = scoring
            captured["case_sensitive"] = case_sensitive

        def run(self) -> str:
            return "beta"

    monkeypatch.setattr(entrypoint, "FuzzyFilterTui", _FakeTui)

    result = runner.invoke(
        entrypoint.cli,
        ["browse", str(candidates_file), "--case-sensitive", "-p", "distance"],
    )

    assert result.exit_code == 0
    assert result.output.strip() == "beta"
    assert captured["candidates"] == ["alpha", "beta", "gamma"]
    assert captured["case_sensitive"] is True
    assert captured["scoring"] == entrypoint.PRESETS["distance"]


def test_browse_exits_for_missing_file(tmp_path, monkeypatch) -> None:
    runner = CliRunner()
    captured: dict[str, object] = {}

    class _FakeTui:
        def __init__(self, *args: object, **kwargs: object) -> None:
            captured["kwargs"] = kwargs

        def run(self) -> None:
            captured["run_called"] = True

    monkeypatch.setattr(entrypoint, "FuzzyFilterTui", _FakeTui)

    result = runner.invoke(entrypoint.cli, ["browse", str(tmp_path / "missing.txt")])

    assert result.exit_code == 1
    assert "Cannot read candidates" in result.output
    assert captured == {}


def test_browse_keeps_verbose_logging_off_the_terminal(tmp_path, monkeypatch) -> None:
    runner = CliRunner()
    captured: dict[str, object] = {}
    candidates_file = tmp_path / "candidates.txt"
    candidates_file.write_text("alpha\n", encoding="utf-8")

    class _FakeTui:
        def __init__(self, *args: object, **kwargs: object) -> None:
            pass

        def run(self) -> None:
            root = logging.getLogger()
            captured["handlers"] = list(root.handlers)
            captured["level"] = root.level

    monkeypatch.setattr(entrypoint, "FuzzyFilterTui", _FakeTui)

    result = runner.invoke(entrypoint.cli, ["-v", "browse", str(candidates_file)])

    assert result.exit_code == 0
    handlers = captured["handlers"]
    assert isinstance(handlers, list)
    assert any(isinstance(handler, TextualHandler) for handler in handlers)
    assert not any(isinstance(handler, RichHandler) for handler in handlers)
    assert captured["level"] == logging.DEBUG
