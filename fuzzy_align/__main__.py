from __future__ import annotations

from pathlib import Path

import typer

from fuzzy_align import __version__
from fuzzy_align.log import configure_logging
from fuzzy_align.rendering import format_simple
from fuzzy_align.scoring import PRESETS, Scoring, scoring_from_name
from fuzzy_align.search import compute_best_match
from fuzzy_align.tui import FuzzyFilterTui

__all__ = [
    "FuzzyFilterTui",
    "cli",
]


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(f"fuzzy-align {__version__}")
    raise typer.Exit()


def _resolve_scoring(preset: str, **overrides: int | None) -> Scoring:
    try:
        scoring = scoring_from_name(preset)
    except KeyError as exc:
        raise typer.BadParameter(exc.args[0], param_hint="--preset") from exc
    changes = {name: value for name, value in overrides.items() if value is not None}
    return scoring.replace(**changes) if changes else scoring


cli = typer.Typer(
    add_completion=False,
    help="Fuzzy-match a query against target strings.",
)


@cli.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log search details to stderr.",
    ),
    _version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    ctx.obj = {"verbose": verbose}
    configure_logging(verbose=verbose)


@cli.command("match")
def match_command(
    query: str = typer.Argument(..., help="Query; whitespace is ignored."),
    target: str = typer.Argument(..., help="String to search in."),
    before: str = typer.Option("<", "--before", help="Inserted before each run."),
    after: str = typer.Option(">", "--after", help="Inserted after each run."),
    show_score: bool = typer.Option(
        False, "--score", "-s", help="Print the score after the match."
    ),
    case_sensitive: bool = typer.Option(
        False, "--case-sensitive", help="Only match chars of the same case."
    ),
    preset: str = typer.Option(
        "default",
        "--preset",
        "-p",
        help=f"Scoring preset, one of: {', '.join(sorted(PRESETS))}.",
    ),
    bonus_consecutive: int | None = typer.Option(None, "--bonus-consecutive"),
    bonus_word_start: int | None = typer.Option(None, "--bonus-word-start"),
    bonus_match_case: int | None = typer.Option(None, "--bonus-match-case"),
    penalty_distance: int | None = typer.Option(None, "--penalty-distance"),
    bonus_coverage: int | None = typer.Option(None, "--bonus-coverage"),
) -> None:
    scoring = _resolve_scoring(
        preset,
        bonus_consecutive=bonus_consecutive,
        bonus_word_start=bonus_word_start,
        bonus_match_case=bonus_match_case,
        penalty_distance=penalty_distance,
        bonus_coverage=bonus_coverage,
    )
    result = compute_best_match(query, target, scoring, case_sensitive=case_sensitive)
    if result is None:
        typer.echo("No match")
        raise typer.Exit(code=1)

    typer.echo(format_simple(result, target, before, after))
    if show_score:
        typer.echo(f"score: {result.score}")


@cli.command("browse")
def browse_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="File with one candidate per line."),
    case_sensitive: bool = typer.Option(
        False, "--case-sensitive", help="Only match chars of the same case."
    ),
    preset: str = typer.Option(
        "default",
        "--preset",
        "-p",
        help=f"Scoring preset, one of: {', '.join(sorted(PRESETS))}.",
    ),
) -> None:
    scoring = _resolve_scoring(preset)
    try:
        text = file.read_text(encoding="utf-8")
    except OSError as exc:
        typer.echo(f"Cannot read candidates from {file}: {exc.strerror}", err=True)
        raise typer.Exit(code=1) from exc

    candidates = [line for line in text.splitlines() if line.strip()]
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    configure_logging(verbose=verbose, inside_tui=True)
    selected = FuzzyFilterTui(
        candidates,
        scoring=scoring,
        case_sensitive=case_sensitive,
    ).run()
    if selected is not None:
        typer.echo(selected)


if __name__ == "__main__":
    cli()
