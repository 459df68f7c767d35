from __future__ import annotations

from rich.text import Text

from fuzzy_align.models import Match


def format_simple(result: Match, target: str, before: str, after: str) -> str:
    """Wrap every continuous match in ``before``/``after``.

    Matching ``"something"`` in ``"some search thing"`` with ``<span>`` and
    ``</span>`` gives ``"<span>some</span> search <span>thing</span>"``.
    """
    pieces: list[str] = []
    cursor = 0
    for run in result.continuous_matches():
        pieces.append(target[cursor : run.start])
        pieces.append(before)
        pieces.append(target[run.start : run.end])
        pieces.append(after)
        cursor = run.end
    pieces.append(target[cursor:])
    return "".join(pieces)


def highlight_text(result: Match, target: str, *, style: str = "bold red") -> Text:
    text = Text(target)
    for run in result.continuous_matches():
        text.stylize(style, run.start, run.end)
    return text


def render_match_markup(
    result: Match, target: str, *, style: str = "bold red"
) -> str:
    # Text.markup escapes brackets in the target itself.
    return highlight_text(result, target, style=style).markup
