from __future__ import annotations

from collections.abc import Iterable

from rich.markup import escape
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.events import Key, Paste, Resize
from textual.widgets import OptionList, Static

from fuzzy_align.models import Match
from fuzzy_align.rendering import highlight_text, render_match_markup
from fuzzy_align.scoring import DEFAULT_SCORING, Scoring
from fuzzy_align.search import compute_best_match


def rank_candidates(
    query: str,
    candidates: Iterable[str],
    *,
    scoring: Scoring = DEFAULT_SCORING,
    case_sensitive: bool = False,
) -> list[tuple[str, Match]]:
    scored_results: list[tuple[str, Match]] = []
    for candidate in candidates:
        result = compute_best_match(
            query, candidate, scoring, case_sensitive=case_sensitive
        )
        if result is not None:
            scored_results.append((candidate, result))

    scored_results.sort(key=lambda item: (-item[1].score, item[0]))
    return scored_results


class FuzzyFilterTui(App[str | None]):
    """Filter-as-you-type list of candidates; selecting one exits with it."""

    CSS_PATH = "browser.tcss"
    ENABLE_COMMAND_PALETTE = False
    BINDINGS = [
        Binding("f", "filter_key_f", "Filter"),
        Binding("slash", "filter_key_slash", show=False),
        Binding("escape", "escape", "Back", show=False),
        Binding("q", "quit_or_type_q", "Quit"),
        Binding("ctrl+c", "quit", show=False),
    ]

    def __init__(
        self,
        candidates: Iterable[str] = (),
        *,
        scoring: Scoring = DEFAULT_SCORING,
        case_sensitive: bool = False,
    ) -> None:
        super().__init__()
        self.theme = "rose-pine"
        self._scoring = scoring
        self._case_sensitive = case_sensitive
        self._all_candidates: list[str] = list(dict.fromkeys(candidates))
        self._visible_candidates: list[str] = list(self._all_candidates)
        self._visible_matches: dict[str, Match] = {}
        self._previewed_candidate: str | None = None
        self._search_query = ""
        self._filter_mode = False

    def compose(self) -> ComposeResult:
        with Horizontal(id="body"):
            with Vertical(id="sidebar"):
                yield Static("Candidates", id="sidebar-title")
                yield OptionList(id="sidebar-list")
                yield Static("", id="status")
            with Vertical(id="main-panel"):
                yield Static(
                    "Select a candidate in the sidebar.",
                    id="main-placeholder",
                )

    def on_mount(self) -> None:
        self._render_candidate_options()
        self.query_one("#sidebar-list", OptionList).focus()
        self._update_filter_indicator()
        self._update_selection_status()
        if self._visible_candidates:
            self._preview_candidate(self._visible_candidates[0])

    def _candidate_label(self, candidate: str) -> Text:
        result = self._visible_matches.get(candidate)
        if result is None:
            return Text(candidate)
        return highlight_text(result, candidate)

    def _render_candidate_options(self, *, preserve_position: bool = False) -> None:
        candidate_list = self.query_one("#sidebar-list", OptionList)
        previous_highlight = candidate_list.highlighted
        previous_scroll_y = candidate_list.scroll_y
        candidate_list.clear_options()
        if self._visible_candidates:
            candidate_list.add_options(
                [
                    self._candidate_label(candidate)
                    for candidate in self._visible_candidates
                ]
            )
            if preserve_position and previous_highlight is not None:
                candidate_list.highlighted = min(
                    previous_highlight, len(self._visible_candidates) - 1
                )
                candidate_list.scroll_to(y=previous_scroll_y, animate=False)
            else:
                candidate_list.action_first()
            return
        candidate_list.add_option("No candidates found")

    def _update_selection_status(self) -> None:
        self.query_one("#status", Static).update(
            f"{len(self._visible_candidates):,} of "
            f"{len(self._all_candidates):,} candidates."
        )

    def _render_preview(self, candidate: str) -> str:
        result = self._visible_matches.get(candidate)
        if result is None:
            return f"# {escape(candidate)}\n\nNo active filter."

        runs = result.continuous_matches()
        run_lines = [f" - start {run.start}, length {run.length}" for run in runs]
        indices = ", ".join(str(index) for index in result.matches) or "none"
        lines = [
            f"# {render_match_markup(result, candidate)}",
            "",
            f"Query:    {escape(self._search_query)}",
            f"Score:    {result.score}",
            f"Indices:  {indices}",
            "",
            "Runs:",
            *(run_lines or [" - none"]),
        ]
        return "\n".join(lines)

    def _preview_candidate(self, candidate: str) -> None:
        if self._previewed_candidate == candidate:
            return
        self.query_one("#main-placeholder", Static).update(
            self._render_preview(candidate)
        )
        self._previewed_candidate = candidate

    def _filter_candidates(self) -> None:
        if not self._filter_mode or not self._search_query.strip():
            self._visible_candidates = list(self._all_candidates)
            self._visible_matches = {}
        else:
            ranked = rank_candidates(
                self._search_query,
                self._all_candidates,
                scoring=self._scoring,
                case_sensitive=self._case_sensitive,
            )
            self._visible_candidates = [candidate for candidate, _ in ranked]
            self._visible_matches = dict(ranked)
        self._render_candidate_options()
        self._update_selection_status()
        self._previewed_candidate = None
        if self._visible_candidates:
            self._preview_candidate(self._visible_candidates[0])
        else:
            self.query_one("#main-placeholder", Static).update(
                "No candidates match the current filter."
            )

    def _filter_indicator_text(self) -> Text:
        indicator = Text()
        if self._filter_mode:
            indicator.append("f", style="bold red")
            indicator.append(f" {self._search_query}_", style="bold white")
        else:
            indicator.append("filter", style="dim")
            indicator.stylize("bold red", 0, 1)
        return indicator

    def _case_indicator_text(self) -> Text:
        if self._case_sensitive:
            return Text("case-sensitive", style="bold white")
        return Text("ignore-case", style="dim")

    def _update_filter_indicator(self) -> None:
        sidebar = self.query_one("#sidebar", Vertical)
        filter_indicator = self._filter_indicator_text()
        right_indicator = self._case_indicator_text()

        spacing = 1
        sidebar_width = sidebar.size.width
        if sidebar_width > 0:
            title_width = max(1, sidebar_width - 2)
            spacing = max(
                1,
                title_width - len(filter_indicator.plain) - len(right_indicator.plain),
            )

        sidebar.border_title = Text.assemble(
            filter_indicator, " " * spacing, right_indicator
        )
        sidebar.border_subtitle = ""

    def _set_filter_mode(self, enabled: bool, *, reset_query: bool) -> None:
        self._filter_mode = enabled
        if reset_query:
            self._search_query = ""
        self._filter_candidates()
        self._update_filter_indicator()

    def _append_filter_char(self, char: str) -> None:
        self._search_query += char
        self._filter_candidates()
        self._update_filter_indicator()

    def action_filter_key_f(self) -> None:
        if not self._filter_mode:
            self._set_filter_mode(True, reset_query=True)
            return

        self._append_filter_char("f")

    def action_filter_key_slash(self) -> None:
        if not self._filter_mode:
            self._set_filter_mode(True, reset_query=True)
            return

        self._append_filter_char("/")

    def action_quit_or_type_q(self) -> None:
        if self._filter_mode:
            self._append_filter_char("q")
            return
        self.exit(None)

    def action_escape(self) -> None:
        if self._filter_mode:
            self._set_filter_mode(False, reset_query=True)

    def on_key(self, event: Key) -> None:
        if not self._filter_mode:
            return

        # These keys are handled by explicit bindings to avoid duplicate input.
        if event.key in {"f", "slash", "q"}:
            return

        if event.key == "backspace":
            self._search_query = self._search_query[:-1]
            self._filter_candidates()
            self._update_filter_indicator()
            event.stop()
            return

        if event.key == "space":
            self._append_filter_char(" ")
            event.stop()
            return

        if event.character and event.character.isprintable():
            self._append_filter_char(event.character)
            event.stop()

    def on_paste(self, event: Paste) -> None:
        if not self._filter_mode:
            return
        sanitized = event.text.replace("\r", "").replace("\n", "")
        if not sanitized:
            return
        self._append_filter_char(sanitized)
        event.stop()

    def on_resize(self, event: Resize) -> None:
        del event
        self._update_filter_indicator()
        self.call_after_refresh(self._render_candidate_options, preserve_position=True)

    def on_option_list_option_highlighted(
        self, event: OptionList.OptionHighlighted
    ) -> None:
        if event.option_list.id != "sidebar-list":
            return
        if event.option_index < 0 or event.option_index >= len(
            self._visible_candidates
        ):
            return
        self._preview_candidate(self._visible_candidates[event.option_index])

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list.id != "sidebar-list":
            return
        if event.option_index < 0 or event.option_index >= len(
            self._visible_candidates
        ):
            return
        self.exit(self._visible_candidates[event.option_index])
