from __future__ import annotations

import bisect
import logging

from fuzzy_align.models import Match
from fuzzy_align.parsing import (
    Occurrence,
    QueryChar,
    build_occurrences,
    process_query,
    query_key,
)
from fuzzy_align.scoring import DEFAULT_SCORING, Scoring

logger = logging.getLogger(__name__)


class FuzzySearch:
    """Configurable fuzzy search of ``query`` in ``target``.

    Whitespace in the query is ignored. Searches are case-insensitive and use
    :data:`DEFAULT_SCORING` unless configured otherwise::

        FuzzySearch("something", "Some Search Thing")
            .score_with(Scoring.emphasize_distance())
            .case_sensitive()
            .best_match()
    """

    def __init__(self, query: str, target: str) -> None:
        self._query = query
        self._target = target
        self._scoring: Scoring = DEFAULT_SCORING
        self._case_insensitive = True

    def score_with(self, scoring: Scoring) -> FuzzySearch:
        self._scoring = scoring
        return self

    def case_sensitive(self) -> FuzzySearch:
        """Only match chars whose case matches; the case bonus never applies."""
        self._case_insensitive = False
        return self

    def case_insensitive(self) -> FuzzySearch:
        self._case_insensitive = True
        return self

    def best_match(self) -> Match | None:
        """Find the highest scoring alignment of the full query.

        Returns ``None`` if some query char cannot be matched in order. An
        empty query matches every target with score zero and no positions.
        """
        query = process_query(self._query)
        if not query:
            return Match()
        if not self._target:
            return None

        occurrences = build_occurrences(
            query, self._target, case_insensitive=self._case_insensitive
        )
        columns: list[list[Occurrence]] = []
        for query_char in query:
            key = query_key(query_char, case_insensitive=self._case_insensitive)
            column = occurrences.get(key)
            if not column:
                return None
            columns.append(column)

        searcher = _AlignmentSearcher(
            query, columns, self._scoring, self._case_insensitive
        )
        result = searcher.best_alignment()
        if result is None:
            return None

        total, matches = result
        if self._scoring.bonus_coverage:
            total += self._scoring.bonus_coverage * len(query) // len(self._target)
        logger.debug(
            "Matched %r in %r with score %d at %s",
            self._query,
            self._target,
            total,
            matches,
        )
        return Match(total, matches)


class _AlignmentSearcher:
    """Bottom-up search over the occurrences of every query char.

    ``best[i][k]`` holds the best score for matching query chars ``i..`` when
    char ``i`` lands on ``columns[i][k]``, or ``None`` if the rest of the
    query cannot follow it. ``choice[i][k]`` is the occurrence picked for
    char ``i + 1``. Both tables live only as long as one search.
    """

    def __init__(
        self,
        query: list[QueryChar],
        columns: list[list[Occurrence]],
        scoring: Scoring,
        case_insensitive: bool,
    ) -> None:
        self._query = query
        self._columns = columns
        self._scoring = scoring
        self._case_insensitive = case_insensitive

    def _char_score(self, query_idx: int, occurrence: Occurrence) -> int:
        score = self._scoring.bonus_word_start if occurrence.is_start else 0
        if (
            self._case_insensitive
            and self._query[query_idx].original == occurrence.char
        ):
            score += self._scoring.bonus_match_case
        return score

    def _transition_score(self, previous: Occurrence, current: Occurrence) -> int:
        skipped = current.target_idx - previous.target_idx - 1
        if skipped == 0:
            return self._scoring.bonus_consecutive
        return -self._scoring.penalty_distance * skipped

    def best_alignment(self) -> tuple[int, tuple[int, ...]] | None:
        columns = self._columns
        last = len(columns) - 1

        best: list[list[int | None]] = [[] for _ in columns]
        choice: list[list[int]] = [[] for _ in columns]
        best[last] = [
            self._char_score(last, occurrence) for occurrence in columns[last]
        ]
        choice[last] = [-1] * len(columns[last])

        states = len(columns[last])
        for query_idx in range(last - 1, -1, -1):
            following = columns[query_idx + 1]
            following_best = best[query_idx + 1]
            following_positions = [o.target_idx for o in following]

            row_best: list[int | None] = []
            row_choice: list[int] = []
            for occurrence in columns[query_idx]:
                top: int | None = None
                top_k = -1
                first = bisect.bisect_right(
                    following_positions, occurrence.target_idx
                )
                for k in range(first, len(following)):
                    rest = following_best[k]
                    if rest is None:
                        continue
                    candidate = (
                        self._transition_score(occurrence, following[k]) + rest
                    )
                    if top is None or candidate > top:
                        top = candidate
                        top_k = k
                if top is None:
                    row_best.append(None)
                else:
                    row_best.append(self._char_score(query_idx, occurrence) + top)
                row_choice.append(top_k)
                states += 1
            best[query_idx] = row_best
            choice[query_idx] = row_choice

        overall: int | None = None
        start_k = -1
        for k, value in enumerate(best[0]):
            if value is not None and (overall is None or value > overall):
                overall = value
                start_k = k
        logger.debug("Explored %d alignment states", states)
        if overall is None:
            return None

        matches: list[int] = []
        k = start_k
        for query_idx in range(len(columns)):
            matches.append(columns[query_idx][k].target_idx)
            k = choice[query_idx][k]
        return overall, tuple(matches)


def compute_best_match(
    pattern: str,
    target: str,
    config: Scoring = DEFAULT_SCORING,
    case_sensitive: bool = False,
) -> Match | None:
    search = FuzzySearch(pattern, target).score_with(config)
    if case_sensitive:
        search.case_sensitive()
    return search.best_match()


def best_match(query: str, target: str) -> Match | None:
    """Case-insensitive search of ``query`` in ``target`` with default scoring."""
    return FuzzySearch(query, target).best_match()
