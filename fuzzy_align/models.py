from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import NamedTuple


class ContinuousMatch(NamedTuple):
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


@total_ordering
@dataclass(frozen=True)
class Match:
    """Score and matched target positions of a single search.

    The score is not clamped and can be negative. Matches order by score, then
    by matched positions, so ``max()`` and ``sorted()`` rank results across
    candidates consistently with equality.
    """

    score: int = 0
    matches: tuple[int, ...] = ()

    def matched_indices(self) -> tuple[int, ...]:
        return self.matches

    def continuous_matches(self) -> list[ContinuousMatch]:
        """Group the matched positions into maximal runs of consecutive indices."""
        runs: list[ContinuousMatch] = []
        start: int | None = None
        length = 0
        for index in self.matches:
            if start is not None and index == start + length:
                length += 1
                continue
            if start is not None:
                runs.append(ContinuousMatch(start, length))
            start = index
            length = 1
        if start is not None:
            runs.append(ContinuousMatch(start, length))
        return runs

    def __lt__(self, other: Match) -> bool:
        if not isinstance(other, Match):
            return NotImplemented
        return (self.score, self.matches) < (other.score, other.matches)


def score(result: Match) -> int:
    return result.score


def matched_indices(result: Match) -> tuple[int, ...]:
    return result.matched_indices()


def continuous_matches(result: Match) -> list[ContinuousMatch]:
    return result.continuous_matches()
