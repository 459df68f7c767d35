from __future__ import annotations

from collections import defaultdict
from typing import NamedTuple


class QueryChar(NamedTuple):
    original: str
    lower: str


class Occurrence(NamedTuple):
    target_idx: int
    char: str
    is_start: bool


Occurrences = dict[str, list[Occurrence]]


def process_query(query: str) -> list[QueryChar]:
    """Drop whitespace from the query and pair every char with its lowercase form."""
    return [QueryChar(char, char.lower()) for char in query if not char.isspace()]


def query_key(query_char: QueryChar, *, case_insensitive: bool) -> str:
    return query_char.lower if case_insensitive else query_char.original


def is_word_separator(char: str) -> bool:
    return not char.isalnum()


def word_starts(target: str) -> frozenset[int]:
    starts: set[int] = set()
    previous: str | None = None
    for index, char in enumerate(target):
        if is_word_separator(char):
            previous = char
            continue
        if (
            previous is None
            or is_word_separator(previous)
            or (previous.islower() and char.isupper())
        ):
            starts.add(index)
        previous = char
    return frozenset(starts)


def build_occurrences(
    query: list[QueryChar], target: str, *, case_insensitive: bool
) -> Occurrences:
    """Index every target position holding a char the query asks for.

    Keys are lowercased when ``case_insensitive`` is set, values keep the
    original target char so the case bonus can be applied later.
    """
    wanted = {query_key(qc, case_insensitive=case_insensitive) for qc in query}
    starts = word_starts(target)

    occurrences: Occurrences = defaultdict(list)
    for index, char in enumerate(target):
        key = char.lower() if case_insensitive else char
        if key in wanted:
            occurrences[key].append(Occurrence(index, char, index in starts))
    return dict(occurrences)
