from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Scoring:
    """Bonuses and penalties used to score an alignment.

    Every field is a plain signed integer. Negative or zero values are legal;
    the search only adds and subtracts them.
    """

    # Added for every matched char that directly follows the previous match.
    bonus_consecutive: int = 8
    # Added when a matched char sits at a word start in the target.
    bonus_word_start: int = 72
    # Added when a case-insensitive match also matches the case exactly.
    bonus_match_case: int = 8
    # Subtracted for every target char skipped between two matches.
    penalty_distance: int = 4
    # Scaled by pattern length / target length and added once per match.
    bonus_coverage: int = 0

    def replace(self, **changes: int) -> Scoring:
        return replace(self, **changes)

    @classmethod
    def emphasize_word_starts(cls) -> Scoring:
        """The default configuration: word starts dominate contiguous runs."""
        return cls()

    @classmethod
    def emphasize_distance(cls) -> Scoring:
        """Prefer short distances between matched chars over word starts."""
        return cls(
            bonus_consecutive=12,
            bonus_word_start=24,
            bonus_match_case=8,
            penalty_distance=8,
        )

    @classmethod
    def emphasize_runs(cls) -> Scoring:
        return cls(bonus_word_start=0)

    @classmethod
    def with_coverage(cls, bonus: int) -> Scoring:
        return cls(bonus_coverage=bonus)


DEFAULT_SCORING = Scoring()

PRESETS: dict[str, Scoring] = {
    "default": DEFAULT_SCORING,
    "word-starts": Scoring.emphasize_word_starts(),
    "distance": Scoring.emphasize_distance(),
    "runs": Scoring.emphasize_runs(),
}


def scoring_from_name(name: str) -> Scoring:
    try:
        return PRESETS[name]
    except KeyError:
        known = ", ".join(sorted(PRESETS))
        raise KeyError(
            f"Unknown scoring preset {name!r}, expected one of: {known}"
        ) from None
