from __future__ import annotations

from fuzzy_align.models import (
    ContinuousMatch,
    Match,
    continuous_matches,
    matched_indices,
    score,
)
from fuzzy_align.rendering import format_simple
from fuzzy_align.scoring import DEFAULT_SCORING, PRESETS, Scoring
from fuzzy_align.search import FuzzySearch, best_match, compute_best_match

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_SCORING",
    "PRESETS",
    "ContinuousMatch",
    "FuzzySearch",
    "Match",
    "Scoring",
    "best_match",
    "compute_best_match",
    "continuous_matches",
    "format_simple",
    "matched_indices",
    "score",
]
