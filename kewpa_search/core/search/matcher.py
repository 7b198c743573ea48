from dataclasses import dataclass
from typing import Any, Dict, Optional

from .models import MatchResult


@dataclass(frozen=True)
class ScoringWeights:
    """
    Scoring constants, tunable from config (search.scoring).
    """
    substring_score: int = 100
    subsequence_weight: int = 2
    word_prefix_bonus: int = 50

    @classmethod
    def from_config(cls, scoring: Optional[Dict[str, Any]]) -> "ScoringWeights":
        scoring = scoring or {}
        defaults = cls()
        return cls(
            substring_score=scoring.get("substring_score", defaults.substring_score),
            subsequence_weight=scoring.get("subsequence_weight", defaults.subsequence_weight),
            word_prefix_bonus=scoring.get("word_prefix_bonus", defaults.word_prefix_bonus),
        )


DEFAULT_WEIGHTS = ScoringWeights()

NO_MATCH = MatchResult(0, ())


def match(field_text: str, query: str, weights: ScoringWeights = DEFAULT_WEIGHTS) -> MatchResult:
    """
    Scores one field value against the query (case-insensitive).

    1. Substring: the text contains the query -> substring_score, highlight the query.
    2. Subsequence: every query char found in order; each hit adds
       (chars left in query) * subsequence_weight. All or nothing.
    3. Word prefix: first whitespace-separated word starting with the query adds
       word_prefix_bonus and is highlighted. Only applies on top of rule 2.

    Rules 2+3 are capped at substring_score - 1 so a substring hit always wins.
    """
    if not query:
        return NO_MATCH

    text_lower = (field_text or "").lower()
    query_lower = query.lower()

    if query_lower in text_lower:
        return MatchResult(weights.substring_score, (query,))

    score = 0
    query_index = 0
    for ch in text_lower:
        if query_index >= len(query_lower):
            break
        if ch == query_lower[query_index]:
            score += (len(query_lower) - query_index) * weights.subsequence_weight
            query_index += 1

    if query_index < len(query_lower):
        return NO_MATCH

    highlights = []
    for word in text_lower.split():
        if word.startswith(query_lower):
            score += weights.word_prefix_bonus
            highlights.append(word)
            break

    # Long fuzzy queries (10+ chars at the default weights) would otherwise
    # outscore a plain substring hit.
    score = min(score, weights.substring_score - 1)
    if score <= 0:
        return NO_MATCH
    return MatchResult(score, tuple(highlights))
