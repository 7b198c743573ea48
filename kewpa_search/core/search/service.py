import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .matcher import DEFAULT_WEIGHTS, ScoringWeights, match
from .models import CANONICAL_KIND_ORDER, EntityKind, SearchableRecord, SearchResult

logger = logging.getLogger(__name__)

RESULT_LIMIT = 20

Collections = Mapping[EntityKind, Optional[Sequence[SearchableRecord]]]


def _score_record(record: SearchableRecord, query: str, weights: ScoringWeights) -> Optional[SearchResult]:
    best = 0
    fragments: List[str] = []
    for _name, value in record.search_fields():
        m = match(value, query, weights)
        if m.score > 0:
            fragments.extend(m.highlights)
            best = max(best, m.score)

    if best <= 0:
        return None

    return SearchResult(
        id=record.id,
        kind=record.kind,
        title=record.display_title,
        subtitle=record.display_subtitle,
        score=best,
        matched_fragments=tuple(fragments),
        navigation_target=record.navigation_target,
    )


def search(
    query: str,
    collections: Collections,
    active_filter_kinds: Iterable[EntityKind] = (),
    result_limit: int = RESULT_LIMIT,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> List[SearchResult]:
    """
    Ranks every record of every enabled collection against the query.

    A kind is searched when its collection is present (not None) and either no
    filter is active or the kind is in the filter set. Results are sorted by
    score (stable, so ties keep canonical kind order then collection order)
    and cut to result_limit.
    """
    if not query or not query.strip():
        return []

    filters = frozenset(active_filter_kinds or ())

    hits: List[SearchResult] = []
    for kind in CANONICAL_KIND_ORDER:
        records = collections.get(kind)
        if records is None:
            continue
        if filters and kind not in filters:
            continue
        for record in records:
            result = _score_record(record, query, weights)
            if result is not None:
                hits.append(result)

    hits.sort(key=lambda r: r.score, reverse=True)
    return hits[:result_limit]


class SearchService:
    def __init__(self, result_limit: int = RESULT_LIMIT, weights: ScoringWeights = DEFAULT_WEIGHTS):
        self.result_limit = result_limit
        self.weights = weights

    @classmethod
    def from_config(cls, config_data: Optional[Dict[str, Any]]) -> "SearchService":
        """
        Builds the service from the loaded config data (the "data" part of
        load_config()). Missing keys fall back to defaults.
        """
        section = (config_data or {}).get("search", {}) or {}
        return cls(
            result_limit=section.get("result_limit", RESULT_LIMIT),
            weights=ScoringWeights.from_config(section.get("scoring")),
        )

    def search(self, query: str, collections: Collections, active_filter_kinds: Iterable[EntityKind] = ()) -> List[SearchResult]:
        filters = frozenset(active_filter_kinds or ())
        results = search(query, collections, filters, self.result_limit, self.weights)
        logger.debug(f"Search query={query!r} filters={sorted(k.value for k in filters)} -> {len(results)} results")
        return results
