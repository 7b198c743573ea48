from dataclasses import dataclass, replace
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Sequence, Tuple

from .models import EntityKind, SearchResult


class Key(str, Enum):
    ARROW_DOWN = "ArrowDown"
    ARROW_UP = "ArrowUp"
    ENTER = "Enter"
    ESCAPE = "Escape"


@dataclass(frozen=True)
class SearchSession:
    """
    State of one open search surface. A closed surface has no session (None).
    selected_index is only meaningful while results is non-empty.
    """
    query: str = ""
    active_filter_kinds: FrozenSet[EntityKind] = frozenset()
    results: Tuple[SearchResult, ...] = ()
    selected_index: int = 0

    @property
    def selected_result(self) -> Optional[SearchResult]:
        if 0 <= self.selected_index < len(self.results):
            return self.results[self.selected_index]
        return None


@dataclass(frozen=True)
class KeyOutcome:
    session: Optional[SearchSession]
    navigate_to: Optional[str] = None


def open_session() -> SearchSession:
    return SearchSession()


def with_query(session: SearchSession, query: str) -> SearchSession:
    return replace(session, query=query)


def with_filters(session: SearchSession, kinds: Iterable[EntityKind]) -> SearchSession:
    return replace(session, active_filter_kinds=frozenset(kinds))


def with_results(session: SearchSession, results: Sequence[SearchResult]) -> SearchSession:
    # New result list: selection always goes back to the top hit.
    return replace(session, results=tuple(results), selected_index=0)


def advance_selection(session: SearchSession, step: int) -> SearchSession:
    count = len(session.results)
    if count == 0:
        return session
    return replace(session, selected_index=(session.selected_index + step) % count)


def select_index(session: SearchSession, index: int) -> SearchSession:
    if 0 <= index < len(session.results):
        return replace(session, selected_index=index)
    return session


def handle_key(session: Optional[SearchSession], key) -> KeyOutcome:
    """
    Applies one keystroke. Returns the next session (None = closed) and,
    for Enter on an existing result, the target to navigate to.
    """
    if session is None:
        return KeyOutcome(None)

    try:
        key = Key(key)
    except ValueError:
        return KeyOutcome(session)

    if key is Key.ARROW_DOWN:
        return KeyOutcome(advance_selection(session, 1))
    if key is Key.ARROW_UP:
        return KeyOutcome(advance_selection(session, -1))
    if key is Key.ENTER:
        selected = session.selected_result
        if selected is None:
            return KeyOutcome(session)
        return KeyOutcome(None, selected.navigation_target)
    # Escape
    return KeyOutcome(None)
