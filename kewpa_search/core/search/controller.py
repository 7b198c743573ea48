import logging
import threading
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from . import navigator
from .debounce import BaseScheduler, Debouncer
from .models import EntityKind, SearchableRecord, SearchResult
from .navigator import SearchSession
from .records import build_collection
from .service import SearchService

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 150


class QuickSearchController:
    """
    Host-facing Quick Search surface.

    Owns the current SearchSession (None while closed), the collection
    snapshots and the debounce timer. Query edits are debounced, filter and
    collection changes recompute immediately. Every open/close bumps a
    generation counter so a debounced run scheduled for an older session is
    dropped instead of applied.
    """

    def __init__(
        self,
        service: Optional[SearchService] = None,
        navigate: Optional[Callable[[str], None]] = None,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        scheduler: Optional[BaseScheduler] = None,
    ):
        self.service = service or SearchService()
        self._navigate = navigate
        self._debouncer = Debouncer(debounce_ms / 1000.0, scheduler)
        self._lock = threading.RLock()
        self._collections: Dict[EntityKind, List[SearchableRecord]] = {}
        self._session: Optional[SearchSession] = None
        self._generation = 0

    @classmethod
    def from_config(cls, config_data: Optional[Dict[str, Any]], navigate=None, scheduler=None) -> "QuickSearchController":
        section = (config_data or {}).get("search", {}) or {}
        return cls(
            service=SearchService.from_config(config_data),
            navigate=navigate,
            debounce_ms=section.get("debounce_ms", DEFAULT_DEBOUNCE_MS),
            scheduler=scheduler,
        )

    # --- read model ---

    @property
    def is_open(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> Optional[SearchSession]:
        return self._session

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def query(self) -> str:
        return self._session.query if self._session else ""

    @property
    def active_filter_kinds(self):
        return self._session.active_filter_kinds if self._session else frozenset()

    @property
    def results(self) -> Tuple[SearchResult, ...]:
        return self._session.results if self._session else ()

    @property
    def selected_index(self) -> int:
        return self._session.selected_index if self._session else 0

    @property
    def selected_result(self) -> Optional[SearchResult]:
        return self._session.selected_result if self._session else None

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def collection_sizes(self) -> Dict[EntityKind, int]:
        return {kind: len(records) for kind, records in self._collections.items()}

    # --- lifecycle ---

    def open(self) -> None:
        with self._lock:
            self._debouncer.cancel()
            self._generation += 1
            self._session = navigator.open_session()
            logger.debug(f"Quick search opened (generation={self._generation})")

    def close(self) -> None:
        with self._lock:
            self._debouncer.cancel()
            self._generation += 1
            self._session = None
            logger.debug(f"Quick search closed (generation={self._generation})")

    # --- inputs ---

    def set_query(self, text: str) -> None:
        with self._lock:
            if self._session is None:
                logger.debug("set_query ignored: search surface is closed")
                return
            self._session = navigator.with_query(self._session, text or "")
            generation = self._generation
            self._debouncer.submit(lambda: self._recompute(generation))

    def toggle_filter(self, kind) -> None:
        kind = EntityKind.parse(kind)
        with self._lock:
            if self._session is None:
                return
            kinds = set(self._session.active_filter_kinds)
            if kind in kinds:
                kinds.discard(kind)
            else:
                kinds.add(kind)
            self._session = navigator.with_filters(self._session, kinds)
            self._recompute_now()

    def clear_filters(self) -> None:
        with self._lock:
            if self._session is None:
                return
            self._session = navigator.with_filters(self._session, ())
            self._recompute_now()

    def update_collection(self, kind, rows: Optional[Iterable[Mapping[str, Any]]]) -> None:
        """
        Replaces the snapshot of one kind. rows=None marks the kind as absent
        (e.g. its fetch failed); it then contributes no results.
        """
        self.update_collections({kind: rows})

    def update_collections(self, raw: Mapping[Any, Optional[Iterable[Mapping[str, Any]]]]) -> None:
        with self._lock:
            for kind, rows in raw.items():
                kind = EntityKind.parse(kind)
                records = build_collection(kind, rows)
                if records is None:
                    self._collections.pop(kind, None)
                else:
                    self._collections[kind] = records
            if self._session is not None:
                self._recompute_now()

    def flush(self) -> bool:
        """Applies a pending debounced query now."""
        return self._debouncer.flush()

    def on_key_down(self, event) -> bool:
        """
        Handles ArrowDown/ArrowUp/Enter/Escape. `event` is a key name or any
        object with a `key` attribute. Returns True if the key was handled.
        """
        key = getattr(event, "key", event)
        target = None
        with self._lock:
            if self._session is None:
                return False
            try:
                navigator.Key(key)
            except ValueError:
                return False
            outcome = navigator.handle_key(self._session, key)
            if outcome.session is None:
                self._debouncer.cancel()
                self._generation += 1
            self._session = outcome.session
            target = outcome.navigate_to
        if target is not None:
            self._emit_navigation(target)
        return True

    def select(self, index: int) -> bool:
        """Click on a rendered result: select it, then commit like Enter."""
        with self._lock:
            if self._session is None or not (0 <= index < len(self._session.results)):
                return False
            self._session = navigator.select_index(self._session, index)
        return self.on_key_down(navigator.Key.ENTER.value)

    # --- internals ---

    def _emit_navigation(self, target: str) -> None:
        logger.info(f"Quick search navigating to {target}")
        if self._navigate is not None:
            self._navigate(target)

    def _recompute_now(self) -> None:
        self._debouncer.cancel()
        self._apply_search()

    def _recompute(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._session is None:
                logger.debug(f"Discarding stale search (generation={generation}, current={self._generation})")
                return
            self._apply_search()

    def _apply_search(self) -> None:
        session = self._session
        results = self.service.search(session.query, self._collections, session.active_filter_kinds)
        self._session = navigator.with_results(session, results)
