import logging

import streamlit as st

from kewpa_search.core.search.models import CANONICAL_KIND_ORDER
from kewpa_search.core.search.navigator import Key
from kewpa_search.ui.components import result_list
from kewpa_search.ui.state import AppState

logger = logging.getLogger(__name__)

QUERY_KEY = "quick_search_query"


def _open(app_state: AppState):
    controller = app_state.quick_search
    controller.open()
    st.session_state[QUERY_KEY] = ""

    # Fresh snapshot on every open; a failed table just drops that kind.
    repo = app_state.records_repo()
    if repo is not None:
        controller.update_collections(repo.load_collections())


def _close(app_state: AppState):
    app_state.quick_search.close()
    st.session_state[QUERY_KEY] = ""


def _on_query_change(app_state: AppState):
    controller = app_state.quick_search
    controller.set_query(st.session_state.get(QUERY_KEY, ""))
    # Streamlit already reruns once per edit, so apply the debounced run now.
    controller.flush()


def _on_key(app_state: AppState, key: Key):
    controller = app_state.quick_search
    controller.on_key_down(key.value)
    if not controller.is_open:
        st.session_state[QUERY_KEY] = ""


def _on_open_result(app_state: AppState, index: int):
    app_state.quick_search.select(index)
    st.session_state[QUERY_KEY] = ""


def render(app_state: AppState):
    st.title("Quick Search")

    if app_state.config.get("status") == "ERROR":
        st.error(f"Config Error: {app_state.config.get('error')}")
        return

    if not app_state.features.get("quick_search_enabled", False):
        st.warning("Quick search is disabled in configuration.")
        return

    if "db_init_error" in app_state.config:
        st.error(f"Database Error: {app_state.config['db_init_error']}")
        return

    if not app_state.config.get("db_path"):
        st.warning("Database not configured. Quick search has nothing to search.")
        return

    controller = app_state.quick_search

    last_target = st.session_state.get("quick_search_last_target")
    if last_target:
        st.caption(f"Last opened: `{last_target}`")

    if not controller.is_open:
        st.button("Open Quick Search", type="primary", on_click=_open, args=(app_state,))
        return

    # --- Search Bar ---
    c_search, c_close = st.columns([6, 1])
    with c_search:
        st.text_input(
            "Query",
            placeholder="Search assets, inventory, suppliers, and more...",
            key=QUERY_KEY,
            on_change=_on_query_change,
            args=(app_state,),
        )
    with c_close:
        st.button("✕", key="quick_search_close", on_click=_close, args=(app_state,))

    # --- Filters ---
    active = controller.active_filter_kinds
    filter_cols = st.columns(len(CANONICAL_KIND_ORDER) + 1)
    for col, kind in zip(filter_cols, CANONICAL_KIND_ORDER):
        with col:
            st.button(
                kind.value.capitalize(),
                key=f"filter_{kind.value}",
                type="primary" if kind in active else "secondary",
                on_click=controller.toggle_filter,
                args=(kind,),
            )
    if active:
        with filter_cols[-1]:
            st.button("Clear", key="filter_clear", on_click=controller.clear_filters)

    # --- Keyboard equivalents ---
    k_up, k_down, k_enter, k_esc = st.columns(4)
    with k_up:
        st.button("↑", key="key_up", on_click=_on_key, args=(app_state, Key.ARROW_UP))
    with k_down:
        st.button("↓", key="key_down", on_click=_on_key, args=(app_state, Key.ARROW_DOWN))
    with k_enter:
        st.button("↵ Open", key="key_enter", on_click=_on_key, args=(app_state, Key.ENTER))
    with k_esc:
        st.button("Esc", key="key_escape", on_click=_on_key, args=(app_state, Key.ESCAPE))

    # --- Results ---
    results = controller.results
    if results:
        result_list.render(
            results,
            controller.selected_index,
            on_open=lambda i: _on_open_result(app_state, i),
        )
        st.caption(f"{len(results)} results found • ↑↓ to navigate • ↵ to select • Esc to close")
    elif controller.query:
        st.info(f'No results found for "{controller.query}". Try different keywords or check filters.')
    else:
        st.info("Start typing to search assets, inventory, suppliers, and more.")
