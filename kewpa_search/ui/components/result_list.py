import streamlit as st
from typing import Callable, Optional, Sequence

from kewpa_search.core.search.models import EntityKind, SearchResult

KIND_ICONS = {
    EntityKind.ASSET: "🏢",
    EntityKind.INVENTORY: "📦",
    EntityKind.SUPPLIER: "👥",
    EntityKind.MOVEMENT: "➡️",
    EntityKind.INSPECTION: "🔍",
    EntityKind.MAINTENANCE: "🕒",
}


def render(results: Sequence[SearchResult], selected_index: int, on_open: Optional[Callable[[int], None]] = None):
    """
    Renders ranked results, marking the selected one.
    Pure render component, no DB access.
    """
    for i, result in enumerate(results):
        with st.container():
            col_icon, col_body, col_action = st.columns([1, 8, 2])
            with col_icon:
                st.write(KIND_ICONS.get(result.kind, "•"))
            with col_body:
                marker = "▶ " if i == selected_index else ""
                st.markdown(f"{marker}**{result.title}**  `{result.kind.value}`")
                st.caption(result.subtitle)
                if result.matched_fragments:
                    st.caption("Matched: " + ", ".join(result.matched_fragments))
            with col_action:
                if on_open is not None:
                    st.button("Open", key=f"open_{i}_{result.key}", on_click=on_open, args=(i,))
