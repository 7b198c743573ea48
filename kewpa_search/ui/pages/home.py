import streamlit as st
import sqlite3
import os
from kewpa_search.core.search.models import CANONICAL_KIND_ORDER
from kewpa_search.ui.state import AppState


def check_db(db_path: str) -> str:
    """
    Checks if the database is accessible and responds to a simple query.
    Returns "OK", "WARN", or "ERROR".
    """
    if not db_path or not os.path.exists(db_path):
        return "WARN"

    try:
        conn = sqlite3.connect(db_path)
        try:
            conn.execute("SELECT 1")
        finally:
            conn.close()
        return "OK"
    except sqlite3.Error:
        return "ERROR"


def render(app_state: AppState):
    st.title("KEW.PA / KEW.PS Quick Search")

    # --- Status Section ---
    st.header("System Status")

    col1, col2, col3 = st.columns(3)

    with col1:
        st.metric("Environment", app_state.env)

    with col2:
        cfg_status = app_state.config.get("status", "UNKNOWN")
        st.metric("Config", cfg_status)
        if cfg_status == "ERROR":
            st.error(f"Config Error: {app_state.config.get('error')}")

    with col3:
        db_path = app_state.config.get("db_path")
        db_status = check_db(db_path)

        st.metric("Database", db_status)

        if db_status == "WARN":
            st.warning("DB not configured or not found.")
        elif db_status == "ERROR":
            st.error(f"Cannot connect to DB at {db_path}")

    st.divider()

    # --- Snapshot sizes ---
    st.header("Searchable Records")
    repo = app_state.records_repo()
    if repo is None:
        st.info("No record snapshot available.")
        return

    cols = st.columns(len(CANONICAL_KIND_ORDER))
    for col, kind in zip(cols, CANONICAL_KIND_ORDER):
        count = repo.count(kind)
        with col:
            st.metric(kind.value.capitalize(), "n/a" if count is None else count)
