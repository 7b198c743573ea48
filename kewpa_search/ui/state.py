import logging
from pathlib import Path

import streamlit as st

from kewpa_search.core.logging_setup import configure_logging
from kewpa_search.core.records_repo import RecordsRepo
from kewpa_search.core.search.controller import QuickSearchController
from kewpa_search.db.database import init_or_upgrade_db
from kewpa_search.ui.config_loader import load_config

logger = logging.getLogger(__name__)


@st.cache_resource
def ensure_db_initialized(db_path_str: str):
    """
    Run DB migrations once per process.
    """
    try:
        init_or_upgrade_db(Path(db_path_str))
        return {"status": "OK"}
    except Exception as e:
        logger.error(f"DB Init Fatal Error: {e}")
        return {"status": "ERROR", "error": str(e)}


def _remember_navigation(target: str):
    st.session_state["quick_search_last_target"] = target


class AppState:
    def __init__(self):
        # Load config only once per browser session
        if "app_config" not in st.session_state:
            st.session_state.app_config = load_config()

        self.config = st.session_state.app_config
        configure_logging(self.config)

        # Initialize DB (Singleton)
        if self.config.get("db_path"):
            db_init_res = ensure_db_initialized(self.config["db_path"])
            if db_init_res["status"] == "ERROR":
                self.config["db_init_error"] = db_init_res["error"]

    @property
    def env(self) -> str:
        return self.config.get("env", "UNKNOWN")

    @property
    def db_status(self) -> str:
        if self.config.get("status") == "ERROR":
            return "CONFIG_ERROR"
        if not self.config.get("db_path"):
            return "NOT_CONFIGURED"
        if "db_init_error" in self.config:
            return "ERROR"
        return "OK"

    @property
    def features(self) -> dict:
        return self.config.get("data", {}).get("features", {})

    def records_repo(self):
        if self.db_status != "OK":
            return None
        return RecordsRepo(self.config["db_path"])

    @property
    def quick_search(self) -> QuickSearchController:
        """
        One controller per browser session, kept across Streamlit reruns.
        """
        if "quick_search" not in st.session_state:
            st.session_state.quick_search = QuickSearchController.from_config(
                self.config.get("data", {}), navigate=_remember_navigation
            )
        return st.session_state.quick_search


def init_app_state() -> AppState:
    return AppState()
