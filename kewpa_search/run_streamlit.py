import streamlit as st
import sys
import os

# Ensure repo root is in path if run directly - MUST BE BEFORE LOCAL IMPORTS
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

from kewpa_search.ui.state import init_app_state
from kewpa_search.ui.components import navigation
from kewpa_search.ui.pages import home, search


def main():
    st.set_page_config(
        page_title="KEW.PA Quick Search",
        page_icon="🔎",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    app_state = init_app_state()

    page_map = {
        "Quick Search": search.render,
        "Home": home.render,
    }

    navigation.render_sidebar(app_state, page_map)


if __name__ == "__main__":
    main()
