"""Sidebar menu and logout."""
import streamlit as st

from pos_core.constants import MENU_ALERTS, MENU_DASHBOARD, MENU_HISTORY, MENU_NEW_SALE
from ui.login import logout


def render_sidebar_menu():
    """Render the sidebar navigation menu with the logout button."""
    menu = [MENU_DASHBOARD, MENU_NEW_SALE, MENU_HISTORY, MENU_ALERTS]
    if (
        "menu_selection" not in st.session_state
        or st.session_state.menu_selection not in menu
    ):
        st.session_state.menu_selection = menu[0]
    selected = st.sidebar.radio("Select Page", menu, key="menu_selection")

    st.sidebar.markdown("---")
    st.sidebar.caption(f"Signed in as {st.session_state.get('username') or '?'}")
    if st.sidebar.button("\U0001F6AA Logout", key="sidebar_logout"):
        logout()
        st.toast("Logged out.", icon="\U0001F512")
        st.rerun()

    return selected


def render_persistence_warning(catalog):
    """Warn when the last catalog save failed (memory and disk differ)."""
    if catalog.last_error is not None:
        st.sidebar.error(
            f"⚠️ Changes are not saved to disk: {catalog.last_error}"
        )
