"""Retail POS - Main Application Entry Point."""
import logging

import streamlit as st

from pos_core.constants import LOG_LEVEL, MENU_ALERTS, MENU_DASHBOARD, MENU_HISTORY, MENU_NEW_SALE
from pos_core.services import open_archive, open_catalog
from ui.login import login_form, require_auth
from ui.sidebar import render_persistence_warning, render_sidebar_menu

# Import page render functions
from page_modules import alerts, billing, dashboard, history

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Page configuration
st.set_page_config(
    page_title="Retail POS",
    page_icon="\U0001F4B3",
    layout="wide",
)


# One catalog per process; every rerun shares it
@st.cache_resource
def get_catalog():
    return open_catalog()


@st.cache_resource
def get_archive():
    return open_archive()


# Check authentication
if not require_auth():
    login_form()
    st.stop()

catalog = get_catalog()
archive = get_archive()

# Render sidebar menu
menu = render_sidebar_menu()
render_persistence_warning(catalog)

# Page routing
pages = {
    MENU_DASHBOARD: lambda: dashboard.render(catalog),
    MENU_NEW_SALE: lambda: billing.render(catalog, archive),
    MENU_HISTORY: lambda: history.render(archive),
    MENU_ALERTS: lambda: alerts.render(catalog),
}

if menu not in pages:
    menu = MENU_DASHBOARD
pages[menu]()
