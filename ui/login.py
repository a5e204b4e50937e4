"""Login gate kept in Streamlit session state."""
import streamlit as st

from pos_core.simple_auth import verify_login


def login_form():
    """Display the login form."""
    st.markdown("### \U0001F510 Login")
    with st.form("login_form", clear_on_submit=False):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submit = st.form_submit_button("Login", width="stretch")

        if submit:
            if username and password:
                if verify_login(username, password):
                    st.session_state.authenticated = True
                    st.session_state.username = username.strip()
                    st.rerun()
                else:
                    st.error("❌ Invalid credentials!")
            else:
                st.warning("⚠️ Please enter both username and password")


def logout():
    """Clear authentication and any sale in progress."""
    st.session_state.authenticated = False
    st.session_state.username = None
    st.session_state.pop("sale", None)


def require_auth():
    """Check if user is authenticated. Returns True if authenticated, False otherwise."""
    return st.session_state.get("authenticated", False)
