"""Dashboard page: inventory table plus add / update / delete actions."""
import plotly.express as px
import streamlit as st

from pos_core.constants import LOW_STOCK_THRESHOLD
from pos_core.errors import InvalidInput
from pos_core.models import parse_quantity, product_from_input
from pos_core.services import products_frame
from ui.components import render_products_table


def _flash(message):
    st.session_state["dashboard_msg"] = message


def render(catalog):
    """Render the dashboard page."""
    st.header("\U0001F4C8 Inventory Dashboard")
    if st.session_state.get("dashboard_msg"):
        st.toast(st.session_state.pop("dashboard_msg"), icon="\U0001F4BE")

    df = products_frame(catalog.get_all())

    col1, col2, col3 = st.columns(3)
    col1.metric("Total Products", len(df))
    col2.metric("Total Items", int(df["quantity"].sum()) if not df.empty else 0)
    col3.metric(
        "Low Stock Items",
        int((df["quantity"] < LOW_STOCK_THRESHOLD).sum()) if not df.empty else 0,
    )

    render_products_table(df)

    if not df.empty:
        fig = px.bar(
            df,
            x="name",
            y="quantity",
            title="Stock on Hand",
            labels={"name": "Product", "quantity": "Quantity"},
            hover_data=["id", "price"],
        )
        fig.add_hline(y=LOW_STOCK_THRESHOLD, line_dash="dot", line_color="red")
        st.plotly_chart(fig, width="stretch")

    st.markdown("---")
    add_tab, update_tab, delete_tab = st.tabs(
        ["➕ Add Product", "\U0001F4DD Update Quantity", "\U0001F5D1️ Delete Product"]
    )

    with add_tab:
        with st.form("add_product_form", clear_on_submit=True):
            product_id = st.text_input("ID")
            name = st.text_input("Name")
            qty = st.text_input("Quantity")
            price = st.text_input("Price")
            if st.form_submit_button("Add Product"):
                try:
                    product = product_from_input(product_id, name, qty, price)
                    catalog.add(product)
                except InvalidInput as e:
                    st.error(f"❌ {e}")
                else:
                    _flash(f"Added '{product.name}'")
                    st.rerun()

    with update_tab:
        with st.form("update_quantity_form"):
            product_id = st.text_input("Product ID to update quantity")
            qty = st.text_input("New quantity")
            if st.form_submit_button("Update Quantity"):
                try:
                    found = catalog.update_quantity(product_id.strip(), parse_quantity(qty))
                except InvalidInput:
                    st.error("❌ Invalid Quantity")
                else:
                    if found:
                        _flash(f"Quantity of {product_id.strip()} updated")
                        st.rerun()
                    else:
                        st.warning("Product not found")

    with delete_tab:
        with st.form("delete_product_form"):
            product_id = st.text_input("Product ID to delete")
            if st.form_submit_button("Delete Product"):
                removed = catalog.delete(product_id.strip())
                if removed:
                    _flash(f"Deleted {product_id.strip()}")
                    st.rerun()
                else:
                    st.warning("Product not found")
