"""Reusable UI components."""
import streamlit as st

from pos_core.bills import format_amount
from pos_core.constants import LOW_STOCK_THRESHOLD


def render_products_table(df):
    """Render products as a table, flagging low stock."""
    if df.empty:
        st.info("No products to show")
        return

    display_df = df.copy()
    display_df["status"] = [
        "⚠️ Low" if qty < LOW_STOCK_THRESHOLD else ""
        for qty in display_df["quantity"]
    ]
    display_df = display_df.rename(
        columns={
            "id": "ID",
            "name": "Name",
            "quantity": "Quantity",
            "price": "Price",
            "status": "Stock",
        }
    )
    st.dataframe(display_df, width="stretch", hide_index=True)


def render_bill_lines(df, total):
    """Render the lines of the sale in progress and its running total."""
    if df.empty:
        st.info("No items added yet")
    else:
        display_df = df.rename(
            columns={"name": "Product", "quantity": "Qty", "line_total": "Price"}
        )
        st.dataframe(display_df, width="stretch", hide_index=True)
    st.markdown(f"**Total: {format_amount(total)}**")
