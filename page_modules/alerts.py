"""Stock alerts page for low inventory warnings."""
import streamlit as st

from pos_core.constants import LOW_STOCK_THRESHOLD
from pos_core.services import products_frame


def render(catalog):
    """Render the stock alerts page."""
    st.header("\U0001F6A8 Low Stock Alerts")
    low = products_frame(catalog.low_stock())
    if low.empty:
        st.info(f"No products below the threshold ({LOW_STOCK_THRESHOLD})")
        return
    low = low.sort_values("quantity", kind="stable")
    display_df = low.rename(
        columns={"id": "ID", "name": "Name", "quantity": "Stock", "price": "Price"}
    )
    st.dataframe(display_df, width="stretch", hide_index=True)
