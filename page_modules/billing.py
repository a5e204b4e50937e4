"""New sale / billing page."""
import streamlit as st

from pos_core.billing import BillingSession, SaleState
from pos_core.errors import (
    EmptySale,
    InsufficientStock,
    InvalidInput,
    PersistenceFailure,
    ProductNotFound,
)
from pos_core.services import lines_frame
from ui.components import render_bill_lines


def _low_stock_toast(product):
    st.toast(
        f"Low stock: {product.name} has only {product.quantity} left",
        icon="\U0001F6A8",
    )


def _current_sale(catalog, archive):
    """Open sale kept across reruns; a fresh one once the last was closed."""
    sale = st.session_state.get("sale")
    if sale is None or sale.state is not SaleState.OPEN:
        sale = BillingSession(catalog, archive)
        st.session_state["sale"] = sale
    sale.on_low_stock = _low_stock_toast
    return sale


def render(catalog, archive):
    """Render the billing page."""
    st.header("\U0001F9FE New Sale / Billing")
    if st.session_state.get("sale_completed_msg"):
        st.success(st.session_state.pop("sale_completed_msg"))

    sale = _current_sale(catalog, archive)

    with st.form("add_item_form", clear_on_submit=True):
        col1, col2 = st.columns([3, 1])
        product_id = col1.text_input("Product ID")
        qty = col2.text_input("Qty")
        if st.form_submit_button("Add Item"):
            try:
                sale.add_item(product_id, qty)
            except InvalidInput:
                st.error("Enter valid quantity")
            except (ProductNotFound, InsufficientStock) as e:
                st.error(str(e))

    render_bill_lines(lines_frame(sale.lines), sale.total)

    col1, col2 = st.columns(2)
    if col1.button("✅ Complete Sale", key="complete_sale"):
        try:
            receipt = sale.complete()
        except EmptySale as e:
            st.warning(str(e))
        except PersistenceFailure as e:
            st.error(f"❌ Bill could not be saved: {e}")
        else:
            st.session_state["sale_completed_msg"] = (
                f"Sale completed. Bill saved! (Bill No: {receipt.number})"
            )
            st.rerun()
    if col2.button("\U0001F6AB Cancel Sale", key="abandon_sale", disabled=sale.is_empty):
        sale.abandon()
        st.toast("Sale cancelled. Stock already sold was not restored.", icon="⚠️")
        st.rerun()
