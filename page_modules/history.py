"""Sales history page listing stored bills."""
import streamlit as st

from pos_core.bills import format_bill_listing
from pos_core.errors import BillNotFound, PersistenceFailure
from pos_core.services import bills_frame


def render(archive):
    """Render the sales history page."""
    st.header("\U0001F4DC Sales History")
    try:
        names = archive.list_bills()
    except PersistenceFailure as e:
        st.error(f"❌ {e}")
        return
    if not names:
        st.info(format_bill_listing(names))
        return

    df = bills_frame(names)
    display_df = df.copy()
    display_df["created"] = display_df["created"].dt.strftime("%d/%m/%Y %H:%M:%S")
    display_df = display_df.rename(
        columns={"file": "Bill", "bill_no": "Bill No", "created": "Date (UTC)"}
    )
    st.dataframe(display_df, width="stretch", hide_index=True)
    with st.expander("Plain listing"):
        st.text(format_bill_listing(names))

    selected = st.selectbox("View bill", names, key="history_selected")
    if selected:
        try:
            st.code(archive.read_bill(selected), language=None)
        except (BillNotFound, PersistenceFailure) as e:
            st.error(f"❌ Could not open {selected}: {e}")
