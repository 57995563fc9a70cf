"""
Streamlit UI for the Quotation Tool.

Features:
- Customer details form
- Item entry in feet or millimeters, priced per square foot
- Line item table with per-row removal
- Transportation cost and GST totals
- Export to / import from Excel
"""
import streamlit as st
import pandas as pd
import sys
from pathlib import Path
from datetime import datetime

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from quotation_tool.engine import CustomerDetails, DecodeError, ItemDraft, QuotationStore, Unit, TAX_RATE
from quotation_tool.export import WORKBOOK_MIME, decode, encode, quotation_filename
from quotation_tool.config.settings import get_settings


st.set_page_config(
    page_title="Quotation Builder",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_settings_cached():
    """Get cached settings."""
    return get_settings()


settings = get_settings_cached()
currency = settings.currency_symbol

# Each browser session owns its quotation
if 'store' not in st.session_state:
    st.session_state.store = QuotationStore()
if 'customer' not in st.session_state:
    st.session_state.customer = CustomerDetails()

store: QuotationStore = st.session_state.store


def money(value: float) -> str:
    return f"{currency}{value:,.2f}"


# ============================================================================
# SIDEBAR: Customer Details
# ============================================================================
with st.sidebar:
    st.header("👤 Customer Details")

    customer = st.session_state.customer
    with st.form("customer_form"):
        project_name = st.text_input("Project Name", value=customer.project_name)
        name = st.text_input("Customer Name", value=customer.name)
        gst_number = st.text_input("GST Number", value=customer.gst_number)
        address = st.text_area("Address", value=customer.address, height=80)
        phone = st.text_input("Phone", value=customer.phone)
        email = st.text_input("Email", value=customer.email)
        if st.form_submit_button("Save Details"):
            st.session_state.customer = CustomerDetails(
                project_name=project_name,
                name=name,
                gst_number=gst_number,
                address=address,
                phone=phone,
                email=email,
            )
            st.toast("Customer details saved")

    st.divider()

    st.subheader("📂 Import")
    uploaded = st.file_uploader("Load a saved quotation", type=["xlsx"])
    if uploaded is not None and st.button("Load Workbook"):
        try:
            imported_customer, imported_items = decode(uploaded.getvalue())
        except DecodeError as e:
            st.error(f"Could not import workbook: {e}")
        else:
            st.session_state.customer = imported_customer
            store.replace_all(imported_items)
            st.success(f"Imported {len(store)} items")
            st.rerun()


# ============================================================================
# MAIN CONTENT
# ============================================================================
st.title(settings.company_name)
st.caption(f"{settings.company_address} | GSTIN: {settings.company_gstin} | {datetime.now().strftime('%Y-%m-%d')}")

col1, col2 = st.columns([1.8, 1.2], gap="large")

with col1:
    st.subheader("Add Item")

    with st.container(border=True):
        unit_label = st.radio("Dimension Unit", ["Feet", "Millimeters (mm)"], horizontal=True)
        unit = Unit.FEET if unit_label == "Feet" else Unit.MILLIMETER

        with st.form("item_form", clear_on_submit=True):
            item_name = st.text_input("Item Name *", placeholder="e.g., Sliding Window")
            description = st.text_area("Description", placeholder="Enter item description (optional)", height=68)
            c1, c2, c3, c4 = st.columns(4)
            with c1:
                height = st.number_input(f"Height ({unit.value}) *", min_value=0.0, step=0.01)
            with c2:
                width = st.number_input(f"Width ({unit.value}) *", min_value=0.0, step=0.01)
            with c3:
                quantity = st.number_input("Quantity *", min_value=1, value=1, step=1)
            with c4:
                price = st.number_input(
                    f"Price/Sq.ft ({currency})",
                    min_value=0.0,
                    value=float(settings.default_price_per_sqft),
                    step=1.0,
                )
            note = st.text_input("Note", placeholder="Optional")

            if st.form_submit_button("➕ Add Item", type="primary"):
                if not item_name.strip() or height <= 0 or width <= 0:
                    st.warning("Item name, height and width are required")
                else:
                    store.add_item(ItemDraft(
                        name=item_name.strip(),
                        description=description.strip(),
                        height=height,
                        width=width,
                        quantity=int(quantity),
                        price_per_area=price,
                        unit=unit,
                        note=note.strip() or None,
                    ))
                    st.rerun()

with col2:
    st.subheader("Quote Summary")

    with st.container(border=True):
        store.transportation_cost = st.number_input(
            f"Transportation Cost ({currency})",
            min_value=0.0,
            value=float(store.transportation_cost),
            step=100.0,
        )
        totals = store.totals()

        m1, m2 = st.columns(2)
        m1.metric("Subtotal", money(totals.subtotal))
        m2.metric(f"GST ({TAX_RATE * 100:g}%)", money(totals.tax))
        if totals.transportation_cost > 0:
            st.caption(f"**Transportation:** {money(totals.transportation_cost)}")
        st.metric("Total Amount", money(totals.grand_total))

        st.divider()

        if len(store):
            btn_col1, btn_col2 = st.columns(2)
            with btn_col1:
                st.download_button(
                    "📥 Excel",
                    data=encode(st.session_state.customer, store.items, totals),
                    file_name=quotation_filename(st.session_state.customer, "xlsx"),
                    mime=WORKBOOK_MIME,
                    use_container_width=True
                )
            with btn_col2:
                if st.button("🗑️ Clear", use_container_width=True):
                    store.clear()
                    st.rerun()
        else:
            st.info("No items yet")
            st.caption("Add an item or load a saved workbook to begin.")

# Line items (Full Width)
if len(store):
    st.markdown("### 📝 Line Items")

    display_data = [{
        'SL No.': item.sequence_number,
        'Name': item.name,
        'Description': item.description,
        'Height': f"{item.height:.2f}",
        'Width': f"{item.width:.2f}",
        'Area (Sq.ft)': f"{item.area:.2f}",
        'Qty': item.quantity,
        'Price/Sq.ft': money(item.price_per_area),
        'Total Cost': money(item.total_cost),
        'Note': item.note or "",
    } for item in store]
    st.dataframe(pd.DataFrame(display_data), use_container_width=True, hide_index=True)

    r1, r2 = st.columns([1, 4])
    with r1:
        to_remove = st.selectbox("Remove SL No.", [item.sequence_number for item in store])
    with r2:
        st.write("")
        st.write("")
        if st.button("Remove Item"):
            store.remove_item(to_remove)
            st.rerun()
