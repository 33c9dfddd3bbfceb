"""Streamlit entry point for the Bank Statement Importer."""

import streamlit as st

st.set_page_config(
    page_title="Bank Statement Import",
    page_icon="🏦",
    layout="wide",
    initial_sidebar_state="expanded",
)

from bank_import.state import get_config, get_source, load_statements, render_preset_picker

st.title("Bank Statement Import")
st.markdown("**Normalize exported bank statements into transactions**")

preset = render_preset_picker()

# Sidebar info
with st.sidebar:
    st.header("Statement Files")
    config = get_config()
    files = get_source().paths
    st.write(f"**{len(files)} statement file{'s' if len(files) != 1 else ''}** in `{config.data_dir.name}/`")
    with st.expander("Files"):
        for f in files:
            size_kb = f.stat().st_size / 1024
            st.write(f"- {f.name} ({size_kb:.0f} KB)")

    if st.button("Reload Statements", type="primary"):
        st.cache_data.clear()
        st.rerun()

try:
    transactions, diagnostics = load_statements(preset)

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Transactions", f"{len(transactions):,}")
    with col2:
        st.metric("Incoming", f"{len(transactions.filter(transactions['amount'] >= 0)):,}")
    with col3:
        st.metric("Outgoing", f"{len(transactions.filter(transactions['amount'] < 0)):,}")
    with col4:
        st.metric("Diagnostics", f"{len(diagnostics):,}")

    st.divider()
    st.subheader("Transactions")
    st.dataframe(transactions.to_pandas(), width="stretch", hide_index=True)

    st.markdown("""
    ### Pages

    1. **Statement Overview**: Period, totals and running balance
    2. **Diagnostics**: Rows and files that could not be imported
    3. **Upload Statement**: Parse a single file without saving it
    """)

except Exception as e:
    st.error(f"Import error: {e}")
    st.exception(e)
