"""Page 3: Upload Statement: Parse a single file without saving it."""

import streamlit as st

from bank_import.state import parse_uploaded, render_preset_picker

st.set_page_config(page_title="Upload Statement", layout="wide")
st.title("Upload Statement")

preset = render_preset_picker()
uploaded = st.file_uploader("Statement export (CSV / TXT)", type=["csv", "txt"])

if uploaded is None:
    st.info("Choose a statement file to preview the import.")
    st.stop()

outcome = parse_uploaded(uploaded.getvalue(), preset)

if outcome.is_rejected:
    st.error(f"File rejected: {outcome.diagnostics[0].message}")
    st.stop()

c1, c2, c3 = st.columns(3)
with c1:
    st.metric("Data rows", f"{outcome.total_data_rows:,}")
with c2:
    st.metric("Transactions", f"{len(outcome.transactions):,}")
with c3:
    st.metric("Skipped rows", f"{len(outcome.diagnostics):,}")

st.dataframe(outcome.to_frame().to_pandas(), width="stretch", hide_index=True)

if outcome.diagnostics:
    st.subheader("Skipped rows")
    st.dataframe(outcome.diagnostics_frame().to_pandas(), width="stretch", hide_index=True)
