"""Page 2: Diagnostics: Rows and files that could not be imported."""

import streamlit as st
import polars as pl

from bank_import.state import load_statements, render_preset_picker

st.set_page_config(page_title="Diagnostics", layout="wide")
st.title("Import Diagnostics")

preset = render_preset_picker()
_, diagnostics = load_statements(preset)

if diagnostics.is_empty():
    st.success("All statement rows were imported.")
    st.stop()

rejected = diagnostics.filter(pl.col("row_index") == 0)
if len(rejected) > 0:
    st.subheader("Rejected files")
    st.warning(f"{len(rejected)} file(s) produced no transactions. Try another bank preset.")
    st.dataframe(rejected.select(["source_file", "message"]).to_pandas(), width="stretch", hide_index=True)

rows = diagnostics.filter(pl.col("row_index") > 0)
if len(rows) > 0:
    st.subheader("Skipped rows")
    per_file = rows.group_by("source_file").agg(pl.len().alias("skipped")).sort("skipped", descending=True)
    st.dataframe(per_file.to_pandas(), hide_index=True)
    st.dataframe(rows.sort(["source_file", "row_index"]).to_pandas(), width="stretch", hide_index=True)
