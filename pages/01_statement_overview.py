"""Page 1: Statement Overview: Period, totals and running balance."""

import streamlit as st
import plotly.express as px
import plotly.graph_objects as go
import polars as pl

from bank_import.state import get_source, load_statements, render_preset_picker
from bank_import.transform.summary import compute_daily_balance, compute_statement_summary

st.set_page_config(page_title="Statement Overview", layout="wide")
st.title("Statement Overview")

preset = render_preset_picker()
transactions, _ = load_statements(preset)

if transactions.is_empty():
    st.info("No transactions imported yet. Put statement files in the data directory.")
    st.stop()

with st.sidebar:
    opening = st.number_input("Opening balance", value=float(get_source().opening_balance), step=100.0)

summary = compute_statement_summary(transactions, opening)

c1, c2, c3, c4, c5 = st.columns(5)
with c1:
    st.metric("Period", f"{summary['first_date']} to {summary['last_date']}")
with c2:
    st.metric("Incoming", f"{summary['total_credit']:,.2f}", f"{summary['credit_count']} tx")
with c3:
    st.metric("Outgoing", f"{summary['total_debit']:,.2f}", f"{summary['debit_count']} tx", delta_color="inverse")
with c4:
    st.metric("Net change", f"{summary['net_change']:,.2f}")
with c5:
    st.metric("Closing balance", f"{summary['closing_balance']:,.2f}")

st.divider()

st.subheader("Running Balance")
daily = compute_daily_balance(transactions, opening).to_pandas()

fig = go.Figure()
fig.add_trace(go.Bar(x=daily["date"], y=daily["credits"], name="Incoming", marker_color="green", opacity=0.5))
fig.add_trace(go.Bar(x=daily["date"], y=daily["debits"], name="Outgoing", marker_color="red", opacity=0.5))
fig.add_trace(go.Scatter(x=daily["date"], y=daily["balance"], name="Balance", line=dict(width=3)))
fig.update_layout(height=400, barmode="relative", title="Daily movements and balance")
st.plotly_chart(fig, width="stretch")

st.subheader("Largest Counterparties")
by_party = (
    transactions.filter(pl.col("counterparty_name") != "")
    .group_by("counterparty_name")
    .agg(pl.col("amount").abs().sum().alias("volume"))
    .sort("volume", descending=True)
    .head(15)
    .to_pandas()
)
fig2 = px.bar(by_party, x="counterparty_name", y="volume", title="Turnover by counterparty")
fig2.update_layout(height=350, xaxis_tickangle=-45)
st.plotly_chart(fig2, width="stretch")
