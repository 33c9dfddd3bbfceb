"""Streamlit session state management and data loaders."""

import streamlit as st
import polars as pl

from bank_import.config import AppConfig, StatementSource
from bank_import.ingest.column_mapper import ColumnMapping
from bank_import.ingest.pipeline import decode_statement, run_import
from bank_import.ingest.presets import get_preset, preset_names
from bank_import.ingest.statement_parser import ParseOutcome, parse
from bank_import.logging_setup import configure_logging

AUTO_DETECT = "auto-detect"


def get_config() -> AppConfig:
    """Get or create the AppConfig singleton."""
    if "config" not in st.session_state:
        configure_logging()
        st.session_state.config = AppConfig()
    return st.session_state.config


def get_source() -> StatementSource:
    """Current statement source, with the preset picked in the sidebar."""
    source = get_config().default_source
    source.preset = st.session_state.get("preset") or source.preset
    return source


def render_preset_picker() -> str | None:
    """Render the bank preset selector in the sidebar. Returns the preset name or None."""
    options = [AUTO_DETECT] + preset_names()
    current = st.session_state.get("preset") or get_config().default_preset or AUTO_DETECT
    if current not in options:
        current = AUTO_DETECT
    with st.sidebar:
        st.subheader("Bank format")
        choice = st.selectbox("Column preset", options, index=options.index(current))
    st.session_state.preset = None if choice == AUTO_DETECT else choice
    return st.session_state.preset


def preset_mapping(name: str | None) -> ColumnMapping | None:
    return get_preset(name) if name else None


# ---------------------------------------------------------------------------
# Loaders. Keyed on the preset so switching formats re-imports.
# ---------------------------------------------------------------------------

@st.cache_data(show_spinner="Importing statements...")
def load_statements(preset: str | None) -> tuple[pl.DataFrame, pl.DataFrame]:
    config = get_config()
    source = config.default_source
    source.preset = preset
    return run_import(config, source)


@st.cache_data(show_spinner="Parsing statement...")
def parse_uploaded(data: bytes, preset: str | None) -> ParseOutcome:
    source = get_config().default_source
    return parse(decode_statement(data, source.encodings), preset_mapping(preset))
