"""Orchestrates statement import: statement files → transactions.parquet + diagnostics.parquet."""

from pathlib import Path

import polars as pl

from bank_import.config import AppConfig, StatementSource
from bank_import.cache_manager import cached_import, make_cache_key
from bank_import.logging_setup import get_logger
from bank_import.ingest.presets import get_preset
from bank_import.ingest.statement_parser import ParseOutcome, TRANSACTION_SCHEMA, parse

logger = get_logger(__name__)

DIAGNOSTICS_SCHEMA = {"source_file": pl.Utf8, "row_index": pl.Int64, "message": pl.Utf8}


def decode_statement(data: bytes, encodings: tuple[str, ...] = ("utf-8-sig", "cp1250")) -> str:
    """Decode raw statement bytes with the first encoding that fits.

    The last encoding's UnicodeDecodeError propagates.
    """
    for encoding in encodings[:-1]:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode(encodings[-1])


def read_statement_text(path: Path, encodings: tuple[str, ...] = ("utf-8-sig", "cp1250")) -> str:
    return decode_statement(path.read_bytes(), encodings)


def parse_statement_file(path: Path, source: StatementSource) -> ParseOutcome:
    """Read and parse one statement file with the source's preset and encodings."""
    mapping = get_preset(source.preset) if source.preset else None
    return parse(read_statement_text(path, source.encodings), mapping)


def _import_files(source: StatementSource) -> tuple[pl.DataFrame, pl.DataFrame]:
    tx_frames = []
    diag_frames = []
    total_rows = 0
    total_errors = 0

    for path in source.paths:
        outcome = parse_statement_file(path, source)
        total_rows += outcome.total_data_rows
        total_errors += len(outcome.diagnostics)

        if outcome.is_rejected:
            logger.warning("%s rejected: %s", path.name, outcome.diagnostics[0].message)
        else:
            logger.info(
                "%s: %d transactions, %d of %d rows skipped",
                path.name, len(outcome.transactions), len(outcome.diagnostics), outcome.total_data_rows,
            )

        tx_frames.append(outcome.to_frame().with_columns(pl.lit(path.name).alias("source_file")))
        diag_frames.append(outcome.diagnostics_frame().with_columns(pl.lit(path.name).alias("source_file")))

    logger.info("Import complete: %d data rows, %d diagnostics", total_rows, total_errors)

    if not tx_frames:
        return empty_transactions(), empty_diagnostics()

    transactions = pl.concat(tx_frames)
    diagnostics = pl.concat(diag_frames).select(list(DIAGNOSTICS_SCHEMA))
    return transactions, diagnostics


def empty_transactions() -> pl.DataFrame:
    return pl.DataFrame(schema={**TRANSACTION_SCHEMA, "source_file": pl.Utf8})


def empty_diagnostics() -> pl.DataFrame:
    return pl.DataFrame(schema=DIAGNOSTICS_SCHEMA)


def run_import(config: AppConfig = None, source: StatementSource = None) -> tuple[pl.DataFrame, pl.DataFrame]:
    """Import every statement file of ``source`` into (transactions, diagnostics).

    Auto-discovers statement files from the data directory when no source is
    given. Uses the parquet cache when no source file changed since the last
    import with the same preset.
    """
    if config is None:
        config = AppConfig()
    if source is None:
        source = config.default_source

    if not source.paths:
        logger.info("No statement files found in %s", config.data_dir)
        return empty_transactions(), empty_diagnostics()

    key = make_cache_key(source.preset, source.paths)
    return cached_import(
        config.cache_path(config.transactions_file),
        config.cache_path(config.diagnostics_file),
        source.paths,
        key,
        lambda: _import_files(source),
    )
