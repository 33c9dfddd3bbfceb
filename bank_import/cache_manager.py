"""Parquet cache for imported statements.

A cache entry is fresh when every cached file is newer than all source
statements and its key (preset + file list) matches the current import.
The key is stored in a sidecar file next to the transactions parquet.
"""

from pathlib import Path

import polars as pl


def _key_path(cache_path: Path) -> Path:
    return cache_path.with_suffix(".key")


def make_cache_key(preset: str | None, source_paths: list[Path]) -> str:
    names = ",".join(sorted(p.name for p in source_paths))
    return f"preset={preset or 'auto'};files={names}"


def is_cache_fresh(cache_paths: list[Path], source_paths: list[Path], key: str | None = None) -> bool:
    """Check that all cache files exist, are newer than all sources and match ``key``."""
    if not all(p.exists() for p in cache_paths):
        return False
    if key is not None:
        key_file = _key_path(cache_paths[0])
        if not key_file.exists() or key_file.read_text(encoding="utf-8") != key:
            return False
    cache_mtime = min(p.stat().st_mtime for p in cache_paths)
    for src in source_paths:
        if src.exists() and src.stat().st_mtime > cache_mtime:
            return False
    return True


def read_parquet(cache_path: Path) -> pl.DataFrame:
    """Read a Polars DataFrame from parquet."""
    return pl.read_parquet(cache_path)


def write_parquet(df: pl.DataFrame, cache_path: Path) -> None:
    """Write a Polars DataFrame to parquet."""
    cache_path.parent.mkdir(parents=True, exist_ok=True)
    df.write_parquet(cache_path)


def cached_import(
    transactions_path: Path,
    diagnostics_path: Path,
    source_paths: list[Path],
    key: str,
    builder_fn,
) -> tuple[pl.DataFrame, pl.DataFrame]:
    """Return cached (transactions, diagnostics) or build them with builder_fn, then cache."""
    cache_paths = [transactions_path, diagnostics_path]
    if is_cache_fresh(cache_paths, source_paths, key):
        return read_parquet(transactions_path), read_parquet(diagnostics_path)

    transactions, diagnostics = builder_fn()
    write_parquet(transactions, transactions_path)
    write_parquet(diagnostics, diagnostics_path)
    _key_path(transactions_path).write_text(key, encoding="utf-8")
    return transactions, diagnostics
