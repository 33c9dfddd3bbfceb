"""Configuration dataclasses for the bank statement importer."""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _env_path(name: str) -> Path | None:
    value = os.getenv(name)
    return Path(value) if value else None


@dataclass
class StatementSource:
    """A set of statement files imported with the same settings."""
    name: str
    paths: list[Path] = field(default_factory=list)
    preset: str | None = None  # None = detect columns from the header row
    encodings: tuple[str, ...] = ("utf-8-sig", "cp1250")
    opening_balance: float = 0.0


@dataclass
class AppConfig:
    """Top-level application configuration.

    BANK_IMPORT_DATA_DIR, BANK_IMPORT_CACHE_DIR and BANK_IMPORT_PRESET
    override the defaults.
    """
    project_root: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)
    cache_dir: Path = field(default=None)
    data_dir: Path = field(default=None)
    default_preset: str | None = field(default_factory=lambda: os.getenv("BANK_IMPORT_PRESET") or None)
    file_patterns: tuple[str, ...] = ("*.csv", "*.txt")

    # Cache file names
    transactions_file: str = "transactions.parquet"
    diagnostics_file: str = "diagnostics.parquet"

    def __post_init__(self):
        if self.cache_dir is None:
            self.cache_dir = _env_path("BANK_IMPORT_CACHE_DIR") or self.project_root / "cache"
        if self.data_dir is None:
            self.data_dir = _env_path("BANK_IMPORT_DATA_DIR") or self.project_root / "data"
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def cache_path(self, filename: str) -> Path:
        return self.cache_dir / filename

    def discover_statement_files(self) -> list[Path]:
        """Find all statement files in the data directory, sorted by name."""
        if not self.data_dir.exists():
            return []
        found = set()
        for pattern in self.file_patterns:
            found.update(self.data_dir.glob(pattern))
        return sorted(found)

    @property
    def default_source(self) -> StatementSource:
        return StatementSource(
            name="all-statements",
            paths=self.discover_statement_files(),
            preset=self.default_preset,
        )
