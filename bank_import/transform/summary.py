"""Statement period, totals and running balance using pure Polars."""

import polars as pl


def compute_statement_summary(transactions: pl.DataFrame, opening_balance: float = 0.0) -> dict:
    """Summarize imported transactions the way a statement header would.

    Closing balance is the opening balance plus the net of all movements.
    """
    if transactions.is_empty():
        return {
            "first_date": None,
            "last_date": None,
            "count": 0,
            "credit_count": 0,
            "debit_count": 0,
            "total_credit": 0.0,
            "total_debit": 0.0,
            "net_change": 0.0,
            "opening_balance": opening_balance,
            "closing_balance": opening_balance,
        }

    stats = transactions.select([
        pl.col("date").min().alias("first_date"),
        pl.col("date").max().alias("last_date"),
        pl.len().alias("count"),
        (pl.col("amount") >= 0).sum().alias("credit_count"),
        (pl.col("amount") < 0).sum().alias("debit_count"),
        pl.col("amount").filter(pl.col("amount") >= 0).sum().alias("total_credit"),
        pl.col("amount").filter(pl.col("amount") < 0).sum().abs().alias("total_debit"),
        pl.col("amount").sum().alias("net_change"),
    ]).row(0, named=True)

    stats["count"] = int(stats["count"])
    stats["credit_count"] = int(stats["credit_count"])
    stats["debit_count"] = int(stats["debit_count"])
    stats["opening_balance"] = opening_balance
    stats["closing_balance"] = opening_balance + stats["net_change"]
    return stats


def compute_daily_balance(transactions: pl.DataFrame, opening_balance: float = 0.0) -> pl.DataFrame:
    """Net movement per date and the running balance after each date."""
    daily = (
        transactions.group_by("date")
        .agg([
            pl.len().alias("tx_count"),
            pl.col("amount").filter(pl.col("amount") >= 0).sum().alias("credits"),
            pl.col("amount").filter(pl.col("amount") < 0).sum().alias("debits"),
            pl.col("amount").sum().alias("net"),
        ])
        .sort("date")
    )
    return daily.with_columns(
        (pl.col("net").cum_sum() + opening_balance).alias("balance")
    )
