# dealcheck/services/screening.py

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import pandas as pd
from loguru import logger

from dealcheck.analysis.finance_batch import compute_deal_metrics_df, numeric_column
from dealcheck.domain.assumptions import DealDefaults
from dealcheck.domain.sdlt import calculate_sdlt

# CSV headers in the web payload's camelCase are accepted too
_COLUMN_ALIASES = {
    "purchasePrice": "purchase_price",
    "rent": "monthly_rent",
    "monthlyRent": "monthly_rent",
    "depositPercent": "deposit_percent",
    "interestRate": "interest_rate_percent",
    "refurb": "refurb_cost",
    "expensePercent": "expense_percent",
}

METRIC_COLUMNS = [
    "deposit_percent",
    "interest_rate",
    "refurb",
    "sdlt",
    "expense_percent",
    "gross_yield_percent",
    "deposit_amount",
    "monthly_interest",
    "other_monthly_costs",
    "net_monthly_cashflow",
    "total_cash_in",
    "tier",
]


def _prepare_frame(raw: pd.DataFrame, *, auto_sdlt: bool) -> tuple[pd.DataFrame, int]:
    """
    Rename known aliases, drop rows without a usable price/rent and fill
    blank SDLT from the band calculator when auto_sdlt is on.

    Returns (clean frame, number of rejected rows).
    """
    df = raw.rename(columns={k: v for k, v in _COLUMN_ALIASES.items() if k in raw.columns})

    for col in ("purchase_price", "monthly_rent"):
        if col not in df.columns:
            raise ValueError(f"Missing required column: {col}")
        df[col] = numeric_column(df[col])

    valid = (df["purchase_price"] > 0) & (df["monthly_rent"] > 0)
    rejected = int((~valid).sum())
    df = df.loc[valid].copy()

    if "sdlt" in df.columns:
        df["sdlt"] = numeric_column(df["sdlt"])
        missing_sdlt = df["sdlt"].isna()
    else:
        missing_sdlt = pd.Series(True, index=df.index)

    df["sdlt_estimated"] = False
    if auto_sdlt and missing_sdlt.any():
        df.loc[missing_sdlt, "sdlt"] = df.loc[missing_sdlt, "purchase_price"].map(calculate_sdlt)
        df.loc[missing_sdlt, "sdlt_estimated"] = True

    return df, rejected


def screen_deals(
    raw: pd.DataFrame,
    defaults: DealDefaults | None = None,
    *,
    auto_sdlt: bool = True,
) -> tuple[pd.DataFrame, Dict[str, Any]]:
    """
    Evaluate every row of raw as an independent deal.

    Returns the evaluated rows (input columns + metric columns) and a summary
    dict with row counts and the number of deals per tier.
    """
    df, rejected = _prepare_frame(raw, auto_sdlt=auto_sdlt)

    if rejected:
        logger.warning("Skipping {} rows with missing or non-positive price/rent", rejected)

    if df.empty:
        out = df.reindex(columns=[*df.columns, *[c for c in METRIC_COLUMNS if c not in df.columns]])
        tiers: Dict[str, int] = {}
    else:
        metrics = compute_deal_metrics_df(df, defaults)
        out = df.copy()
        for col in METRIC_COLUMNS:
            out[col] = getattr(metrics, col)
        tiers = {str(k): int(v) for k, v in out["tier"].value_counts().items()}

    summary: Dict[str, Any] = {
        "rows_in": int(len(raw)),
        "rows_evaluated": int(len(out)),
        "rows_rejected": rejected,
        "tiers": tiers,
    }
    return out, summary


def screen_deals_csv(
    input_csv: Path,
    output_csv: Path,
    defaults: DealDefaults | None = None,
    *,
    auto_sdlt: bool = True,
) -> Dict[str, Any]:
    """
    Screen a CSV of candidate deals.

    input_csv must contain at least purchase_price and monthly_rent (or the
    camelCase purchasePrice / rent). Writes the evaluated rows to output_csv.
    """
    logger.info("Screening deals from {}", input_csv)

    raw = pd.read_csv(input_csv)
    out, summary = screen_deals(raw, defaults, auto_sdlt=auto_sdlt)

    output_csv.parent.mkdir(parents=True, exist_ok=True)
    out.to_csv(output_csv, index=False)

    logger.info(
        "Screened {} deals ({} rejected) -> {} | tiers={}",
        summary["rows_evaluated"],
        summary["rows_rejected"],
        output_csv,
        summary["tiers"],
    )
    return summary
