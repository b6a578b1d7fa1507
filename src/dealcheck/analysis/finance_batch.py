# src/dealcheck/analysis/finance_batch.py

from __future__ import annotations
from dataclasses import dataclass

import numpy as np
import pandas as pd

from dealcheck.domain.assumptions import DealDefaults
from dealcheck.domain.parsing import parse_number
from dealcheck.domain.rules import (
    ACCEPTABLE_MIN_CASHFLOW,
    ACCEPTABLE_MIN_YIELD,
    STRONG_MIN_CASHFLOW,
    STRONG_MIN_YIELD,
)


@dataclass
class BatchDealResult:
    deposit_percent: np.ndarray
    interest_rate: np.ndarray
    refurb: np.ndarray
    sdlt: np.ndarray
    expense_percent: np.ndarray
    gross_yield_percent: np.ndarray
    deposit_amount: np.ndarray
    monthly_interest: np.ndarray
    other_monthly_costs: np.ndarray
    net_monthly_cashflow: np.ndarray
    total_cash_in: np.ndarray
    tier: np.ndarray


def numeric_column(series: pd.Series) -> pd.Series:
    """Lenient per-cell parse ("£250,000", "6.5%"); garbage and booleans become NaN."""
    return pd.to_numeric(series.map(parse_number), errors="coerce")


def _positive_or_default(df: pd.DataFrame, col: str, default: float) -> np.ndarray:
    """Column as floats; missing column, blanks, garbage and values <= 0 become default."""
    if col not in df.columns:
        return np.full(len(df), float(default), dtype=float)
    values = numeric_column(df[col]).to_numpy(dtype=float)
    ok = np.isfinite(values) & (values > 0)
    return np.where(ok, values, float(default))


def classify_deals(gross_yield_percent: np.ndarray, net_monthly_cashflow: np.ndarray) -> np.ndarray:
    # np.select picks the first true condition, same precedence as classify_deal
    conditions = [
        (gross_yield_percent >= STRONG_MIN_YIELD) & (net_monthly_cashflow > STRONG_MIN_CASHFLOW),
        (gross_yield_percent >= ACCEPTABLE_MIN_YIELD) & (net_monthly_cashflow > ACCEPTABLE_MIN_CASHFLOW),
        net_monthly_cashflow > 0,
    ]
    return np.select(conditions, ["strong", "acceptable", "marginal"], default="negative")


def compute_deal_metrics_df(
    df: pd.DataFrame,
    defaults: DealDefaults | None = None,
) -> BatchDealResult:
    """
    Vectorized deal evaluation over a DataFrame.

    Expected columns on df:
      - purchase_price (> 0)
      - monthly_rent   (> 0)
    Optional columns (blank / <= 0 fall back to defaults):
      - deposit_percent, interest_rate_percent, refurb_cost, sdlt, expense_percent
    """
    defaults = defaults or DealDefaults()

    purchase_price = numeric_column(df["purchase_price"]).to_numpy(dtype=float)
    monthly_rent = numeric_column(df["monthly_rent"]).to_numpy(dtype=float)

    deposit_percent = _positive_or_default(df, "deposit_percent", defaults.deposit_percent)
    interest_rate = _positive_or_default(df, "interest_rate_percent", defaults.interest_rate_percent)
    refurb = _positive_or_default(df, "refurb_cost", 0.0)
    sdlt = _positive_or_default(df, "sdlt", 0.0)
    expense_percent = _positive_or_default(df, "expense_percent", defaults.expense_percent)

    gross_yield_percent = (monthly_rent * 12.0 / purchase_price) * 100.0

    # --- Interest-only financing ---
    deposit_amount = purchase_price * deposit_percent / 100.0
    mortgage_amount = purchase_price - deposit_amount
    monthly_interest = mortgage_amount * (interest_rate / 100.0) / 12.0

    other_monthly_costs = monthly_rent * expense_percent / 100.0
    net_monthly_cashflow = monthly_rent - (monthly_interest + other_monthly_costs)

    total_cash_in = deposit_amount + refurb + sdlt

    return BatchDealResult(
        deposit_percent=deposit_percent,
        interest_rate=interest_rate,
        refurb=refurb,
        sdlt=sdlt,
        expense_percent=expense_percent,
        gross_yield_percent=gross_yield_percent,
        deposit_amount=deposit_amount,
        monthly_interest=monthly_interest,
        other_monthly_costs=other_monthly_costs,
        net_monthly_cashflow=net_monthly_cashflow,
        total_cash_in=total_cash_in,
        tier=classify_deals(gross_yield_percent, net_monthly_cashflow),
    )
