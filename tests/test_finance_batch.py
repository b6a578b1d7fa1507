import numpy as np
import pandas as pd
import pytest

from dealcheck.analysis.finance import evaluate_deal
from dealcheck.analysis.finance_batch import classify_deals, compute_deal_metrics_df
from dealcheck.domain.deal import DealInputs


def _frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "purchase_price": [200_000, 200_000, 200_000, 300_000, 450_000],
            "monthly_rent": [1_200, 1_000, 1_000, 1_000, 2_600],
            "deposit_percent": [None, 25, "x", 0, 40],
            "interest_rate_percent": [None, None, 6.5, None, 4.25],
            "refurb_cost": [0, 5_000, None, -1, 20_000],
            "sdlt": [0, None, 11_500, 0, 22_500],
        }
    )


def test_batch_matches_scalar_evaluator_row_by_row():
    df = _frame()
    batch = compute_deal_metrics_df(df)

    for i, row in df.iterrows():
        scalar = evaluate_deal(
            DealInputs(
                purchase_price=float(row["purchase_price"]),
                monthly_rent=float(row["monthly_rent"]),
                deposit_percent=row["deposit_percent"],
                interest_rate_percent=row["interest_rate_percent"],
                refurb_cost=row["refurb_cost"],
                sdlt=row["sdlt"],
            )
        )
        assert batch.gross_yield_percent[i] == pytest.approx(scalar.gross_yield_percent)
        assert batch.monthly_interest[i] == pytest.approx(scalar.monthly_interest)
        assert batch.other_monthly_costs[i] == pytest.approx(scalar.other_monthly_costs)
        assert batch.net_monthly_cashflow[i] == pytest.approx(scalar.net_monthly_cashflow)
        assert batch.total_cash_in[i] == pytest.approx(scalar.total_cash_in)
        assert batch.tier[i] == scalar.tier


def test_missing_optional_columns_use_defaults():
    df = pd.DataFrame({"purchase_price": [200_000.0], "monthly_rent": [1_200.0]})
    batch = compute_deal_metrics_df(df)

    assert batch.deposit_percent[0] == 25
    assert batch.interest_rate[0] == 5.5
    assert batch.expense_percent[0] == 15
    assert batch.net_monthly_cashflow[0] == pytest.approx(332.5)
    assert batch.tier[0] == "strong"


def test_vector_tiers_follow_precedence():
    tiers = classify_deals(
        np.array([10.0, 7.0, 5.5, 20.0, 3.0]),
        np.array([500.0, 250.0, 100.0, 0.5, -10.0]),
    )
    assert list(tiers) == ["strong", "acceptable", "marginal", "marginal", "negative"]
