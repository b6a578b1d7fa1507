import math
import numbers
from typing import Any, Dict

from dealcheck.domain.assumptions import DealDefaults
from dealcheck.domain.deal import DealInputs, DealResult
from dealcheck.domain.rules import classify_deal, summarize_tier


def resolve_positive(value: Any, default: float) -> float:
    """
    Use value if it is a finite number > 0, else default.
    Zero is never an override: 0 / None / "abc" / NaN all give the default,
    as does an int too large for a float.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return float(default)
    try:
        f = float(value)
    except (OverflowError, ValueError):
        return float(default)
    if not math.isfinite(f) or f <= 0:
        return float(default)
    return f


def _financing_monthly(
    purchase_price: float,
    deposit_percent: float,
    interest_rate_percent: float,
) -> Dict[str, float]:
    """
    Interest-only financing: the monthly cost is interest on the mortgage
    balance only, no principal is repaid.
    """
    deposit_amount = purchase_price * deposit_percent / 100.0
    mortgage_amount = purchase_price - deposit_amount
    monthly_interest = mortgage_amount * (interest_rate_percent / 100.0) / 12.0
    return {
        "deposit_amount": deposit_amount,
        "mortgage_amount": mortgage_amount,
        "monthly_interest": monthly_interest,
    }


def evaluate_deal(inputs: DealInputs, defaults: DealDefaults | None = None) -> DealResult:
    """
    Core deal economics.

    Assumes purchase_price and monthly_rent are already validated as positive;
    every optional field is resolved through resolve_positive.
    """
    defaults = defaults or DealDefaults()

    price = float(inputs.purchase_price)
    rent = float(inputs.monthly_rent)

    deposit_percent = resolve_positive(inputs.deposit_percent, defaults.deposit_percent)
    interest_rate = resolve_positive(inputs.interest_rate_percent, defaults.interest_rate_percent)
    refurb = resolve_positive(inputs.refurb_cost, 0.0)
    sdlt = resolve_positive(inputs.sdlt, 0.0)
    expense_percent = resolve_positive(inputs.expense_percent, defaults.expense_percent)

    # --- income ---
    gross_yield_percent = (rent * 12.0 / price) * 100.0

    # --- financing ---
    fin = _financing_monthly(price, deposit_percent, interest_rate)

    # --- running costs (letting, repairs, voids...) as a share of rent ---
    other_monthly_costs = rent * expense_percent / 100.0

    net_monthly_cashflow = rent - (fin["monthly_interest"] + other_monthly_costs)

    # --- upfront cash ---
    total_cash_in = fin["deposit_amount"] + refurb + sdlt

    tier = classify_deal(gross_yield_percent, net_monthly_cashflow)

    return DealResult(
        purchase_price=price,
        rent=rent,
        deposit_percent=deposit_percent,
        interest_rate=interest_rate,
        refurb=refurb,
        sdlt=sdlt,
        expense_percent=expense_percent,
        gross_yield_percent=gross_yield_percent,
        deposit_amount=fin["deposit_amount"],
        mortgage_amount=fin["mortgage_amount"],
        monthly_interest=fin["monthly_interest"],
        other_monthly_costs=other_monthly_costs,
        net_monthly_cashflow=net_monthly_cashflow,
        total_cash_in=total_cash_in,
        tier=tier,
        summary=summarize_tier(tier),
    )
