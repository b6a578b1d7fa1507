from dataclasses import dataclass
from typing import Literal, Optional

Tier = Literal["strong", "acceptable", "marginal", "negative"]


@dataclass(frozen=True)
class DealInputs:
    purchase_price: float               # required, > 0 (checked by the caller)
    monthly_rent: float                 # required, > 0 (checked by the caller)
    deposit_percent: Optional[float] = None        # 25 == 25%
    interest_rate_percent: Optional[float] = None  # annual, interest-only
    refurb_cost: Optional[float] = None
    sdlt: Optional[float] = None                   # None == not supplied
    expense_percent: Optional[float] = None        # share of rent spent on running costs


@dataclass(frozen=True)
class DealResult:
    # resolved inputs
    purchase_price: float
    rent: float
    deposit_percent: float
    interest_rate: float
    refurb: float
    sdlt: float
    expense_percent: float

    # derived figures
    gross_yield_percent: float
    deposit_amount: float
    mortgage_amount: float
    monthly_interest: float
    other_monthly_costs: float
    net_monthly_cashflow: float
    total_cash_in: float

    # verdict
    tier: Tier
    summary: str

    sdlt_estimated: bool = False
    ai_summary: Optional[str] = None
