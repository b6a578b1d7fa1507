# src/dealcheck/api/schemas.py
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from dealcheck.domain.deal import DealResult
from dealcheck.domain.sdlt import SdltBreakdown


# --------------------------------------------
# Analyse
# --------------------------------------------

Numberish = Any


class AnalyseRequest(BaseModel):
    """
    Request for /analyse, in the web form's camelCase.

    Fields are left as sent ("25%", "£250,000", true, null) because
    validate_and_prepare_payload owns coercion and defaulting.
    Aliases such as monthlyRent or interestRatePercent arrive as extra fields.
    """
    model_config = ConfigDict(extra="allow")

    purchasePrice: Numberish = None
    rent: Numberish = None
    depositPercent: Numberish = None
    interestRate: Numberish = None
    refurb: Numberish = None
    sdlt: Numberish = None
    expensePercent: Numberish = None

    # listing link from the form; accepted, not used by the evaluator
    url: str | None = None


Tier = Literal["strong", "acceptable", "marginal", "negative"]


class AnalyseResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    purchase_price: float
    rent: float
    deposit_percent: float
    interest_rate: float
    refurb: float
    sdlt: float
    expense_percent: float

    gross_yield_percent: float
    deposit_amount: float
    mortgage_amount: float
    monthly_interest: float
    other_monthly_costs: float
    net_monthly_cashflow: float
    total_cash_in: float

    tier: Tier
    summary: str
    sdlt_estimated: bool = False
    ai_summary: str | None = None

    @classmethod
    def from_result(cls, result: DealResult) -> "AnalyseResponse":
        return cls(**asdict(result))


# --------------------------------------------
# SDLT
# --------------------------------------------

class SdltBandItem(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    lower: float
    upper: float | None = None
    rate: float
    taxable: float
    tax: float


class SdltResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    purchase_price: float
    sdlt: float
    banded_total: float
    flat_rule_tax: float | None = None
    flat_rule_applied: bool = False
    effective_rate: float = 0.0
    bands: list[SdltBandItem] = []

    @classmethod
    def from_breakdown(cls, b: SdltBreakdown) -> "SdltResponse":
        return cls(
            purchase_price=b.purchase_price,
            sdlt=b.total,
            banded_total=b.banded_total,
            flat_rule_tax=b.flat_rule_tax,
            flat_rule_applied=b.flat_rule_applied,
            effective_rate=b.effective_rate,
            bands=[SdltBandItem(**asdict(band)) for band in b.bands],
        )
