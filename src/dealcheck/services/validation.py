# src/dealcheck/services/validation.py

import math
from typing import Any

from dealcheck.domain.deal import DealInputs
from dealcheck.domain.parsing import parse_number

REQUIRED_MESSAGE = "Please provide purchasePrice and rent"

# wire key(s) -> DealInputs field; first non-null key wins
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "purchase_price": ("purchasePrice", "purchase_price"),
    "monthly_rent": ("rent", "monthlyRent", "monthly_rent"),
    "deposit_percent": ("depositPercent", "deposit_percent"),
    "interest_rate_percent": ("interestRate", "interestRatePercent", "interest_rate_percent"),
    "refurb_cost": ("refurb", "refurbCost", "refurb_cost"),
    "sdlt": ("sdlt",),
    "expense_percent": ("expensePercent", "expense_percent"),
}


class InvalidDealInput(ValueError):
    pass


def _pick(raw: dict[str, Any], field_name: str) -> Any:
    # a key sent as null does not shadow a later alias
    for key in FIELD_ALIASES[field_name]:
        if raw.get(key) is not None:
            return raw[key]
    return None


def validate_and_prepare_payload(raw: dict[str, Any]) -> DealInputs:
    """
    Normalize an incoming deal payload into DealInputs.

    Responsibilities:
      - Reject missing / zero / negative / unparsable price or rent.
      - Coerce numeric strings for every field.
      - Leave optional fields as None when unusable; the evaluator applies
        defaults. A blank sdlt stays None so the caller can estimate it.
    """
    price = parse_number(_pick(raw, "purchase_price"))
    rent = parse_number(_pick(raw, "monthly_rent"))
    if price is None or rent is None:
        raise InvalidDealInput(REQUIRED_MESSAGE)
    if not (math.isfinite(price) and math.isfinite(rent)) or price <= 0 or rent <= 0:
        raise InvalidDealInput(REQUIRED_MESSAGE)

    return DealInputs(
        purchase_price=price,
        monthly_rent=rent,
        deposit_percent=parse_number(_pick(raw, "deposit_percent")),
        interest_rate_percent=parse_number(_pick(raw, "interest_rate_percent")),
        refurb_cost=parse_number(_pick(raw, "refurb_cost")),
        sdlt=parse_number(_pick(raw, "sdlt")),
        expense_percent=parse_number(_pick(raw, "expense_percent")),
    )
