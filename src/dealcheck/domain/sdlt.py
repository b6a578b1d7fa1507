# src/dealcheck/domain/sdlt.py
"""
Stamp Duty Land Tax for company / additional-property purchases.

Marginal bands are applied cumulatively to the slice of the price inside each
band. Above FLAT_RATE_THRESHOLD a flat 17% of the whole price acts as a floor,
so the charge is max(banded total, 17% of price).
"""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field

# (upper bound, marginal rate); anything above the last bound pays TOP_RATE
SDLT_BANDS: list[tuple[float, float]] = [
    (125_000, 0.05),
    (250_000, 0.07),
    (925_000, 0.10),
    (1_500_000, 0.15),
]
TOP_RATE = 0.17

# Kept apart from the band table: the flat rule can exceed the banded total.
FLAT_RATE_THRESHOLD = 500_000
FLAT_RATE = 0.17


@dataclass(frozen=True)
class SdltBand:
    lower: float
    upper: float | None   # None for the open-ended top slice
    rate: float
    taxable: float
    tax: float


@dataclass(frozen=True)
class SdltBreakdown:
    purchase_price: float
    bands: list[SdltBand] = field(default_factory=list)
    banded_total: float = 0.0
    flat_rule_tax: float | None = None
    total: float = 0.0

    @property
    def flat_rule_applied(self) -> bool:
        return self.flat_rule_tax is not None and self.flat_rule_tax > self.banded_total

    @property
    def effective_rate(self) -> float:
        if self.purchase_price <= 0:
            return 0.0
        return self.total / self.purchase_price


def _is_positive_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    try:
        f = float(value)
    except (OverflowError, ValueError):
        return False
    return math.isfinite(f) and f > 0


def sdlt_breakdown(purchase_price: float) -> SdltBreakdown:
    """
    Band-by-band SDLT working for a purchase price.

    Invalid prices (non-numeric, zero, negative) give an empty breakdown with
    a zero total.
    """
    if not _is_positive_number(purchase_price):
        return SdltBreakdown(purchase_price=0.0)

    price = float(purchase_price)
    bands: list[SdltBand] = []
    banded_total = 0.0
    previous_upper = 0.0

    for upper, rate in SDLT_BANDS:
        if price <= previous_upper:
            break
        taxable = min(price, upper) - previous_upper
        tax = taxable * rate
        bands.append(SdltBand(lower=previous_upper, upper=float(upper), rate=rate, taxable=taxable, tax=tax))
        banded_total += tax
        previous_upper = float(upper)

    if price > previous_upper:
        taxable = price - previous_upper
        tax = taxable * TOP_RATE
        bands.append(SdltBand(lower=previous_upper, upper=None, rate=TOP_RATE, taxable=taxable, tax=tax))
        banded_total += tax

    flat_rule_tax: float | None = None
    total = banded_total
    if price > FLAT_RATE_THRESHOLD:
        flat_rule_tax = price * FLAT_RATE
        total = max(banded_total, flat_rule_tax)

    return SdltBreakdown(
        purchase_price=price,
        bands=bands,
        banded_total=banded_total,
        flat_rule_tax=flat_rule_tax,
        total=total,
    )


def calculate_sdlt(purchase_price: float) -> float:
    """SDLT charge for a purchase price; 0 for anything that isn't a positive number."""
    return sdlt_breakdown(purchase_price).total
