from dealcheck.domain.deal import Tier

STRONG_MIN_YIELD = 7.0
STRONG_MIN_CASHFLOW = 250.0
ACCEPTABLE_MIN_YIELD = 5.5
ACCEPTABLE_MIN_CASHFLOW = 100.0

TIER_SUMMARIES: dict[str, str] = {
    "strong": (
        "Strong yield and healthy monthly cashflow on these assumptions. "
        "Worth serious consideration if the property and area stack up."
    ),
    "acceptable": (
        "Acceptable yield with modest cashflow. Could work as a long term hold, "
        "but keep an eye on interest rate rises and maintenance."
    ),
    "marginal": (
        "Cashflow is positive but slim. This might rely more on long term capital "
        "growth than monthly income. You may want to negotiate harder or increase the deposit."
    ),
    "negative": (
        "On these numbers the deal is likely to be cashflow negative. You would need a "
        "lower purchase price, higher rent, more deposit, or a cheaper mortgage product."
    ),
}


def classify_deal(gross_yield_percent: float, net_monthly_cashflow: float) -> Tier:
    # Order matters: first matching tier wins.
    if gross_yield_percent >= STRONG_MIN_YIELD and net_monthly_cashflow > STRONG_MIN_CASHFLOW:
        return "strong"
    if gross_yield_percent >= ACCEPTABLE_MIN_YIELD and net_monthly_cashflow > ACCEPTABLE_MIN_CASHFLOW:
        return "acceptable"
    if net_monthly_cashflow > 0:
        return "marginal"
    return "negative"


def summarize_tier(tier: Tier) -> str:
    return TIER_SUMMARIES[tier]
