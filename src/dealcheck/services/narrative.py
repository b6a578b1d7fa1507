# src/dealcheck/services/narrative.py
from __future__ import annotations

import asyncio

from dealcheck.adapters.config import config
from dealcheck.adapters.logging_utils import get_logger
from dealcheck.domain.deal import DealResult
from dealcheck.domain.ports import NarrativeService

logger = get_logger(__name__)


def build_narrative_prompt(result: DealResult) -> str:
    """
    Deterministic prompt for the narrative service: same result, same text.
    """
    lines = [
        "Give a short view on this UK buy-to-let deal.",
        "",
        f"Purchase price: £{result.purchase_price:,.0f}",
        f"Monthly rent: £{result.rent:,.0f}",
        f"Deposit: {result.deposit_percent:g}%",
        f"Interest rate: {result.interest_rate:g}% (interest-only)",
        f"Refurb: £{result.refurb:,.0f}",
        f"SDLT: £{result.sdlt:,.0f}",
        f"Operating costs: {result.expense_percent:g}% of rent",
        f"Total cash in: £{result.total_cash_in:,.0f}",
        f"Gross yield: {result.gross_yield_percent:.2f}%",
        f"Net monthly cashflow: £{result.net_monthly_cashflow:,.0f}",
        "",
        "Cover the main risks and what would make the numbers work better.",
    ]
    return "\n".join(lines)


async def fetch_narrative(
    prompt: str,
    narrative: NarrativeService | None,
    *,
    timeout_s: float | None = None,
) -> str | None:
    """
    Single best-effort call to the narrative service.

    Never raises: no service, timeout, any exception or a blank reply all
    give None.
    """
    if narrative is None:
        return None

    timeout = timeout_s if timeout_s is not None else config.NARRATIVE_TIMEOUT_S
    try:
        text = await asyncio.wait_for(narrative(prompt), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("narrative_timeout", extra={"context": {"timeout_s": timeout}})
        return None
    except Exception as e:
        logger.warning("narrative_failed", extra={"context": {"error": repr(e)}})
        return None

    if not isinstance(text, str) or not text.strip():
        return None
    return text.strip()
