from __future__ import annotations

from dataclasses import replace
from typing import Any

from dealcheck.adapters.config import config
from dealcheck.adapters.logging_utils import get_logger
from dealcheck.analysis.finance import evaluate_deal
from dealcheck.domain.assumptions import DealDefaults
from dealcheck.domain.deal import DealInputs, DealResult
from dealcheck.domain.ports import NarrativeService
from dealcheck.domain.sdlt import calculate_sdlt
from dealcheck.services.narrative import build_narrative_prompt, fetch_narrative
from dealcheck.services.validation import validate_and_prepare_payload

logger = get_logger(__name__)


def defaults_from_config() -> DealDefaults:
    return DealDefaults(
        deposit_percent=config.DEFAULT_DEPOSIT_PERCENT,
        interest_rate_percent=config.DEFAULT_INTEREST_RATE_PERCENT,
        expense_percent=config.DEFAULT_EXPENSE_PERCENT,
    )


async def evaluate_with_narrative(
    inputs: DealInputs,
    narrative: NarrativeService | None = None,
    *,
    defaults: DealDefaults | None = None,
    timeout_s: float | None = None,
) -> DealResult:
    """
    Deterministic evaluation plus optional commentary.

    The narrative only ever fills ai_summary; every other field comes from
    evaluate_deal and is identical whether or not the service answers.
    """
    result = evaluate_deal(inputs, defaults or defaults_from_config())

    if narrative is None:
        return result

    text = await fetch_narrative(build_narrative_prompt(result), narrative, timeout_s=timeout_s)
    if text is None:
        return result
    return replace(result, ai_summary=text)


async def analyze_deal(
    raw_payload: dict[str, Any],
    narrative: NarrativeService | None = None,
    *,
    auto_sdlt: bool | None = None,
) -> DealResult:
    """
    Main analysis entrypoint.

    - validates the raw payload (raises InvalidDealInput on bad price/rent)
    - estimates SDLT from the band calculator when it was not supplied
    - evaluates and, when a narrative service is given, asks it for commentary
    """
    inputs = validate_and_prepare_payload(raw_payload)

    if auto_sdlt is None:
        auto_sdlt = config.AUTO_SDLT

    sdlt_estimated = False
    if inputs.sdlt is None and auto_sdlt:
        inputs = replace(inputs, sdlt=calculate_sdlt(inputs.purchase_price))
        sdlt_estimated = True

    result = await evaluate_with_narrative(inputs, narrative)
    if sdlt_estimated:
        result = replace(result, sdlt_estimated=True)

    logger.info(
        "deal_analyzed",
        extra={
            "context": {
                "purchase_price": result.purchase_price,
                "tier": result.tier,
                "sdlt_estimated": result.sdlt_estimated,
                "has_ai_summary": result.ai_summary is not None,
            }
        },
    )
    return result
