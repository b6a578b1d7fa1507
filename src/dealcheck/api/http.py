# src/dealcheck/api/http.py
from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException, Query

from dealcheck.adapters.logging_utils import get_logger
from dealcheck.adapters.narrative_client import make_narrative_client
from dealcheck.domain.ports import NarrativeService
from dealcheck.domain.sdlt import sdlt_breakdown
from dealcheck.services.deal_analyzer import analyze_deal
from dealcheck.services.validation import InvalidDealInput
from .schemas import AnalyseRequest, AnalyseResponse, SdltResponse

logger = get_logger(__name__)

app = FastAPI(title="dealcheck")

# -------------------------------------------------------------------
# Narrative service (single init at startup; None when unconfigured)
# -------------------------------------------------------------------
_narrative = make_narrative_client()


def get_narrative_service() -> NarrativeService | None:
    return _narrative


@app.post(
    "/analyse",
    response_model=AnalyseResponse,
    response_model_exclude_none=True,
)
async def analyse_endpoint(
    payload: AnalyseRequest,
    narrative: NarrativeService | None = Depends(get_narrative_service),
) -> AnalyseResponse:
    """
    Evaluate one deal. aiSummary is only present when the narrative service
    answered.
    """
    try:
        result = await analyze_deal(payload.model_dump(exclude_unset=True), narrative)
    except InvalidDealInput as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return AnalyseResponse.from_result(result)


@app.get("/sdlt", response_model=SdltResponse)
def sdlt_endpoint(
    purchase_price: float = Query(..., gt=0, description="Purchase price in pounds"),
) -> SdltResponse:
    return SdltResponse.from_breakdown(sdlt_breakdown(purchase_price))
