import logging

from fastapi import APIRouter, Depends, HTTPException

from cardfolio.api.dependencies import get_orchestrator
from cardfolio.schemas.requests import FollowUpRequest, StrategyRequest
from cardfolio.schemas.responses import FollowUpResponse, StrategyResponse
from cardfolio.service.orchestrator import StrategyOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["strategy"])


@router.post("/follow-ups", response_model=FollowUpResponse)
def follow_ups(
    request: FollowUpRequest,
    orchestrator: StrategyOrchestrator = Depends(get_orchestrator),
) -> FollowUpResponse:
    try:
        return FollowUpResponse(questions=orchestrator.follow_ups(request.owned_cards))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/strategy", response_model=StrategyResponse)
def strategy(
    request: StrategyRequest,
    orchestrator: StrategyOrchestrator = Depends(get_orchestrator),
) -> StrategyResponse:
    try:
        return orchestrator.recommend(request)
    except ValueError as exc:
        logger.info("Rejected strategy request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
