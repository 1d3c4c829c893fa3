from fastapi import APIRouter, Depends

from cardfolio.api.dependencies import get_orchestrator
from cardfolio.schemas.responses import CatalogResponse
from cardfolio.service.orchestrator import StrategyOrchestrator

router = APIRouter(tags=["cards"])


@router.get("/cards", response_model=CatalogResponse)
def list_cards(orchestrator: StrategyOrchestrator = Depends(get_orchestrator)) -> CatalogResponse:
    return CatalogResponse(cards=orchestrator.catalog_store.load_cards())
