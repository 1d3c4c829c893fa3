from functools import lru_cache

from cardfolio.config import settings
from cardfolio.repository.catalog_store import CatalogStore
from cardfolio.service.orchestrator import StrategyOrchestrator


@lru_cache
def get_orchestrator() -> StrategyOrchestrator:
    return StrategyOrchestrator(CatalogStore(settings.card_catalog_file))
