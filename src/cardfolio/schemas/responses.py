from pydantic import BaseModel

from cardfolio.domain.models import CardRecord, FollowUpQuestion, OwnedCard, PortfolioStrategy
from cardfolio.schemas.summary import ResultsSummary


class CatalogResponse(BaseModel):
    cards: list[CardRecord]


class FollowUpResponse(BaseModel):
    questions: list[FollowUpQuestion]


class StrategyResponse(BaseModel):
    strategy: PortfolioStrategy
    owned_cards: list[OwnedCard]
    summary: ResultsSummary
