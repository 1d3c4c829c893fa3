from datetime import date

from pydantic import BaseModel, Field

from cardfolio.domain.models import FollowUpType, SpendingProfile


class OwnedCardRequest(BaseModel):
    card_id: str
    name: str | None = None
    is_custom: bool = False
    annual_fee: int = Field(default=0, ge=0)
    rewards: dict[str, float] = Field(default_factory=dict)
    # Chosen reward key per follow-up question type; unanswered questions use the top spend category.
    answers: dict[FollowUpType, str] = Field(default_factory=dict)


class ProfileRequest(BaseModel):
    credit_score: int = Field(default=0, ge=0, le=850)
    oldest_card_opened: date | None = None
    cards_opened_24mo: int = Field(default=0, ge=0)
    fee_preference: bool = True


class FollowUpRequest(BaseModel):
    owned_cards: list[OwnedCardRequest] = Field(default_factory=list)


class StrategyRequest(BaseModel):
    owned_cards: list[OwnedCardRequest] = Field(default_factory=list)
    profile: ProfileRequest = Field(default_factory=ProfileRequest)
    spending: SpendingProfile = Field(default_factory=SpendingProfile)
    oldest_card_id: str | None = None
