import logging
from collections.abc import Sequence
from datetime import date

from cardfolio.domain.models import FollowUpQuestion, OwnedCard, SpendingProfile, UserCreditProfile
from cardfolio.engine.followups import apply_answer, default_answer, list_follow_ups, strip_placeholders
from cardfolio.engine.strategy import generate_portfolio_strategy
from cardfolio.repository.catalog_store import CatalogStore
from cardfolio.schemas.requests import OwnedCardRequest, ProfileRequest, StrategyRequest
from cardfolio.schemas.responses import StrategyResponse
from cardfolio.schemas.summary import build_results_summary

logger = logging.getLogger(__name__)


class CardResolutionError(ValueError):
    pass


class StrategyOrchestrator:
    def __init__(self, catalog_store: CatalogStore):
        self.catalog_store = catalog_store

    def _owned_card(self, ref: OwnedCardRequest) -> OwnedCard:
        if ref.is_custom:
            return OwnedCard(
                card_id=ref.card_id,
                name=ref.name or ref.card_id,
                resolved_rewards=strip_placeholders(ref.rewards),
                annual_fee=ref.annual_fee,
                is_custom=True,
            )

        card = self.catalog_store.get(ref.card_id)
        if card is None:
            raise CardResolutionError(f"Unknown card id: {ref.card_id}")

        owned = OwnedCard.from_catalog(card)
        if ref.name:
            owned = owned.model_copy(update={"name": ref.name})
        return owned

    def follow_ups(self, refs: Sequence[OwnedCardRequest]) -> list[FollowUpQuestion]:
        owned_cards = [self._owned_card(ref) for ref in refs]
        return list_follow_ups(owned_cards, self.catalog_store.load_cards())

    def resolve_owned_cards(self, refs: Sequence[OwnedCardRequest], spending: SpendingProfile) -> list[OwnedCard]:
        catalog = self.catalog_store.load_cards()
        resolved: list[OwnedCard] = []

        for ref in refs:
            owned = self._owned_card(ref)
            rewards = owned.resolved_rewards
            for question in list_follow_ups([owned], catalog):
                chosen_key = ref.answers.get(question.type)
                if chosen_key:
                    rewards = apply_answer(rewards, question, chosen_key)
                else:
                    rewards = default_answer(rewards, question, spending)
            resolved.append(owned.with_rewards(strip_placeholders(rewards)))

        return resolved

    def build_profile(self, request: ProfileRequest, today: date | None = None) -> UserCreditProfile:
        return UserCreditProfile.from_oldest_open_date(
            request.oldest_card_opened,
            today=today,
            credit_score=request.credit_score,
            cards_opened_24mo=request.cards_opened_24mo,
            fee_preference=request.fee_preference,
        )

    def recommend(self, request: StrategyRequest, today: date | None = None) -> StrategyResponse:
        owned_cards = self.resolve_owned_cards(request.owned_cards, request.spending)
        profile = self.build_profile(request.profile, today=today)

        strategy = generate_portfolio_strategy(
            self.catalog_store.load_cards(),
            owned_cards,
            profile,
            request.spending,
            request.oldest_card_id,
            today=today,
        )
        logger.info(
            "Strategy for %d owned cards: %d apply, %d upgrade, %d remove",
            len(owned_cards),
            len(strategy.apply),
            len(strategy.upgrade),
            len(strategy.remove),
        )

        return StrategyResponse(
            strategy=strategy,
            owned_cards=owned_cards,
            summary=build_results_summary(strategy),
        )
