import logging
from collections.abc import Sequence

from cardfolio.domain.models import (
    Action,
    CardRecord,
    OwnedCard,
    SpendingProfile,
    StrategyItem,
    UserCreditProfile,
)
from cardfolio.engine.eligibility import passes_profile
from cardfolio.engine.evaluator import compute_anv

logger = logging.getLogger(__name__)


def _upgrade_reason(gain: float, fee_diff: int) -> str:
    reason = f"Product change saves +${gain:.0f}/yr in net rewards."
    if fee_diff < 0:
        reason += f" Also eliminates ${abs(fee_diff)}/yr in fees."
    elif fee_diff > 0:
        reason += f" Fee increases by ${fee_diff}/yr, but rewards more than offset it."
    return reason


def find_upgrades(
    catalog: Sequence[CardRecord],
    owned_cards: Sequence[OwnedCard],
    profile: UserCreditProfile,
    spending: SpendingProfile,
) -> list[StrategyItem]:
    """Same-family product changes whose net value beats the owned card.

    Every qualifying candidate is returned, not only the best one per owned card.
    """
    cards_by_id = {card.card_id: card for card in catalog}
    owned_ids = {owned.card_id for owned in owned_cards}
    items: list[StrategyItem] = []

    for owned in owned_cards:
        current = cards_by_id.get(owned.card_id)
        if current is None or not current.family_id:
            continue

        owned_anv = compute_anv(owned.resolved_rewards, spending, current.annual_fee).anv

        for candidate in catalog:
            if candidate.family_id != current.family_id or candidate.card_id in owned_ids:
                continue
            if not passes_profile(candidate, profile):
                continue

            candidate_anv = compute_anv(candidate.rewards, spending, candidate.annual_fee).anv
            if candidate_anv <= owned_anv:
                continue

            gain = candidate_anv - owned_anv
            logger.debug("Upgrade %s -> %s gains %.2f", owned.card_id, candidate.card_id, gain)
            items.append(
                StrategyItem(
                    action=Action.UPGRADE,
                    card=candidate,
                    reason=_upgrade_reason(gain, candidate.annual_fee - current.annual_fee),
                    annual_net_value=candidate_anv,
                    upgrade_from=owned.name,
                )
            )

    return items
