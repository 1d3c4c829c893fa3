import logging
from collections.abc import Iterable, Set

from cardfolio.domain.models import CardRecord, UserCreditProfile

logger = logging.getLogger(__name__)

# Issuers with a velocity rule decline applicants who opened this many cards in 24 months.
VELOCITY_LIMIT = 5


def is_velocity_locked(profile: UserCreditProfile) -> bool:
    return profile.cards_opened_24mo >= VELOCITY_LIMIT


def passes_profile(card: CardRecord, profile: UserCreditProfile) -> bool:
    """Score and fee-preference checks shared by new-card and upgrade searches."""
    if profile.credit_score < card.min_score:
        return False
    if not profile.fee_preference and card.annual_fee > 0:
        return False
    return True


def filter_eligible(
    catalog: Iterable[CardRecord],
    owned_ids: Set[str],
    owned_family_ids: Set[str],
    profile: UserCreditProfile,
) -> list[CardRecord]:
    eligible: list[CardRecord] = []
    for card in catalog:
        if card.card_id in owned_ids:
            continue
        if card.family_id and card.family_id in owned_family_ids:
            continue
        if is_velocity_locked(profile) and card.velocity_restricted:
            continue
        if not passes_profile(card, profile):
            continue
        eligible.append(card)

    logger.debug("Eligible cards: %d", len(eligible))
    return eligible
