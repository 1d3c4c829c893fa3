import logging
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass, field

from cardfolio.domain.categories import CATEGORY_LABELS, PORTAL_TRAVEL_MAP, CategoryKey
from cardfolio.domain.models import Action, CardRecord, SpendingProfile, StrategyItem
from cardfolio.engine.evaluator import annual_gain, compute_anv
from cardfolio.engine.rates import best_rate

logger = logging.getLogger(__name__)

MAX_APPLY_CARDS = 3
SECURED_MAX_SCORE = 300


@dataclass
class CategoryHit:
    card: CardRecord
    category: CategoryKey
    rate: float
    current_rate: float
    annual_gain: float
    anv: float
    alternatives: list[CardRecord] = field(default_factory=list)


@dataclass
class ApplySelection:
    items: list[StrategyItem] = field(default_factory=list)
    used_ids: set[str] = field(default_factory=set)
    used_families: set[str] = field(default_factory=set)

    def claim(self, card: CardRecord) -> None:
        self.used_ids.add(card.card_id)
        if card.family_id:
            self.used_families.add(card.family_id)

    def is_claimed(self, card: CardRecord) -> bool:
        return card.card_id in self.used_ids or bool(card.family_id and card.family_id in self.used_families)


def _rate_line(rate: float, current_rate: float) -> str:
    return f"{rate * 100:.1f}% vs your current {current_rate * 100:.1f}%"


def category_winner(
    eligible: Sequence[CardRecord],
    category: CategoryKey,
    current_rate: float,
    spending: SpendingProfile,
    anvs: Mapping[str, float],
) -> CategoryHit | None:
    """Eligible card with the largest annual gain on one category.

    Cards with non-positive net value never win. Equal gains go to the higher
    net value; cards tying on both are collected as alternatives.
    """
    monthly = spending.monthly(category)
    best: CategoryHit | None = None

    for card in eligible:
        rate = best_rate(card.rewards, category)
        if rate <= current_rate:
            continue
        gain = annual_gain(rate, current_rate, monthly)
        anv = anvs[card.card_id]
        if anv <= 0:
            continue
        if best is None or gain > best.annual_gain or (gain == best.annual_gain and anv > best.anv):
            best = CategoryHit(card, category, rate, current_rate, gain, anv)

    if best is None:
        return None

    for card in eligible:
        if card.card_id == best.card.card_id:
            continue
        if card.family_id and card.family_id == best.card.family_id:
            continue
        rate = best_rate(card.rewards, category)
        if rate <= current_rate:
            continue
        if annual_gain(rate, current_rate, monthly) == best.annual_gain and anvs[card.card_id] == best.anv:
            best.alternatives.append(card)

    return best


def select_apply_cards(
    eligible: Sequence[CardRecord],
    current_rates: Mapping[CategoryKey, float],
    spending: SpendingProfile,
) -> ApplySelection:
    anvs = {card.card_id: compute_anv(card.rewards, spending, card.annual_fee).anv for card in eligible}

    hits: list[CategoryHit] = []
    for category, monthly in spending.items():
        if monthly == 0:
            continue
        hit = category_winner(eligible, category, current_rates[category], spending, anvs)
        if hit is not None:
            hits.append(hit)

    # Stable sort keeps canonical category order among equal gains.
    hits.sort(key=lambda item: item.annual_gain, reverse=True)

    selection = ApplySelection()
    for hit in hits:
        if len(selection.items) >= MAX_APPLY_CARDS:
            break
        if selection.is_claimed(hit.card):
            continue
        selection.claim(hit.card)

        label = CATEGORY_LABELS[hit.category]
        selection.items.append(
            StrategyItem(
                action=Action.APPLY,
                card=hit.card,
                reason=(
                    f"Best for {label}: {_rate_line(hit.rate, hit.current_rate)}, "
                    f"saving +${hit.annual_gain:.0f}/yr in that category"
                ),
                annual_net_value=hit.anv,
                best_category=hit.category,
                alternatives=hit.alternatives,
            )
        )
        logger.debug("APPLY %s for %s (+%.2f/yr)", hit.card.card_id, hit.category.value, hit.annual_gain)

    return selection


def select_portal_card(
    eligible: Sequence[CardRecord],
    current_travel_rate: float,
    spending: SpendingProfile,
    selection: ApplySelection,
) -> StrategyItem | None:
    """Best travel-portal bonus among eligible, unclaimed cards, if it beats current travel."""
    monthly = spending.monthly(CategoryKey.TRAVEL)
    if monthly == 0:
        return None

    best_card: CardRecord | None = None
    best_rate_found = 0.0
    best_label = ""
    for card in eligible:
        if selection.is_claimed(card):
            continue
        for key, label in PORTAL_TRAVEL_MAP.items():
            rate = card.rewards.get(key)
            if rate is None or rate <= best_rate_found:
                continue
            if compute_anv(card.rewards, spending, card.annual_fee).anv > 0 or card.annual_fee == 0:
                best_card, best_rate_found, best_label = card, rate, label

    if best_card is None or best_rate_found <= current_travel_rate:
        return None

    selection.claim(best_card)
    gain = annual_gain(best_rate_found, current_travel_rate, monthly)
    return StrategyItem(
        action=Action.APPLY,
        card=best_card,
        reason=(
            f"Best for Travel via {best_label}: {_rate_line(best_rate_found, current_travel_rate)}, "
            f"saving +${gain:.0f}/yr when booking through their portal"
        ),
        annual_net_value=compute_anv(best_card.rewards, spending, best_card.annual_fee).anv,
        best_category=CategoryKey.TRAVEL,
    )


def select_credit_builder(catalog: Sequence[CardRecord], owned_ids: Set[str]) -> StrategyItem | None:
    for card in catalog:
        if card.min_score <= SECURED_MAX_SCORE and card.card_id not in owned_ids:
            return StrategyItem(
                action=Action.APPLY,
                card=card,
                reason="Start building credit with a secured card. No credit history required.",
                annual_net_value=0,
            )
    return None
