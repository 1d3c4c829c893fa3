import logging
from collections.abc import Sequence
from datetime import date

from cardfolio.domain.categories import CATEGORY_LABELS, CATEGORY_ORDER, CategoryKey
from cardfolio.domain.models import (
    CardRecord,
    CategoryBreakdown,
    OwnedCard,
    PortfolioStrategy,
    SpendingProfile,
    StrategyItem,
    UserCreditProfile,
)
from cardfolio.engine.eligibility import filter_eligible, is_velocity_locked
from cardfolio.engine.rates import best_rate, best_rates
from cardfolio.engine.retention import classify_owned
from cardfolio.engine.selectors import select_apply_cards, select_credit_builder, select_portal_card
from cardfolio.engine.tips import build_tips
from cardfolio.engine.upgrades import find_upgrades

logger = logging.getLogger(__name__)


def _optimal_breakdown(
    kept_owned: Sequence[OwnedCard],
    apply_items: Sequence[StrategyItem],
    current_rates: dict[CategoryKey, float],
    spending: SpendingProfile,
) -> list[CategoryBreakdown]:
    sources = [(owned.name, owned.resolved_rewards) for owned in kept_owned]
    sources += [(item.card.card_name, item.card.rewards) for item in apply_items]

    rows: list[CategoryBreakdown] = []
    for category in CATEGORY_ORDER:
        optimal_rate = 0.0
        best_name = ""
        for name, rewards in sources:
            rate = best_rate(rewards, category)
            if rate > optimal_rate:
                optimal_rate = rate
                best_name = name
        monthly = spending.monthly(category)
        rows.append(
            CategoryBreakdown(
                category=CATEGORY_LABELS[category],
                category_key=category,
                current_rate=current_rates[category],
                optimal_rate=optimal_rate,
                current_annual=monthly * current_rates[category] * 12,
                optimal_annual=monthly * optimal_rate * 12,
                best_card_name=best_name,
            )
        )
    return rows


def generate_portfolio_strategy(
    catalog: Sequence[CardRecord],
    owned_cards: Sequence[OwnedCard],
    profile: UserCreditProfile,
    spending: SpendingProfile,
    oldest_card_id: str | None = None,
    *,
    today: date | None = None,
) -> PortfolioStrategy:
    """Full recommendation for one user. Pure apart from ``today`` defaulting to the current date."""
    today = today or date.today()
    cards_by_id = {card.card_id: card for card in catalog}
    owned_ids = {owned.card_id for owned in owned_cards}
    owned_family_ids = {
        cards_by_id[owned.card_id].family_id
        for owned in owned_cards
        if owned.card_id in cards_by_id and cards_by_id[owned.card_id].family_id
    }

    current_rates = best_rates(owned.resolved_rewards for owned in owned_cards)
    total_current = sum(spending.monthly(cat) * current_rates[cat] * 12 for cat in CATEGORY_ORDER)

    eligible = filter_eligible(catalog, owned_ids, owned_family_ids, profile)

    selection = select_apply_cards(eligible, current_rates, spending)
    portal_item = select_portal_card(eligible, current_rates[CategoryKey.TRAVEL], spending, selection)
    if portal_item is not None:
        selection.items.append(portal_item)

    if not selection.items and not eligible:
        builder = select_credit_builder(catalog, owned_ids)
        if builder is not None:
            selection.items.append(builder)
    apply_items = selection.items

    keep, remove = classify_owned(catalog, owned_cards, apply_items, spending, oldest_card_id)

    removed_ids = {item.card.card_id for item in remove}
    kept_owned = [owned for owned in owned_cards if owned.card_id not in removed_ids]
    breakdown = _optimal_breakdown(kept_owned, apply_items, current_rates, spending)
    total_optimal = sum(row.optimal_annual for row in breakdown)

    tips = build_tips(
        catalog=catalog,
        owned_cards=owned_cards,
        apply_items=apply_items,
        eligible=eligible,
        used_families=selection.used_families,
        current_rates=current_rates,
        breakdown=breakdown,
        spending=spending,
        profile=profile,
        today=today,
    )

    upgrades = find_upgrades(catalog, owned_cards, profile, spending)

    logger.debug(
        "Strategy: %d apply, %d upgrade, %d keep, %d remove",
        len(apply_items),
        len(upgrades),
        len(keep),
        len(remove),
    )
    return PortfolioStrategy(
        apply=apply_items,
        upgrade=upgrades,
        keep=keep,
        remove=remove,
        total_current_rewards=total_current,
        total_optimal_rewards=total_optimal,
        category_breakdown=breakdown,
        velocity_locked=is_velocity_locked(profile),
        tips=tips,
    )
