"""Plain-language tips. Bold text is marked with ``**`` for the renderer."""

from collections.abc import Mapping, Sequence, Set
from datetime import date

from cardfolio.domain.categories import BASE_REWARD_KEY, CATEGORY_LABELS, CATEGORY_MAP, CategoryKey
from cardfolio.domain.models import (
    CardRecord,
    CategoryBreakdown,
    OwnedCard,
    PlaceholderKind,
    SpendingProfile,
    StrategyItem,
    UserCreditProfile,
)

FLAT_RATE_THRESHOLD = 0.02
BASE_RATE_GAP = 0.01


def quarter_end_label(today: date) -> str:
    if today.month <= 3:
        return "March 31"
    if today.month <= 6:
        return "June 30"
    if today.month <= 9:
        return "September 30"
    return "December 31"


def summary_tip(apply_items: Sequence[StrategyItem]) -> str | None:
    if not apply_items:
        return None

    total_fees = sum(item.card.annual_fee for item in apply_items)
    fee_note = f" (total annual fees: ${total_fees}/yr)" if total_fees > 0 else " (all with no annual fee)"
    if len(apply_items) == 1:
        lead = "adding 1 strategic card"
    else:
        lead = f"building a portfolio with {len(apply_items)} new strategic cards"

    reasons = []
    for item in apply_items:
        if item.best_category is None:
            reasons.append(f"**{item.card.card_name}** was chosen to start building your credit history.")
        else:
            label = CATEGORY_LABELS[item.best_category]
            reasons.append(
                f"**{item.card.card_name}** was chosen because it offers the best improvement "
                f"for your {label} spending."
            )
    return f"Based on your spending habits, we recommend {lead}{fee_note}. " + " ".join(reasons)


def flat_rate_tip(
    catalog: Sequence[CardRecord],
    owned_cards: Sequence[OwnedCard],
    apply_items: Sequence[StrategyItem],
    profile: UserCreditProfile,
) -> str | None:
    best_base = max(
        [owned.resolved_rewards.get(BASE_REWARD_KEY, 0.0) for owned in owned_cards]
        + [item.card.rewards.get(BASE_REWARD_KEY, 0.0) for item in apply_items],
        default=0.0,
    )
    if best_base >= FLAT_RATE_THRESHOLD:
        return None

    taken = {owned.card_id for owned in owned_cards} | {item.card.card_id for item in apply_items}
    for card in catalog:
        if (
            card.rewards.get(BASE_REWARD_KEY, 0.0) >= FLAT_RATE_THRESHOLD
            and card.annual_fee == 0
            and card.card_id not in taken
            and card.min_score <= profile.credit_score
        ):
            return (
                f"We also recommend adding a **2% flat-rate card** like **{card.card_name}** "
                "for purchases that don't fit bonus categories."
            )
    return None


def rotating_tip(
    catalog: Sequence[CardRecord],
    owned_cards: Sequence[OwnedCard],
    apply_items: Sequence[StrategyItem],
    today: date,
) -> str | None:
    cards_by_id = {card.card_id: card for card in catalog}
    names = [
        owned.name
        for owned in owned_cards
        if owned.card_id in cards_by_id and cards_by_id[owned.card_id].has_rotating
    ]
    names += [item.card.card_name for item in apply_items if item.card.has_rotating]
    if not names:
        return None

    verb = "offers" if len(names) == 1 else "offer"
    return (
        f"**Quarterly Bonus Tip:** Your **{' and '.join(names)}** {verb} 5% rotating categories "
        f"(current quarter ends {quarter_end_label(today)}). These rotate every 3 months, so we didn't "
        "include them in your annual calculation, but they're great for extra savings when the categories align!"
    )


def travel_choice_tip(
    eligible: Sequence[CardRecord],
    taken_ids: Set[str],
    used_families: Set[str],
    current_travel_rate: float,
    spending: SpendingProfile,
) -> str | None:
    if spending.monthly(CategoryKey.TRAVEL) == 0:
        return None

    travel_keys = {CategoryKey.TRAVEL.value, *CATEGORY_MAP[CategoryKey.TRAVEL]}
    for card in eligible:
        if card.card_id in taken_ids:
            continue
        if card.family_id and card.family_id in used_families:
            continue

        placeholders = card.placeholders()
        top = placeholders.get(PlaceholderKind.TOP_CATEGORY)
        if top and top.choices and travel_keys & top.choices.keys() and top.rate > current_travel_rate:
            return (
                f"**{card.card_name}** could earn {top.rate * 100:.0f}% on travel if it becomes your top "
                f"spending category, higher than your current {current_travel_rate * 100:.1f}%."
            )
        custom = placeholders.get(PlaceholderKind.CUSTOM)
        if custom and custom.choices and travel_keys & custom.choices.keys() and custom.rate > current_travel_rate:
            return (
                f"**{card.card_name}** could earn {custom.rate * 100:.0f}% on travel if you choose it "
                "as your custom category."
            )
    return None


def base_rate_gap_tip(breakdown: Sequence[CategoryBreakdown], spending: SpendingProfile) -> str | None:
    weak = [
        row.category
        for row in breakdown
        if row.optimal_rate <= BASE_RATE_GAP and spending.monthly(row.category_key) > 0
    ]
    if not weak:
        return None

    if len(weak) == 1:
        return (
            f"Your **{weak[0]}** spending is still earning the base rate. "
            "Look for specialized cards in this category as new products launch."
        )
    return (
        f"Your **{' and '.join(weak)}** spending are still earning the base rate. "
        "Look for specialized cards in these categories as new products launch."
    )


def build_tips(
    *,
    catalog: Sequence[CardRecord],
    owned_cards: Sequence[OwnedCard],
    apply_items: Sequence[StrategyItem],
    eligible: Sequence[CardRecord],
    used_families: Set[str],
    current_rates: Mapping[CategoryKey, float],
    breakdown: Sequence[CategoryBreakdown],
    spending: SpendingProfile,
    profile: UserCreditProfile,
    today: date,
) -> list[str]:
    taken_ids = {owned.card_id for owned in owned_cards} | {item.card.card_id for item in apply_items}
    tips = [
        summary_tip(apply_items),
        flat_rate_tip(catalog, owned_cards, apply_items, profile),
        rotating_tip(catalog, owned_cards, apply_items, today),
        travel_choice_tip(eligible, taken_ids, used_families, current_rates[CategoryKey.TRAVEL], spending),
        base_rate_gap_tip(breakdown, spending),
    ]
    return [tip for tip in tips if tip]
