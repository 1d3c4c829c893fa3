"""KEEP / REMOVE classification of the cards a user already holds."""

import logging
from collections.abc import Iterable, Mapping, Sequence

from cardfolio.domain.models import Action, CardRecord, OwnedCard, SpendingProfile, StrategyItem
from cardfolio.engine.evaluator import compute_anv
from cardfolio.engine.rates import best_rate

logger = logging.getLogger(__name__)


def fallback_card(owned: OwnedCard) -> CardRecord:
    """Minimal catalog record for a custom or unknown owned card."""
    return CardRecord(
        card_id=owned.card_id,
        card_name=owned.name,
        annual_fee=owned.annual_fee,
        rewards=dict(owned.resolved_rewards),
    )


def unique_value(
    rewards: Mapping[str, float],
    others: Iterable[Mapping[str, float]],
    spending: SpendingProfile,
) -> tuple[bool, float]:
    """Return (redundant, annual dollars earned beyond the best other source)."""
    others = list(others)
    redundant = True
    unique = 0.0
    for category, monthly in spending.items():
        if monthly == 0:
            continue
        rate = best_rate(rewards, category)
        other_rate = max((best_rate(r, category) for r in others), default=0.0)
        if rate > other_rate:
            redundant = False
            unique += (rate - other_rate) * monthly * 12
    return redundant, unique


def _closing(downgrade_target: str | None) -> str:
    if downgrade_target:
        return f"Downgrade to {downgrade_target} to keep the account open."
    return "Consider closing."


def _no_fee_keep_reason(anv: float) -> str:
    if anv > 0:
        return f"No annual fee, earns ${anv:.0f}/yr in rewards."
    return "No annual fee, keep open for credit utilization."


def _fee_keep_reason(anv: float, fee: int) -> str:
    return f"Earns ${anv + fee:.0f}/yr in rewards, net ${anv:.0f}/yr after ${fee} fee."


def find_oldest(owned_cards: Sequence[OwnedCard], oldest_card_id: str | None) -> OwnedCard | None:
    if oldest_card_id:
        return next((owned for owned in owned_cards if owned.card_id == oldest_card_id), None)
    return owned_cards[0] if owned_cards else None


def _verdict(
    owned: OwnedCard,
    card: CardRecord,
    downgrade_target: str | None,
    is_oldest: bool,
    others: list[Mapping[str, float]],
    alone: bool,
    spending: SpendingProfile,
) -> StrategyItem:
    """KEEP or REMOVE for one owned card.

    ``others`` holds the reward mappings of every other kept card plus the
    APPLY cards. ``alone`` is set when the user holds no other card.
    """
    fee = owned.annual_fee
    anv = compute_anv(owned.resolved_rewards, spending, fee).anv

    def item(action: Action, reason: str, target: str | None = None) -> StrategyItem:
        return StrategyItem(
            action=action,
            card=card,
            reason=reason,
            annual_net_value=anv,
            downgrade_target=target,
        )

    if fee > 0 and anv < 0:
        if not is_oldest:
            return item(
                Action.REMOVE,
                f"${fee}/yr fee exceeds earned rewards by ${abs(anv):.0f}/yr. {_closing(downgrade_target)}",
                downgrade_target,
            )
        if downgrade_target:
            reason = (
                f"Oldest card, protects credit history. Consider downgrading to "
                f"{downgrade_target} to eliminate the ${fee}/yr fee."
            )
        else:
            reason = (
                f"Oldest card, protects credit history, but the ${fee}/yr fee exceeds rewards "
                f"earned (${abs(anv):.0f}/yr gap). Consider downgrading to a no-fee card instead of closing it."
            )
        return item(Action.KEEP, reason, downgrade_target)

    if is_oldest:
        reason = "Oldest card, protects credit history."
        if anv > 0:
            reason += f" Earns ${anv:.0f}/yr net."
        return item(Action.KEEP, reason)

    if fee == 0 and alone:
        return item(Action.KEEP, _no_fee_keep_reason(anv))

    redundant, unique = unique_value(owned.resolved_rewards, others, spending)
    if fee > 0:
        if redundant:
            return item(
                Action.REMOVE,
                "Redundant, every category is already matched or beaten by your other cards. "
                f"${fee}/yr fee is unnecessary. {_closing(downgrade_target)}",
                downgrade_target,
            )
        if unique < fee:
            return item(
                Action.REMOVE,
                f"Unique rewards only add ${unique:.0f}/yr beyond your other cards, "
                f"but the fee is ${fee}/yr. {_closing(downgrade_target)}",
                downgrade_target,
            )
        return item(Action.KEEP, _fee_keep_reason(anv, fee))

    if not redundant:
        return item(Action.KEEP, _no_fee_keep_reason(anv))
    if anv > 0:
        reason = (
            "Every category is already matched or beaten by your other cards. "
            "You can cancel this card and your rewards won't change."
        )
    else:
        reason = "This card earns no meaningful rewards for your spending. Consider canceling to simplify your wallet."
    return item(Action.REMOVE, reason)


def classify_owned(
    catalog: Sequence[CardRecord],
    owned_cards: Sequence[OwnedCard],
    apply_items: Sequence[StrategyItem],
    spending: SpendingProfile,
    oldest_card_id: str | None = None,
) -> tuple[list[StrategyItem], list[StrategyItem]]:
    """Split owned cards into KEEP and REMOVE items, in input order.

    The oldest card is always kept. Other cards are compared against every
    owned card still kept plus every APPLY card: a card that is matched or
    beaten in every spent category is redundant, and a fee card whose unique
    contribution is below its fee is removed as well.

    Fee cards are judged before free cards. Removed cards are then judged
    again against the final kept set until nothing changes, so a card is
    never removed on the strength of a card that was removed after it.
    """
    cards_by_id = {card.card_id: card for card in catalog}
    apply_rewards = [item.card.rewards for item in apply_items]
    oldest = find_oldest(owned_cards, oldest_card_id)
    alone = len(owned_cards) <= 1

    def judge(index: int, kept: set[int]) -> StrategyItem:
        owned = owned_cards[index]
        entry = cards_by_id.get(owned.card_id)
        downgrade_target = None
        if entry is not None and entry.downgrade_to:
            target = cards_by_id.get(entry.downgrade_to)
            downgrade_target = target.card_name if target else None

        others = [owned_cards[j].resolved_rewards for j in sorted(kept) if j != index] + apply_rewards

        return _verdict(
            owned,
            entry or fallback_card(owned),
            downgrade_target,
            oldest is not None and owned.card_id == oldest.card_id,
            others,
            alone,
            spending,
        )

    order = sorted(range(len(owned_cards)), key=lambda i: owned_cards[i].annual_fee == 0)
    kept = set(range(len(owned_cards)))
    verdicts: dict[int, StrategyItem] = {}

    for index in order:
        verdicts[index] = judge(index, kept)
        if verdicts[index].action == Action.REMOVE:
            kept.discard(index)

    changed = True
    while changed:
        changed = False
        for index in order:
            if index in kept:
                continue
            verdicts[index] = judge(index, kept)
            if verdicts[index].action == Action.KEEP:
                logger.debug("Restoring %s, its coverage was removed", owned_cards[index].card_id)
                kept.add(index)
                changed = True

    keep = [verdicts[i] for i in range(len(owned_cards)) if i in kept]
    remove = [verdicts[i] for i in range(len(owned_cards)) if i not in kept]
    logger.debug("Owned cards: %d kept, %d removed", len(keep), len(remove))
    return keep, remove
