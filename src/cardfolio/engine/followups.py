"""Follow-up questions for cards whose bonus category is picked by the user or the issuer."""

import logging
from collections.abc import Iterable, Mapping

from cardfolio.domain.categories import CATEGORY_MAP, CategoryKey
from cardfolio.domain.models import (
    PLACEHOLDER_KEYS,
    CardRecord,
    FollowUpQuestion,
    FollowUpType,
    OwnedCard,
    PlaceholderKind,
    SpendingProfile,
)

logger = logging.getLogger(__name__)

# Rotating categories change each quarter without user input, so they get no question.
QUESTION_TYPES = {
    PlaceholderKind.TOP_CATEGORY: FollowUpType.TOP_CATEGORY,
    PlaceholderKind.CUSTOM: FollowUpType.CUSTOM_CATEGORY,
    PlaceholderKind.CHOSEN: FollowUpType.CHOSEN_CATEGORY,
}


def list_follow_ups(owned_cards: Iterable[OwnedCard], catalog: Iterable[CardRecord]) -> list[FollowUpQuestion]:
    cards_by_id = {card.card_id: card for card in catalog}
    questions: list[FollowUpQuestion] = []

    for owned in owned_cards:
        if owned.is_custom:
            continue
        card = cards_by_id.get(owned.card_id)
        if card is None:
            continue

        for kind, rule in card.placeholders().items():
            question_type = QUESTION_TYPES.get(kind)
            if question_type is None:
                continue
            questions.append(
                FollowUpQuestion(
                    card_id=owned.card_id,
                    card_name=owned.name,
                    type=question_type,
                    rate=rule.rate,
                    choices=dict(rule.choices) if rule.choices else None,
                )
            )

    return questions


def strip_placeholders(rewards: Mapping[str, float]) -> dict[str, float]:
    return {key: rate for key, rate in rewards.items() if key not in PLACEHOLDER_KEYS}


def apply_answer(rewards: Mapping[str, float], question: FollowUpQuestion, chosen_key: str) -> dict[str, float]:
    """Assign the question's rate to ``chosen_key`` and drop every placeholder key.

    Never lowers a rate the chosen key already has. The input mapping is not modified.
    """
    updated = dict(rewards)
    updated[chosen_key] = max(updated.get(chosen_key, 0.0), question.rate)
    return strip_placeholders(updated)


def top_spend_category(spending: SpendingProfile) -> CategoryKey:
    best_category = CategoryKey.GROCERY
    best_spend = 0.0
    for category, monthly in spending.items():
        if monthly > best_spend:
            best_spend = monthly
            best_category = category
    return best_category


def default_answer(
    rewards: Mapping[str, float],
    question: FollowUpQuestion,
    spending: SpendingProfile,
) -> dict[str, float]:
    category = top_spend_category(spending)
    chosen_key = CATEGORY_MAP[category][0]
    logger.debug("Defaulting %s %s to %s", question.card_id, question.type.value, chosen_key)
    return apply_answer(rewards, question, chosen_key)
