from collections.abc import Iterable, Mapping

from cardfolio.domain.categories import (
    BASE_RATE_EXCLUDED,
    BASE_REWARD_KEY,
    CATEGORY_MAP,
    CATEGORY_ORDER,
    CategoryKey,
)


def best_rate(rewards: Mapping[str, float], category: CategoryKey) -> float:
    """Best rate a reward mapping earns on one spending category."""
    category = CategoryKey(category)
    rate = 0.0 if category in BASE_RATE_EXCLUDED else rewards.get(BASE_REWARD_KEY, 0.0)
    for key in CATEGORY_MAP[category]:
        value = rewards.get(key)
        if value is not None and value > rate:
            rate = value
    return rate


def best_rates(reward_sets: Iterable[Mapping[str, float]]) -> dict[CategoryKey, float]:
    rates = {cat: 0.0 for cat in CATEGORY_ORDER}
    for rewards in reward_sets:
        for cat in CATEGORY_ORDER:
            rate = best_rate(rewards, cat)
            if rate > rates[cat]:
                rates[cat] = rate
    return rates
