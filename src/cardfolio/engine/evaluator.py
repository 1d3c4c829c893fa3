from collections.abc import Mapping

from cardfolio.domain.categories import CategoryKey
from cardfolio.domain.models import AnnualValue, SpendingProfile
from cardfolio.engine.rates import best_rate


def compute_anv(rewards: Mapping[str, float], spending: SpendingProfile, annual_fee: float) -> AnnualValue:
    """Annual rewards on the spending profile minus the annual fee.

    The best category is the one with the largest annual dollar contribution;
    ties keep the first category in canonical order. The result may be negative.
    """
    total = 0.0
    best_category = CategoryKey.GROCERY
    best_value = 0.0

    for category, monthly in spending.items():
        if monthly == 0:
            continue
        annual = monthly * best_rate(rewards, category) * 12
        total += annual
        if annual > best_value:
            best_value = annual
            best_category = category

    return AnnualValue(anv=total - annual_fee, best_category=best_category, best_category_value=best_value)


def annual_gain(rate: float, current_rate: float, monthly: float) -> float:
    return (rate - current_rate) * monthly * 12
