from cardfolio.domain.categories import (
    CATEGORY_ORDER,
    EXTRA_CATEGORY_GROUP_LABELS,
    EXTRA_CATEGORY_OPTIONS,
    CategoryKey,
    reward_key_label,
)
from cardfolio.engine.rates import best_rate, best_rates


def test_bonus_rate_for_matching_category():
    assert best_rate({"base": 0.01, "groceries": 0.03}, CategoryKey.GROCERY) == 0.03


def test_base_rate_for_non_bonus_category():
    assert best_rate({"base": 0.02, "groceries": 0.03}, CategoryKey.DINING) == 0.02


def test_rent_ignores_base_rate():
    assert best_rate({"base": 0.02, "groceries": 0.03}, CategoryKey.RENT) == 0
    assert best_rate({"base": 0.02, "rent": 0.01}, CategoryKey.RENT) == 0.01


def test_multiple_reward_keys_for_one_category():
    assert best_rate({"base": 0.01, "gas": 0.02, "ev_charging": 0.04}, CategoryKey.GAS) == 0.04


def test_empty_rewards_earn_nothing():
    assert best_rate({}, CategoryKey.GROCERY) == 0


def test_accepts_plain_category_strings():
    assert best_rate({"base": 0.01, "restaurants": 0.04}, "dining") == 0.04


def test_base_rate_is_lower_bound_outside_rent():
    rewards = {"base": 0.015, "dining": 0.01, "travel": 0.05}
    for category in CATEGORY_ORDER:
        if category is CategoryKey.RENT:
            continue
        assert best_rate(rewards, category) >= rewards["base"]


def test_best_rates_takes_max_across_cards():
    rates = best_rates([{"base": 0.01, "dining": 0.04}, {"base": 0.02}])
    assert rates[CategoryKey.DINING] == 0.04
    assert rates[CategoryKey.GROCERY] == 0.02
    assert rates[CategoryKey.RENT] == 0
    assert list(rates) == list(CATEGORY_ORDER)


def test_extra_category_options_cover_canonical_categories():
    spending_options = [opt for opt in EXTRA_CATEGORY_OPTIONS if opt.group == "spending"]
    assert [opt.key for opt in spending_options] == [cat.value for cat in CATEGORY_ORDER]
    assert {opt.group for opt in EXTRA_CATEGORY_OPTIONS} <= EXTRA_CATEGORY_GROUP_LABELS.keys()


def test_reward_key_label():
    assert reward_key_label("travel_chase") == "Chase Travel"
    assert reward_key_label("warehouse_clubs") == "Warehouse Clubs"
