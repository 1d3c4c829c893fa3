from cardfolio.domain.models import Action, SpendingProfile
from cardfolio.engine.upgrades import find_upgrades

from helpers import TYPICAL_SPENDING, make_card, make_owned, make_profile

ALTITUDE_GO = make_card(
    card_id="usBank_altitudeGo",
    card_name="U.S. Bank Altitude Go",
    family_id="us-bank-altitude",
    min_score=700,
    rewards={"base": 0.01, "dining": 0.04, "grocery": 0.02, "gas_stations": 0.02, "streaming": 0.02},
)
ALTITUDE_CONNECT = make_card(
    card_id="usBank_altitudeConnect",
    card_name="U.S. Bank Altitude Connect",
    family_id="us-bank-altitude",
    min_score=700,
    rewards={"base": 0.01, "travel": 0.04, "gas_stations": 0.04, "grocery": 0.02, "dining": 0.02, "streaming": 0.02},
)
QUICKSILVER_ONE = make_card(
    card_id="capitalOne_quicksilverOne",
    card_name="Capital One QuicksilverOne",
    family_id="capital-one-quicksilver",
    min_score=580,
    annual_fee=39,
    rewards={"base": 0.015},
)
QUICKSILVER = make_card(
    card_id="capitalOne_quicksilver",
    card_name="Capital One Quicksilver",
    family_id="capital-one-quicksilver",
    min_score=670,
    rewards={"base": 0.015},
)
STANDALONE = make_card(card_id="standalone", card_name="Standalone Card", rewards={"base": 0.02})

CATALOG = [ALTITUDE_GO, ALTITUDE_CONNECT, QUICKSILVER_ONE, QUICKSILVER, STANDALONE]


def _owned(card):
    return make_owned(
        card_id=card.card_id,
        name=card.card_name,
        resolved_rewards=dict(card.rewards),
        annual_fee=card.annual_fee,
    )


def test_travel_heavy_spender_moves_to_connect():
    spending = SpendingProfile(travel=200, gas=150, dining=100)
    result = find_upgrades(CATALOG, [_owned(ALTITUDE_GO)], make_profile(), spending)
    assert len(result) == 1
    assert result[0].card.card_id == "usBank_altitudeConnect"
    assert result[0].action == Action.UPGRADE
    assert result[0].upgrade_from == "U.S. Bank Altitude Go"


def test_no_upgrade_when_owned_card_wins():
    result = find_upgrades(CATALOG, [_owned(ALTITUDE_GO)], make_profile(), SpendingProfile(dining=500))
    assert result == []


def test_mixed_trade_off_that_nets_positive():
    owned_card = make_card(
        card_id="owned", card_name="Dining Card", family_id="fam", rewards={"dining": 0.04, "travel": 0.02}
    )
    candidate = make_card(
        card_id="candidate", card_name="Travel Card", family_id="fam", rewards={"dining": 0.02, "travel": 0.04}
    )
    positive = find_upgrades([owned_card, candidate], [_owned(owned_card)], make_profile(), SpendingProfile(travel=300, dining=50))
    negative = find_upgrades([owned_card, candidate], [_owned(owned_card)], make_profile(), SpendingProfile(travel=50, dining=300))

    assert [item.card.card_id for item in positive] == ["candidate"]
    assert positive[0].annual_net_value == 300 * 0.04 * 12 + 50 * 0.02 * 12
    assert negative == []


def test_fee_eliminating_upgrade():
    result = find_upgrades(CATALOG, [_owned(QUICKSILVER_ONE)], make_profile(), SpendingProfile(grocery=500))
    assert len(result) == 1
    assert result[0].card.card_id == "capitalOne_quicksilver"
    assert "eliminates $39/yr in fees" in result[0].reason
    assert "+$39/yr" in result[0].reason


def test_fee_increase_is_explained():
    premium = make_card(
        card_id="premium", card_name="Premium", family_id="capital-one-quicksilver", annual_fee=95, rewards={"base": 0.03}
    )
    result = find_upgrades([QUICKSILVER, premium], [_owned(QUICKSILVER)], make_profile(), SpendingProfile(grocery=1000))
    assert len(result) == 1
    assert "Fee increases by $95/yr, but rewards more than offset it." in result[0].reason


def test_dominating_candidate_always_surfaces():
    owned_card = make_card(card_id="low", card_name="Low", family_id="fam", annual_fee=95, rewards={"base": 0.01, "dining": 0.03})
    candidate = make_card(card_id="high", card_name="High", family_id="fam", annual_fee=0, rewards={"base": 0.015, "dining": 0.03})
    result = find_upgrades([owned_card, candidate], [_owned(owned_card)], make_profile(), TYPICAL_SPENDING)
    assert [item.card.card_id for item in result] == ["high"]
    assert result[0].annual_net_value > 0


def test_every_qualifying_candidate_is_returned():
    owned_card = make_card(card_id="base", card_name="Base", family_id="fam", rewards={"base": 0.01})
    better = make_card(card_id="better", card_name="Better", family_id="fam", rewards={"base": 0.015})
    best = make_card(card_id="best", card_name="Best", family_id="fam", rewards={"base": 0.02})
    result = find_upgrades([owned_card, better, best], [_owned(owned_card)], make_profile(), TYPICAL_SPENDING)
    assert [item.card.card_id for item in result] == ["better", "best"]


def test_skips_cards_already_owned():
    owned = [_owned(ALTITUDE_GO), _owned(ALTITUDE_CONNECT)]
    result = find_upgrades(CATALOG, owned, make_profile(), SpendingProfile(travel=200, gas=150))
    assert all(item.card.card_id != "usBank_altitudeConnect" for item in result)


def test_respects_fee_preference():
    fee_connect = ALTITUDE_CONNECT.model_copy(update={"annual_fee": 95})
    catalog = [ALTITUDE_GO, fee_connect, QUICKSILVER_ONE, QUICKSILVER]
    spending = SpendingProfile(travel=200, gas=150)
    result = find_upgrades(catalog, [_owned(ALTITUDE_GO)], make_profile(fee_preference=False), spending)
    assert result == []


def test_respects_credit_score():
    result = find_upgrades(
        CATALOG, [_owned(QUICKSILVER_ONE)], make_profile(credit_score=600), SpendingProfile(grocery=500)
    )
    assert result == []


def test_standalone_cards_have_no_upgrades():
    assert find_upgrades(CATALOG, [_owned(STANDALONE)], make_profile(), TYPICAL_SPENDING) == []
