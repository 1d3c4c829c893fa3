from cardfolio.engine.eligibility import filter_eligible, is_velocity_locked

from helpers import make_card, make_profile

CARDS = [
    make_card(card_id="a", family_id="fam1", min_score=670, annual_fee=0),
    make_card(card_id="b", family_id="fam2", min_score=700, annual_fee=95, velocity_restricted=True),
    make_card(card_id="c", family_id="fam3", min_score=300, annual_fee=0),
    make_card(card_id="d", family_id="fam1", min_score=670, annual_fee=0),
    make_card(card_id="e", family_id="", min_score=0, annual_fee=0),
]


def _ids(cards):
    return {card.card_id for card in cards}


def test_excludes_owned_cards():
    assert "a" not in _ids(filter_eligible(CARDS, {"a"}, set(), make_profile()))


def test_excludes_owned_families():
    result = _ids(filter_eligible(CARDS, set(), {"fam1"}, make_profile()))
    assert "a" not in result
    assert "d" not in result


def test_empty_family_never_matches():
    assert "e" in _ids(filter_eligible(CARDS, set(), {""}, make_profile()))


def test_excludes_cards_above_credit_score():
    result = _ids(filter_eligible(CARDS, set(), set(), make_profile(credit_score=650)))
    assert "a" not in result
    assert "b" not in result
    assert "c" in result


def test_low_score_excludes_both_scored_cards():
    cards = [
        make_card(card_id="a", min_score=670, annual_fee=0),
        make_card(card_id="b", min_score=700, annual_fee=95, velocity_restricted=True),
    ]
    profile = make_profile(credit_score=650, cards_opened_24mo=2, fee_preference=True)
    assert filter_eligible(cards, set(), set(), profile) == []


def test_velocity_restriction_at_threshold():
    assert "b" not in _ids(filter_eligible(CARDS, set(), set(), make_profile(cards_opened_24mo=5)))
    assert "b" in _ids(filter_eligible(CARDS, set(), set(), make_profile(cards_opened_24mo=4)))


def test_excludes_fee_cards_when_fees_declined():
    assert "b" not in _ids(filter_eligible(CARDS, set(), set(), make_profile(fee_preference=False)))


def test_secured_cards_available_for_low_scores():
    assert "e" in _ids(filter_eligible(CARDS, set(), set(), make_profile(credit_score=300)))


def test_strong_profile_gets_everything():
    assert len(filter_eligible(CARDS, set(), set(), make_profile(credit_score=800))) == 5


def test_tightening_filters_never_grows_result():
    base = _ids(filter_eligible(CARDS, set(), set(), make_profile(credit_score=720, cards_opened_24mo=5)))
    lower_score = _ids(filter_eligible(CARDS, set(), set(), make_profile(credit_score=600, cards_opened_24mo=5)))
    stricter_cards = [card.model_copy(update={"min_score": card.min_score + 50}) for card in CARDS]
    raised = _ids(filter_eligible(stricter_cards, set(), set(), make_profile(credit_score=720, cards_opened_24mo=5)))
    restricted = [card.model_copy(update={"velocity_restricted": True}) if card.card_id == "c" else card for card in CARDS]
    velocity = _ids(filter_eligible(restricted, set(), set(), make_profile(credit_score=720, cards_opened_24mo=5)))

    assert lower_score <= base
    assert raised <= base
    assert velocity <= base


def test_velocity_lock_flag():
    assert is_velocity_locked(make_profile(cards_opened_24mo=5))
    assert not is_velocity_locked(make_profile(cards_opened_24mo=4))
