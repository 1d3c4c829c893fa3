from cardfolio.domain.models import CardRecord, OwnedCard, SpendingProfile, UserCreditProfile


def make_card(**overrides) -> CardRecord:
    fields = {
        "card_id": "test_card",
        "card_name": "Test Card",
        "brand": "Test",
        "family_id": "",
        "min_score": 670,
        "annual_fee": 0,
        "velocity_restricted": False,
        "rewards": {"base": 0.01},
    }
    fields.update(overrides)
    return CardRecord(**fields)


def make_profile(**overrides) -> UserCreditProfile:
    fields = {
        "credit_score": 750,
        "credit_age": 5,
        "cards_opened_24mo": 2,
        "fee_preference": True,
    }
    fields.update(overrides)
    return UserCreditProfile(**fields)


def make_owned(**overrides) -> OwnedCard:
    fields = {
        "card_id": "test_card",
        "name": "Test Card",
        "resolved_rewards": {"base": 0.01},
        "annual_fee": 0,
    }
    fields.update(overrides)
    return OwnedCard(**fields)


ZERO_SPENDING = SpendingProfile()

TYPICAL_SPENDING = SpendingProfile(
    grocery=500,
    dining=200,
    gas=100,
    online=150,
    travel=50,
    streaming=30,
)
