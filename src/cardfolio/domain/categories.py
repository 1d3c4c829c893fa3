"""Static category and reward-key tables shared by the engine and the API."""

from enum import Enum
from types import MappingProxyType
from typing import NamedTuple


class CategoryKey(str, Enum):
    GROCERY = "grocery"
    DINING = "dining"
    RENT = "rent"
    GAS = "gas"
    ONLINE = "online"
    TRAVEL = "travel"
    STREAMING = "streaming"
    TRANSIT = "transit"


# Canonical iteration order. Tie-breaks everywhere follow this order.
CATEGORY_ORDER: tuple[CategoryKey, ...] = tuple(CategoryKey)

CATEGORY_LABELS = MappingProxyType(
    {
        CategoryKey.GROCERY: "Groceries",
        CategoryKey.DINING: "Dining",
        CategoryKey.RENT: "Rent",
        CategoryKey.GAS: "Gas",
        CategoryKey.ONLINE: "Online Shopping",
        CategoryKey.TRAVEL: "Travel",
        CategoryKey.STREAMING: "Streaming",
        CategoryKey.TRANSIT: "Transit",
    }
)

# Spending category -> catalog reward keys that can satisfy it.
# The first key is the one a default follow-up answer writes to.
CATEGORY_MAP = MappingProxyType(
    {
        CategoryKey.GROCERY: (
            "groceries",
            "online_groceries",
            "whole_foods",
            "grocery",
            "supermarkets",
            "wholesale",
        ),
        CategoryKey.DINING: ("dining", "restaurants"),
        CategoryKey.RENT: ("rent",),
        CategoryKey.GAS: ("gas", "ev_charging", "gas_stations"),
        CategoryKey.ONLINE: ("online_shopping", "online_retail"),
        CategoryKey.TRAVEL: ("travel", "flights", "hotels"),
        CategoryKey.STREAMING: ("streaming",),
        CategoryKey.TRANSIT: ("transit",),
    }
)

BASE_REWARD_KEY = "base"

# Paying rent by card usually costs a processing fee larger than a generic base rate.
BASE_RATE_EXCLUDED: frozenset[CategoryKey] = frozenset({CategoryKey.RENT})

REWARD_KEY_LABELS = MappingProxyType(
    {
        "base": "Base",
        "groceries": "Groceries",
        "online_groceries": "Online Groceries",
        "whole_foods": "Whole Foods",
        "grocery": "Groceries",
        "supermarkets": "Supermarkets",
        "wholesale": "Wholesale",
        "dining": "Dining",
        "restaurants": "Restaurants",
        "rent": "Rent",
        "gas": "Gas",
        "ev_charging": "EV Charging",
        "gas_stations": "Gas Stations",
        "online_shopping": "Online Shopping",
        "online_retail": "Online Retail",
        "travel": "Travel",
        "flights": "Flights",
        "hotels": "Hotels",
        "streaming": "Streaming",
        "transit": "Transit",
        "drugstores": "Drugstores",
        "home_improvement": "Home Improvement",
        "entertainment": "Entertainment",
        "gym": "Gym",
        "fitness": "Fitness",
        "apple_pay": "Apple Pay",
        "amazon": "Amazon",
        "paypal": "PayPal",
        "paypal_purchases": "PayPal",
        "travel_chase": "Chase Travel",
        "chase_travel": "Chase Travel",
        "travel_capitalOne": "Capital One Travel",
        "flights_capitalOne": "Capital One Flights",
        "hotel_capitalOne": "Capital One Hotels",
        "rentalCar_capitalOne": "Capital One Rental Cars",
        "vacationRental_capitalOne": "Capital One Vacation Rentals",
        "travel_USBank": "U.S. Bank Travel",
        "travel_delta": "Delta",
        "flight_amex": "Amex Flights",
        "hotel_amex": "Amex Hotels",
    }
)

# Issuer booking-portal bonuses. Not interchangeable with generic travel spend.
PORTAL_TRAVEL_MAP = MappingProxyType(
    {
        "travel_chase": "Chase Travel portal",
        "chase_travel": "Chase Travel portal",
        "travel_capitalOne": "Capital One Travel portal",
        "flights_capitalOne": "Capital One Travel portal",
        "hotel_capitalOne": "Capital One Travel portal",
        "rentalCar_capitalOne": "Capital One Travel portal",
        "vacationRental_capitalOne": "Capital One Travel portal",
        "travel_USBank": "U.S. Bank Travel portal",
        "travel_delta": "Delta",
        "flight_amex": "Amex Travel",
        "hotel_amex": "Amex Travel",
    }
)


class ExtraCategoryOption(NamedTuple):
    key: str
    label: str
    group: str
    reward_keys: tuple[str, ...]


EXTRA_CATEGORY_GROUP_LABELS = MappingProxyType(
    {"spending": "Spending", "general": "General", "retail": "Retail"}
)

EXTRA_CATEGORY_OPTIONS: tuple[ExtraCategoryOption, ...] = (
    *(
        ExtraCategoryOption(cat.value, CATEGORY_LABELS[cat], "spending", CATEGORY_MAP[cat])
        for cat in CATEGORY_ORDER
    ),
    ExtraCategoryOption("drugstores", "Drugstores", "general", ("drugstores",)),
    ExtraCategoryOption("home_improvement", "Home Improvement", "general", ("home_improvement",)),
    ExtraCategoryOption("entertainment", "Entertainment", "general", ("entertainment",)),
    ExtraCategoryOption("gym", "Gym & Fitness", "general", ("gym", "fitness")),
    ExtraCategoryOption("apple_pay", "Apple Pay", "general", ("apple_pay",)),
    ExtraCategoryOption("amazon", "Amazon", "retail", ("amazon",)),
    ExtraCategoryOption("paypal", "PayPal", "retail", ("paypal", "paypal_purchases")),
)


def reward_key_label(key: str) -> str:
    return REWARD_KEY_LABELS.get(key, key.replace("_", " ").title())
