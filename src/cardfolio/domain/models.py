from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from cardfolio.domain.categories import CATEGORY_ORDER, CategoryKey


class PlaceholderKind(str, Enum):
    """Reward keys whose concrete category is decided after catalog authoring."""

    TOP_CATEGORY = "top_category"
    CUSTOM = "custom"
    ROTATING = "rotating_categories"
    CHOSEN = "chosen_category"


# second_category is a legacy key: stripped on resolution, never asked about.
PLACEHOLDER_KEYS: frozenset[str] = frozenset(
    {*(kind.value for kind in PlaceholderKind), "second_category"}
)


class FollowUpType(str, Enum):
    TOP_CATEGORY = "top_category"
    ROTATING = "rotating"
    CHOSEN_CATEGORY = "chosen_category"
    CUSTOM_CATEGORY = "custom_category"


class Action(str, Enum):
    APPLY = "APPLY"
    KEEP = "KEEP"
    REMOVE = "REMOVE"
    UPGRADE = "UPGRADE"


class PlaceholderRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: PlaceholderKind
    rate: float
    choices: dict[str, str] | None = None


class CardRecord(BaseModel):
    """Catalog entry. Read-only once loaded."""

    model_config = ConfigDict(frozen=True)

    card_id: str
    card_name: str
    brand: str = ""
    family_id: str = ""
    min_score: int = 0
    annual_fee: int = Field(default=0, ge=0)
    velocity_restricted: bool = False
    rewards: dict[str, float] = Field(default_factory=dict)
    downgrade_to: str | None = None
    top_category_choices: dict[str, str] | None = None
    custom_category_choices: dict[str, str] | None = None
    rotating_category: dict[str, str] | None = None

    def placeholders(self) -> dict[PlaceholderKind, PlaceholderRule]:
        choices = {
            PlaceholderKind.TOP_CATEGORY: self.top_category_choices,
            PlaceholderKind.CUSTOM: self.custom_category_choices,
            PlaceholderKind.ROTATING: self.rotating_category,
            PlaceholderKind.CHOSEN: None,
        }
        return {
            kind: PlaceholderRule(kind=kind, rate=self.rewards[kind.value], choices=choices[kind])
            for kind in PlaceholderKind
            if kind.value in self.rewards
        }

    @property
    def has_rotating(self) -> bool:
        return PlaceholderKind.ROTATING.value in self.rewards


class OwnedCard(BaseModel):
    """A card the user holds, with placeholder rewards resolved to concrete keys."""

    model_config = ConfigDict(frozen=True)

    card_id: str
    name: str
    resolved_rewards: dict[str, float] = Field(default_factory=dict)
    annual_fee: int = Field(default=0, ge=0)
    is_custom: bool = False

    @classmethod
    def from_catalog(cls, card: CardRecord) -> "OwnedCard":
        return cls(
            card_id=card.card_id,
            name=card.card_name,
            resolved_rewards=dict(card.rewards),
            annual_fee=card.annual_fee,
        )

    def with_rewards(self, rewards: dict[str, float]) -> "OwnedCard":
        return self.model_copy(update={"resolved_rewards": dict(rewards)})


class UserCreditProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    credit_score: int = 0
    credit_age: int = 0
    cards_opened_24mo: int = 0
    fee_preference: bool = True

    @classmethod
    def from_oldest_open_date(
        cls,
        opened_on: date | None,
        *,
        today: date | None = None,
        credit_score: int = 0,
        cards_opened_24mo: int = 0,
        fee_preference: bool = True,
    ) -> "UserCreditProfile":
        today = today or date.today()
        age = 0
        if opened_on is not None:
            age = today.year - opened_on.year
            if (today.month, today.day) < (opened_on.month, opened_on.day):
                age -= 1
        return cls(
            credit_score=credit_score,
            credit_age=max(age, 0),
            cards_opened_24mo=cards_opened_24mo,
            fee_preference=fee_preference,
        )


class SpendingProfile(BaseModel):
    """Monthly dollars per canonical category."""

    model_config = ConfigDict(frozen=True)

    grocery: float = Field(default=0, ge=0)
    dining: float = Field(default=0, ge=0)
    rent: float = Field(default=0, ge=0)
    gas: float = Field(default=0, ge=0)
    online: float = Field(default=0, ge=0)
    travel: float = Field(default=0, ge=0)
    streaming: float = Field(default=0, ge=0)
    transit: float = Field(default=0, ge=0)

    def monthly(self, category: CategoryKey) -> float:
        return getattr(self, CategoryKey(category).value)

    def items(self) -> list[tuple[CategoryKey, float]]:
        return [(cat, self.monthly(cat)) for cat in CATEGORY_ORDER]


class AnnualValue(BaseModel):
    anv: float
    best_category: CategoryKey
    best_category_value: float


class FollowUpQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    card_id: str
    card_name: str
    type: FollowUpType
    rate: float
    choices: dict[str, str] | None = None


class StrategyItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: Action
    card: CardRecord
    reason: str
    annual_net_value: float
    best_category: CategoryKey | None = None
    downgrade_target: str | None = None
    alternatives: list[CardRecord] = Field(default_factory=list)
    upgrade_from: str | None = None


class CategoryBreakdown(BaseModel):
    category: str
    category_key: CategoryKey
    current_rate: float
    optimal_rate: float
    current_annual: float
    optimal_annual: float
    best_card_name: str


class PortfolioStrategy(BaseModel):
    apply: list[StrategyItem] = Field(default_factory=list)
    upgrade: list[StrategyItem] = Field(default_factory=list)
    keep: list[StrategyItem] = Field(default_factory=list)
    remove: list[StrategyItem] = Field(default_factory=list)
    total_current_rewards: float = 0
    total_optimal_rewards: float = 0
    category_breakdown: list[CategoryBreakdown] = Field(default_factory=list)
    velocity_locked: bool = False
    tips: list[str] = Field(default_factory=list)
