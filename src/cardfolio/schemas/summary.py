"""Payload handed to the results-email collaborator."""

from pydantic import BaseModel, ConfigDict, Field

from cardfolio.domain.models import PortfolioStrategy, StrategyItem


class CardAction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    reason: str
    anv: float | None = None
    downgrade: str | None = None
    upgrade_from: str | None = Field(default=None, alias="upgradeFrom")

    @classmethod
    def from_item(cls, item: StrategyItem) -> "CardAction":
        return cls(
            name=item.card.card_name,
            reason=item.reason,
            anv=item.annual_net_value,
            downgrade=item.downgrade_target,
            upgrade_from=item.upgrade_from,
        )


class ResultsSummary(BaseModel):
    apply: list[CardAction]
    upgrade: list[CardAction]
    keep: list[CardAction]
    remove: list[CardAction]
    improvement: float


def build_results_summary(strategy: PortfolioStrategy) -> ResultsSummary:
    return ResultsSummary(
        apply=[CardAction.from_item(item) for item in strategy.apply],
        upgrade=[CardAction.from_item(item) for item in strategy.upgrade],
        keep=[CardAction.from_item(item) for item in strategy.keep],
        remove=[CardAction.from_item(item) for item in strategy.remove],
        improvement=strategy.total_optimal_rewards - strategy.total_current_rewards,
    )
