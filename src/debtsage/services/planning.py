"""Payoff plans for debts held in a repository."""

from __future__ import annotations

from ..config import BaseConfig
from ..domain.repositories import DebtRepository
from ..errors import InvalidInputError
from ..logging_config import get_logger
from ..models.debt import Debt, Strategy
from .debts import PlanResult, StrategyComparison, compare_strategies, simulate

logger = get_logger(__name__)


def _load_debts(repository: DebtRepository, user_id: str) -> list[Debt]:
    debts = repository.list(user_id=user_id)
    if not debts:
        raise InvalidInputError(f"No debts recorded for user {user_id!r}")
    return debts


def _resolve_max_months(max_months: int | None, config: BaseConfig | None) -> int:
    if max_months is not None:
        return max_months
    return (config or BaseConfig()).MAX_MONTHS


def plan_for_user(
    *,
    repository: DebtRepository,
    user_id: str,
    monthly_budget: float,
    strategy: Strategy | str,
    max_months: int | None = None,
    config: BaseConfig | None = None,
) -> PlanResult:
    """Simulate a payoff plan over every debt the user has stored."""

    debts = _load_debts(repository, user_id)
    result = simulate(
        debts,
        monthly_budget,
        strategy,
        max_months=_resolve_max_months(max_months, config),
    )
    logger.info(
        "Computed payoff plan",
        extra={
            "user_id": user_id,
            "strategy": result.strategy.value,
            "months": result.total_months,
            "converged": result.converged,
        },
    )
    return result


def compare_for_user(
    *,
    repository: DebtRepository,
    user_id: str,
    monthly_budget: float,
    max_months: int | None = None,
    config: BaseConfig | None = None,
) -> StrategyComparison:
    """Run avalanche and snowball over the user's stored debts."""

    debts = _load_debts(repository, user_id)
    return compare_strategies(
        debts,
        monthly_budget,
        max_months=_resolve_max_months(max_months, config),
    )
