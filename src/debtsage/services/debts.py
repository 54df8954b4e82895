"""Debt payoff simulation (avalanche and snowball).

The simulator walks forward one month at a time. Each month every open debt
accrues interest, minimum payments are applied in the order the debts were
given, and whatever budget is left goes to debts in strategy order. The loop
stops once every balance is within a cent of zero or the month cap is hit;
a capped run is returned with ``converged=False`` rather than passed off as a
finished payoff.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Iterable

from ..config import DEFAULT_MAX_MONTHS
from ..errors import InvalidInputError, NonConvergentPlanError
from ..logging_config import get_logger
from ..models.debt import Debt, Strategy

logger = get_logger(__name__)

BALANCE_EPSILON = 0.01  # balances at or below one cent count as paid off


@dataclass(slots=True)
class Payment:
    """Money applied to one debt in one month."""

    debt_id: str
    name: str
    minimum_applied: float = 0.0
    extra_applied: float = 0.0

    @property
    def total(self) -> float:
        return self.minimum_applied + self.extra_applied

    def to_dict(self) -> dict[str, Any]:
        return {
            "debtId": self.debt_id,
            "name": self.name,
            "minimumApplied": self.minimum_applied,
            "extraApplied": self.extra_applied,
        }


@dataclass(slots=True)
class ScheduleRow:
    """One simulated month of the amortization schedule."""

    month: int
    payments: list[Payment] = field(default_factory=list)
    interest_accrued: float = 0.0
    principal_paid: float = 0.0
    remaining_balance: float = 0.0
    balances: dict[str, float] = field(default_factory=dict)

    @property
    def total_paid(self) -> float:
        return sum(payment.total for payment in self.payments)

    def payment_for(self, debt_id: str) -> Payment | None:
        """Return the payment recorded against *debt_id* this month, if any."""

        for payment in self.payments:
            if payment.debt_id == debt_id:
                return payment
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "payments": [payment.to_dict() for payment in self.payments],
            "interestAccrued": self.interest_accrued,
            "principalPaid": self.principal_paid,
            "remainingBalance": self.remaining_balance,
            "balances": dict(self.balances),
        }


@dataclass(slots=True)
class PlanResult:
    """Outcome of a payoff simulation."""

    strategy: Strategy
    monthly_budget: float
    starting_balance: float
    schedule: list[ScheduleRow]
    converged: bool
    remaining_balance: float
    payoff_months: dict[str, int] = field(default_factory=dict)

    @property
    def total_months(self) -> int:
        return len(self.schedule)

    @property
    def total_interest_paid(self) -> float:
        return sum(row.interest_accrued for row in self.schedule)

    @property
    def total_paid(self) -> float:
        return sum(row.total_paid for row in self.schedule)

    # Short aliases matching the plan payload consumed by existing displays.
    @property
    def months(self) -> int:
        return self.total_months

    @property
    def interest_paid(self) -> float:
        return self.total_interest_paid

    def raise_if_not_converged(self) -> "PlanResult":
        """Return self, or raise when the month cap left balances outstanding."""

        if not self.converged:
            raise NonConvergentPlanError(self.total_months, self.remaining_balance)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Plain-data representation for JSON transports."""

        total_interest = self.total_interest_paid
        return {
            "strategy": self.strategy.value,
            "monthlyBudget": self.monthly_budget,
            "converged": self.converged,
            "totalMonths": self.total_months,
            "months": self.total_months,
            "totalInterestPaid": total_interest,
            "interestPaid": total_interest,
            "totalPaid": self.total_paid,
            "remainingBalance": self.remaining_balance,
            "payoffMonths": dict(self.payoff_months),
            "schedule": [row.to_dict() for row in self.schedule],
        }


@dataclass(slots=True)
class _WorkingDebt:
    """Mutable simulation state for a single debt."""

    debt: Debt
    balance: float

    @property
    def active(self) -> bool:
        return self.balance > BALANCE_EPSILON


def _check_amount(label: str, value: float, *, allow_zero: bool = True) -> float:
    """Coerce *value* to float and reject negatives and non-finite numbers."""

    if isinstance(value, bool):
        raise InvalidInputError(f"{label} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{label} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise InvalidInputError(f"{label} must be finite, got {value!r}")
    if number < 0 or (number == 0 and not allow_zero):
        bound = "at least zero" if allow_zero else "greater than zero"
        raise InvalidInputError(f"{label} must be {bound}, got {value!r}")
    return number


def _validate(debts: Iterable[Debt], monthly_budget: float, max_months: int) -> list[Debt]:
    """Reject malformed inputs before any month is simulated."""

    accounts = list(debts)
    if not accounts:
        raise InvalidInputError("At least one debt is required to build a payoff plan.")

    seen: set[str] = set()
    normalized: list[Debt] = []
    for debt in accounts:
        if debt.id in seen:
            raise InvalidInputError(f"Duplicate debt id {debt.id!r}")
        seen.add(debt.id)
        label = debt.name or debt.id
        # Simulate over floats whatever numeric type the caller supplied.
        normalized.append(
            replace(
                debt,
                principal=_check_amount(f"{label}: principal", debt.principal, allow_zero=False),
                apr=_check_amount(f"{label}: apr", debt.apr),
                minimum_payment=_check_amount(f"{label}: minimum payment", debt.minimum_payment),
            )
        )

    _check_amount("Monthly budget", monthly_budget)
    if isinstance(max_months, bool) or not isinstance(max_months, int) or max_months < 1:
        raise InvalidInputError(f"max_months must be a positive integer, got {max_months!r}")
    return normalized


def _strategy_order(working: list[_WorkingDebt], strategy: Strategy) -> list[_WorkingDebt]:
    """Open debts in allocation order; sorted() keeps input order on ties."""

    open_debts = [item for item in working if item.active]
    if strategy is Strategy.SNOWBALL:
        return sorted(open_debts, key=lambda item: item.balance)
    return sorted(open_debts, key=lambda item: item.debt.apr, reverse=True)


def simulate(
    debts: Iterable[Debt],
    monthly_budget: float,
    strategy: Strategy | str = Strategy.AVALANCHE,
    *,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> PlanResult:
    """Simulate monthly payments until every debt is paid or *max_months* pass."""

    strategy = Strategy.parse(strategy)
    accounts = _validate(debts, monthly_budget, max_months)
    budget = float(monthly_budget)

    working = [_WorkingDebt(debt=debt, balance=float(debt.principal)) for debt in accounts]
    starting_balance = sum(item.balance for item in working)
    schedule: list[ScheduleRow] = []
    payoff_months: dict[str, int] = {}

    logger.debug(
        "Simulating payoff plan",
        extra={"strategy": strategy.value, "debts": len(working), "monthly_budget": budget},
    )

    month = 0
    while month < max_months and any(item.active for item in working):
        month += 1
        row = ScheduleRow(month=month)
        available = budget

        accrued: dict[str, float] = {}
        for item in working:
            if not item.active:
                continue
            interest = item.balance * item.debt.monthly_rate
            item.balance += interest
            row.interest_accrued += interest
            accrued[item.debt.id] = interest

        for item in working:
            if not item.active or available <= 0:
                continue
            pay_min = min(item.balance, float(item.debt.minimum_payment))
            applied = min(pay_min, available)
            if applied <= 0:
                continue
            item.balance = max(0.0, item.balance - applied)
            available -= applied
            row.payments.append(
                Payment(debt_id=item.debt.id, name=item.debt.name, minimum_applied=applied)
            )
            # Approximate split: whatever exceeds this month's interest counts as principal.
            row.principal_paid += max(0.0, applied - accrued[item.debt.id])

        for item in _strategy_order(working, strategy):
            if available <= 0:
                break
            extra = min(item.balance, available)
            item.balance = max(0.0, item.balance - extra)
            available -= extra
            payment = row.payment_for(item.debt.id)
            if payment is None:
                payment = Payment(debt_id=item.debt.id, name=item.debt.name)
                row.payments.append(payment)
            payment.extra_applied += extra
            row.principal_paid += extra

        row.balances = {item.debt.id: item.balance for item in working}
        row.remaining_balance = sum(row.balances.values())
        for item in working:
            if (
                not item.active
                and item.debt.id not in payoff_months
                and row.payment_for(item.debt.id) is not None
            ):
                payoff_months[item.debt.id] = month
        schedule.append(row)

    remaining = sum(item.balance for item in working if item.active)
    converged = not any(item.active for item in working)
    if not converged:
        logger.warning(
            "Payoff plan did not converge",
            extra={
                "strategy": strategy.value,
                "months": month,
                "remaining_balance": round(remaining, 2),
                "monthly_budget": budget,
            },
        )

    return PlanResult(
        strategy=strategy,
        monthly_budget=budget,
        starting_balance=starting_balance,
        schedule=schedule,
        converged=converged,
        remaining_balance=remaining,
        payoff_months=payoff_months,
    )


@dataclass(slots=True)
class StrategyComparison:
    """Avalanche and snowball plans for the same debts and budget."""

    avalanche: PlanResult
    snowball: PlanResult

    @property
    def interest_savings(self) -> float:
        """Interest avalanche saves over snowball (negative if it costs more)."""
        return self.snowball.total_interest_paid - self.avalanche.total_interest_paid

    @property
    def month_difference(self) -> int:
        return self.snowball.total_months - self.avalanche.total_months

    @property
    def recommended(self) -> Strategy:
        """Converged plan first, then least interest, then fewest months."""

        if self.avalanche.converged != self.snowball.converged:
            return Strategy.AVALANCHE if self.avalanche.converged else Strategy.SNOWBALL
        if abs(self.interest_savings) >= 0.005:
            return Strategy.AVALANCHE if self.interest_savings > 0 else Strategy.SNOWBALL
        if self.month_difference < 0:
            return Strategy.SNOWBALL
        return Strategy.AVALANCHE

    def plan_for(self, strategy: Strategy | str) -> PlanResult:
        strategy = Strategy.parse(strategy)
        return self.avalanche if strategy is Strategy.AVALANCHE else self.snowball


def compare_strategies(
    debts: Iterable[Debt],
    monthly_budget: float,
    *,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> StrategyComparison:
    """Run both strategies over the same inputs."""

    accounts = list(debts)
    return StrategyComparison(
        avalanche=simulate(accounts, monthly_budget, Strategy.AVALANCHE, max_months=max_months),
        snowball=simulate(accounts, monthly_budget, Strategy.SNOWBALL, max_months=max_months),
    )


def schedule_summary(result: PlanResult) -> tuple[int, float, float]:
    """Return (months, total_interest, total_paid) rounded to cents."""

    return (
        result.total_months,
        round(result.total_interest_paid, 2),
        round(result.total_paid, 2),
    )


def balance_series(result: PlanResult) -> list[float]:
    """Total outstanding balance at the start and after each simulated month."""

    series = [round(result.starting_balance, 2)]
    series.extend(round(row.remaining_balance, 2) for row in result.schedule)
    return series


def describe_timeframe(months: int) -> str:
    """Render a month count as e.g. ``"2 years and 3 months"``."""

    def _plural(count: int, unit: str) -> str:
        return f"{count} {unit}{'' if count == 1 else 's'}"

    years, remainder = divmod(max(int(months), 0), 12)
    if years == 0:
        return _plural(remainder, "month")
    if remainder == 0:
        return _plural(years, "year")
    return f"{_plural(years, 'year')} and {_plural(remainder, 'month')}"
