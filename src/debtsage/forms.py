"""Debt and plan form definitions and validation helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List

from .errors import InvalidInputError
from .models.debt import Debt, Strategy

StrategyChoices = Dict[str, str]


DEFAULT_STRATEGIES: StrategyChoices = {
    Strategy.AVALANCHE.value: "Avalanche · prioritize highest APR first",
    Strategy.SNOWBALL.value: "Snowball · knock out the smallest balance",
}


class _FormMixin:
    """Shared numeric parsing for forms that collect per-field errors."""

    errors: Dict[str, List[str]]

    def _parse_amount(
        self,
        field: str,
        value: Decimal | str | float | None,
        *,
        minimum: Decimal,
        inclusive: bool = True,
    ) -> Decimal | None:
        """Parse and validate numeric input, storing errors when parsing fails."""

        if value is None or (isinstance(value, str) and not value.strip()):
            self.errors.setdefault(field, []).append("This field is required.")
            return None

        if not isinstance(value, Decimal):
            try:
                value = Decimal(str(value).strip().replace(",", "").lstrip("$"))
            except (InvalidOperation, TypeError, ValueError):
                self.errors.setdefault(field, []).append("Enter a valid number.")
                return None

        if not value.is_finite():
            self.errors.setdefault(field, []).append("Enter a valid number.")
            return None

        if value < minimum or (not inclusive and value == minimum):
            message = (
                "Amount must be greater than zero."
                if not inclusive
                else "Amount must be at least zero."
            )
            self.errors.setdefault(field, []).append(message)
        return value

    @property
    def error_messages(self) -> Iterable[str]:
        """Flattened iterable of error strings for summaries."""

        for messages in self.errors.values():
            yield from messages


@dataclass(slots=True)
class DebtForm(_FormMixin):
    """Represents debt inputs and associated validation errors."""

    name: str = ""
    principal: Decimal | str | float | None = None
    apr: Decimal | str | float | None = None
    minimum_payment: Decimal | str | float | None = "0"
    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def validate(self) -> bool:
        """Validate debt inputs returning True when all values are acceptable."""

        self.errors.clear()

        if not self.name or not self.name.strip():
            self.errors.setdefault("name", []).append("Enter the creditor or account name.")
        else:
            self.name = self.name.strip()

        self.principal = self._parse_amount(
            "principal", self.principal, minimum=Decimal("0"), inclusive=False
        )
        self.apr = self._parse_amount("apr", self.apr, minimum=Decimal("0"))
        self.minimum_payment = self._parse_amount(
            "minimum_payment", self.minimum_payment, minimum=Decimal("0")
        )

        if isinstance(self.apr, Decimal) and self.apr > Decimal("100"):
            self.errors.setdefault("apr", []).append("APR must be between 0 and 100 percent.")

        return not self.errors

    def to_debt(self, debt_id: str) -> Debt:
        """Build a validated ``Debt`` record."""

        if not self.validate():
            raise InvalidInputError("; ".join(self.error_messages))
        return Debt(
            id=debt_id,
            name=self.name,
            principal=float(self.principal),
            apr=float(self.apr),
            minimum_payment=float(self.minimum_payment),
        )


def parse_debt_spec(spec: str) -> DebtForm:
    """Split a ``name:principal:apr:minimum`` token into an unvalidated form.

    The minimum payment may be omitted. Names containing colons are not
    supported.
    """

    parts = [part.strip() for part in spec.split(":")]
    if len(parts) not in (3, 4):
        raise InvalidInputError(
            f"Expected NAME:PRINCIPAL:APR[:MINIMUM], got {spec!r}"
        )
    name, principal, apr = parts[:3]
    minimum = parts[3] if len(parts) == 4 else "0"
    return DebtForm(name=name, principal=principal, apr=apr, minimum_payment=minimum)


@dataclass(slots=True)
class PlanForm(_FormMixin):
    """Monthly budget and strategy choice for a payoff plan."""

    monthly_budget: Decimal | str | float | None = None
    strategy: str = Strategy.AVALANCHE.value
    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def validate(self, *, strategies: StrategyChoices | None = None) -> bool:
        self.errors.clear()
        strategies = strategies or DEFAULT_STRATEGIES

        self.monthly_budget = self._parse_amount(
            "monthly_budget", self.monthly_budget, minimum=Decimal("0")
        )

        choice = (self.strategy or "").strip().lower()
        if choice not in strategies:
            self.errors.setdefault("strategy", []).append("Choose a payoff strategy.")
        else:
            self.strategy = choice

        return not self.errors
