"""Debt records and payoff strategies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..errors import InvalidInputError


class Strategy(str, Enum):
    """Order in which extra budget is allocated across debts."""

    AVALANCHE = "avalanche"  # highest APR first
    SNOWBALL = "snowball"  # smallest balance first

    @classmethod
    def parse(cls, value: "Strategy | str") -> "Strategy":
        """Return the strategy matching *value*, case-insensitively."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise InvalidInputError(
                f"Invalid debt payoff strategy {value!r}; choose one of: {choices}"
            ) from None


@dataclass(frozen=True, slots=True)
class Debt:
    """Represents a liability input for payoff projections.

    ``apr`` is a percentage (18.99 means 18.99%), ``principal`` the balance
    the simulation starts from.
    """

    id: str
    name: str
    principal: float
    apr: float = 0.0
    minimum_payment: float = 0.0

    @property
    def monthly_rate(self) -> float:
        return self.apr / 100 / 12
