"""Exceptions raised by payoff planning."""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when debts, budget or strategy are rejected before simulating."""


class NonConvergentPlanError(RuntimeError):
    """Raised on request when a plan hit its month cap with balances outstanding."""

    def __init__(self, months: int, remaining_balance: float) -> None:
        super().__init__(
            f"Payoff schedule did not converge within {months} months; "
            f"{remaining_balance:,.2f} still outstanding"
        )
        self.months = months
        self.remaining_balance = remaining_balance
