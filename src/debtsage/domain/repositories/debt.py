"""Debt repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.debt import Debt


class DebtRepository(Protocol):
    """Repository for managing a user's debts."""

    def get(self, debt_id: str, *, user_id: str) -> Optional[Debt]:
        """Retrieve a debt by ID."""
        ...

    def put(self, debt: Debt, *, user_id: str) -> Debt:
        """Insert or replace a debt."""
        ...

    def list(self, *, user_id: str) -> list[Debt]:
        """List debts in insertion order."""
        ...

    def delete(self, debt_id: str, *, user_id: str) -> None:
        """Delete a debt by ID."""
        ...
