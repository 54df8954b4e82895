"""In-memory implementation of the debt repository."""

from __future__ import annotations

import itertools
import threading
from typing import Optional

from ...models.debt import Debt


class InMemoryDebtRepository:
    """Process-local debt store scoped per user.

    Owned by the calling layer and handed to the planning service; the
    simulator itself never touches it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._debts: dict[str, dict[str, Debt]] = {}
        self._ids = itertools.count(1)

    def next_id(self) -> str:
        """Return a fresh debt id."""
        with self._lock:
            return str(next(self._ids))

    def get(self, debt_id: str, *, user_id: str) -> Optional[Debt]:
        """Retrieve a debt by ID."""
        with self._lock:
            return self._debts.get(user_id, {}).get(debt_id)

    def put(self, debt: Debt, *, user_id: str) -> Debt:
        """Insert or replace a debt; replacing keeps its original position."""
        with self._lock:
            self._debts.setdefault(user_id, {})[debt.id] = debt
            return debt

    def list(self, *, user_id: str) -> list[Debt]:
        """List debts in insertion order."""
        with self._lock:
            return list(self._debts.get(user_id, {}).values())

    def delete(self, debt_id: str, *, user_id: str) -> None:
        """Delete a debt by ID."""
        with self._lock:
            self._debts.get(user_id, {}).pop(debt_id, None)
