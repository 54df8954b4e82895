"""Unit tests for repository implementations."""

from __future__ import annotations

import threading

from debtsage.domain.repositories import DebtRepository
from debtsage.infra.repositories import InMemoryDebtRepository
from debtsage.models import Debt


def _debt(debt_id: str, name: str = "Card", principal: float = 1000.0) -> Debt:
    return Debt(id=debt_id, name=name, principal=principal, apr=19.99, minimum_payment=35.0)


def test_put_and_get(debt_repository):
    stored = debt_repository.put(_debt("1"), user_id="alice")

    assert stored.id == "1"
    assert debt_repository.get("1", user_id="alice") == stored
    assert debt_repository.get("missing", user_id="alice") is None


def test_list_preserves_insertion_order(debt_repository):
    for debt_id, name in [("3", "Car"), ("1", "Card"), ("2", "Loan")]:
        debt_repository.put(_debt(debt_id, name), user_id="alice")

    assert [debt.name for debt in debt_repository.list(user_id="alice")] == ["Car", "Card", "Loan"]


def test_put_replaces_in_place(debt_repository):
    debt_repository.put(_debt("1", "Card"), user_id="alice")
    debt_repository.put(_debt("2", "Loan"), user_id="alice")

    debt_repository.put(_debt("1", "Card", principal=250.0), user_id="alice")

    debts = debt_repository.list(user_id="alice")
    assert [debt.id for debt in debts] == ["1", "2"]
    assert debts[0].principal == 250.0


def test_users_are_isolated(debt_repository):
    debt_repository.put(_debt("1"), user_id="alice")

    assert debt_repository.list(user_id="bob") == []
    assert debt_repository.get("1", user_id="bob") is None


def test_delete(debt_repository):
    debt_repository.put(_debt("1"), user_id="alice")

    debt_repository.delete("1", user_id="alice")
    debt_repository.delete("1", user_id="alice")  # already gone
    debt_repository.delete("1", user_id="nobody")

    assert debt_repository.list(user_id="alice") == []


def test_next_id_is_unique_across_threads():
    repository = InMemoryDebtRepository()
    ids: list[str] = []
    lock = threading.Lock()

    def worker():
        for _ in range(100):
            value = repository.next_id()
            with lock:
                ids.append(value)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(ids) == len(set(ids)) == 400


def test_in_memory_repository_satisfies_protocol():
    repository: DebtRepository = InMemoryDebtRepository()
    repository.put(_debt("1"), user_id="alice")
    assert len(repository.list(user_id="alice")) == 1
