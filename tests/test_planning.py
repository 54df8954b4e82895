"""Tests for planning over stored debts."""

from __future__ import annotations

import pytest

from debtsage.config import BaseConfig
from debtsage.errors import InvalidInputError
from debtsage.models import Debt, Strategy
from debtsage.services.planning import compare_for_user, plan_for_user


@pytest.fixture
def seeded_repository(debt_repository):
    debt_repository.put(
        Debt(id="1", name="Card", principal=3000.0, apr=22.0, minimum_payment=90.0),
        user_id="alice",
    )
    debt_repository.put(
        Debt(id="2", name="Loan", principal=1200.0, apr=7.0, minimum_payment=60.0),
        user_id="alice",
    )
    debt_repository.put(
        Debt(id="9", name="Someone else", principal=99999.0, apr=30.0, minimum_payment=1.0),
        user_id="bob",
    )
    return debt_repository


def test_plan_uses_only_the_users_debts(seeded_repository):
    result = plan_for_user(
        repository=seeded_repository,
        user_id="alice",
        monthly_budget=400.0,
        strategy="avalanche",
    )

    assert result.converged
    assert result.strategy is Strategy.AVALANCHE
    assert result.starting_balance == 4200.0
    assert set(result.payoff_months) == {"1", "2"}


def test_user_without_debts_is_rejected(debt_repository):
    with pytest.raises(InvalidInputError, match="No debts recorded"):
        plan_for_user(
            repository=debt_repository,
            user_id="carol",
            monthly_budget=100.0,
            strategy="snowball",
        )


def test_month_cap_defaults_to_config(seeded_repository, monkeypatch):
    monkeypatch.setenv("DEBTSAGE_MAX_MONTHS", "3")

    result = plan_for_user(
        repository=seeded_repository,
        user_id="alice",
        monthly_budget=400.0,
        strategy="snowball",
        config=BaseConfig(),
    )

    assert result.total_months == 3
    assert not result.converged


def test_explicit_cap_wins_over_config(seeded_repository, monkeypatch):
    monkeypatch.setenv("DEBTSAGE_MAX_MONTHS", "3")

    result = plan_for_user(
        repository=seeded_repository,
        user_id="alice",
        monthly_budget=400.0,
        strategy="snowball",
        max_months=600,
        config=BaseConfig(),
    )

    assert result.converged


def test_compare_for_user(seeded_repository):
    comparison = compare_for_user(
        repository=seeded_repository, user_id="alice", monthly_budget=400.0
    )

    assert comparison.avalanche.converged and comparison.snowball.converged
    assert comparison.recommended in (Strategy.AVALANCHE, Strategy.SNOWBALL)
