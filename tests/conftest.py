"""Pytest configuration and shared fixtures for DebtSage tests.

Provides debt factories, an isolated configuration environment and float
helpers for testing the payoff simulator, repository and CLI without
writing into the working directory.
"""

from __future__ import annotations

import logging

import pytest

from debtsage.infra.repositories import InMemoryDebtRepository
from debtsage.logging_config import ROOT_LOGGER_NAME
from debtsage.models import Debt


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point config at a temporary data dir and clear DebtSage env overrides."""

    for name in (
        "DEBTSAGE_MAX_MONTHS",
        "DEBTSAGE_DEFAULT_STRATEGY",
        "DEBTSAGE_DEV_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DEBTSAGE_DATA_DIR", str(tmp_path / "data"))
    yield


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so tests do not leak streams."""

    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def debt_factory():
    """Factory for creating debts with sensible defaults.

    Returns:
        Callable: Function that builds Debt instances
    """

    counter = {"next": 0}

    def _create_debt(
        name: str = "Test Debt",
        principal: float = 1000.00,
        apr: float = 18.0,
        minimum_payment: float = 25.00,
        debt_id: str | None = None,
    ) -> Debt:
        """Create a test debt.

        Args:
            name: Debt name/description
            principal: Starting balance
            apr: Annual percentage rate (e.g., 18.0 for 18%)
            minimum_payment: Minimum monthly payment
            debt_id: Explicit id; sequential ids are generated otherwise
        """
        if debt_id is None:
            counter["next"] += 1
            debt_id = str(counter["next"])
        return Debt(
            id=debt_id,
            name=name,
            principal=principal,
            apr=apr,
            minimum_payment=minimum_payment,
        )

    return _create_debt


@pytest.fixture
def debt_repository():
    """Empty in-memory repository."""
    return InMemoryDebtRepository()


# =============================================================================
# Assertion Helpers
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
