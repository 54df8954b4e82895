"""DebtSage debt payoff planning package."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .errors import InvalidInputError, NonConvergentPlanError
from .models import Debt, Strategy
from .services.debts import PlanResult, compare_strategies, simulate

__all__ = [
    "BaseConfig",
    "Debt",
    "DevConfig",
    "InvalidInputError",
    "NonConvergentPlanError",
    "PlanResult",
    "Strategy",
    "compare_strategies",
    "simulate",
]
