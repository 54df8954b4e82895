"""Domain record exports."""

from .debt import Debt, Strategy

__all__ = [
    "Debt",
    "Strategy",
]
