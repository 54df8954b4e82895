"""Concrete repository implementations."""

from .debt import InMemoryDebtRepository

__all__ = [
    "InMemoryDebtRepository",
]
