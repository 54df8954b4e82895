"""Service module exports."""

from . import debts, planning

__all__ = [
    "debts",
    "planning",
]
