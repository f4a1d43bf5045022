"""Debt portfolio heuristics."""

from .engine import evaluate, summarize_debt
from .models import (
    AccountEntry,
    DebtAccount,
    DebtInsight,
    DebtSummary,
    InsightType,
    Priority,
    normalize_account,
)

__all__ = [
    "AccountEntry",
    "DebtAccount",
    "DebtInsight",
    "DebtSummary",
    "InsightType",
    "Priority",
    "evaluate",
    "normalize_account",
    "summarize_debt",
]
