"""Evaluate a debt portfolio against the fixed rule set."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from rewardwise.debt.models import (
    PRIORITY_RANK,
    DebtAccount,
    DebtInsight,
    DebtSummary,
    normalize_account,
)
from rewardwise.debt.rules import DEBT_RULES, DebtRule, no_debt, weighted_apr, with_balance

logger = logging.getLogger(__name__)


def evaluate(
    accounts: Iterable[DebtAccount | Mapping[str, Any]] | None,
    rules: tuple[DebtRule, ...] = DEBT_RULES,
) -> list[DebtInsight]:
    """Return prioritized insights for ``accounts``.

    A portfolio without any balance yields only the ``no_debt`` insight.
    Otherwise every rule runs and the emitted insights are stably sorted
    high -> medium -> low, keeping rule order among equals.
    """
    normalized = [normalize_account(account) for account in (accounts or ())]

    congratulation = no_debt(normalized)
    if congratulation is not None:
        return [congratulation]

    insights = [insight for insight in (rule(normalized) for rule in rules) if insight is not None]
    logger.debug(
        "Debt evaluation produced %d insights for %d accounts",
        len(insights),
        len(normalized),
    )
    return sorted(insights, key=lambda i: PRIORITY_RANK[i.priority], reverse=True)


def summarize_debt(accounts: Iterable[DebtAccount | Mapping[str, Any]] | None) -> DebtSummary:
    normalized = [normalize_account(account) for account in (accounts or ())]
    active = with_balance(normalized)
    return DebtSummary(
        account_count=len(normalized),
        accounts_with_balance=len(active),
        total_balance=sum(a.balance for a in active),
        total_minimum_payment=sum(a.minimum_payment for a in normalized),
        weighted_average_apr=weighted_apr(active),
    )
