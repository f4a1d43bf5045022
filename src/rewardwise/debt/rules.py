"""Debt heuristics.

Each rule is a pure function ``(accounts) -> DebtInsight | None`` over
normalized accounts. Rules don't know about each other; the engine
evaluates them in ``DEBT_RULES`` order.
"""

from __future__ import annotations

from typing import Callable, Sequence

from rewardwise.debt.models import (
    DebtAccount,
    DebtInsight,
    InsightType,
    Priority,
    format_money,
)

DebtRule = Callable[[Sequence[DebtAccount]], "DebtInsight | None"]

HIGH_APR_THRESHOLD = 15.0
EMERGENCY_APR_THRESHOLD = 25.0
MORTGAGE_APR_THRESHOLD = 5.5
UTILIZATION_THRESHOLD = 0.30

# 18 months at 0% APR is worth roughly 75% of a year's interest.
BALANCE_TRANSFER_FACTOR = 0.75
AVALANCHE_YEARS = 2
AVALANCHE_REALIZATION = 0.30
# A one percentage point lower rate on the refinanced balance.
REFINANCE_RATE_DROP = 0.01


def with_balance(accounts: Sequence[DebtAccount]) -> list[DebtAccount]:
    return [a for a in accounts if a.balance > 0]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def weighted_apr(accounts: Sequence[DebtAccount]) -> float:
    """Balance-weighted average APR, 0 when there is no balance."""
    total = sum(a.balance for a in accounts)
    if total <= 0:
        return 0.0
    return sum(a.balance / total * a.apr for a in accounts)


def no_debt(accounts: Sequence[DebtAccount]) -> DebtInsight | None:
    if with_balance(accounts):
        return None
    return DebtInsight(
        id="no_debt",
        type=InsightType.WARNING,
        title="Excellent Debt Management!",
        description=(
            "You have no outstanding debt balances. This puts you in a great position "
            "to focus on maximizing rewards and building wealth."
        ),
        priority=Priority.LOW,
        action_items=(
            "Continue using credit cards responsibly",
            "Focus on maximizing rewards from your spending",
            "Consider investing surplus funds for long-term growth",
        ),
        icon="🎉",
    )


def high_apr_balance_transfer(accounts: Sequence[DebtAccount]) -> DebtInsight | None:
    flagged = [a for a in with_balance(accounts) if a.apr > HIGH_APR_THRESHOLD]
    if not flagged:
        return None

    total = sum(a.balance for a in flagged)
    avg_apr = _mean([a.apr for a in flagged])
    return DebtInsight(
        id="balance_transfer",
        type=InsightType.BALANCE_TRANSFER,
        title="Balance Transfer Opportunity Detected",
        description=(
            f"You have {format_money(total)} in high-APR debt (avg {avg_apr:.1f}% APR). "
            "A 0% APR balance transfer card could save you significant interest."
        ),
        priority=Priority.HIGH,
        potential_savings=total * (avg_apr / 100) * BALANCE_TRANSFER_FACTOR,
        action_items=(
            "Apply for a 0% APR balance transfer card",
            f"Transfer {format_money(total)} to eliminate interest charges",
            "Create aggressive payoff plan during 0% period",
            "Avoid new purchases on transferred balances",
        ),
        icon="💳",
    )


def avalanche_target(accounts: Sequence[DebtAccount]) -> DebtAccount:
    """Highest APR first; ties go to the larger balance, then input order."""
    return min(
        enumerate(accounts),
        key=lambda item: (-item[1].apr, -item[1].balance, item[0]),
    )[1]


def avalanche_strategy(accounts: Sequence[DebtAccount]) -> DebtInsight | None:
    active = with_balance(accounts)
    if len(active) <= 1:
        return None

    target = avalanche_target(active)
    total = sum(a.balance for a in active)
    total_minimums = sum(a.minimum_payment for a in active)
    savings = total * (weighted_apr(active) / 100) * AVALANCHE_YEARS * AVALANCHE_REALIZATION
    return DebtInsight(
        id="debt_avalanche",
        type=InsightType.PAYOFF_STRATEGY,
        title="Optimal Debt Payoff Strategy",
        description=(
            'Using the mathematically optimal "Debt Avalanche" method, focus extra payments '
            f"on {target.name} ({target.apr:g}% APR) first."
        ),
        priority=Priority.MEDIUM,
        potential_savings=savings,
        action_items=(
            f"Pay minimum on all accounts ({format_money(total_minimums)}/month)",
            f"Put ALL extra payments toward {target.name}",
            f"After paying off {target.name}, target next highest APR",
            "Consider increasing monthly payment by 20-50% if possible",
        ),
        icon="🎯",
    )


def utilization_warning(accounts: Sequence[DebtAccount]) -> DebtInsight | None:
    cards = [
        a
        for a in accounts
        if "credit" in a.account_type.lower() and a.credit_limit is not None and a.credit_limit > 0
    ]
    ratios = [a.balance / a.credit_limit for a in cards if a.balance / a.credit_limit > UTILIZATION_THRESHOLD]
    if not ratios:
        return None

    avg = _mean(ratios)
    return DebtInsight(
        id="high_utilization",
        type=InsightType.UTILIZATION,
        title="High Credit Utilization Detected",
        description=(
            f"{len(ratios)} card(s) have >{UTILIZATION_THRESHOLD:.0%} utilization "
            f"(avg {avg * 100:.1f}%). This may be hurting your credit score."
        ),
        priority=Priority.MEDIUM,
        action_items=(
            "Pay down balances to below 30% of credit limits",
            "Consider making multiple payments per month",
            "Request credit limit increases on existing cards",
            "Avoid closing old credit cards (reduces available credit)",
        ),
        icon="⚠️",
    )


def _is_mortgage(account: DebtAccount) -> bool:
    kind = account.account_type.lower()
    return "mortgage" in kind or "home" in kind


def refinance_opportunity(accounts: Sequence[DebtAccount]) -> DebtInsight | None:
    flagged = [a for a in with_balance(accounts) if _is_mortgage(a) and a.apr > MORTGAGE_APR_THRESHOLD]
    if not flagged:
        return None

    total = sum(a.balance for a in flagged)
    avg_rate = _mean([a.apr for a in flagged])
    return DebtInsight(
        id="refinance_opportunity",
        type=InsightType.REFINANCE,
        title="Mortgage Refinancing Opportunity",
        description=(
            f"Your mortgage rate of {avg_rate:.2f}% may be higher than current market rates. "
            "Refinancing could reduce monthly payments."
        ),
        priority=Priority.MEDIUM,
        potential_savings=total * REFINANCE_RATE_DROP,
        action_items=(
            "Check current mortgage rates with multiple lenders",
            "Calculate break-even point including closing costs",
            "Consider cash-out refinancing for debt consolidation",
            "Shop around for best rates and terms",
        ),
        icon="🏠",
    )


def emergency_high_apr(accounts: Sequence[DebtAccount]) -> DebtInsight | None:
    flagged = [a for a in with_balance(accounts) if a.apr > EMERGENCY_APR_THRESHOLD]
    if not flagged:
        return None

    total = sum(a.balance for a in flagged)
    return DebtInsight(
        id="emergency_high_apr",
        type=InsightType.WARNING,
        title="Emergency: Extremely High Interest Debt",
        description=(
            f"You have {format_money(total)} in extremely high-interest debt "
            f"(>{EMERGENCY_APR_THRESHOLD:g}% APR). This should be your absolute top priority."
        ),
        priority=Priority.HIGH,
        action_items=(
            "Stop all non-essential spending immediately",
            "Consider personal loan for debt consolidation (lower APR)",
            "Look into credit counseling services",
            "Negotiate payment plans with creditors",
            "Consider balance transfer as emergency measure",
        ),
        icon="🚨",
    )


# Evaluation order; also the tie order among equal priorities.
DEBT_RULES: tuple[DebtRule, ...] = (
    high_apr_balance_transfer,
    avalanche_strategy,
    utilization_warning,
    refinance_opportunity,
    emergency_high_apr,
)
