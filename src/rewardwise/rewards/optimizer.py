"""Compare the card used on each transaction with the best card for it.

Points are computed as ``|amount| x multiplier``. A card's multiplier for a
transaction is its effective multiplier (own category rule, else
catch-all); unknown or missing cards earn 1x.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from rewardwise.categorization.rules import classify_transaction_category
from rewardwise.core.categories import CanonicalCategory
from rewardwise.rewards.catalog import CardRewardIndex
from rewardwise.rewards.ranker import effective_entries, rank

BASE_MULTIPLIER = 1.0


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    date: date
    description: str
    amount: float
    category: str = ""
    card_id: str | None = None


@dataclass(frozen=True, slots=True)
class TransactionReward:
    transaction: TransactionRecord
    reward_category: CanonicalCategory
    optimal_card: str | None
    optimal_points: float
    actual_points: float
    is_optimal: bool


@dataclass(frozen=True, slots=True)
class OptimizationSummary:
    total_optimal_points: float
    total_actual_points: float
    points_lost: float
    optimization_rate: float
    non_optimal_transactions: int
    total_transactions: int


@dataclass(frozen=True, slots=True)
class CumulativePoints:
    dates: tuple[date, ...]
    optimal: tuple[float, ...]
    actual: tuple[float, ...]


def card_multiplier(card_id: str | None, category: CanonicalCategory, index: CardRewardIndex) -> float:
    if not card_id or card_id not in index:
        return BASE_MULTIPLIER
    applied = effective_entries(category, index).get(card_id)
    return applied[1].multiplier if applied else BASE_MULTIPLIER


def optimize_transactions(
    transactions: Iterable[TransactionRecord], index: CardRewardIndex
) -> list[TransactionReward]:
    # One ranking per category is enough for a whole statement.
    best_by_category: dict[CanonicalCategory, tuple[str | None, float]] = {}
    results: list[TransactionReward] = []

    for txn in transactions:
        category = classify_transaction_category(txn.category, txn.description)
        if category not in best_by_category:
            ranked = rank(category, index)
            best_by_category[category] = (
                (ranked[0].card_id, ranked[0].multiplier) if ranked else (None, BASE_MULTIPLIER)
            )
        optimal_card, optimal_multiplier = best_by_category[category]

        spend = abs(txn.amount)
        results.append(
            TransactionReward(
                transaction=txn,
                reward_category=category,
                optimal_card=optimal_card,
                optimal_points=spend * optimal_multiplier,
                actual_points=spend * card_multiplier(txn.card_id, category, index),
                is_optimal=optimal_card is not None and txn.card_id == optimal_card,
            )
        )
    return results


def summarize(rewards: Iterable[TransactionReward]) -> OptimizationSummary:
    rows = list(rewards)
    total_optimal = sum(r.optimal_points for r in rows)
    total_actual = sum(r.actual_points for r in rows)
    rate = (total_actual / total_optimal) * 100 if total_optimal > 0 else 100.0
    return OptimizationSummary(
        total_optimal_points=total_optimal,
        total_actual_points=total_actual,
        points_lost=total_optimal - total_actual,
        optimization_rate=rate,
        non_optimal_transactions=sum(1 for r in rows if not r.is_optimal),
        total_transactions=len(rows),
    )


def cumulative_points(rewards: Iterable[TransactionReward]) -> CumulativePoints:
    """Running optimal/actual totals in date order."""
    ordered = sorted(rewards, key=lambda r: r.transaction.date)
    dates: list[date] = []
    optimal: list[float] = []
    actual: list[float] = []
    optimal_total = actual_total = 0.0
    for r in ordered:
        optimal_total += r.optimal_points
        actual_total += r.actual_points
        dates.append(r.transaction.date)
        optimal.append(optimal_total)
        actual.append(actual_total)
    return CumulativePoints(dates=tuple(dates), optimal=tuple(optimal), actual=tuple(actual))
