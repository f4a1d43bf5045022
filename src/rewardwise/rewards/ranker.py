"""Rank card reward programs for a canonical category."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Final, Iterable, Mapping

from rewardwise.categorization.rules import classify
from rewardwise.core.categories import (
    CATCH_ALL,
    DEFAULT_MONTHLY_SPEND,
    CanonicalCategory,
    display_name,
    monthly_spend_estimate,
)
from rewardwise.core.exceptions import InvalidCategoryError
from rewardwise.rewards.catalog import CardRewardIndex, IndexEntry, RewardType

logger = logging.getLogger(__name__)

# Cents of value per unit of reward, relative to cash back.
CONVERSION_FACTORS: Final[Mapping[RewardType, float]] = MappingProxyType(
    {
        RewardType.CASH_BACK: 1.0,
        RewardType.POINTS: 1.2,
        RewardType.MILES: 1.5,
    }
)


@dataclass(frozen=True, slots=True)
class CardRecommendation:
    card_id: str
    display_name: str
    category: CanonicalCategory
    multiplier: float
    reward_type: RewardType
    description: str
    annual_fee: float
    estimated_monthly_value: float
    is_top_choice: bool = False


@dataclass(frozen=True, slots=True)
class BusinessAnalysis:
    business_name: str
    reward_category: CanonicalCategory
    category_display_name: str
    recommendations: tuple[CardRecommendation, ...]
    best_card: CardRecommendation | None


def estimate_value(multiplier: float, reward_type: RewardType, spend: float) -> float:
    """Dollar value of ``spend`` earned at ``multiplier`` in ``reward_type``."""
    return spend * (multiplier / 100) * CONVERSION_FACTORS[reward_type]


def effective_entries(
    category: CanonicalCategory, index: CardRewardIndex
) -> dict[str, tuple[CanonicalCategory, IndexEntry]]:
    """Applicable rule per card: the category's own rule, else catch-all.

    Rules with a zero multiplier don't count; cards left without any rule
    are absent from the result.
    """
    chosen: dict[str, tuple[CanonicalCategory, IndexEntry]] = {}
    for entry in index.lookup(category):
        if entry.multiplier > 0:
            chosen[entry.card_id] = (category, entry)
    if category is not CATCH_ALL:
        for entry in index.lookup(CATCH_ALL):
            if entry.multiplier > 0 and entry.card_id not in chosen:
                chosen[entry.card_id] = (CATCH_ALL, entry)
    return chosen


def rank(
    category: CanonicalCategory | str,
    index: CardRewardIndex,
    spend_estimate: float | None = None,
    spend_estimates: Mapping[CanonicalCategory, float] | None = None,
    default_spend: float = DEFAULT_MONTHLY_SPEND,
) -> list[CardRecommendation]:
    """Rank every qualifying card for ``category``.

    Args:
        category: Canonical category, a member or its exact string value.
        index: Card catalog index.
        spend_estimate: Monthly spend to value; overrides the table.
        spend_estimates: Category -> monthly spend table. Defaults to
            MONTHLY_SPEND_ESTIMATES.
        default_spend: Spend used when the table has no entry for the category.

    Returns:
        Recommendations sorted by multiplier desc, annual fee asc, card id asc.
        Only the first one is marked as top choice. Empty when no card has a
        positive multiplier for the category or catch-all.

    Raises:
        InvalidCategoryError: ``category`` is outside the canonical set.
        ValueError: The monthly spend is negative or not finite.
    """
    try:
        target = CanonicalCategory(category)
    except ValueError:
        raise InvalidCategoryError(category) from None

    spend = (
        float(spend_estimate)
        if spend_estimate is not None
        else monthly_spend_estimate(target, spend_estimates, default_spend)
    )
    if not math.isfinite(spend) or spend < 0:
        raise ValueError(f"monthly spend must be a non-negative number, got {spend!r}")

    ranked: list[CardRecommendation] = []
    for card_id, (applied, entry) in effective_entries(target, index).items():
        card = index.cards[card_id]
        ranked.append(
            CardRecommendation(
                card_id=card_id,
                display_name=card.display_name,
                category=applied,
                multiplier=entry.multiplier,
                reward_type=entry.reward_type,
                description=entry.description
                or f"{entry.multiplier:g}x rewards on {display_name(applied)}",
                annual_fee=card.annual_fee,
                estimated_monthly_value=estimate_value(entry.multiplier, entry.reward_type, spend),
            )
        )

    ranked.sort(key=lambda r: (-r.multiplier, r.annual_fee, r.card_id))

    if ranked:
        ranked[0] = replace(ranked[0], is_top_choice=True)

    logger.debug(
        "Ranked %d cards for %s (top: %s)",
        len(ranked),
        target.value,
        ranked[0].card_id if ranked else None,
    )
    return ranked


def analyze_business(
    name: str | None,
    tags: Iterable[object] | None,
    index: CardRewardIndex,
    spend_estimates: Mapping[CanonicalCategory, float] | None = None,
) -> BusinessAnalysis:
    """Classify a business and rank cards for its category."""
    category = classify(name, tags)
    recommendations = tuple(rank(category, index, spend_estimates=spend_estimates))
    return BusinessAnalysis(
        business_name=name or "",
        reward_category=category,
        category_display_name=display_name(category),
        recommendations=recommendations,
        best_card=recommendations[0] if recommendations else None,
    )
