"""Card reward catalog, ranking and transaction optimization."""

from .catalog import (
    CardIndexHolder,
    CardProgram,
    CardRewardIndex,
    RewardRule,
    RewardType,
    load_catalog,
)
from .ranker import BusinessAnalysis, CardRecommendation, analyze_business, estimate_value, rank

__all__ = [
    "BusinessAnalysis",
    "CardIndexHolder",
    "CardProgram",
    "CardRecommendation",
    "CardRewardIndex",
    "RewardRule",
    "RewardType",
    "analyze_business",
    "estimate_value",
    "load_catalog",
    "rank",
]
