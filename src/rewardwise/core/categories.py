"""Canonical reward categories.

Every component of the engine speaks in terms of this closed set. The
priority ordering is used to break ties whenever more than one category
could apply (e.g. a business tagged both ``airport`` and ``travel_agency``)
and is never changed at runtime.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping


class CanonicalCategory(str, Enum):
    DINING = "dining"
    GROCERY = "grocery"
    GAS_STATIONS = "gas_stations"
    TRAVEL_GENERAL = "travel_general"
    TRAVEL_FLIGHTS = "travel_flights"
    TRAVEL_HOTELS = "travel_hotels"
    ENTERTAINMENT_AND_RECREATION = "entertainment_and_recreation"
    STREAMING_SERVICES = "streaming_services"
    DRUGSTORES_AND_PHARMACIES = "drugstores_and_pharmacies"
    FITNESS_AND_WELLNESS = "fitness_and_wellness"
    TRANSIT_AND_RIDESHARE = "transit_and_rideshare"
    CATCH_ALL_GENERAL_PURCHASES = "catch_all_general_purchases"


CATCH_ALL: Final = CanonicalCategory.CATCH_ALL_GENERAL_PURCHASES

# Earlier wins. Specific categories come before the general ones they overlap.
CATEGORY_PRIORITY: Final[tuple[CanonicalCategory, ...]] = (
    CanonicalCategory.DINING,
    CanonicalCategory.GROCERY,
    CanonicalCategory.GAS_STATIONS,
    CanonicalCategory.TRAVEL_FLIGHTS,
    CanonicalCategory.TRAVEL_HOTELS,
    CanonicalCategory.TRAVEL_GENERAL,
    CanonicalCategory.STREAMING_SERVICES,
    CanonicalCategory.ENTERTAINMENT_AND_RECREATION,
    CanonicalCategory.DRUGSTORES_AND_PHARMACIES,
    CanonicalCategory.FITNESS_AND_WELLNESS,
    CanonicalCategory.TRANSIT_AND_RIDESHARE,
    CanonicalCategory.CATCH_ALL_GENERAL_PURCHASES,
)

_PRIORITY_RANK: Final[Mapping[CanonicalCategory, int]] = MappingProxyType(
    {category: rank for rank, category in enumerate(CATEGORY_PRIORITY)}
)

# Monthly spend estimates in dollars, used to value a recommendation.
DEFAULT_MONTHLY_SPEND: Final[float] = 200.0

MONTHLY_SPEND_ESTIMATES: Final[Mapping[CanonicalCategory, float]] = MappingProxyType(
    {
        CanonicalCategory.DINING: 400.0,
        CanonicalCategory.GROCERY: 500.0,
        CanonicalCategory.GAS_STATIONS: 200.0,
        CanonicalCategory.TRAVEL_GENERAL: 300.0,
        CanonicalCategory.TRAVEL_FLIGHTS: 200.0,
        CanonicalCategory.TRAVEL_HOTELS: 250.0,
        CanonicalCategory.ENTERTAINMENT_AND_RECREATION: 150.0,
        CanonicalCategory.STREAMING_SERVICES: 50.0,
        CanonicalCategory.DRUGSTORES_AND_PHARMACIES: 100.0,
        CanonicalCategory.FITNESS_AND_WELLNESS: 100.0,
        CanonicalCategory.TRANSIT_AND_RIDESHARE: 150.0,
        CanonicalCategory.CATCH_ALL_GENERAL_PURCHASES: 200.0,
    }
)

# UI-friendly colors; presentation only, never used for ranking.
CATEGORY_COLORS: Final[Mapping[CanonicalCategory, str]] = MappingProxyType(
    {
        CanonicalCategory.DINING: "#ef4444",
        CanonicalCategory.GROCERY: "#22c55e",
        CanonicalCategory.GAS_STATIONS: "#f59e0b",
        CanonicalCategory.TRAVEL_GENERAL: "#3b82f6",
        CanonicalCategory.TRAVEL_FLIGHTS: "#1d4ed8",
        CanonicalCategory.TRAVEL_HOTELS: "#6366f1",
        CanonicalCategory.ENTERTAINMENT_AND_RECREATION: "#ec4899",
        CanonicalCategory.STREAMING_SERVICES: "#8b5cf6",
        CanonicalCategory.DRUGSTORES_AND_PHARMACIES: "#06b6d4",
        CanonicalCategory.FITNESS_AND_WELLNESS: "#10b981",
        CanonicalCategory.TRANSIT_AND_RIDESHARE: "#f97316",
        CanonicalCategory.CATCH_ALL_GENERAL_PURCHASES: "#6b7280",
    }
)


def parse_category(value: CanonicalCategory | str | None) -> CanonicalCategory | None:
    """Return the canonical member for ``value`` or ``None`` if it is not one."""
    if isinstance(value, CanonicalCategory):
        return value
    if not isinstance(value, str):
        return None
    try:
        return CanonicalCategory(value.strip().lower())
    except ValueError:
        return None


def priority_rank(category: CanonicalCategory) -> int:
    return _PRIORITY_RANK[category]


def highest_priority(categories) -> CanonicalCategory | None:
    """Pick the category that comes first in ``CATEGORY_PRIORITY``."""
    candidates = list(categories)
    if not candidates:
        return None
    return min(candidates, key=priority_rank)


def monthly_spend_estimate(
    category: CanonicalCategory,
    estimates: Mapping[CanonicalCategory, float] | None = None,
    default: float = DEFAULT_MONTHLY_SPEND,
) -> float:
    table = MONTHLY_SPEND_ESTIMATES if estimates is None else estimates
    value = table.get(category)
    if value is None:
        # Allow tables keyed by plain strings (e.g. loaded from JSON).
        value = table.get(category.value)  # type: ignore[call-overload]
    return float(value) if value is not None else default


def display_name(category: CanonicalCategory | str) -> str:
    """``travel_flights`` -> ``Travel Flights``."""
    key = category.value if isinstance(category, CanonicalCategory) else str(category)
    return " ".join(word.capitalize() for word in key.split("_") if word)


def category_color(category: CanonicalCategory | str) -> str:
    parsed = parse_category(category) or CATCH_ALL
    return CATEGORY_COLORS[parsed]
