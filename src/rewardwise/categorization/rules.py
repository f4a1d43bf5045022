"""Deterministic business categorization.

Places/search providers describe a business with a name and a bag of raw
type tags (``restaurant``, ``meal_takeaway``, ``gas_station`` ...). Reward
programs, however, are expressed against a small closed set of canonical
categories. This module bridges the two.

Matching runs in strict steps, first step with a hit wins:

1. exact tag lookup
2. keyword fragments found in a tag
3. merchant-name overrides for well-known chains
4. ``catch_all_general_purchases``

Inside one step every rule is evaluated and ties are broken with
``CATEGORY_PRIORITY``, never by table order.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable

from rewardwise.core.categories import (
    CATCH_ALL,
    CanonicalCategory as C,
    highest_priority,
    parse_category,
)

logger = logging.getLogger(__name__)

_PUNCT = re.compile(r"[^a-z0-9]+")


def normalize_tag(tag: object) -> str:
    """Lowercase and replace punctuation runs (``_``, ``-``, ``&`` ...) by one space."""
    if not isinstance(tag, str):
        return ""
    return _PUNCT.sub(" ", tag.lower()).strip()


@dataclass(frozen=True)
class TagRule:
    """Exact tag match. ``tag`` is stored normalized."""

    tag: str
    category: C

    def matches(self, normalized_tag: str) -> bool:
        return normalized_tag == self.tag


@dataclass(frozen=True)
class KeywordRule:
    """Keyword fragments matched at word starts inside a normalized text."""

    category: C
    pattern: re.Pattern[str]

    def matches(self, text: str) -> bool:
        return bool(self.pattern.search(text))


def _tags(category: C, *tags: str) -> tuple[TagRule, ...]:
    return tuple(TagRule(normalize_tag(tag), category) for tag in tags)


def _keywords(category: C, *fragments: str) -> KeywordRule:
    # Fragments must start a word; plural/suffixed forms still match.
    alternation = "|".join(re.escape(fragment) for fragment in fragments)
    return KeywordRule(category, re.compile(rf"\b(?:{alternation})"))


def _names(category: C, *names: str) -> KeywordRule:
    # Merchant names must match as whole words ("bp" should not hit "bpm").
    alternation = "|".join(re.escape(name) for name in names)
    return KeywordRule(category, re.compile(rf"\b(?:{alternation})\b"))


TAG_RULES: tuple[TagRule, ...] = (
    *_tags(C.DINING, "restaurant", "food", "meal_takeaway", "meal_delivery", "bar", "cafe", "bakery", "fast_food"),
    *_tags(C.GROCERY, "grocery_or_supermarket", "supermarket", "convenience_store", "liquor_store"),
    *_tags(C.TRAVEL_HOTELS, "lodging", "hotel"),
    *_tags(C.TRAVEL_FLIGHTS, "airport"),
    *_tags(C.TRAVEL_GENERAL, "travel_agency", "tourist_attraction"),
    *_tags(C.GAS_STATIONS, "gas_station", "gas", "fuel"),
    *_tags(
        C.ENTERTAINMENT_AND_RECREATION,
        "movie_theater",
        "amusement_park",
        "bowling_alley",
        "casino",
        "night_club",
        "zoo",
        "aquarium",
    ),
    *_tags(C.DRUGSTORES_AND_PHARMACIES, "pharmacy", "drugstore", "health"),
    *_tags(C.FITNESS_AND_WELLNESS, "gym", "spa", "fitness"),
    *_tags(C.TRANSIT_AND_RIDESHARE, "taxi_stand", "subway_station", "bus_station", "train_station", "transit_station"),
)

KEYWORD_RULES: tuple[KeywordRule, ...] = (
    _keywords(C.DINING, "restaurant", "cafe", "coffee", "bakery", "diner", "pizz", "bistro", "eatery", "takeaway", "food"),
    _keywords(C.GROCERY, "grocer", "supermarket", "convenience store", "farmers market"),
    _keywords(C.GAS_STATIONS, "gas station", "gasoline", "fuel", "petrol", "ev charging"),
    _keywords(C.TRAVEL_FLIGHTS, "airport", "airline", "flight", "aviation"),
    _keywords(C.TRAVEL_HOTELS, "hotel", "lodging", "motel", "resort", "hostel"),
    _keywords(C.TRAVEL_GENERAL, "travel", "tourist", "cruise", "campground"),
    _keywords(C.STREAMING_SERVICES, "streaming", "video on demand"),
    _keywords(
        C.ENTERTAINMENT_AND_RECREATION,
        "movie",
        "cinema",
        "theater",
        "theatre",
        "amusement",
        "museum",
        "stadium",
        "bowling",
        "casino",
        "concert",
    ),
    _keywords(C.DRUGSTORES_AND_PHARMACIES, "pharmac", "drugstore", "drug store", "chemist"),
    _keywords(C.FITNESS_AND_WELLNESS, "gym", "fitness", "day spa", "yoga", "wellness", "pilates", "massage"),
    _keywords(C.TRANSIT_AND_RIDESHARE, "transit", "taxi", "rideshare", "subway station", "bus station", "train station", "railway"),
)

# Named partners; keep narrow, tags win whenever they say anything.
MERCHANT_NAME_RULES: tuple[KeywordRule, ...] = (
    _names(C.DINING, "starbucks", "mcdonalds", "mcdonald s", "subway", "chipotle", "five guys", "cheesecake factory"),
    _names(C.GROCERY, "walmart", "target", "costco", "whole foods", "trader joe"),
    _names(C.GAS_STATIONS, "shell", "chevron", "exxon", "bp"),
    _names(C.DRUGSTORES_AND_PHARMACIES, "cvs", "walgreens", "rite aid"),
    _names(C.STREAMING_SERVICES, "netflix", "spotify", "hulu"),
    _names(C.TRANSIT_AND_RIDESHARE, "uber", "lyft"),
)


def _match_exact_tags(tags: list[str]) -> C | None:
    hits = {rule.category for tag in tags for rule in TAG_RULES if rule.matches(tag)}
    return highest_priority(hits)


def _match_keyword_tags(tags: list[str]) -> C | None:
    hits = {rule.category for tag in tags for rule in KEYWORD_RULES if rule.matches(tag)}
    return highest_priority(hits)


def _match_merchant_name(name: str) -> C | None:
    if not name:
        return None
    hits = {rule.category for rule in MERCHANT_NAME_RULES if rule.matches(name)}
    return highest_priority(hits)


def classify(name: str | None, tags: Iterable[object] | None = None) -> C:
    """Map a business name and raw type tags to one canonical category.

    Args:
        name: Business display name (may be empty or None).
        tags: Raw type tags from a places provider. Non-string items are ignored.

    Returns:
        A member of CanonicalCategory; ``catch_all_general_purchases`` when
        nothing matches.
    """
    if isinstance(tags, str):
        tags = [tags]
    try:
        normalized_tags = [t for t in (normalize_tag(tag) for tag in (tags or ())) if t]
    except TypeError:
        # Non-iterable tags are treated as no tags.
        normalized_tags = []
    normalized_name = normalize_tag(name)

    steps = (
        ("exact_tag", lambda: _match_exact_tags(normalized_tags)),
        ("keyword_tag", lambda: _match_keyword_tags(normalized_tags)),
        ("merchant_name", lambda: _match_merchant_name(normalized_name)),
    )
    for step, match in steps:
        category = match()
        if category is not None:
            logger.debug("Classified %r via %s as %s", name, step, category.value)
            return category

    logger.debug("No category match for %r, using catch-all", name)
    return CATCH_ALL


# Bank / CSV export categories that don't name a canonical category directly.
TRANSACTION_CATEGORY_ALIASES: dict[str, C] = {
    "food drink": C.DINING,
    "food": C.DINING,
    "restaurants": C.DINING,
    "dining": C.DINING,
    "groceries": C.GROCERY,
    "supermarkets": C.GROCERY,
    "travel": C.TRAVEL_GENERAL,
    "airfare": C.TRAVEL_FLIGHTS,
    "hotels": C.TRAVEL_HOTELS,
    "transportation": C.TRANSIT_AND_RIDESHARE,
    "gas": C.GAS_STATIONS,
    "fuel": C.GAS_STATIONS,
    "entertainment": C.ENTERTAINMENT_AND_RECREATION,
    "streaming": C.STREAMING_SERVICES,
    "subscriptions": C.STREAMING_SERVICES,
    "pharmacy": C.DRUGSTORES_AND_PHARMACIES,
    "health": C.DRUGSTORES_AND_PHARMACIES,
    "health wellness": C.FITNESS_AND_WELLNESS,
    "fitness": C.FITNESS_AND_WELLNESS,
    "gym": C.FITNESS_AND_WELLNESS,
    "shopping": C.CATCH_ALL_GENERAL_PURCHASES,
    "bills utilities": C.CATCH_ALL_GENERAL_PURCHASES,
    "personal": C.CATCH_ALL_GENERAL_PURCHASES,
    "automotive": C.CATCH_ALL_GENERAL_PURCHASES,
    "home": C.CATCH_ALL_GENERAL_PURCHASES,
}


def classify_transaction_category(category: str | None, description: str | None = None) -> C:
    """Map a statement transaction category (and description) to a canonical category.

    Order: canonical value as-is, alias table, then the business classifier
    with the description as name and the category as its only tag.
    """
    canonical = parse_category(category)
    if canonical is not None:
        return canonical

    alias = TRANSACTION_CATEGORY_ALIASES.get(normalize_tag(category))
    if alias is not None:
        return alias

    return classify(description, [category] if category else [])
