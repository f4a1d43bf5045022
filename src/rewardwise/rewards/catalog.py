"""Card reward catalog and its category index.

A catalog snapshot is plain data (usually JSON)::

    {
        "AMEX_GOLD": {
            "annualFee": 250,
            "displayName": "American Express Gold",
            "rewards": [
                {"category": "dining", "multiplier": 4, "description": "4x points at restaurants"}
            ]
        }
    }

``CardRewardIndex`` turns it into frozen ``CardProgram`` objects plus an
inverted index ``category -> entries`` built once at load time. An index
is never modified after construction; ``CardIndexHolder`` swaps whole
indexes when the catalog is refreshed.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeFloat,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from rewardwise.core.categories import CanonicalCategory, parse_category
from rewardwise.core.exceptions import CatalogLoadError

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = "cards.json"


class RewardType(str, Enum):
    POINTS = "points"
    CASH_BACK = "cash_back"
    MILES = "miles"


@dataclass(frozen=True, slots=True)
class RewardRule:
    category: CanonicalCategory
    multiplier: float
    reward_type: RewardType
    description: str = ""


@dataclass(frozen=True, slots=True)
class CardProgram:
    id: str
    display_name: str
    annual_fee: float
    rules: tuple[RewardRule, ...]

    def rule_for(self, category: CanonicalCategory) -> RewardRule | None:
        """Best rule for ``category`` (highest multiplier), if the card has one."""
        best = None
        for rule in self.rules:
            if rule.category is category and (best is None or rule.multiplier > best.multiplier):
                best = rule
        return best


@dataclass(frozen=True, slots=True)
class IndexEntry:
    card_id: str
    multiplier: float
    reward_type: RewardType
    description: str


def infer_reward_type(card_id: str, description: str | None) -> RewardType:
    """Guess the reward currency from the rule text when the catalog omits it."""
    text = (description or "").lower()
    if "cash" in text:
        return RewardType.CASH_BACK
    if "mile" in text or "VENTURE" in card_id.upper():
        return RewardType.MILES
    return RewardType.POINTS


class RuleEntry(BaseModel):
    """One reward rule as written in a catalog snapshot."""

    model_config = ConfigDict(allow_inf_nan=False)

    category: str | None = None
    multiplier: NonNegativeFloat = Field(0.0, strict=True)
    reward_type: RewardType | None = Field(
        None, validation_alias=AliasChoices("reward_type", "rewardType")
    )
    description: str = ""

    @field_validator("reward_type", mode="before")
    @classmethod
    def lowercase_reward_type(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @field_validator("description", mode="before")
    @classmethod
    def description_or_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class CardEntry(BaseModel):
    """One card program as written in a catalog snapshot."""

    model_config = ConfigDict(allow_inf_nan=False)

    display_name: str | None = Field(
        None, validation_alias=AliasChoices("display_name", "displayName")
    )
    annual_fee: NonNegativeFloat = Field(
        0.0, strict=True, validation_alias=AliasChoices("annual_fee", "annualFee")
    )
    rules: list[RuleEntry] = Field(validation_alias=AliasChoices("rules", "rewards"))

    @field_validator("rules")
    @classmethod
    def drop_unknown_categories(cls, rules: list[RuleEntry], info: ValidationInfo) -> list[RuleEntry]:
        card_id = (info.context or {}).get("card_id")
        kept = []
        for rule in rules:
            if parse_category(rule.category) is None:
                logger.warning(
                    "Skipping reward rule with unknown category",
                    extra={"card_id": card_id, "category": rule.category},
                )
                continue
            kept.append(rule)
        return kept

    def to_program(self, card_id: str) -> CardProgram:
        rules = tuple(
            RewardRule(
                category=parse_category(rule.category),
                multiplier=rule.multiplier,
                reward_type=rule.reward_type or infer_reward_type(card_id, rule.description),
                description=rule.description,
            )
            for rule in self.rules
        )
        return CardProgram(
            id=card_id,
            display_name=self.display_name or card_id.replace("_", " ").title(),
            annual_fee=self.annual_fee,
            rules=rules,
        )


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(x) for x in error['loc']) or 'entry'}: {error['msg']}" for error in exc.errors()
    )


def parse_card(card_id: str, payload: Any) -> CardProgram:
    """Build a CardProgram from one catalog entry."""
    try:
        entry = CardEntry.model_validate(payload, context={"card_id": card_id})
    except ValidationError as exc:
        raise CatalogLoadError(_describe(exc), card_id=card_id) from exc
    return entry.to_program(card_id)


class CardRewardIndex:
    """Immutable card catalog with O(1) category lookup.

    Entries per category keep only the best rule of each card and are sorted
    by multiplier (desc), then annual fee (asc), then card id.
    """

    __slots__ = ("_cards", "_by_category")

    def __init__(self, cards: Mapping[str, CardProgram] | list[CardProgram]):
        programs = list(cards.values()) if isinstance(cards, Mapping) else list(cards)
        by_id: dict[str, CardProgram] = {}
        for program in programs:
            if program.id in by_id:
                raise CatalogLoadError("duplicate card id", card_id=program.id)
            by_id[program.id] = program

        buckets: dict[CanonicalCategory, list[IndexEntry]] = {}
        for program in by_id.values():
            for category in {rule.category for rule in program.rules}:
                rule = program.rule_for(category)
                buckets.setdefault(category, []).append(
                    IndexEntry(
                        card_id=program.id,
                        multiplier=rule.multiplier,
                        reward_type=rule.reward_type,
                        description=rule.description,
                    )
                )

        for entries in buckets.values():
            entries.sort(key=lambda e: (-e.multiplier, by_id[e.card_id].annual_fee, e.card_id))

        self._cards: Mapping[str, CardProgram] = MappingProxyType(dict(sorted(by_id.items())))
        self._by_category: Mapping[CanonicalCategory, tuple[IndexEntry, ...]] = MappingProxyType(
            {category: tuple(entries) for category, entries in buckets.items()}
        )

    @classmethod
    def from_snapshot(cls, snapshot: Mapping[str, Any]) -> "CardRewardIndex":
        """Build an index from a raw ``card id -> entry`` mapping."""
        if not isinstance(snapshot, Mapping):
            raise CatalogLoadError("catalog snapshot must be an object keyed by card id")
        return cls([parse_card(str(card_id), payload) for card_id, payload in snapshot.items()])

    @property
    def cards(self) -> Mapping[str, CardProgram]:
        return self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._cards

    def get(self, card_id: str) -> CardProgram | None:
        return self._cards.get(card_id)

    def lookup(self, category: CanonicalCategory) -> tuple[IndexEntry, ...]:
        return self._by_category.get(category, ())


def load_catalog(path: str | Path | None = None) -> CardRewardIndex:
    """Read a JSON catalog snapshot; ``None`` loads the bundled catalog."""
    try:
        if path is None:
            raw = resources.files("rewardwise.rewards.data").joinpath(BUNDLED_CATALOG).read_text(encoding="utf-8")
            source = f"bundled:{BUNDLED_CATALOG}"
        else:
            raw = Path(path).read_text(encoding="utf-8")
            source = str(path)
        snapshot = json.loads(raw)
    except (OSError, ValueError) as exc:
        raise CatalogLoadError(f"could not read catalog: {exc}") from exc

    index = CardRewardIndex.from_snapshot(snapshot)
    logger.info("Loaded card catalog from %s", source, extra={"card_count": len(index)})
    return index


class CardIndexHolder:
    """Owns the process-wide index reference.

    Readers use ``current`` without locking. ``reload`` builds the new index
    completely before a single reference assignment, so a reader sees either
    the old or the new index, never a partial one.
    """

    def __init__(self, index: CardRewardIndex):
        self._index = index
        self._write_lock = threading.Lock()

    @property
    def current(self) -> CardRewardIndex:
        return self._index

    def replace(self, index: CardRewardIndex) -> CardRewardIndex:
        with self._write_lock:
            previous = self._index
            self._index = index
        return previous

    def reload(self, snapshot: Mapping[str, Any] | None = None, path: str | Path | None = None) -> CardRewardIndex:
        """Build a fresh index from ``snapshot`` (or ``path``) and swap it in."""
        index = CardRewardIndex.from_snapshot(snapshot) if snapshot is not None else load_catalog(path)
        self.replace(index)
        return index
