"""Debt account and insight records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Mapping

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    FiniteFloat,
    TypeAdapter,
    ValidationError,
    field_validator,
)

logger = logging.getLogger(__name__)


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_RANK: Final[dict[Priority, int]] = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


class InsightType(str, Enum):
    BALANCE_TRANSFER = "balance_transfer"
    PAYOFF_STRATEGY = "payoff_strategy"
    REFINANCE = "refinance"
    UTILIZATION = "utilization"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class DebtAccount:
    """One normalized debt account, as seen by the rules."""

    name: str
    account_type: str
    balance: float = 0.0
    apr: float = 0.0
    minimum_payment: float = 0.0
    credit_limit: float | None = None


@dataclass(frozen=True, slots=True)
class DebtInsight:
    id: str
    type: InsightType
    title: str
    description: str
    priority: Priority
    action_items: tuple[str, ...]
    icon: str
    potential_savings: float | None = None


@dataclass(frozen=True, slots=True)
class DebtSummary:
    account_count: int
    accounts_with_balance: int
    total_balance: float
    total_minimum_payment: float
    weighted_average_apr: float


# Amounts and rates above this are capped so aggregates stay finite.
MAX_AMOUNT: Final[float] = 1e12

_FINITE = TypeAdapter(FiniteFloat)


def clamp_amount(value: Any) -> float:
    """Coerce to a finite float in ``[0, MAX_AMOUNT]``; unusable values become 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        number = _FINITE.validate_python(value)
    except ValidationError:
        return 0.0
    return min(max(number, 0.0), MAX_AMOUNT)


class AccountEntry(BaseModel):
    """A debt account as supplied by a caller (snake_case or camelCase keys).

    Amounts never fail validation: non-numeric, non-finite or negative
    values become 0.
    """

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(
        "", validation_alias=AliasChoices("name", "account_name", "accountName"),
        description="Account display name",
    )
    account_type: str = Field(
        "", validation_alias=AliasChoices("account_type", "accountType"),
        description="Free text, e.g. 'Credit Card', 'Mortgage'",
    )
    balance: float = Field(0.0, description="Current balance in dollars")
    apr: float = Field(0.0, description="Annual percentage rate, e.g. 22.5")
    minimum_payment: float = Field(
        0.0, validation_alias=AliasChoices("minimum_payment", "minimumPayment"),
        description="Minimum monthly payment in dollars",
    )
    credit_limit: float | None = Field(
        None, validation_alias=AliasChoices("credit_limit", "creditLimit"),
        description="Credit limit for revolving accounts",
    )

    @field_validator("name", "account_type", mode="before")
    @classmethod
    def text_or_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("balance", "apr", "minimum_payment", mode="before")
    @classmethod
    def clamp(cls, v: Any) -> float:
        return clamp_amount(v)

    @field_validator("credit_limit", mode="before")
    @classmethod
    def clamp_limit(cls, v: Any) -> float | None:
        return None if v is None else clamp_amount(v)


def normalize_account(account: DebtAccount | AccountEntry | Mapping[str, Any]) -> DebtAccount:
    """Return a clean copy of ``account``; the input is never modified."""
    if isinstance(account, AccountEntry):
        entry = account
    else:
        try:
            entry = AccountEntry.model_validate(account)
        except ValidationError:
            logger.warning("Unreadable debt account of type %s, treating as empty", type(account).__name__)
            entry = AccountEntry()
    return DebtAccount(**entry.model_dump())


def format_money(amount: float) -> str:
    return f"${amount:,.2f}"
