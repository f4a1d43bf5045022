"""Pydantic schemas for debt insight API requests/responses."""

from pydantic import BaseModel, ConfigDict, Field

from rewardwise.debt.models import AccountEntry, InsightType, Priority


class DebtAccountIn(AccountEntry):
    """A parsed debt account.

    Keys may be snake_case or camelCase (``accountType``, ``minimumPayment``,
    ``creditLimit``). Non-numeric or negative amounts are treated as 0
    instead of rejecting the request.
    """


class DebtInsightsRequest(BaseModel):
    accounts: list[DebtAccountIn] = Field(default_factory=list)


class DebtInsightResponse(BaseModel):
    id: str
    type: InsightType
    title: str
    description: str
    priority: Priority
    potential_savings: float | None = None
    action_items: list[str]
    icon: str

    model_config = ConfigDict(from_attributes=True)


class DebtSummaryResponse(BaseModel):
    account_count: int
    accounts_with_balance: int
    total_balance: float
    total_minimum_payment: float
    weighted_average_apr: float

    model_config = ConfigDict(from_attributes=True)


class DebtInsightsResponse(BaseModel):
    insights: list[DebtInsightResponse]
    summary: DebtSummaryResponse
