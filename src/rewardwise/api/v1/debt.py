"""Debt insight endpoints."""

from fastapi import APIRouter

from rewardwise.debt import evaluate, summarize_debt
from rewardwise.schemas.debt import (
    DebtInsightResponse,
    DebtInsightsRequest,
    DebtInsightsResponse,
    DebtSummaryResponse,
)

router = APIRouter(prefix="/debt", tags=["debt"])


@router.post(
    "/insights",
    response_model=DebtInsightsResponse,
    summary="Evaluate a debt portfolio",
    description="""
    Run the debt heuristics over a list of accounts.

    Insights are ordered high, medium, low priority. A portfolio without
    any outstanding balance returns a single `no_debt` insight.
    Non-numeric or negative amounts are treated as 0.
    """,
)
async def debt_insights(payload: DebtInsightsRequest) -> DebtInsightsResponse:
    insights = evaluate(payload.accounts)
    return DebtInsightsResponse(
        insights=[DebtInsightResponse.model_validate(i) for i in insights],
        summary=DebtSummaryResponse.model_validate(summarize_debt(payload.accounts)),
    )
