"""Card catalog and reward recommendation endpoints."""

from fastapi import APIRouter, Depends, Query

from rewardwise.api.deps import get_card_index
from rewardwise.core.categories import display_name, parse_category
from rewardwise.core.exceptions import InvalidCategoryError
from rewardwise.rewards.catalog import CardRewardIndex
from rewardwise.rewards.optimizer import (
    TransactionRecord,
    cumulative_points,
    optimize_transactions,
    summarize,
)
from rewardwise.rewards.ranker import analyze_business, rank
from rewardwise.schemas.rewards import (
    AnalyzeBusinessRequest,
    BusinessAnalysisResponse,
    CardListResult,
    CardProgramResponse,
    CardRecommendationResponse,
    CumulativePointsResponse,
    OptimizationSummaryResponse,
    OptimizeRequest,
    OptimizeResponse,
    RecommendationListResult,
    TransactionRewardResponse,
)

router = APIRouter(tags=["rewards"])


@router.get(
    "/cards",
    response_model=CardListResult,
    summary="List card programs",
)
async def list_cards(index: CardRewardIndex = Depends(get_card_index)) -> CardListResult:
    """List every card program in the loaded catalog, ordered by id."""
    cards = [CardProgramResponse.model_validate(card) for card in index.cards.values()]
    return CardListResult(cards=cards, total=len(cards))


@router.get(
    "/rewards/{category}/recommendations",
    response_model=RecommendationListResult,
    summary="Rank cards for a category",
    description="""
    Rank card programs for a canonical category.

    Sorting: effective multiplier (descending), annual fee (ascending),
    card id. Cards earning nothing on the category or on general
    purchases are left out. The first card is marked as top choice.
    """,
    responses={400: {"description": "Unknown category"}},
)
async def recommend_cards(
    category: str,
    spend: float | None = Query(None, ge=0, description="Monthly spend in dollars to value"),
    index: CardRewardIndex = Depends(get_card_index),
) -> RecommendationListResult:
    target = parse_category(category)
    if target is None:
        raise InvalidCategoryError(category)

    ranked = rank(target, index, spend_estimate=spend)
    return RecommendationListResult(
        category=target,
        category_display_name=display_name(target),
        recommendations=[CardRecommendationResponse.model_validate(r) for r in ranked],
        total=len(ranked),
    )


@router.post(
    "/rewards/analyze-business",
    response_model=BusinessAnalysisResponse,
    summary="Classify a business and rank cards for it",
)
async def analyze(
    payload: AnalyzeBusinessRequest,
    index: CardRewardIndex = Depends(get_card_index),
) -> BusinessAnalysisResponse:
    analysis = analyze_business(payload.name, payload.tags, index)
    return BusinessAnalysisResponse.model_validate(analysis)


@router.post(
    "/rewards/optimize",
    response_model=OptimizeResponse,
    summary="Compare cards used with the optimal cards",
)
async def optimize(
    payload: OptimizeRequest,
    index: CardRewardIndex = Depends(get_card_index),
) -> OptimizeResponse:
    records = [
        TransactionRecord(
            date=txn.date,
            description=txn.description,
            amount=txn.amount,
            category=txn.category,
            card_id=txn.card_id,
        )
        for txn in payload.transactions
    ]
    rewards = optimize_transactions(records, index)

    return OptimizeResponse(
        transactions=[
            TransactionRewardResponse(
                date=r.transaction.date,
                description=r.transaction.description,
                amount=r.transaction.amount,
                category=r.transaction.category,
                card_id=r.transaction.card_id,
                reward_category=r.reward_category,
                optimal_card=r.optimal_card,
                optimal_points=r.optimal_points,
                actual_points=r.actual_points,
                is_optimal=r.is_optimal,
            )
            for r in rewards
        ],
        summary=OptimizationSummaryResponse.model_validate(summarize(rewards)),
        cumulative=CumulativePointsResponse.model_validate(cumulative_points(rewards)),
    )
