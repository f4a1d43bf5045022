"""Category endpoints."""

from fastapi import APIRouter

from rewardwise.categorization import classify
from rewardwise.core.categories import (
    CATEGORY_PRIORITY,
    category_color,
    display_name,
    monthly_spend_estimate,
    priority_rank,
)
from rewardwise.schemas.rewards import (
    CategoryInfo,
    CategoryListResult,
    ClassifyRequest,
    ClassifyResponse,
)

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get(
    "",
    response_model=CategoryListResult,
    summary="List canonical reward categories",
)
async def list_categories() -> CategoryListResult:
    """List the closed category set in priority order."""
    categories = [
        CategoryInfo(
            category=category,
            label=display_name(category),
            color=category_color(category),
            priority=priority_rank(category),
            monthly_spend_estimate=monthly_spend_estimate(category),
        )
        for category in CATEGORY_PRIORITY
    ]
    return CategoryListResult(categories=categories, total=len(categories))


@router.post(
    "/classify",
    response_model=ClassifyResponse,
    summary="Classify a business",
    description="""
    Map a business name and its raw type tags (as returned by a places
    search) to one canonical reward category. Never fails: unmatched input
    is classified as `catch_all_general_purchases`.
    """,
)
async def classify_business(payload: ClassifyRequest) -> ClassifyResponse:
    category = classify(payload.name, payload.tags)
    return ClassifyResponse(category=category, label=display_name(category), color=category_color(category))
