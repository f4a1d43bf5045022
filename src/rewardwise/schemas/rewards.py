"""Pydantic schemas for category and reward API requests/responses."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from rewardwise.core.categories import CanonicalCategory
from rewardwise.rewards.catalog import RewardType


class CategoryInfo(BaseModel):
    """One canonical category with presentation metadata."""

    category: CanonicalCategory
    label: str = Field(description="Human readable category name")
    color: str = Field(description="Hex color used by charts")
    priority: int = Field(description="Tie-break rank, 0 is highest")
    monthly_spend_estimate: float = Field(description="Assumed monthly spend in dollars")


class CategoryListResult(BaseModel):
    categories: list[CategoryInfo]
    total: int


class ClassifyRequest(BaseModel):
    name: str = Field("", description="Business name")
    tags: list[str] = Field(default_factory=list, description="Raw business type tags")


class ClassifyResponse(BaseModel):
    category: CanonicalCategory
    label: str
    color: str


class RewardRuleResponse(BaseModel):
    category: CanonicalCategory
    multiplier: float
    reward_type: RewardType
    description: str

    model_config = ConfigDict(from_attributes=True)


class CardProgramResponse(BaseModel):
    """Card program as loaded from the catalog."""

    id: str
    display_name: str
    annual_fee: float = Field(description="Annual fee in dollars")
    rules: list[RewardRuleResponse]

    model_config = ConfigDict(from_attributes=True)


class CardListResult(BaseModel):
    cards: list[CardProgramResponse]
    total: int = Field(description="Total number of cards")


class CardRecommendationResponse(BaseModel):
    card_id: str
    display_name: str
    category: CanonicalCategory = Field(description="Rule category applied (target or catch-all)")
    multiplier: float
    reward_type: RewardType
    description: str
    annual_fee: float
    estimated_monthly_value: float = Field(description="Estimated dollars earned per month")
    is_top_choice: bool

    model_config = ConfigDict(from_attributes=True)


class RecommendationListResult(BaseModel):
    category: CanonicalCategory
    category_display_name: str
    recommendations: list[CardRecommendationResponse]
    total: int


class AnalyzeBusinessRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Business name")
    tags: list[str] = Field(default_factory=list, description="Raw business type tags")


class BusinessAnalysisResponse(BaseModel):
    business_name: str
    reward_category: CanonicalCategory
    category_display_name: str
    recommendations: list[CardRecommendationResponse]
    best_card: CardRecommendationResponse | None = None

    model_config = ConfigDict(from_attributes=True)


class TransactionIn(BaseModel):
    date: date
    description: str
    amount: float
    category: str = ""
    card_id: str | None = Field(None, description="Card used for the purchase")


class OptimizeRequest(BaseModel):
    transactions: list[TransactionIn] = Field(default_factory=list)


class TransactionRewardResponse(BaseModel):
    date: date
    description: str
    amount: float
    category: str
    card_id: str | None
    reward_category: CanonicalCategory
    optimal_card: str | None
    optimal_points: float
    actual_points: float
    is_optimal: bool


class OptimizationSummaryResponse(BaseModel):
    total_optimal_points: float
    total_actual_points: float
    points_lost: float
    optimization_rate: float = Field(description="Actual / optimal points, in percent")
    non_optimal_transactions: int
    total_transactions: int

    model_config = ConfigDict(from_attributes=True)


class CumulativePointsResponse(BaseModel):
    dates: list[date]
    optimal: list[float]
    actual: list[float]

    model_config = ConfigDict(from_attributes=True)


class OptimizeResponse(BaseModel):
    transactions: list[TransactionRewardResponse]
    summary: OptimizationSummaryResponse
    cumulative: CumulativePointsResponse
