from fastapi import APIRouter, Depends

from rewardwise.api.deps import get_card_index
from rewardwise.rewards.catalog import CardRewardIndex

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Basic health check."""
    return {"status": "ok"}


@router.get("/health/ready")
async def health_ready(index: CardRewardIndex = Depends(get_card_index)):
    """Readiness check: the card catalog is loaded."""
    return {"status": "ready", "catalog": "loaded", "cards": len(index)}
