"""API version 1 routes."""

from fastapi import APIRouter

from rewardwise.api.v1 import categories, debt, rewards

router = APIRouter(prefix="/api/v1")

# Include routers
router.include_router(categories.router)
router.include_router(rewards.router)
router.include_router(debt.router)
