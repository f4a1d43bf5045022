"""API dependencies."""

from fastapi import Request

from rewardwise.rewards.catalog import CardIndexHolder, CardRewardIndex


def get_index_holder(request: Request) -> CardIndexHolder:
    """Return the process-wide catalog holder created at startup."""
    return request.app.state.card_index_holder


def get_card_index(request: Request) -> CardRewardIndex:
    """Snapshot of the current catalog index.

    Resolved once per request so a concurrent reload can't change the
    catalog halfway through a handler.
    """
    return get_index_holder(request).current
