import pytest
from httpx import ASGITransport, AsyncClient

from rewardwise.main import create_app
from rewardwise.rewards.catalog import CardIndexHolder, CardRewardIndex, load_catalog

SAMPLE_SNAPSHOT = {
    "CARD_A": {
        "annualFee": 0,
        "rewards": [
            {"category": "dining", "multiplier": 4, "description": "4x points on dining"},
            {"category": "catch_all_general_purchases", "multiplier": 1, "description": "1x points"},
        ],
    },
    "CARD_B": {
        "annual_fee": 95,
        "display_name": "Card B Cash",
        "rules": [
            {"category": "grocery", "multiplier": 6, "description": "6% cash back at supermarkets"},
            {"category": "catch_all_general_purchases", "multiplier": 1, "description": "1% cash back"},
        ],
    },
    "CARD_C": {
        "annualFee": 0,
        "rewards": [
            {"category": "catch_all_general_purchases", "multiplier": 2, "description": "2% cash back"},
        ],
    },
    "CARD_D": {
        "annualFee": 395,
        "rewards": [
            {"category": "travel_hotels", "multiplier": 10, "description": "10x miles on hotels"},
            {"category": "catch_all_general_purchases", "multiplier": 0, "description": "nothing else"},
        ],
    },
}


@pytest.fixture
def sample_index() -> CardRewardIndex:
    """Small synthetic catalog covering fallback and exclusion cases."""
    return CardRewardIndex.from_snapshot(SAMPLE_SNAPSHOT)


@pytest.fixture(scope="session")
def bundled_index() -> CardRewardIndex:
    """Catalog shipped with the package."""
    return load_catalog()


@pytest.fixture
def app(sample_index):
    return create_app(CardIndexHolder(sample_index))


@pytest.fixture
async def client(app):
    """Provide test client bound to an app using the sample catalog."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
