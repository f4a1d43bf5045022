import json
import logging
import threading

import pytest

from rewardwise.core.categories import CanonicalCategory as C
from rewardwise.core.exceptions import CatalogLoadError
from rewardwise.rewards.catalog import (
    CardIndexHolder,
    CardRewardIndex,
    RewardType,
    infer_reward_type,
    load_catalog,
    parse_card,
)


def test_from_snapshot_builds_programs(sample_index: CardRewardIndex) -> None:
    assert len(sample_index) == 4
    assert list(sample_index.cards) == ["CARD_A", "CARD_B", "CARD_C", "CARD_D"]

    card_b = sample_index.get("CARD_B")
    assert card_b.display_name == "Card B Cash"
    assert card_b.annual_fee == 95
    assert card_b.rule_for(C.GROCERY).multiplier == 6


def test_display_name_defaults_from_id(sample_index: CardRewardIndex) -> None:
    assert sample_index.get("CARD_A").display_name == "Card A"


def test_lookup_sorted_by_multiplier_then_fee_then_id(sample_index: CardRewardIndex) -> None:
    entries = sample_index.lookup(C.CATCH_ALL_GENERAL_PURCHASES)
    assert [e.card_id for e in entries] == ["CARD_C", "CARD_A", "CARD_B", "CARD_D"]


def test_lookup_unknown_category_is_empty(sample_index: CardRewardIndex) -> None:
    assert sample_index.lookup(C.FITNESS_AND_WELLNESS) == ()


def test_index_is_read_only(sample_index: CardRewardIndex) -> None:
    with pytest.raises(TypeError):
        sample_index.cards["NEW"] = sample_index.get("CARD_A")  # type: ignore[index]
    with pytest.raises(AttributeError):
        sample_index.get("CARD_A").annual_fee = 1  # type: ignore[misc]


def test_duplicate_category_keeps_best_multiplier() -> None:
    index = CardRewardIndex.from_snapshot(
        {
            "X": {
                "annualFee": 0,
                "rewards": [
                    {"category": "dining", "multiplier": 2, "description": "2x"},
                    {"category": "dining", "multiplier": 5, "description": "5x promo"},
                ],
            }
        }
    )
    (entry,) = index.lookup(C.DINING)
    assert entry.multiplier == 5
    assert entry.description == "5x promo"


def test_unknown_category_rule_is_skipped(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="rewardwise.rewards.catalog"):
        card = parse_card(
            "X",
            {"annualFee": 0, "rewards": [{"category": "lunar_travel", "multiplier": 9}, {"category": "dining", "multiplier": 2}]},
        )
    assert [rule.category for rule in card.rules] == [C.DINING]
    assert "unknown category" in caplog.text


@pytest.mark.parametrize(
    "payload",
    [
        {"annualFee": 0},
        {"annualFee": -5, "rewards": []},
        {"annualFee": "free", "rewards": []},
        {"annualFee": 0, "rewards": [{"category": "dining", "multiplier": -1}]},
        {"annualFee": 0, "rewards": [{"category": "dining", "multiplier": 2, "rewardType": "gold"}]},
        {"annualFee": 0, "rewards": ["dining"]},
        {"annualFee": float("nan"), "rewards": []},
        {"annualFee": True, "rewards": []},
        {"annualFee": 0, "rewards": [{"category": "dining", "multiplier": float("inf")}]},
        {"annualFee": 0, "rewards": [{"category": "dining", "multiplier": "3"}]},
        "not an object",
    ],
)
def test_invalid_card_entries_raise(payload) -> None:
    with pytest.raises(CatalogLoadError) as exc_info:
        parse_card("BAD", payload)
    assert exc_info.value.error_code == "CATALOG_001"
    assert exc_info.value.card_id == "BAD"


def test_invalid_entry_reason_names_the_field() -> None:
    with pytest.raises(CatalogLoadError) as exc_info:
        parse_card("BAD", {"annualFee": -5, "rewards": []})
    assert "annual" in exc_info.value.reason


def test_snake_and_camel_case_keys_are_equivalent() -> None:
    camel = parse_card(
        "X",
        {"displayName": "X Card", "annualFee": 95, "rewards": [{"category": "dining", "multiplier": 3, "rewardType": "MILES"}]},
    )
    snake = parse_card(
        "X",
        {"display_name": "X Card", "annual_fee": 95, "rules": [{"category": "dining", "multiplier": 3, "reward_type": "miles"}]},
    )
    assert camel == snake
    assert camel.rules[0].reward_type is RewardType.MILES


def test_snapshot_must_be_mapping() -> None:
    with pytest.raises(CatalogLoadError):
        CardRewardIndex.from_snapshot([])  # type: ignore[arg-type]


def test_explicit_reward_type_wins() -> None:
    card = parse_card("X", {"rewards": [{"category": "dining", "multiplier": 3, "description": "3% cash", "reward_type": "miles"}]})
    assert card.rules[0].reward_type is RewardType.MILES


@pytest.mark.parametrize(
    "card_id,description,expected",
    [
        ("ANY", "3% cash back on dining", RewardType.CASH_BACK),
        ("ANY", "2x miles on everything", RewardType.MILES),
        ("CAPITAL_ONE_VENTURE", "2x on everything", RewardType.MILES),
        ("ANY", "4x points at restaurants", RewardType.POINTS),
        ("ANY", None, RewardType.POINTS),
    ],
)
def test_infer_reward_type(card_id, description, expected) -> None:
    assert infer_reward_type(card_id, description) is expected


def test_load_bundled_catalog(bundled_index: CardRewardIndex) -> None:
    assert len(bundled_index) == 8
    assert "AMEX_GOLD" in bundled_index
    amex = bundled_index.get("AMEX_GOLD")
    assert amex.annual_fee == 250
    assert amex.rule_for(C.DINING).reward_type is RewardType.POINTS
    venture = bundled_index.get("CAPITAL_ONE_VENTURE_X_REWARDS")
    assert venture.rule_for(C.CATCH_ALL_GENERAL_PURCHASES).reward_type is RewardType.MILES


def test_load_catalog_from_file(tmp_path) -> None:
    path = tmp_path / "cards.json"
    path.write_text(json.dumps({"ONLY": {"annualFee": 0, "rewards": [{"category": "grocery", "multiplier": 3}]}}))
    index = load_catalog(path)
    assert list(index.cards) == ["ONLY"]


def test_load_catalog_bad_file(tmp_path) -> None:
    missing = tmp_path / "missing.json"
    with pytest.raises(CatalogLoadError):
        load_catalog(missing)

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(CatalogLoadError):
        load_catalog(broken)


class TestCardIndexHolder:
    def test_reload_swaps_whole_index(self, sample_index: CardRewardIndex) -> None:
        holder = CardIndexHolder(sample_index)
        before = holder.current

        new_index = holder.reload({"NEW": {"annualFee": 0, "rewards": [{"category": "dining", "multiplier": 1}]}})

        assert holder.current is new_index
        assert list(holder.current.cards) == ["NEW"]
        # Readers holding the previous snapshot keep a complete catalog.
        assert len(before) == 4

    def test_failed_reload_keeps_current_index(self, sample_index: CardRewardIndex) -> None:
        holder = CardIndexHolder(sample_index)
        with pytest.raises(CatalogLoadError):
            holder.reload({"BAD": {"annualFee": -1, "rewards": []}})
        assert holder.current is sample_index

    def test_concurrent_readers_see_complete_indexes(self, sample_index: CardRewardIndex) -> None:
        holder = CardIndexHolder(sample_index)
        snapshot = {"NEW": {"annualFee": 0, "rewards": [{"category": "dining", "multiplier": 1}]}}
        sizes: set[int] = set()
        stop = threading.Event()

        def read() -> None:
            while not stop.is_set():
                sizes.add(len(holder.current))

        readers = [threading.Thread(target=read) for _ in range(4)]
        for t in readers:
            t.start()
        for _ in range(50):
            holder.reload(snapshot)
            holder.replace(sample_index)
        stop.set()
        for t in readers:
            t.join()

        assert sizes <= {1, 4}
