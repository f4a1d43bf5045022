import pytest

from rewardwise.debt.models import (
    MAX_AMOUNT,
    AccountEntry,
    DebtAccount,
    Priority,
    clamp_amount,
    normalize_account,
)
from rewardwise.debt.rules import (
    avalanche_strategy,
    avalanche_target,
    emergency_high_apr,
    high_apr_balance_transfer,
    no_debt,
    refinance_opportunity,
    utilization_warning,
    weighted_apr,
)


def account(name="Card", account_type="credit_card", balance=0.0, apr=0.0, minimum_payment=0.0, credit_limit=None):
    return DebtAccount(
        name=name,
        account_type=account_type,
        balance=balance,
        apr=apr,
        minimum_payment=minimum_payment,
        credit_limit=credit_limit,
    )


class TestNormalization:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (12.5, 12.5),
            ("19.99", 19.99),
            (-40, 0.0),
            (float("nan"), 0.0),
            (float("inf"), 0.0),
            ("n/a", 0.0),
            (None, 0.0),
            (True, 0.0),
        ],
    )
    def test_clamp_amount(self, raw, expected) -> None:
        assert clamp_amount(raw) == expected

    def test_mapping_with_camel_case_keys(self) -> None:
        raw = {"name": "Visa", "accountType": "credit_card", "balance": "1200", "apr": 24.99, "minimumPayment": 35, "creditLimit": 3000}
        normalized = normalize_account(raw)
        assert normalized == account("Visa", "credit_card", 1200.0, 24.99, 35.0, 3000.0)

    def test_input_is_not_modified(self) -> None:
        raw = {"name": "Visa", "balance": -5}
        normalize_account(raw)
        assert raw == {"name": "Visa", "balance": -5}

    def test_missing_limit_stays_unknown(self) -> None:
        assert normalize_account({"balance": 10}).credit_limit is None

    def test_huge_amounts_are_capped(self) -> None:
        assert clamp_amount(1e308) == MAX_AMOUNT

    def test_entry_accepts_both_key_styles(self) -> None:
        snake = AccountEntry.model_validate(
            {"account_type": "Mortgage", "minimum_payment": 1700, "credit_limit": None, "balance": 1}
        )
        camel = AccountEntry.model_validate({"accountType": "Mortgage", "minimumPayment": 1700, "balance": 1})
        assert snake == camel
        assert camel.minimum_payment == 1700.0

    def test_entry_clamps_instead_of_rejecting(self) -> None:
        entry = AccountEntry.model_validate({"balance": "lots", "apr": float("nan"), "creditLimit": -10})
        assert (entry.balance, entry.apr, entry.credit_limit) == (0.0, 0.0, 0.0)

    def test_normalizes_objects_by_attribute(self) -> None:
        raw = account("Visa", balance=100, apr=20)
        assert normalize_account(raw) == raw

    def test_unreadable_account_is_empty(self) -> None:
        assert normalize_account(42) == account("", "")


def test_no_debt_only_without_balances() -> None:
    assert no_debt([]).id == "no_debt"
    assert no_debt([account(balance=0, apr=29)]).priority is Priority.LOW
    assert no_debt([account(balance=1)]) is None


class TestBalanceTransfer:
    def test_aggregates_high_apr_accounts(self) -> None:
        insight = high_apr_balance_transfer(
            [account("A", balance=5000, apr=22), account("B", balance=3000, apr=10)]
        )
        assert insight.id == "balance_transfer"
        assert insight.priority is Priority.HIGH
        assert insight.potential_savings == pytest.approx(5000 * 0.22 * 0.75)
        assert "$5,000.00" in insight.description

    def test_averages_apr(self) -> None:
        insight = high_apr_balance_transfer(
            [account("A", balance=1000, apr=20), account("B", balance=1000, apr=30)]
        )
        assert insight.potential_savings == pytest.approx(2000 * 0.25 * 0.75)

    def test_threshold_is_exclusive(self) -> None:
        assert high_apr_balance_transfer([account(balance=1000, apr=15)]) is None

    def test_zero_balance_ignored(self) -> None:
        assert high_apr_balance_transfer([account(balance=0, apr=29)]) is None


class TestAvalanche:
    def test_needs_two_balances(self) -> None:
        assert avalanche_strategy([account(balance=100, apr=20), account(balance=0, apr=30)]) is None

    def test_targets_highest_apr(self) -> None:
        insight = avalanche_strategy(
            [account("Low", balance=3000, apr=10, minimum_payment=60), account("High", balance=5000, apr=22, minimum_payment=100)]
        )
        assert insight.id == "debt_avalanche"
        assert insight.priority is Priority.MEDIUM
        assert "High" in insight.description
        assert "$160.00/month" in insight.action_items[0]
        # weighted APR 17.5% over 8000, two years, 30% realization
        assert insight.potential_savings == pytest.approx(8000 * 0.175 * 2 * 0.30)

    def test_tie_break_larger_balance_then_input_order(self) -> None:
        small = account("Small", balance=100, apr=20)
        big = account("Big", balance=900, apr=20)
        assert avalanche_target([small, big]) is big

        first = account("First", balance=500, apr=20)
        second = account("Second", balance=500, apr=20)
        assert avalanche_target([first, second]) is first

    def test_weighted_apr(self) -> None:
        assert weighted_apr([]) == 0.0
        assert weighted_apr([account(balance=1000, apr=10), account(balance=3000, apr=20)]) == pytest.approx(17.5)


class TestUtilization:
    def test_flags_cards_over_thirty_percent(self) -> None:
        insight = utilization_warning(
            [
                account("A", balance=800, credit_limit=1000),
                account("B", balance=500, credit_limit=1000),
                account("C", balance=100, credit_limit=1000),
            ]
        )
        assert insight.id == "high_utilization"
        assert insight.description.startswith("2 card(s)")
        assert "avg 65.0%" in insight.description
        assert insight.potential_savings is None

    def test_ignores_non_credit_and_unknown_limits(self) -> None:
        assert utilization_warning([account(account_type="auto_loan", balance=900, credit_limit=1000)]) is None
        assert utilization_warning([account(balance=900, credit_limit=None)]) is None
        assert utilization_warning([account(balance=900, credit_limit=0)]) is None


class TestRefinance:
    def test_mortgage_above_threshold(self) -> None:
        insight = refinance_opportunity([account("House", "Mortgage", balance=300000, apr=6.5)])
        assert insight.id == "refinance_opportunity"
        assert insight.potential_savings == pytest.approx(3000.0)
        assert "6.50%" in insight.description

    def test_home_equity_matches(self) -> None:
        assert refinance_opportunity([account("HELOC", "home_equity", balance=20000, apr=8)]) is not None

    def test_low_rate_mortgage_ignored(self) -> None:
        assert refinance_opportunity([account("House", "mortgage", balance=300000, apr=5.5)]) is None


class TestEmergency:
    def test_extremely_high_apr(self) -> None:
        insight = emergency_high_apr([account(balance=1500, apr=29.99), account(balance=700, apr=26)])
        assert insight.id == "emergency_high_apr"
        assert insight.priority is Priority.HIGH
        assert "$2,200.00" in insight.description

    def test_threshold_is_exclusive(self) -> None:
        assert emergency_high_apr([account(balance=1500, apr=25)]) is None
