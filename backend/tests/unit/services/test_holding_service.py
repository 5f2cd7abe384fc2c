"""Tests for HoldingService."""

from datetime import date
from decimal import Decimal

import pytest

from app.constants import DividendStatus
from app.services.dividends.exceptions import InvalidDividendDataError
from app.services.holding_service import HoldingService
from app.services.repositories import HoldingRepository, NotFoundError
from tests.conftest import TEST_USER_ID

PURCHASED = date(2023, 1, 3)


@pytest.fixture
def scheduled_ko(test_account, add_dividend):
    """A scheduled KO dividend of 0.50 per share with no shares held yet."""
    return add_dividend(
        test_account,
        "KO",
        date(2024, 7, 1),
        "0",
        amount_per_share="0.50",
        status=DividendStatus.SCHEDULED,
    )


class TestCreateHolding:
    """Adding lots."""

    def test_creates_lot_and_recomputes_scheduled_dividend(self, db, test_account, scheduled_ko):
        holding = HoldingService(db).create_holding(
            TEST_USER_ID, test_account.id, " ko ", Decimal("40"), Decimal("55"), PURCHASED
        )

        assert holding.ticker == "KO"
        assert scheduled_ko.total_amount == Decimal("20")

    def test_paid_dividend_is_not_touched(self, db, test_account, add_dividend):
        paid = add_dividend(test_account, "KO", date(2024, 4, 1), "15", amount_per_share="0.50")

        HoldingService(db).create_holding(
            TEST_USER_ID, test_account.id, "KO", Decimal("40"), Decimal("55"), PURCHASED
        )

        assert paid.total_amount == Decimal("15")

    @pytest.mark.parametrize("shares,cost,field", [("0", "10", "shares"), ("5", "-1", "avg_cost_basis")])
    def test_invalid_lot_is_rejected(self, db, test_account, shares, cost, field):
        with pytest.raises(InvalidDividendDataError) as exc_info:
            HoldingService(db).create_holding(
                TEST_USER_ID, test_account.id, "KO", Decimal(shares), Decimal(cost), PURCHASED
            )
        assert exc_info.value.field == field

    def test_foreign_account_is_not_found(self, db, other_user_account):
        with pytest.raises(NotFoundError):
            HoldingService(db).create_holding(
                TEST_USER_ID, other_user_account.id, "KO", Decimal("1"), Decimal("1"), PURCHASED
            )


class TestUpdateHolding:
    """Editing lots keeps dividend totals in sync."""

    def test_share_change_recomputes(self, db, test_account, add_lot, scheduled_ko):
        holding = add_lot(test_account, "KO", "40")

        HoldingService(db).update_holding(TEST_USER_ID, holding.id, shares=Decimal("100"))

        assert scheduled_ko.total_amount == Decimal("50")

    def test_moving_lot_refreshes_both_accounts(
        self, db, test_account, second_account, add_lot, add_dividend, scheduled_ko
    ):
        holding = add_lot(test_account, "KO", "40")
        other_side = add_dividend(
            second_account,
            "KO",
            date(2024, 7, 1),
            "0",
            amount_per_share="0.50",
            status=DividendStatus.SCHEDULED,
        )

        HoldingService(db).update_holding(TEST_USER_ID, holding.id, account_id=second_account.id)

        assert scheduled_ko.total_amount == Decimal("0")
        assert other_side.total_amount == Decimal("20")

    def test_renaming_ticker_refreshes_old_ticker(self, db, test_account, add_lot, scheduled_ko):
        holding = add_lot(test_account, "KO", "40")
        service = HoldingService(db)
        service.dividend_service.recompute_for_holding(test_account.id, "KO")
        assert scheduled_ko.total_amount == Decimal("20")

        service.update_holding(TEST_USER_ID, holding.id, ticker="pep")

        assert holding.ticker == "PEP"
        assert scheduled_ko.total_amount == Decimal("0")

    def test_non_positive_shares_are_rejected(self, db, test_account, add_lot):
        holding = add_lot(test_account, "KO", "40")

        with pytest.raises(InvalidDividendDataError):
            HoldingService(db).update_holding(TEST_USER_ID, holding.id, shares=Decimal("-3"))

    def test_other_users_lot_is_not_found(self, db, other_user_account, add_lot):
        holding = add_lot(other_user_account, "KO", "40")

        with pytest.raises(NotFoundError):
            HoldingService(db).update_holding(TEST_USER_ID, holding.id, shares=Decimal("1"))


class TestDeleteHolding:
    """Removing lots."""

    def test_delete_zeroes_scheduled_total(self, db, test_account, add_lot, scheduled_ko):
        holding = add_lot(test_account, "KO", "40")
        service = HoldingService(db)
        service.dividend_service.recompute_for_holding(test_account.id, "KO")

        service.delete_holding(TEST_USER_ID, holding.id)

        assert HoldingRepository(db).find_by_id(holding.id) is None
        assert scheduled_ko.total_amount == Decimal("0")

    def test_remaining_lots_still_count(self, db, test_account, add_lot, scheduled_ko):
        first = add_lot(test_account, "KO", "40")
        add_lot(test_account, "KO", "10")

        HoldingService(db).delete_holding(TEST_USER_ID, first.id)

        assert scheduled_ko.total_amount == Decimal("5")
