"""Tests for PriceRepository."""

from datetime import date
from decimal import Decimal

import pytest

from app.services.repositories import NotFoundError, PriceRepository


@pytest.fixture
def price_history(add_price):
    add_price("KO", date(2024, 6, 10), "58")
    add_price("KO", date(2024, 6, 11), "59")
    add_price("KO", date(2024, 6, 12), "60")
    add_price("PEP", date(2024, 6, 10), "170")


class TestPriceRepository:
    """Test PriceRepository."""

    def test_find_latest_price(self, db, price_history):
        repo = PriceRepository(db)

        assert repo.find_latest_price("KO").close_price == Decimal("60")
        assert repo.find_latest_price("KO", as_of=date(2024, 6, 11)).close_price == Decimal("59")

    def test_find_latest_price_not_found(self, db):
        repo = PriceRepository(db)
        assert repo.find_latest_price("NOPE") is None

    def test_get_latest_price_raises(self, db, price_history):
        repo = PriceRepository(db)
        with pytest.raises(NotFoundError):
            repo.get_latest_price("KO", as_of=date(2024, 1, 1))

    def test_find_latest_prices(self, db, price_history):
        repo = PriceRepository(db)

        latest = repo.find_latest_prices(["KO", "PEP", "NOPE"], as_of=date(2024, 6, 11))

        assert set(latest) == {"KO", "PEP"}
        assert latest["KO"].date == date(2024, 6, 11)
        assert latest["PEP"].close_price == Decimal("170")

    def test_find_latest_prices_empty(self, db):
        assert PriceRepository(db).find_latest_prices([]) == {}

    def test_find_daily_prices(self, db, price_history):
        repo = PriceRepository(db)

        daily = repo.find_daily_prices(["KO", "PEP"], date(2024, 6, 10), date(2024, 6, 11))

        assert list(daily) == [date(2024, 6, 10), date(2024, 6, 11)]
        assert daily[date(2024, 6, 10)] == {"KO": Decimal("58"), "PEP": Decimal("170")}
        assert daily[date(2024, 6, 11)] == {"KO": Decimal("59")}

    def test_find_price_history(self, db, price_history):
        rows = PriceRepository(db).find_price_history("KO", date(2024, 6, 11), date(2024, 6, 30))

        assert [r.date for r in rows] == [date(2024, 6, 11), date(2024, 6, 12)]

    def test_upsert_price(self, db, price_history):
        repo = PriceRepository(db)

        repo.upsert_price("KO", date(2024, 6, 12), Decimal("61"))
        repo.upsert_price("KO", date(2024, 6, 13), Decimal("62"))
        db.commit()

        assert repo.find_latest_price("KO", as_of=date(2024, 6, 12)).close_price == Decimal("61")
        assert len(repo.find_price_history("KO", date(2024, 6, 1), date(2024, 6, 30))) == 4
