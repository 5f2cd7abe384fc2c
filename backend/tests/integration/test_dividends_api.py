"""Integration tests for the dividends and prices APIs."""

from datetime import date, timedelta
from decimal import Decimal

from app.constants import DividendStatus


class TestDividendsApi:
    """Dividend CRUD with derived totals."""

    def test_create_derives_total(self, auth_client, test_account, add_lot):
        add_lot(test_account, "SCHD", "120")

        response = auth_client.post(
            "/api/dividends",
            json={
                "account_id": test_account.id,
                "ticker": "schd",
                "amount_per_share": "0.6647",
                "pay_date": "2024-06-26",
                "status": "paid",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["ticker"] == "SCHD"
        assert data["status"] == "paid"
        assert Decimal(data["total_amount"]) == Decimal("79.764")

    def test_client_total_is_ignored(self, auth_client, test_account):
        response = auth_client.post(
            "/api/dividends",
            json={
                "account_id": test_account.id,
                "ticker": "KO",
                "amount_per_share": "1",
                "total_amount": "1000",
                "pay_date": "2024-06-26",
            },
        )

        assert response.status_code == 201
        assert Decimal(response.json()["total_amount"]) == Decimal("0")
        assert response.json()["status"] == "scheduled"

    def test_negative_amount_is_rejected(self, auth_client, test_account):
        response = auth_client.post(
            "/api/dividends",
            json={
                "account_id": test_account.id,
                "ticker": "KO",
                "amount_per_share": "-0.1",
                "pay_date": "2024-06-26",
            },
        )

        assert response.status_code == 422

    def test_update_amount_recomputes(self, auth_client, test_account, add_lot, add_dividend):
        add_lot(test_account, "KO", "100")
        dividend = add_dividend(test_account, "KO", date(2024, 4, 1), "46", amount_per_share="0.46")

        response = auth_client.put(f"/api/dividends/{dividend.id}", json={"amount_per_share": "0.485"})

        assert response.status_code == 200
        assert Decimal(response.json()["total_amount"]) == Decimal("48.5")

    def test_other_users_dividend_is_not_found(self, auth_client, other_user_account, add_dividend):
        dividend = add_dividend(other_user_account, "KO", date(2024, 4, 1), "46")

        assert auth_client.get(f"/api/dividends/{dividend.id}").status_code == 404
        assert auth_client.delete(f"/api/dividends/{dividend.id}").status_code == 404


class TestDividendListing:
    """Filtered, paginated listing."""

    def test_pagination(self, auth_client, test_account, add_dividend):
        for month in range(1, 6):
            add_dividend(test_account, "O", date(2024, month, 15), "2")

        response = auth_client.get("/api/dividends", params={"skip": 1, "limit": 2})

        data = response.json()
        assert data["total"] == 5
        assert data["has_more"] is True
        assert [d["pay_date"] for d in data["items"]] == ["2024-02-15", "2024-03-15"]

    def test_filters(self, auth_client, test_account, second_account, add_dividend):
        add_dividend(test_account, "KO", date(2024, 4, 1), "46")
        add_dividend(test_account, "KO", date(2024, 7, 1), "46", status=DividendStatus.SCHEDULED)
        add_dividend(second_account, "KO", date(2024, 4, 1), "5")

        by_status = auth_client.get("/api/dividends", params={"status": "scheduled"}).json()
        by_account = auth_client.get(
            "/api/dividends", params={"account_id": second_account.id, "ticker": "ko"}
        ).json()
        by_dates = auth_client.get(
            "/api/dividends", params={"start_date": "2024-05-01", "end_date": "2024-12-31"}
        ).json()

        assert by_status["total"] == 1
        assert by_account["total"] == 1
        assert by_dates["items"][0]["pay_date"] == "2024-07-01"

    def test_unknown_status_is_rejected(self, auth_client):
        assert auth_client.get("/api/dividends", params={"status": "cancelled"}).status_code == 422


class TestPricesApi:
    """Stored closing prices."""

    def test_upsert_and_latest(self, auth_client):
        today = date.today()
        payload = [
            {"ticker": "ko", "date": (today - timedelta(days=1)).isoformat(), "close_price": "60.1"},
            {"ticker": "KO", "date": today.isoformat(), "close_price": "61"},
        ]

        created = auth_client.post("/api/prices", json=payload)
        replaced = auth_client.post(
            "/api/prices", json=[{"ticker": "KO", "date": today.isoformat(), "close_price": "62"}]
        )
        latest = auth_client.get("/api/prices/ko/latest")
        history = auth_client.get("/api/prices/KO/history", params={"days": 7})

        assert created.status_code == 201
        assert replaced.status_code == 201
        assert Decimal(latest.json()["close_price"]) == Decimal("62")
        assert len(history.json()) == 2

    def test_non_positive_close_is_rejected(self, auth_client):
        response = auth_client.post(
            "/api/prices", json=[{"ticker": "KO", "date": "2024-06-14", "close_price": "0"}]
        )

        assert response.status_code == 422

    def test_unknown_ticker_is_not_found(self, auth_client):
        assert auth_client.get("/api/prices/NOPE/latest").status_code == 404
