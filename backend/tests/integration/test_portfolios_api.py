"""Integration tests for the portfolios API."""

from datetime import date, timedelta

from tests.conftest import OTHER_USER_ID


class TestPortfolioCrud:
    """Create, read, update and delete portfolios."""

    def test_create_portfolio(self, auth_client):
        response = auth_client.post(
            "/api/portfolios", json={"name": "Income", "description": "Dividend payers"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Income"
        assert data["user_id"] == "user-test"

    def test_duplicate_name_conflicts(self, auth_client, test_portfolio):
        response = auth_client.post("/api/portfolios", json={"name": test_portfolio.name})

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "Duplicate"
        assert body["details"][0]["field"] == "name"
        assert body["path"] == "/api/portfolios"

    def test_list_includes_account_count(self, auth_client, test_account, second_account):
        response = auth_client.get("/api/portfolios")

        assert response.status_code == 200
        portfolios = response.json()
        assert len(portfolios) == 1
        assert portfolios[0]["account_count"] == 2

    def test_rename_to_existing_name_conflicts(self, auth_client, test_portfolio):
        auth_client.post("/api/portfolios", json={"name": "Second"})

        response = auth_client.put(f"/api/portfolios/{test_portfolio.id}", json={"name": "Second"})

        assert response.status_code == 409

    def test_rename(self, auth_client, test_portfolio):
        response = auth_client.put(f"/api/portfolios/{test_portfolio.id}", json={"name": "Renamed"})

        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"

    def test_other_users_portfolio_is_not_found(self, auth_client, other_user_account):
        response = auth_client.get(f"/api/portfolios/{other_user_account.portfolio_id}")

        assert response.status_code == 404
        assert response.json()["error"] == "NotFound"

    def test_delete_cascades(self, auth_client, test_portfolio, test_account, add_lot):
        add_lot(test_account, "KO", "10")

        response = auth_client.delete(f"/api/portfolios/{test_portfolio.id}")

        assert response.status_code == 204
        assert auth_client.get(f"/api/portfolios/{test_portfolio.id}").status_code == 404
        assert auth_client.get("/api/holdings").json() == []

    def test_other_user_sees_nothing(self, client, test_portfolio):
        response = client.get("/api/portfolios", headers={"X-User-Id": OTHER_USER_ID})

        assert response.status_code == 200
        assert response.json() == []


class TestPortfolioValuation:
    """Live value, snapshots and history."""

    def test_value_at_latest_price(self, auth_client, test_portfolio, test_account, add_lot, add_price):
        add_lot(test_account, "KO", "10", avg_cost_basis="50")
        add_price("KO", date.today(), "60")

        response = auth_client.get(f"/api/portfolios/{test_portfolio.id}/value")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total_value"] == 600.0
        assert data["cost_basis"] == 500.0
        assert data["unrealized_gain"] == 100.0
        assert data["is_partial"] is False

    def test_value_without_price_is_partial(self, auth_client, test_portfolio, test_account, add_lot):
        add_lot(test_account, "KO", "10", avg_cost_basis="50")

        data = auth_client.get(f"/api/portfolios/{test_portfolio.id}/value").json()["data"]

        assert data["total_value"] == 500.0
        assert data["is_partial"] is True
        assert data["missing_tickers"] == ["KO"]

    def test_empty_portfolio_is_worth_zero(self, auth_client, test_portfolio):
        data = auth_client.get(f"/api/portfolios/{test_portfolio.id}/value").json()["data"]

        assert data["total_value"] == 0.0
        assert data["is_partial"] is False

    def test_snapshot_then_history(self, auth_client, test_portfolio, test_account, add_lot, add_price):
        add_lot(test_account, "KO", "10", avg_cost_basis="50")
        add_price("KO", date.today(), "60")

        first = auth_client.post(f"/api/portfolios/{test_portfolio.id}/snapshots")
        second = auth_client.post(f"/api/portfolios/{test_portfolio.id}/snapshots")
        history = auth_client.get(
            f"/api/portfolios/{test_portfolio.id}/value-history", params={"range": "1m"}
        )

        assert first.status_code == 201
        assert first.json()["data"]["id"] == second.json()["data"]["id"]
        points = history.json()["data"]
        assert len(points) == 1
        assert points[0]["date"] == date.today().isoformat()
        assert points[0]["total_value"] == 600.0

    def test_invalid_range_is_rejected(self, auth_client, test_portfolio):
        response = auth_client.get(
            f"/api/portfolios/{test_portfolio.id}/value-history", params={"range": "2w"}
        )

        assert response.status_code == 422

    def test_reconstructed_history(self, auth_client, test_portfolio, test_account, add_lot, add_price):
        add_lot(test_account, "KO", "10")
        add_lot(test_account, "PEP", "2")
        today = date.today()
        for days_ago in range(3):
            add_price("KO", today - timedelta(days=days_ago), "60")
        add_price("PEP", today, "150")

        response = auth_client.get(
            f"/api/portfolios/{test_portfolio.id}/value-history/reconstructed", params={"days": 3}
        )

        points = response.json()["data"]
        assert [p["date"] for p in points] == [today.isoformat()]
        assert points[0]["total_value"] == 900.0
        assert points[0]["is_partial"] is False

    def test_positions(self, auth_client, test_portfolio, test_account, second_account, add_lot):
        add_lot(test_account, "KO", "10", avg_cost_basis="50")
        add_lot(second_account, "KO", "30", avg_cost_basis="60")

        positions = auth_client.get(f"/api/portfolios/{test_portfolio.id}/positions").json()["data"]

        assert positions == [
            {
                "ticker": "KO",
                "total_shares": 40.0,
                "avg_cost_basis": 57.5,
                "cost_basis": 2300.0,
                "lot_count": 2,
            }
        ]

    def test_foreign_portfolio_value_is_not_found(self, auth_client, other_user_account):
        response = auth_client.get(f"/api/portfolios/{other_user_account.portfolio_id}/value")

        assert response.status_code == 404
