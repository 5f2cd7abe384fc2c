"""Integration tests for the dashboard API."""

from datetime import date

import pytest

from app.constants import DividendStatus
from app.services.dividends.dates import add_months


@pytest.fixture
def paid_history(test_account, second_account, add_dividend):
    """Quarterly KO income in the brokerage account plus one IRA payment."""
    today = date.today()
    for quarters_ago in range(8):
        add_dividend(test_account, "KO", add_months(today, -3 * quarters_ago), "10")
    add_dividend(second_account, "O", add_months(today, -1), "5")
    add_dividend(test_account, "KO", add_months(today, 3), "10", status=DividendStatus.SCHEDULED)


class TestDashboardApi:
    """Realized income endpoints."""

    def test_summary(self, auth_client, paid_history):
        response = auth_client.get("/api/dashboard/summary")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["all_time_income"] == 85.0
        assert data["paid_count"] == 9
        assert data["valuation"] is None

    def test_portfolio_summary_has_valuation(self, auth_client, test_portfolio, paid_history):
        response = auth_client.get(
            "/api/dashboard/summary", params={"portfolio_id": test_portfolio.id}
        )

        data = response.json()["data"]
        assert data["valuation"]["total_value"] == 0.0
        assert data["valuation"]["is_partial"] is False

    def test_ttm_series_is_dense(self, auth_client, paid_history):
        data = auth_client.get("/api/dashboard/ttm").json()["data"]

        assert len(data["months"]) == 12
        assert [a["account_name"] for a in data["accounts"]] == ["Brokerage", "Roth IRA"]
        assert all(len(m["by_account"]) == 2 for m in data["months"])
        assert data["total"] == 45.0

    def test_quarterly_aggregates(self, auth_client, paid_history):
        data = auth_client.get("/api/dashboard/aggregates/quarterly", params={"count": 4}).json()["data"]

        assert len(data) <= 4
        for period in data:
            assert period["total"] == pytest.approx(sum(period["per_ticker"].values()))
            assert period["label"].startswith("Q")

    def test_yearly_aggregates_oldest_first(self, auth_client, paid_history):
        data = auth_client.get("/api/dashboard/aggregates/yearly").json()["data"]

        years = [p["year"] for p in data]
        assert years == sorted(years)

    def test_growth(self, auth_client, paid_history):
        data = auth_client.get("/api/dashboard/growth").json()["data"]

        assert set(data) == {"quarter_over_quarter", "year_over_year", "cagr"}

    def test_daily_income(self, auth_client, paid_history):
        data = auth_client.get("/api/dashboard/daily-income", params={"days": 7}).json()["data"]

        assert len(data) == 7
        assert data[-1]["date"] == date.today().isoformat()
        assert data[-1]["total"] == 10.0

    def test_calendar_for_month(self, auth_client, test_account, add_dividend):
        add_dividend(test_account, "KO", date(2024, 6, 14), "10")
        add_dividend(test_account, "PEP", date(2024, 6, 28), "5", status=DividendStatus.SCHEDULED)

        data = auth_client.get("/api/dashboard/calendar", params={"year": 2024, "month": 6}).json()["data"]

        assert [d["date"] for d in data] == ["2024-06-14", "2024-06-28"]
        assert data[1]["dividends"][0]["status"] == "scheduled"

    def test_foreign_portfolio_is_not_found(self, auth_client, other_user_account):
        response = auth_client.get(
            "/api/dashboard/summary", params={"portfolio_id": other_user_account.portfolio_id}
        )

        assert response.status_code == 404
