"""Integration tests for the projections API."""

from datetime import date

import pytest

from app.services.dividends.dates import add_months


@pytest.fixture
def quarterly_holdings(test_account, second_account, add_lot, add_dividend):
    """KO pays quarterly on 100 shares; VZ has a single payment; PEP was sold."""
    today = date.today()
    add_lot(test_account, "KO", "100")
    add_dividend(test_account, "KO", add_months(today, -4), "46", amount_per_share="0.46")
    add_dividend(test_account, "KO", add_months(today, -1), "48.5", amount_per_share="0.485")

    add_lot(second_account, "VZ", "50")
    add_dividend(second_account, "VZ", add_months(today, -2), "33.25", amount_per_share="0.665")

    add_dividend(test_account, "PEP", add_months(today, -4), "13.55", amount_per_share="1.355")
    add_dividend(test_account, "PEP", add_months(today, -1), "13.55", amount_per_share="1.355")


class TestProjectionsApi:
    """Forward income projections."""

    def test_projection_response(self, auth_client, quarterly_holdings):
        response = auth_client.get("/api/projections")

        assert response.status_code == 200
        data = response.json()["data"]

        assert [p["ticker"] for p in data["holding_projections"]] == ["KO"]
        ko = data["holding_projections"][0]
        assert ko["cadence"] == "quarterly"
        assert ko["next_pay_amount"] == pytest.approx(48.5)
        assert ko["projected_annual"] == pytest.approx(194.0)
        assert ko["pct_of_total"] == pytest.approx(100.0)
        assert data["projected_annual"] == pytest.approx(194.0)

        reasons = {e["ticker"]: e["reason"] for e in data["excluded"]}
        assert reasons == {
            "VZ": "insufficient history",
            "PEP": "no shares currently held",
        }
        assert len(data["chart_data"]) == 24
        assert data["ttm_income"] == pytest.approx(154.85)

    def test_trend_against_trailing_income(self, auth_client, quarterly_holdings):
        data = auth_client.get("/api/projections").json()["data"]

        assert data["trend"] == pytest.approx(data["projected_annual"] - data["ttm_income"])

    def test_monthly_projection(self, auth_client, quarterly_holdings):
        data = auth_client.get("/api/projections/monthly").json()["data"]

        assert len(data) == 12
        # PEP was sold, so only KO on its current 100 shares
        assert sum(m["projected_income"] for m in data) == pytest.approx(48.5 * 4)

    def test_empty_projection(self, auth_client, test_portfolio):
        data = auth_client.get(
            "/api/projections", params={"portfolio_id": test_portfolio.id}
        ).json()["data"]

        assert data["holding_projections"] == []
        assert data["excluded"] == []
        assert data["projected_annual"] == 0.0
        assert data["trend_pct"] == 0.0

    def test_foreign_portfolio_is_not_found(self, auth_client, other_user_account):
        response = auth_client.get(
            "/api/projections", params={"portfolio_id": other_user_account.portfolio_id}
        )

        assert response.status_code == 404
