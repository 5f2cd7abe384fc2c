"""Integration tests for the holdings and accounts APIs."""

from datetime import date
from decimal import Decimal

from app.constants import DividendStatus


def lot_payload(account_id, ticker="ko", shares="25", cost="55.10"):
    return {
        "account_id": account_id,
        "ticker": ticker,
        "shares": shares,
        "avg_cost_basis": cost,
        "purchase_date": "2023-04-03",
    }


class TestHoldingsApi:
    """Lots CRUD."""

    def test_create_holding(self, auth_client, test_account):
        response = auth_client.post("/api/holdings", json=lot_payload(test_account.id))

        assert response.status_code == 201
        data = response.json()
        assert data["ticker"] == "KO"
        assert Decimal(data["shares"]) == Decimal("25")
        assert data["purchase_date"] == "2023-04-03"

    def test_zero_shares_are_rejected(self, auth_client, test_account):
        response = auth_client.post("/api/holdings", json=lot_payload(test_account.id, shares="0"))

        assert response.status_code == 422

    def test_foreign_account_is_not_found(self, auth_client, other_user_account):
        response = auth_client.post("/api/holdings", json=lot_payload(other_user_account.id))

        assert response.status_code == 404

    def test_list_by_account(self, auth_client, test_account, second_account, add_lot):
        add_lot(test_account, "KO", "1")
        add_lot(second_account, "PEP", "1")

        everything = auth_client.get("/api/holdings").json()
        one_account = auth_client.get("/api/holdings", params={"account_id": test_account.id}).json()

        assert len(everything) == 2
        assert [h["ticker"] for h in one_account] == ["KO"]

    def test_create_recomputes_scheduled_dividend(self, auth_client, test_account, add_dividend):
        dividend = add_dividend(
            test_account,
            "KO",
            date(2030, 1, 2),
            "0",
            amount_per_share="0.50",
            status=DividendStatus.SCHEDULED,
        )

        auth_client.post("/api/holdings", json=lot_payload(test_account.id, shares="40"))
        response = auth_client.get(f"/api/dividends/{dividend.id}")

        assert Decimal(response.json()["total_amount"]) == Decimal("20")

    def test_update_and_delete(self, auth_client, test_account, add_lot):
        holding = add_lot(test_account, "KO", "10")

        updated = auth_client.put(f"/api/holdings/{holding.id}", json={"shares": "12.5"})
        deleted = auth_client.delete(f"/api/holdings/{holding.id}")

        assert updated.status_code == 200
        assert Decimal(updated.json()["shares"]) == Decimal("12.5")
        assert deleted.status_code == 204
        assert auth_client.get(f"/api/holdings/{holding.id}").status_code == 404


class TestAccountsApi:
    """Accounts CRUD."""

    def test_create_and_list(self, auth_client, test_portfolio):
        created = auth_client.post(
            "/api/accounts", json={"portfolio_id": test_portfolio.id, "name": "HSA"}
        )
        listed = auth_client.get("/api/accounts", params={"portfolio_id": test_portfolio.id})

        assert created.status_code == 201
        assert [a["name"] for a in listed.json()] == ["HSA"]

    def test_create_in_foreign_portfolio(self, auth_client, other_user_account):
        response = auth_client.post(
            "/api/accounts",
            json={"portfolio_id": other_user_account.portfolio_id, "name": "Sneaky"},
        )

        assert response.status_code == 404

    def test_rename_and_delete(self, auth_client, test_account):
        renamed = auth_client.put(f"/api/accounts/{test_account.id}", json={"name": "Taxable"})
        deleted = auth_client.delete(f"/api/accounts/{test_account.id}")

        assert renamed.json()["name"] == "Taxable"
        assert deleted.status_code == 204
        assert auth_client.get(f"/api/accounts/{test_account.id}").status_code == 404
