"""Shared test fixtures.

Database tests run against an in-memory SQLite engine shared through
StaticPool, so the API client and the test body see the same data.
"""

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.constants import DividendStatus
from app.database import Base, get_db
from app.main import app
from app.models import Account, Dividend, Holding, Portfolio, PriceHistory

TEST_USER_ID = "user-test"
OTHER_USER_ID = "user-other"


@pytest.fixture
def engine():
    """Create an in-memory database with all tables."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    """Create a fresh database session for each test."""
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    """Create test client with database override."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Headers the upstream proxy sets for the test user."""
    return {"X-User-Id": TEST_USER_ID}


@pytest.fixture
def auth_client(client, auth_headers):
    """Client with the user id header."""
    client.headers.update(auth_headers)
    return client


@pytest.fixture
def test_portfolio(db):
    """Create a test portfolio."""
    portfolio = Portfolio(user_id=TEST_USER_ID, name="Test Portfolio")
    db.add(portfolio)
    db.commit()
    db.refresh(portfolio)
    return portfolio


@pytest.fixture
def test_account(db, test_portfolio):
    """Create a test account in the test portfolio."""
    account = Account(portfolio_id=test_portfolio.id, name="Brokerage")
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


@pytest.fixture
def second_account(db, test_portfolio):
    """Create a second account in the test portfolio."""
    account = Account(portfolio_id=test_portfolio.id, name="Roth IRA")
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


@pytest.fixture
def other_user_account(db):
    """An account owned by somebody else."""
    portfolio = Portfolio(user_id=OTHER_USER_ID, name="Not Yours")
    db.add(portfolio)
    db.flush()
    account = Account(portfolio_id=portfolio.id, name="Foreign Account")
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


@pytest.fixture
def add_lot(db):
    """Factory for holding lots."""

    def _add_lot(
        account: Account,
        ticker: str,
        shares: str,
        avg_cost_basis: str = "10",
        purchase_date: date = date(2023, 1, 3),
    ) -> Holding:
        holding = Holding(
            account_id=account.id,
            ticker=ticker,
            shares=Decimal(shares),
            avg_cost_basis=Decimal(avg_cost_basis),
            purchase_date=purchase_date,
        )
        db.add(holding)
        db.commit()
        db.refresh(holding)
        return holding

    return _add_lot


@pytest.fixture
def add_dividend(db):
    """Factory for dividend rows with an explicit total."""

    def _add_dividend(
        account: Account,
        ticker: str,
        pay_date: date,
        total_amount: str,
        amount_per_share: str = "0",
        status: DividendStatus = DividendStatus.PAID,
    ) -> Dividend:
        dividend = Dividend(
            account_id=account.id,
            ticker=ticker,
            amount_per_share=Decimal(amount_per_share),
            total_amount=Decimal(total_amount),
            pay_date=pay_date,
            status=status,
        )
        db.add(dividend)
        db.commit()
        db.refresh(dividend)
        return dividend

    return _add_dividend


@pytest.fixture
def add_price(db):
    """Factory for closing prices."""

    def _add_price(ticker: str, price_date: date, close: str) -> PriceHistory:
        price = PriceHistory(ticker=ticker, date=price_date, close_price=Decimal(close))
        db.add(price)
        db.commit()
        return price

    return _add_price
