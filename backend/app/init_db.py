"""Database initialization script with seed data."""

from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from app.constants import DividendStatus
from app.database import Base, SessionLocal, engine
from app.models import Portfolio
from app.services.dividend_service import DividendService
from app.services.dividends.dates import add_months
from app.services.holding_service import HoldingService
from app.services.portfolio import PortfolioValuationService
from app.services.repositories import AccountRepository, PortfolioRepository, PriceRepository

DEMO_USER_ID = "demo-user"


def create_tables():
    """Create all database tables."""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created successfully!")


def seed_data(db: Session):
    """Seed the database with sample data for testing."""
    print("\nSeeding database with sample data...")
    today = date.today()

    print("Creating portfolio...")
    portfolio = PortfolioRepository(db).create(
        DEMO_USER_ID, "Dividend Portfolio", "Income-focused long-term holdings"
    )

    print("Creating accounts...")
    account_repo = AccountRepository(db)
    brokerage = account_repo.create(portfolio.id, "Taxable Brokerage")
    roth = account_repo.create(portfolio.id, "Roth IRA", "Tax-free growth")

    print("Creating holdings...")
    holding_service = HoldingService(db)
    lots = [
        (brokerage.id, "SCHD", Decimal("120"), Decimal("71.50"), date(2022, 3, 14)),
        (brokerage.id, "SCHD", Decimal("80"), Decimal("76.20"), date(2023, 6, 1)),
        (brokerage.id, "O", Decimal("150"), Decimal("58.10"), date(2022, 9, 20)),
        (roth.id, "JNJ", Decimal("40"), Decimal("162.35"), date(2021, 11, 2)),
        (roth.id, "VZ", Decimal("100"), Decimal("39.80"), date(2023, 2, 8)),
    ]
    for account_id, ticker, shares, cost, purchased in lots:
        holding_service.create_holding(DEMO_USER_ID, account_id, ticker, shares, cost, purchased)

    print("Creating dividends...")
    dividend_service = DividendService(db)
    schedules = [
        # (account, ticker, months between payments, per-share amount, payments)
        (brokerage.id, "SCHD", 3, Decimal("0.66"), 8),
        (brokerage.id, "O", 1, Decimal("0.2565"), 24),
        (roth.id, "JNJ", 3, Decimal("1.19"), 8),
        (roth.id, "VZ", 3, Decimal("0.665"), 1),
    ]
    for account_id, ticker, interval, per_share, count in schedules:
        last_paid = add_months(today, -1)
        for i in range(count):
            dividend_service.create_dividend(
                DEMO_USER_ID,
                account_id,
                ticker,
                per_share,
                add_months(last_paid, -interval * i),
                status=DividendStatus.PAID,
            )
        dividend_service.create_dividend(
            DEMO_USER_ID,
            account_id,
            ticker,
            per_share,
            add_months(last_paid, interval),
            status=DividendStatus.SCHEDULED,
        )

    print("Creating price history...")
    price_repo = PriceRepository(db)
    closes = {"SCHD": Decimal("78.40"), "O": Decimal("57.25"), "JNJ": Decimal("158.90")}
    for offset in range(30):
        day = today - timedelta(days=offset)
        for ticker, close in closes.items():
            price_repo.upsert_price(ticker, day, close + Decimal(offset % 5) / 10)

    print("Saving today's value snapshot...")
    PortfolioValuationService(db).save_snapshot(portfolio.id, today)

    db.commit()
    print("Seed data created successfully!")
    print(f"  User: {DEMO_USER_ID}")
    print(f"  Portfolio: {portfolio.name}")
    print(f"  Accounts: {len([brokerage, roth])}")


def init_db():
    """Initialize database with tables and seed data."""
    print("Initializing database...")

    # Create tables
    create_tables()

    # Seed data
    db = SessionLocal()
    try:
        # Check if data already exists
        existing = db.query(Portfolio).count()
        if existing > 0:
            print(f"\nDatabase already has {existing} portfolios. Skipping seed data.")
            return

        seed_data(db)
        print("\nDatabase initialization complete!")

    except Exception as e:
        print(f"\nError during database initialization: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    init_db()
