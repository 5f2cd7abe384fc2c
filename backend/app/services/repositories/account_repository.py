"""Account data access layer."""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.models import Account, Portfolio
from app.services.repositories.exceptions import NotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence


class AccountRepository:
    """Centralized account data access.

    Naming conventions:
    - find_* : Query that may return None or empty list
    - get_* : Query that raises NotFoundError if missing
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_id(self, account_id: str) -> Account | None:
        """Find account by primary key."""
        return self._db.query(Account).filter(Account.id == account_id).first()

    def find_by_user(self, user_id: str) -> "Sequence[Account]":
        """Find all accounts belonging to a user (via portfolios)."""
        return (
            self._db.query(Account)
            .join(Account.portfolio)
            .filter(Portfolio.user_id == user_id)
            .order_by(Account.name)
            .all()
        )

    def find_by_portfolio(self, portfolio_id: str) -> "Sequence[Account]":
        """Find accounts in a specific portfolio."""
        return (
            self._db.query(Account)
            .filter(Account.portfolio_id == portfolio_id)
            .order_by(Account.name)
            .all()
        )

    def get_for_user(self, account_id: str, user_id: str) -> Account:
        """Get an account whose portfolio is owned by the user.

        Raises:
            NotFoundError: If the account does not exist or belongs to someone else
        """
        account = (
            self._db.query(Account)
            .join(Account.portfolio)
            .filter(Account.id == account_id, Portfolio.user_id == user_id)
            .first()
        )
        if account is None:
            raise NotFoundError("Account", account_id)
        return account

    def create(self, portfolio_id: str, name: str, description: str | None = None) -> Account:
        account = Account(portfolio_id=portfolio_id, name=name, description=description)
        self._db.add(account)
        self._db.flush()
        return account

    def update(self, account: Account, **fields) -> Account:
        for field, value in fields.items():
            setattr(account, field, value)
        self._db.flush()
        return account

    def delete(self, account: Account) -> None:
        self._db.delete(account)
        self._db.flush()
