"""AccountRepository — concrete implementation of AccountRepositoryProtocol.

All lookups and mutations filter on user_id; update and delete are single
UPDATE/DELETE ... RETURNING statements. Expense sums are read straight from
the expenses table on every call, there is no stored balance.

asyncpg NULL/array parameter pattern: CAST(:param AS TYPE) is required.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.tf_account.domain.models import Account
from src.tf_common.errors import InternalError
from src.tf_common.sql_utils import build_scoped_update

_COLUMNS = """id, user_id, name, initial_balance, type, currency, color,
              created_at, updated_at"""

_UPDATABLE = frozenset({"name", "initial_balance", "type", "currency", "color"})

_LIST_ACCOUNTS_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM accounts
    WHERE user_id = CAST(:user_id AS UUID)
    ORDER BY created_at DESC, id DESC
""")

_GET_ACCOUNT_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM accounts
    WHERE id = CAST(:id AS UUID) AND user_id = CAST(:user_id AS UUID)
""")

_INSERT_ACCOUNT_SQL = text(f"""
    INSERT INTO accounts (user_id, name, initial_balance, type, currency, color)
    VALUES (CAST(:user_id AS UUID), :name, :initial_balance, :type, :currency, :color)
    RETURNING {_COLUMNS}
""")

_DELETE_ACCOUNT_SQL = text(f"""
    DELETE FROM accounts
    WHERE id = CAST(:id AS UUID) AND user_id = CAST(:user_id AS UUID)
    RETURNING {_COLUMNS}
""")

_DELETE_ACCOUNTS_BY_USER_SQL = text("""
    DELETE FROM accounts
    WHERE user_id = CAST(:user_id AS UUID)
""")

_EXPENSE_TOTALS_SQL = text("""
    SELECT account_id, SUM(amount) AS total
    FROM expenses
    WHERE account_id = ANY(CAST(:account_ids AS UUID[]))
    GROUP BY account_id
""")

_EXPENSES_SINCE_SQL = text("""
    SELECT COALESCE(SUM(e.amount), 0) AS total
    FROM expenses e
    WHERE e.account_id IN (
            SELECT a.id FROM accounts a WHERE a.user_id = CAST(:user_id AS UUID)
          )
      AND e.date >= :since
""")


def _row_to_account(row: object) -> Account:
    return Account(
        id=str(row.id),  # type: ignore[attr-defined]
        user_id=str(row.user_id),  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        initial_balance=row.initial_balance,  # type: ignore[attr-defined]
        type=row.type,  # type: ignore[attr-defined]
        currency=row.currency,  # type: ignore[attr-defined]
        color=row.color,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class AccountRepository:
    """Concrete repository — all operations atomic at the SQL level."""

    async def list_accounts(self, db: AsyncSession, user_id: str) -> list[Account]:
        result = await db.execute(_LIST_ACCOUNTS_SQL, {"user_id": user_id})
        return [_row_to_account(row) for row in result.fetchall()]

    async def get_account(
        self, db: AsyncSession, user_id: str, account_id: str
    ) -> Account | None:
        result = await db.execute(_GET_ACCOUNT_SQL, {"id": account_id, "user_id": user_id})
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def create_account(
        self, db: AsyncSession, user_id: str, fields: dict[str, Any]
    ) -> Account:
        result = await db.execute(_INSERT_ACCOUNT_SQL, {"user_id": user_id, **fields})
        row = result.fetchone()
        if row is None:
            raise InternalError("Account insert returned no rows — this should never happen")
        return _row_to_account(row)

    async def update_account(
        self, db: AsyncSession, user_id: str, account_id: str, fields: dict[str, Any]
    ) -> Account | None:
        stmt = build_scoped_update("accounts", fields, _UPDATABLE, _COLUMNS)
        result = await db.execute(stmt, {"id": account_id, "user_id": user_id, **fields})
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def delete_account(
        self, db: AsyncSession, user_id: str, account_id: str
    ) -> Account | None:
        result = await db.execute(_DELETE_ACCOUNT_SQL, {"id": account_id, "user_id": user_id})
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def delete_accounts_by_user(self, db: AsyncSession, user_id: str) -> int:
        result = await db.execute(_DELETE_ACCOUNTS_BY_USER_SQL, {"user_id": user_id})
        return int(result.rowcount or 0)

    async def expense_totals(
        self, db: AsyncSession, account_ids: list[str]
    ) -> dict[str, Decimal]:
        if not account_ids:
            return {}
        result = await db.execute(_EXPENSE_TOTALS_SQL, {"account_ids": account_ids})
        return {str(row.account_id): row.total for row in result.fetchall()}

    async def expenses_since(
        self, db: AsyncSession, user_id: str, since: datetime
    ) -> Decimal:
        result = await db.execute(_EXPENSES_SINCE_SQL, {"user_id": user_id, "since": since})
        row = result.fetchone()
        return Decimal(row.total) if row else Decimal("0")
