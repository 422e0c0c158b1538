"""ExpenseRepository — concrete implementation of ExpenseRepositoryProtocol.

receipt_data is only selected by get_receipt; every other query projects
has_receipt instead so list responses never drag the blobs along.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.tf_common.errors import InternalError
from src.tf_common.sql_utils import build_scoped_update
from src.tf_expense.domain.models import Expense, Receipt

_COLUMNS = """id, user_id, account_id, description, amount, date, category,
              (receipt_content_type IS NOT NULL) AS has_receipt,
              created_at, updated_at"""

_UPDATABLE = frozenset(
    {"description", "amount", "date", "category", "receipt_data", "receipt_content_type"}
)

_LIST_EXPENSES_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM expenses
    WHERE user_id = CAST(:user_id AS UUID)
      AND (CAST(:account_id AS UUID) IS NULL OR account_id = CAST(:account_id AS UUID))
    ORDER BY created_at DESC, id DESC
""")

_LIST_ACCOUNT_EXPENSES_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM expenses
    WHERE user_id = CAST(:user_id AS UUID)
      AND account_id = CAST(:account_id AS UUID)
    ORDER BY date DESC, id DESC
""")

_GET_EXPENSE_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM expenses
    WHERE id = CAST(:id AS UUID) AND user_id = CAST(:user_id AS UUID)
""")

_GET_RECEIPT_SQL = text(f"""
    SELECT {_COLUMNS}, receipt_data, receipt_content_type
    FROM expenses
    WHERE id = CAST(:id AS UUID) AND user_id = CAST(:user_id AS UUID)
""")

_INSERT_EXPENSE_SQL = text(f"""
    INSERT INTO expenses
        (user_id, account_id, description, amount, date, category,
         receipt_data, receipt_content_type)
    VALUES
        (CAST(:user_id AS UUID), CAST(:account_id AS UUID), :description, :amount,
         :date, :category, :receipt_data, :receipt_content_type)
    RETURNING {_COLUMNS}
""")

_DELETE_EXPENSE_SQL = text(f"""
    DELETE FROM expenses
    WHERE id = CAST(:id AS UUID) AND user_id = CAST(:user_id AS UUID)
    RETURNING {_COLUMNS}
""")

_DELETE_BY_ACCOUNT_SQL = text("""
    DELETE FROM expenses
    WHERE account_id = CAST(:account_id AS UUID)
""")

_DELETE_BY_USER_SQL = text("""
    DELETE FROM expenses
    WHERE user_id = CAST(:user_id AS UUID)
""")


def _row_to_expense(row: object) -> Expense:
    return Expense(
        id=str(row.id),  # type: ignore[attr-defined]
        user_id=str(row.user_id),  # type: ignore[attr-defined]
        account_id=str(row.account_id),  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        date=row.date,  # type: ignore[attr-defined]
        category=row.category,  # type: ignore[attr-defined]
        has_receipt=bool(row.has_receipt),  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class ExpenseRepository:
    """Concrete repository — all operations atomic at the SQL level."""

    async def list_expenses(
        self, db: AsyncSession, user_id: str, account_id: str | None
    ) -> list[Expense]:
        result = await db.execute(
            _LIST_EXPENSES_SQL, {"user_id": user_id, "account_id": account_id}
        )
        return [_row_to_expense(row) for row in result.fetchall()]

    async def list_account_expenses(
        self, db: AsyncSession, user_id: str, account_id: str
    ) -> list[Expense]:
        result = await db.execute(
            _LIST_ACCOUNT_EXPENSES_SQL, {"user_id": user_id, "account_id": account_id}
        )
        return [_row_to_expense(row) for row in result.fetchall()]

    async def get_expense(
        self, db: AsyncSession, user_id: str, expense_id: str
    ) -> Expense | None:
        result = await db.execute(_GET_EXPENSE_SQL, {"id": expense_id, "user_id": user_id})
        row = result.fetchone()
        return _row_to_expense(row) if row else None

    async def get_receipt(
        self, db: AsyncSession, user_id: str, expense_id: str
    ) -> tuple[Expense, Receipt | None] | None:
        result = await db.execute(_GET_RECEIPT_SQL, {"id": expense_id, "user_id": user_id})
        row = result.fetchone()
        if row is None:
            return None
        receipt = None
        if row.receipt_data is not None and row.receipt_content_type is not None:
            receipt = Receipt(data=bytes(row.receipt_data), content_type=row.receipt_content_type)
        return _row_to_expense(row), receipt

    async def create_expense(
        self, db: AsyncSession, user_id: str, fields: dict[str, Any]
    ) -> Expense:
        params = {"receipt_data": None, "receipt_content_type": None, **fields}
        result = await db.execute(_INSERT_EXPENSE_SQL, {"user_id": user_id, **params})
        row = result.fetchone()
        if row is None:
            raise InternalError("Expense insert returned no rows — this should never happen")
        return _row_to_expense(row)

    async def update_expense(
        self, db: AsyncSession, user_id: str, expense_id: str, fields: dict[str, Any]
    ) -> Expense | None:
        stmt = build_scoped_update("expenses", fields, _UPDATABLE, _COLUMNS)
        result = await db.execute(stmt, {"id": expense_id, "user_id": user_id, **fields})
        row = result.fetchone()
        return _row_to_expense(row) if row else None

    async def delete_expense(
        self, db: AsyncSession, user_id: str, expense_id: str
    ) -> Expense | None:
        result = await db.execute(_DELETE_EXPENSE_SQL, {"id": expense_id, "user_id": user_id})
        row = result.fetchone()
        return _row_to_expense(row) if row else None

    async def delete_expenses_by_account(self, db: AsyncSession, account_id: str) -> int:
        result = await db.execute(_DELETE_BY_ACCOUNT_SQL, {"account_id": account_id})
        return int(result.rowcount or 0)

    async def delete_expenses_by_user(self, db: AsyncSession, user_id: str) -> int:
        result = await db.execute(_DELETE_BY_USER_SQL, {"user_id": user_id})
        return int(result.rowcount or 0)
