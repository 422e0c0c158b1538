"""Repository Protocol — dependency inversion for testability."""

from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.tf_expense.domain.models import Expense, Receipt


class ExpenseRepositoryProtocol(Protocol):
    async def list_expenses(
        self, db: AsyncSession, user_id: str, account_id: str | None
    ) -> list[Expense]: ...

    async def list_account_expenses(
        self, db: AsyncSession, user_id: str, account_id: str
    ) -> list[Expense]: ...

    async def get_expense(
        self, db: AsyncSession, user_id: str, expense_id: str
    ) -> Expense | None: ...

    async def get_receipt(
        self, db: AsyncSession, user_id: str, expense_id: str
    ) -> tuple[Expense, Receipt | None] | None: ...

    async def create_expense(
        self, db: AsyncSession, user_id: str, fields: dict[str, Any]
    ) -> Expense: ...

    async def update_expense(
        self, db: AsyncSession, user_id: str, expense_id: str, fields: dict[str, Any]
    ) -> Expense | None: ...

    async def delete_expense(
        self, db: AsyncSession, user_id: str, expense_id: str
    ) -> Expense | None: ...

    async def delete_expenses_by_account(self, db: AsyncSession, account_id: str) -> int: ...

    async def delete_expenses_by_user(self, db: AsyncSession, user_id: str) -> int: ...
