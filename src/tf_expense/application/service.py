"""ExpenseApplicationService — ownership-scoped expense CRUD and receipt fetch.

An expense may only be created against an account the caller owns; the
check runs in the same transaction as the insert. There is no database
foreign key backing it.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.tf_account.domain.repository import AccountRepositoryProtocol
from src.tf_account.infrastructure.persistence import AccountRepository
from src.tf_common.errors import (
    AccountNotFoundError,
    ExpenseNotFoundError,
    ReceiptNotFoundError,
)
from src.tf_expense.application.schemas import (
    ExpenseCreateForm,
    ExpenseResponse,
    ExpenseUpdateForm,
)
from src.tf_expense.domain.models import Receipt
from src.tf_expense.domain.repository import ExpenseRepositoryProtocol
from src.tf_expense.infrastructure.persistence import ExpenseRepository


class ExpenseApplicationService:
    def __init__(
        self,
        repo: ExpenseRepositoryProtocol | None = None,
        account_repo: AccountRepositoryProtocol | None = None,
    ) -> None:
        self._repo: ExpenseRepositoryProtocol = repo or ExpenseRepository()
        self._account_repo: AccountRepositoryProtocol = account_repo or AccountRepository()

    async def list_expenses(
        self, db: AsyncSession, user_id: str, account_id: str | None
    ) -> list[ExpenseResponse]:
        expenses = await self._repo.list_expenses(db, user_id, account_id)
        return [ExpenseResponse.from_domain(e) for e in expenses]

    async def get_expense(
        self, db: AsyncSession, user_id: str, expense_id: str
    ) -> ExpenseResponse:
        expense = await self._repo.get_expense(db, user_id, expense_id)
        if expense is None:
            raise ExpenseNotFoundError(expense_id)
        return ExpenseResponse.from_domain(expense)

    async def get_receipt(self, db: AsyncSession, user_id: str, expense_id: str) -> Receipt:
        found = await self._repo.get_receipt(db, user_id, expense_id)
        if found is None:
            raise ExpenseNotFoundError(expense_id)
        _, receipt = found
        if receipt is None:
            raise ReceiptNotFoundError(expense_id)
        return receipt

    async def create_expense(
        self,
        db: AsyncSession,
        user_id: str,
        body: ExpenseCreateForm,
        receipt: Receipt | None,
    ) -> ExpenseResponse:
        account_id = str(body.account_id)
        try:
            if await self._account_repo.get_account(db, user_id, account_id) is None:
                raise AccountNotFoundError(account_id)
            expense = await self._repo.create_expense(db, user_id, body.to_fields(receipt))
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return ExpenseResponse.from_domain(expense)

    async def update_expense(
        self,
        db: AsyncSession,
        user_id: str,
        expense_id: str,
        body: ExpenseUpdateForm,
        receipt: Receipt | None,
    ) -> ExpenseResponse:
        try:
            expense = await self._repo.update_expense(
                db, user_id, expense_id, body.to_fields(receipt)
            )
            if expense is None:
                raise ExpenseNotFoundError(expense_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return ExpenseResponse.from_domain(expense)

    async def delete_expense(self, db: AsyncSession, user_id: str, expense_id: str) -> None:
        try:
            expense = await self._repo.delete_expense(db, user_id, expense_id)
            if expense is None:
                raise ExpenseNotFoundError(expense_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
