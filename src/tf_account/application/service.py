"""AccountApplicationService — thin composition layer.

List and detail attach the derived balance, recomputed from the expenses
table on every call. Deletion is not here: it cascades into expenses and
lives in CascadeDeletionService.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.tf_account.application.schemas import (
    AccountCreateRequest,
    AccountDetail,
    AccountResponse,
    AccountStatsResponse,
    AccountUpdateRequest,
    AccountWithBalance,
)
from src.tf_account.domain.balance import balance_from_total, compute_balance, compute_stats
from src.tf_account.domain.repository import AccountRepositoryProtocol
from src.tf_account.infrastructure.persistence import AccountRepository
from src.tf_common.datetime_utils import start_of_month
from src.tf_common.errors import AccountNotFoundError
from src.tf_expense.application.schemas import ExpenseResponse
from src.tf_expense.domain.repository import ExpenseRepositoryProtocol
from src.tf_expense.infrastructure.persistence import ExpenseRepository


class AccountApplicationService:
    def __init__(
        self,
        repo: AccountRepositoryProtocol | None = None,
        expense_repo: ExpenseRepositoryProtocol | None = None,
    ) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()
        self._expense_repo: ExpenseRepositoryProtocol = expense_repo or ExpenseRepository()

    async def list_accounts(self, db: AsyncSession, user_id: str) -> list[AccountWithBalance]:
        accounts = await self._repo.list_accounts(db, user_id)
        totals = await self._repo.expense_totals(db, [a.id for a in accounts])
        return [
            AccountWithBalance.from_balance(a, balance_from_total(a.initial_balance, totals.get(a.id)))
            for a in accounts
        ]

    async def get_account(self, db: AsyncSession, user_id: str, account_id: str) -> AccountDetail:
        account = await self._repo.get_account(db, user_id, account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        expenses = await self._expense_repo.list_account_expenses(db, user_id, account_id)
        balance = compute_balance(account.initial_balance, (e.amount for e in expenses))
        return AccountDetail(
            **AccountWithBalance.from_balance(account, balance).model_dump(),
            expenses=[ExpenseResponse.from_domain(e) for e in expenses],
        )

    async def get_stats(self, db: AsyncSession, user_id: str) -> AccountStatsResponse:
        accounts = await self._repo.list_accounts(db, user_id)
        totals = await self._repo.expense_totals(db, [a.id for a in accounts])
        this_month = await self._repo.expenses_since(db, user_id, start_of_month())
        return AccountStatsResponse.from_domain(compute_stats(accounts, totals, this_month))

    async def create_account(
        self, db: AsyncSession, user_id: str, body: AccountCreateRequest
    ) -> AccountResponse:
        try:
            account = await self._repo.create_account(db, user_id, body.to_fields())
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return AccountResponse.from_domain(account)

    async def update_account(
        self, db: AsyncSession, user_id: str, account_id: str, body: AccountUpdateRequest
    ) -> AccountResponse:
        try:
            account = await self._repo.update_account(db, user_id, account_id, body.to_fields())
            if account is None:
                raise AccountNotFoundError(account_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return AccountResponse.from_domain(account)
