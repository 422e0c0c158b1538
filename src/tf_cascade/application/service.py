"""CascadeDeletionService — deletions that span several tables.

Two cascades:
  - account: delete the account (ownership-checked), then every expense
    pointing at it. Nothing else is touched when the account is not found.
  - user: delete the user's expenses, accounts, tasks, then the user row,
    in that order. Every step runs even when a table has nothing to delete.

Each cascade runs in a single transaction: one commit at the end, rollback
on any failure, so a crash mid-cascade leaves no orphans behind.
"""

import logging
import uuid

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from src.tf_account.domain.repository import AccountRepositoryProtocol
from src.tf_account.infrastructure.persistence import AccountRepository
from src.tf_common.errors import AccountNotFoundError
from src.tf_expense.domain.repository import ExpenseRepositoryProtocol
from src.tf_expense.infrastructure.persistence import ExpenseRepository
from src.tf_gateway.user.db_models import UserModel
from src.tf_task.domain.repository import TaskRepositoryProtocol
from src.tf_task.infrastructure.persistence import TaskRepository

logger = logging.getLogger("tf.cascade")


class CascadeDeletionService:
    def __init__(
        self,
        task_repo: TaskRepositoryProtocol | None = None,
        account_repo: AccountRepositoryProtocol | None = None,
        expense_repo: ExpenseRepositoryProtocol | None = None,
    ) -> None:
        self._task_repo: TaskRepositoryProtocol = task_repo or TaskRepository()
        self._account_repo: AccountRepositoryProtocol = account_repo or AccountRepository()
        self._expense_repo: ExpenseRepositoryProtocol = expense_repo or ExpenseRepository()

    async def delete_account(self, db: AsyncSession, user_id: str, account_id: str) -> int:
        """Delete an owned account and its expenses. Returns expenses removed."""
        try:
            account = await self._account_repo.delete_account(db, user_id, account_id)
            if account is None:
                raise AccountNotFoundError(account_id)
            expenses = await self._expense_repo.delete_expenses_by_account(db, account.id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Deleted account %s with %d expenses", account_id, expenses)
        return expenses

    async def delete_user(self, db: AsyncSession, user_id: str) -> dict[str, int]:
        """Delete the user and everything they own. Irreversible."""
        try:
            removed = {
                "expenses": await self._expense_repo.delete_expenses_by_user(db, user_id),
                "accounts": await self._account_repo.delete_accounts_by_user(db, user_id),
                "tasks": await self._task_repo.delete_tasks_by_user(db, user_id),
            }
            result = await db.execute(
                delete(UserModel).where(UserModel.id == uuid.UUID(user_id))
            )
            removed["users"] = int(result.rowcount or 0)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Deleted user %s: %d expenses, %d accounts, %d tasks",
            user_id,
            removed["expenses"],
            removed["accounts"],
            removed["tasks"],
        )
        return removed
