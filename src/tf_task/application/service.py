"""TaskApplicationService — ownership-scoped task CRUD plus toggle.

Mutations commit on success and roll back on any error, like
AccountApplicationService. A task linked to an account must point at an
account the caller owns.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.tf_account.domain.repository import AccountRepositoryProtocol
from src.tf_account.infrastructure.persistence import AccountRepository
from src.tf_common.errors import AccountNotFoundError, TaskNotFoundError
from src.tf_task.application.schemas import (
    TaskCreateRequest,
    TaskResponse,
    TaskUpdateRequest,
)
from src.tf_task.domain.repository import TaskRepositoryProtocol
from src.tf_task.infrastructure.persistence import TaskRepository


class TaskApplicationService:
    def __init__(
        self,
        repo: TaskRepositoryProtocol | None = None,
        account_repo: AccountRepositoryProtocol | None = None,
    ) -> None:
        self._repo: TaskRepositoryProtocol = repo or TaskRepository()
        self._account_repo: AccountRepositoryProtocol = account_repo or AccountRepository()

    async def list_tasks(self, db: AsyncSession, user_id: str) -> list[TaskResponse]:
        tasks = await self._repo.list_tasks(db, user_id)
        return [TaskResponse.from_domain(t) for t in tasks]

    async def get_task(self, db: AsyncSession, user_id: str, task_id: str) -> TaskResponse:
        task = await self._repo.get_task(db, user_id, task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return TaskResponse.from_domain(task)

    async def create_task(
        self, db: AsyncSession, user_id: str, body: TaskCreateRequest
    ) -> TaskResponse:
        fields = body.to_fields()
        try:
            await self._check_account(db, user_id, fields.get("account_id"))
            task = await self._repo.create_task(db, user_id, fields)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return TaskResponse.from_domain(task)

    async def update_task(
        self, db: AsyncSession, user_id: str, task_id: str, body: TaskUpdateRequest
    ) -> TaskResponse:
        fields = body.to_fields()
        try:
            await self._check_account(db, user_id, fields.get("account_id"))
            task = await self._repo.update_task(db, user_id, task_id, fields)
            if task is None:
                raise TaskNotFoundError(task_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return TaskResponse.from_domain(task)

    async def toggle_task(self, db: AsyncSession, user_id: str, task_id: str) -> TaskResponse:
        try:
            task = await self._repo.toggle_task(db, user_id, task_id)
            if task is None:
                raise TaskNotFoundError(task_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return TaskResponse.from_domain(task)

    async def delete_task(self, db: AsyncSession, user_id: str, task_id: str) -> None:
        try:
            task = await self._repo.delete_task(db, user_id, task_id)
            if task is None:
                raise TaskNotFoundError(task_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

    async def _check_account(
        self, db: AsyncSession, user_id: str, account_id: str | None
    ) -> None:
        if account_id is None:
            return
        if await self._account_repo.get_account(db, user_id, account_id) is None:
            raise AccountNotFoundError(account_id)
