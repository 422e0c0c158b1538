"""Repository Protocol — dependency inversion for testability.

Every read and write takes the caller's user_id; there is deliberately no
method that looks a task up by id alone.
"""

from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.tf_task.domain.models import Task


class TaskRepositoryProtocol(Protocol):
    async def list_tasks(self, db: AsyncSession, user_id: str) -> list[Task]: ...

    async def get_task(
        self, db: AsyncSession, user_id: str, task_id: str
    ) -> Task | None: ...

    async def create_task(
        self, db: AsyncSession, user_id: str, fields: dict[str, Any]
    ) -> Task: ...

    async def update_task(
        self, db: AsyncSession, user_id: str, task_id: str, fields: dict[str, Any]
    ) -> Task | None: ...

    async def toggle_task(
        self, db: AsyncSession, user_id: str, task_id: str
    ) -> Task | None: ...

    async def delete_task(
        self, db: AsyncSession, user_id: str, task_id: str
    ) -> Task | None: ...

    async def delete_tasks_by_user(self, db: AsyncSession, user_id: str) -> int: ...
