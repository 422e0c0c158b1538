"""TaskRepository — concrete implementation of TaskRepositoryProtocol.

Every statement filters on user_id. Update, toggle and delete are single
UPDATE/DELETE ... RETURNING statements: 0 rows means the task does not
exist or belongs to someone else, and the caller cannot tell which.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.tf_common.errors import InternalError
from src.tf_common.sql_utils import build_scoped_update
from src.tf_task.domain.models import Task

_COLUMNS = """id, user_id, title, description, completed, priority,
              due_date, account_id, created_at, updated_at"""

_UPDATABLE = frozenset(
    {"title", "description", "completed", "priority", "due_date", "account_id"}
)

_LIST_TASKS_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM tasks
    WHERE user_id = CAST(:user_id AS UUID)
    ORDER BY created_at DESC, id DESC
""")

_GET_TASK_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM tasks
    WHERE id = CAST(:id AS UUID) AND user_id = CAST(:user_id AS UUID)
""")

_INSERT_TASK_SQL = text(f"""
    INSERT INTO tasks
        (user_id, title, description, completed, priority, due_date, account_id)
    VALUES
        (CAST(:user_id AS UUID), :title, :description, :completed, :priority,
         :due_date, CAST(:account_id AS UUID))
    RETURNING {_COLUMNS}
""")

_TOGGLE_TASK_SQL = text(f"""
    UPDATE tasks
    SET completed = NOT completed,
        updated_at = NOW()
    WHERE id = CAST(:id AS UUID) AND user_id = CAST(:user_id AS UUID)
    RETURNING {_COLUMNS}
""")

_DELETE_TASK_SQL = text(f"""
    DELETE FROM tasks
    WHERE id = CAST(:id AS UUID) AND user_id = CAST(:user_id AS UUID)
    RETURNING {_COLUMNS}
""")

_DELETE_TASKS_BY_USER_SQL = text("""
    DELETE FROM tasks
    WHERE user_id = CAST(:user_id AS UUID)
""")


def _row_to_task(row: object) -> Task:
    account_id = row.account_id  # type: ignore[attr-defined]
    return Task(
        id=str(row.id),  # type: ignore[attr-defined]
        user_id=str(row.user_id),  # type: ignore[attr-defined]
        title=row.title,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        completed=row.completed,  # type: ignore[attr-defined]
        priority=row.priority,  # type: ignore[attr-defined]
        due_date=row.due_date,  # type: ignore[attr-defined]
        account_id=str(account_id) if account_id is not None else None,
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class TaskRepository:
    """Concrete repository — all operations atomic at the SQL level."""

    async def list_tasks(self, db: AsyncSession, user_id: str) -> list[Task]:
        result = await db.execute(_LIST_TASKS_SQL, {"user_id": user_id})
        return [_row_to_task(row) for row in result.fetchall()]

    async def get_task(
        self, db: AsyncSession, user_id: str, task_id: str
    ) -> Task | None:
        result = await db.execute(_GET_TASK_SQL, {"id": task_id, "user_id": user_id})
        row = result.fetchone()
        return _row_to_task(row) if row else None

    async def create_task(
        self, db: AsyncSession, user_id: str, fields: dict[str, Any]
    ) -> Task:
        result = await db.execute(_INSERT_TASK_SQL, {"user_id": user_id, **fields})
        row = result.fetchone()
        if row is None:
            raise InternalError("Task insert returned no rows — this should never happen")
        return _row_to_task(row)

    async def update_task(
        self, db: AsyncSession, user_id: str, task_id: str, fields: dict[str, Any]
    ) -> Task | None:
        stmt = build_scoped_update("tasks", fields, _UPDATABLE, _COLUMNS)
        result = await db.execute(stmt, {"id": task_id, "user_id": user_id, **fields})
        row = result.fetchone()
        return _row_to_task(row) if row else None

    async def toggle_task(
        self, db: AsyncSession, user_id: str, task_id: str
    ) -> Task | None:
        result = await db.execute(_TOGGLE_TASK_SQL, {"id": task_id, "user_id": user_id})
        row = result.fetchone()
        return _row_to_task(row) if row else None

    async def delete_task(
        self, db: AsyncSession, user_id: str, task_id: str
    ) -> Task | None:
        result = await db.execute(_DELETE_TASK_SQL, {"id": task_id, "user_id": user_id})
        row = result.fetchone()
        return _row_to_task(row) if row else None

    async def delete_tasks_by_user(self, db: AsyncSession, user_id: str) -> int:
        result = await db.execute(_DELETE_TASKS_BY_USER_SQL, {"user_id": user_id})
        return int(result.rowcount or 0)
