"""tf_task REST API — all endpoints require JWT authentication.

GET    /tasks                 — caller's tasks, newest first
GET    /tasks/{task_id}       — single task
POST   /tasks                 — create (create rate limit)
PUT    /tasks/{task_id}       — partial update
DELETE /tasks/{task_id}       — delete
PATCH  /tasks/{task_id}/toggle — flip completed
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.tf_common.database import get_db_session
from src.tf_common.response import ApiResponse, request_response
from src.tf_gateway.auth.dependencies import CurrentUser
from src.tf_gateway.middleware.rate_limit import create_limiter
from src.tf_task.application.schemas import TaskCreateRequest, TaskUpdateRequest
from src.tf_task.application.service import TaskApplicationService

router = APIRouter(prefix="/tasks", tags=["tasks"])

_service = TaskApplicationService()


@router.get("")
async def list_tasks(
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    tasks = await _service.list_tasks(db, str(current_user.id))
    return request_response(request, [t.model_dump() for t in tasks])


@router.get("/{task_id}")
async def get_task(
    task_id: UUID,
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    task = await _service.get_task(db, str(current_user.id), str(task_id))
    return request_response(request, task.model_dump())


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(create_limiter)],
)
async def create_task(
    body: TaskCreateRequest,
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    task = await _service.create_task(db, str(current_user.id), body)
    return request_response(request, task.model_dump(), "Task created")


@router.put("/{task_id}")
async def update_task(
    task_id: UUID,
    body: TaskUpdateRequest,
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    task = await _service.update_task(db, str(current_user.id), str(task_id), body)
    return request_response(request, task.model_dump(), "Task updated")


@router.delete("/{task_id}")
async def delete_task(
    task_id: UUID,
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _service.delete_task(db, str(current_user.id), str(task_id))
    return request_response(request, None, "Task deleted")


@router.patch("/{task_id}/toggle")
async def toggle_task(
    task_id: UUID,
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    task = await _service.toggle_task(db, str(current_user.id), str(task_id))
    return request_response(request, task.model_dump())
