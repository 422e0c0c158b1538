"""tf_expense REST API — all endpoints require JWT authentication.

GET    /expenses?account_id=...   — caller's expenses, optionally one account
GET    /expenses/{expense_id}      — single expense (no receipt bytes)
GET    /expenses/{expense_id}/image — raw receipt bytes with stored content type
POST   /expenses                  — multipart create (create rate limit)
PUT    /expenses/{expense_id}      — multipart partial update
DELETE /expenses/{expense_id}      — delete
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.tf_common.database import get_db_session
from src.tf_common.response import ApiResponse, request_response
from src.tf_expense.api.forms import expense_create_form, expense_update_form
from src.tf_expense.api.receipt import read_receipt
from src.tf_expense.application.schemas import ExpenseCreateForm, ExpenseUpdateForm
from src.tf_expense.application.service import ExpenseApplicationService
from src.tf_expense.domain.models import Receipt
from src.tf_gateway.auth.dependencies import CurrentUser
from src.tf_gateway.middleware.rate_limit import create_limiter

router = APIRouter(prefix="/expenses", tags=["expenses"])

_service = ExpenseApplicationService()


@router.get("")
async def list_expenses(
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    account_id: UUID | None = Query(None, description="Only expenses of this account"),
) -> ApiResponse:
    expenses = await _service.list_expenses(
        db, str(current_user.id), str(account_id) if account_id else None
    )
    return request_response(request, [e.model_dump() for e in expenses])


@router.get("/{expense_id}")
async def get_expense(
    expense_id: UUID,
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    expense = await _service.get_expense(db, str(current_user.id), str(expense_id))
    return request_response(request, expense.model_dump())


@router.get("/{expense_id}/image", response_class=Response)
async def get_expense_image(
    expense_id: UUID,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> Response:
    receipt = await _service.get_receipt(db, str(current_user.id), str(expense_id))
    return Response(content=receipt.data, media_type=receipt.content_type)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(create_limiter)],
)
async def create_expense(
    current_user: CurrentUser,
    body: Annotated[ExpenseCreateForm, Depends(expense_create_form)],
    receipt: Annotated[Receipt | None, Depends(read_receipt)],
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    expense = await _service.create_expense(db, str(current_user.id), body, receipt)
    return request_response(request, expense.model_dump(), "Expense created")


@router.put("/{expense_id}")
async def update_expense(
    expense_id: UUID,
    current_user: CurrentUser,
    body: Annotated[ExpenseUpdateForm, Depends(expense_update_form)],
    receipt: Annotated[Receipt | None, Depends(read_receipt)],
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    expense = await _service.update_expense(
        db, str(current_user.id), str(expense_id), body, receipt
    )
    return request_response(request, expense.model_dump(), "Expense updated")


@router.delete("/{expense_id}")
async def delete_expense(
    expense_id: UUID,
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _service.delete_expense(db, str(current_user.id), str(expense_id))
    return request_response(request, None, "Expense deleted")
