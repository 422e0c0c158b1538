"""tf_account REST API — all endpoints require JWT authentication.

GET    /accounts/stats          — total balance, account count, this month's spend
GET    /accounts                — caller's accounts with current_balance/total_expenses
GET    /accounts/{account_id}    — single account with balance and its expenses
POST   /accounts                — create (create rate limit)
PUT    /accounts/{account_id}    — partial update
DELETE /accounts/{account_id}    — delete account and its expenses
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.tf_account.application.schemas import AccountCreateRequest, AccountUpdateRequest
from src.tf_account.application.service import AccountApplicationService
from src.tf_cascade.application.service import CascadeDeletionService
from src.tf_common.database import get_db_session
from src.tf_common.response import ApiResponse, request_response
from src.tf_gateway.auth.dependencies import CurrentUser
from src.tf_gateway.middleware.rate_limit import create_limiter

router = APIRouter(prefix="/accounts", tags=["accounts"])

_service = AccountApplicationService()
_cascade = CascadeDeletionService()


@router.get("/stats")
async def get_stats(
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    stats = await _service.get_stats(db, str(current_user.id))
    return request_response(request, stats.model_dump())


@router.get("")
async def list_accounts(
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    accounts = await _service.list_accounts(db, str(current_user.id))
    return request_response(request, [a.model_dump() for a in accounts])


@router.get("/{account_id}")
async def get_account(
    account_id: UUID,
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    account = await _service.get_account(db, str(current_user.id), str(account_id))
    return request_response(request, account.model_dump())


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(create_limiter)],
)
async def create_account(
    body: AccountCreateRequest,
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    account = await _service.create_account(db, str(current_user.id), body)
    return request_response(request, account.model_dump(), "Account created")


@router.put("/{account_id}")
async def update_account(
    account_id: UUID,
    body: AccountUpdateRequest,
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    account = await _service.update_account(db, str(current_user.id), str(account_id), body)
    return request_response(request, account.model_dump(), "Account updated")


@router.delete("/{account_id}")
async def delete_account(
    account_id: UUID,
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    removed = await _cascade.delete_account(db, str(current_user.id), str(account_id))
    return request_response(
        request, {"deleted_expenses": removed}, "Account and its expenses deleted"
    )
