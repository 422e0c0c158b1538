"""Auth API router: register, login, profile, self-deletion.

All endpoints return ApiResponse[T]. request_id is read from
request.state (injected by RequestLogMiddleware).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.tf_cascade.application.service import CascadeDeletionService
from src.tf_common.database import get_db_session
from src.tf_common.response import ApiResponse, request_response
from src.tf_gateway.auth.dependencies import CurrentUser
from src.tf_gateway.middleware.rate_limit import auth_limiter
from src.tf_gateway.user.db_models import UserModel
from src.tf_gateway.user.schemas import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    UserInfo,
)
from src.tf_gateway.user.service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])
_service = UserService()
_cascade = CascadeDeletionService()


def _auth_payload(user: UserModel, token: str) -> dict:
    return AuthResponse(
        token=token,
        token_type="Bearer",
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        user=UserInfo(id=str(user.id), name=user.name, email=user.email),
    ).model_dump()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    dependencies=[Depends(auth_limiter)],
    summary="User registration",
)
async def register(
    request: Request,
    body: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    user, token = await _service.register(body.name, body.email, body.password, db)
    return request_response(request, _auth_payload(user, token), "User registered successfully")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    dependencies=[Depends(auth_limiter)],
    summary="User login",
)
async def login(
    request: Request,
    body: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    user, token = await _service.login(body.email, body.password, db)
    return request_response(request, _auth_payload(user, token), "Login successful")


@router.get("/me", response_model=ApiResponse, summary="Current user profile")
async def me(request: Request, current_user: CurrentUser) -> ApiResponse:
    data = ProfileResponse(
        id=str(current_user.id),
        name=current_user.name,
        email=current_user.email,
        created_at=current_user.created_at.isoformat(),
    )
    return request_response(request, data.model_dump())


@router.delete("/me", response_model=ApiResponse, summary="Delete own user and all data")
async def delete_me(
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    removed = await _cascade.delete_user(db, str(current_user.id))
    return request_response(request, removed, "User and all associated data deleted")
