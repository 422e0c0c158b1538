"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.tf_account.api.router import router as account_router
from src.tf_common.database import engine
from src.tf_common.errors import AppError, InternalError, ValidationFailedError
from src.tf_common.redis_client import close_redis, get_redis
from src.tf_common.response import error_response
from src.tf_expense.api.router import router as expense_router
from src.tf_gateway.api.router import router as auth_router
from src.tf_gateway.middleware.rate_limit import general_limiter
from src.tf_gateway.middleware.request_log import RequestLogMiddleware
from src.tf_task.api.router import router as task_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("tf.app")

# Location prefixes FastAPI puts in front of the field name.
_LOC_SOURCES = {"body", "query", "path", "header", "cookie"}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis connections. Shutdown: dispose."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    redis = await get_redis()
    await redis.ping()
    logger.info("Connected to database and redis")
    yield
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
    dependencies=[Depends(general_limiter)],
)


app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _json_error(request: Request, status_code: int, resp, headers=None) -> JSONResponse:
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=status_code,
        content=resp.model_dump(),
        headers=headers,
    )


def _field_errors(errors) -> list[dict[str, str]]:
    fields = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in _LOC_SOURCES]
        fields.append({"field": ".".join(loc) or "request", "message": err.get("msg", "")})
    return fields


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    errors = exc.errors if isinstance(exc, ValidationFailedError) else None
    resp = error_response(exc.code, exc.message, errors)
    return _json_error(request, exc.http_status, resp, exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await app_error_handler(request, ValidationFailedError(_field_errors(exc.errors())))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    err = InternalError(str(exc) if settings.DEBUG else "Internal server error")
    return await app_error_handler(request, err)


app.include_router(auth_router, prefix="/api/v1")
app.include_router(task_router, prefix="/api/v1")
app.include_router(account_router, prefix="/api/v1")
app.include_router(expense_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
