"""Unit tests for CascadeDeletionService — ordering and atomicity."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.tf_account.domain.models import Account
from src.tf_cascade.application.service import CascadeDeletionService
from src.tf_common.errors import AccountNotFoundError

USER_ID = "5b1d6a0e-7c1f-4c7a-9a0f-0d3e1b2c3a44"


def _make_account() -> Account:
    now = datetime.now(UTC)
    return Account(
        id="acc-1",
        user_id=USER_ID,
        name="Main",
        initial_balance=Decimal("0"),
        type="cash",
        currency="USD",
        color="#7C3AED",
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def calls() -> list[str]:
    return []


@pytest.fixture
def repos(calls: list[str]) -> tuple[AsyncMock, AsyncMock, AsyncMock]:
    task_repo, account_repo, expense_repo = AsyncMock(), AsyncMock(), AsyncMock()

    def _record(name: str, value: object) -> AsyncMock:
        async def _call(*args: object) -> object:
            calls.append(name)
            return value

        return AsyncMock(side_effect=_call)

    expense_repo.delete_expenses_by_user = _record("expenses", 3)
    expense_repo.delete_expenses_by_account = _record("account_expenses", 2)
    account_repo.delete_accounts_by_user = _record("accounts", 1)
    account_repo.delete_account = _record("account", _make_account())
    task_repo.delete_tasks_by_user = _record("tasks", 4)
    return task_repo, account_repo, expense_repo


@pytest.fixture
def svc(repos: tuple[AsyncMock, AsyncMock, AsyncMock]) -> CascadeDeletionService:
    task_repo, account_repo, expense_repo = repos
    return CascadeDeletionService(
        task_repo=task_repo, account_repo=account_repo, expense_repo=expense_repo
    )


def _db(calls: list[str]) -> AsyncMock:
    db = AsyncMock()
    result = MagicMock()
    result.rowcount = 1

    async def _execute(*args: object) -> MagicMock:
        calls.append("user")
        return result

    db.execute = AsyncMock(side_effect=_execute)
    return db


class TestDeleteAccount:
    async def test_deletes_account_then_its_expenses(
        self, svc: CascadeDeletionService, calls: list[str]
    ) -> None:
        db = AsyncMock()

        removed = await svc.delete_account(db, USER_ID, "acc-1")

        assert removed == 2
        assert calls == ["account", "account_expenses"]
        db.commit.assert_awaited_once()

    async def test_missing_account_touches_no_expenses(
        self,
        svc: CascadeDeletionService,
        repos: tuple[AsyncMock, AsyncMock, AsyncMock],
        calls: list[str],
    ) -> None:
        _, account_repo, _ = repos
        account_repo.delete_account = AsyncMock(return_value=None)
        db = AsyncMock()

        with pytest.raises(AccountNotFoundError):
            await svc.delete_account(db, USER_ID, "acc-x")

        assert "account_expenses" not in calls
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()


class TestDeleteUser:
    async def test_order_is_expenses_accounts_tasks_user(
        self, svc: CascadeDeletionService, calls: list[str]
    ) -> None:
        db = _db(calls)

        removed = await svc.delete_user(db, USER_ID)

        assert calls == ["expenses", "accounts", "tasks", "user"]
        assert removed == {"expenses": 3, "accounts": 1, "tasks": 4, "users": 1}
        db.commit.assert_awaited_once()

    async def test_failure_rolls_back_everything(
        self,
        svc: CascadeDeletionService,
        repos: tuple[AsyncMock, AsyncMock, AsyncMock],
        calls: list[str],
    ) -> None:
        task_repo, _, _ = repos
        task_repo.delete_tasks_by_user = AsyncMock(side_effect=RuntimeError("db down"))
        db = _db(calls)

        with pytest.raises(RuntimeError):
            await svc.delete_user(db, USER_ID)

        assert "user" not in calls
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()
