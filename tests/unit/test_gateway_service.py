"""Unit tests for user service (mocked DB)."""

import time
import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import IntegrityError

from src.tf_common.errors import EmailExistsError, InvalidCredentialsError
from src.tf_gateway.auth.jwt_handler import decode_token
from src.tf_gateway.auth.password import hash_password
from src.tf_gateway.user.db_models import UserModel
from src.tf_gateway.user.service import UserService


def _make_user() -> UserModel:
    user = UserModel()
    user.id = uuid.uuid4()
    user.name = "Alice"
    user.email = "alice@example.com"
    user.password_hash = "$2b$12$fakehash"
    return user


def _result(value: object) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


@pytest.fixture
def mock_db() -> AsyncMock:
    db = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def service() -> UserService:
    return UserService()


class TestRegister:
    async def test_duplicate_email_raises_error(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        mock_db.execute = AsyncMock(return_value=_result(_make_user()))

        with pytest.raises(EmailExistsError):
            await service.register("Alice", "alice@example.com", "secret1", mock_db)
        mock_db.add.assert_not_called()

    async def test_success_hashes_password_and_issues_token(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        mock_db.execute = AsyncMock(return_value=_result(None))
        new_id = uuid.uuid4()

        async def _refresh(user: UserModel) -> None:
            user.id = new_id

        mock_db.refresh = AsyncMock(side_effect=_refresh)

        user, token = await service.register("Alice", "alice@example.com", "secret1", mock_db)

        assert user.name == "Alice"
        assert user.password_hash != "secret1"
        assert decode_token(token)["sub"] == str(new_id)
        mock_db.commit.assert_awaited_once()

    async def test_unique_violation_race_maps_to_email_exists(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        mock_db.execute = AsyncMock(return_value=_result(None))
        mock_db.flush = AsyncMock(side_effect=IntegrityError("INSERT", {}, Exception("dup")))

        with pytest.raises(EmailExistsError):
            await service.register("Alice", "alice@example.com", "secret1", mock_db)
        mock_db.rollback.assert_awaited_once()


class TestLogin:
    async def test_unknown_email_raises_credentials_error(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        mock_db.execute = AsyncMock(return_value=_result(None))

        with pytest.raises(InvalidCredentialsError):
            await service.login("nobody@example.com", "secret1", mock_db)

    async def test_wrong_password_raises_credentials_error(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        mock_db.execute = AsyncMock(return_value=_result(_make_user()))

        with (
            patch("src.tf_gateway.user.service.verify_password", return_value=False),
            pytest.raises(InvalidCredentialsError),
        ):
            await service.login("alice@example.com", "wrong", mock_db)

    async def test_success_returns_user_and_token(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        user = _make_user()
        mock_db.execute = AsyncMock(return_value=_result(user))

        with patch("src.tf_gateway.user.service.verify_password", return_value=True):
            returned_user, token = await service.login("alice@example.com", "secret1", mock_db)

        assert returned_user is user
        assert decode_token(token)["sub"] == str(user.id)

    async def test_unknown_email_still_runs_bcrypt(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        mock_db.execute = AsyncMock(return_value=_result(None))

        with (
            patch("src.tf_gateway.user.service.verify_password", return_value=False) as verify,
            pytest.raises(InvalidCredentialsError),
        ):
            await service.login("nobody@example.com", "secret1", mock_db)

        verify.assert_called_once()
        assert verify.call_args.args[0] == "secret1"
        assert verify.call_args.args[1].startswith("$2b$")

    async def test_unknown_email_and_wrong_password_take_comparable_time(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        user = _make_user()
        user.password_hash = hash_password("correct-horse")

        mock_db.execute = AsyncMock(return_value=_result(None))
        start = time.perf_counter()
        with pytest.raises(InvalidCredentialsError):
            await service.login("nobody@example.com", "wrong", mock_db)
        unknown = time.perf_counter() - start

        mock_db.execute = AsyncMock(return_value=_result(user))
        start = time.perf_counter()
        with pytest.raises(InvalidCredentialsError):
            await service.login("alice@example.com", "wrong", mock_db)
        wrong_password = time.perf_counter() - start

        assert wrong_password < unknown * 10
