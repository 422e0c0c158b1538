"""Unit tests for scoped UPDATE building and date helpers."""

from datetime import UTC, datetime

import pytest

from src.tf_common.datetime_utils import start_of_month
from src.tf_common.sql_utils import build_scoped_update


class TestBuildScopedUpdate:
    def test_builds_ownership_scoped_statement(self) -> None:
        stmt = build_scoped_update("tasks", ["title"], frozenset({"title", "completed"}), "id")
        sql = str(stmt)
        assert sql.startswith("UPDATE tasks SET title = :title, updated_at = NOW()")
        assert "WHERE id = CAST(:id AS UUID) AND user_id = CAST(:user_id AS UUID)" in sql
        assert sql.endswith("RETURNING id")

    def test_empty_update_only_touches_timestamp(self) -> None:
        sql = str(build_scoped_update("tasks", [], frozenset({"title"}), "id"))
        assert "SET updated_at = NOW()" in sql

    def test_rejects_unknown_column(self) -> None:
        with pytest.raises(ValueError):
            build_scoped_update("tasks", ["user_id"], frozenset({"title"}), "id")


class TestStartOfMonth:
    def test_truncates_to_first_instant(self) -> None:
        now = datetime(2026, 3, 17, 15, 42, 9, 123, tzinfo=UTC)
        assert start_of_month(now) == datetime(2026, 3, 1, tzinfo=UTC)

    def test_default_is_current_month(self) -> None:
        first = start_of_month()
        assert first.day == 1
        assert first.tzinfo is not None
