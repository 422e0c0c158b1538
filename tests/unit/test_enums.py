"""Tests for tf_common.enums — all enum values must match DB CHECK constraints."""

from src.tf_common.enums import AccountType, Currency, TaskPriority


class TestAllEnumsAreStr:
    """All enums inherit from (str, Enum) for JSON serialization."""

    def test_task_priority_is_str(self) -> None:
        assert isinstance(TaskPriority.HIGH, str)
        assert TaskPriority.HIGH == "high"

    def test_account_type_is_str(self) -> None:
        assert isinstance(AccountType.SAVINGS, str)
        assert AccountType.SAVINGS == "savings"

    def test_currency_is_str(self) -> None:
        assert isinstance(Currency.COP, str)
        assert Currency.COP == "COP"


class TestValuesMatchCheckConstraints:
    def test_task_priority(self) -> None:
        assert {p.value for p in TaskPriority} == {"low", "medium", "high"}

    def test_account_type(self) -> None:
        assert {t.value for t in AccountType} == {"checking", "savings", "cash", "credit", "other"}

    def test_currency(self) -> None:
        assert {c.value for c in Currency} == {"USD", "COP", "EUR"}
