"""Pydantic schemas for tf_account API."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.tf_account.domain.models import Account, AccountBalance, AccountStats
from src.tf_common.enums import AccountType, Currency
from src.tf_expense.application.schemas import ExpenseResponse

DEFAULT_COLOR = "#7C3AED"

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class AccountCreateRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    name: str = Field(..., min_length=1, max_length=100)
    initial_balance: Decimal = Field(Decimal("0"), max_digits=14, decimal_places=2)
    type: AccountType = AccountType.CHECKING
    currency: Currency = Currency.USD
    color: str = Field(DEFAULT_COLOR, min_length=1, max_length=20)

    @field_validator("name", "color", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    def to_fields(self) -> dict[str, Any]:
        return self.model_dump()


class AccountUpdateRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str | None = Field(None, min_length=1, max_length=100)
    initial_balance: Decimal | None = Field(None, max_digits=14, decimal_places=2)
    type: AccountType | None = None
    currency: Currency | None = None
    color: str | None = Field(None, min_length=1, max_length=20)

    @field_validator("name", "color", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("name", "initial_balance", "type", "currency", "color")
    @classmethod
    def not_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("must not be null")
        return v

    def to_fields(self) -> dict[str, Any]:
        """Only the fields present in the request body."""
        return self.model_dump(exclude_unset=True)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AccountResponse(BaseModel):
    id: str
    name: str
    initial_balance: float
    type: str
    currency: str
    color: str
    user_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, account: Account) -> "AccountResponse":
        return cls(
            id=account.id,
            name=account.name,
            initial_balance=float(account.initial_balance),
            type=account.type,
            currency=account.currency,
            color=account.color,
            user_id=account.user_id,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


class AccountWithBalance(AccountResponse):
    current_balance: float
    total_expenses: float

    @classmethod
    def from_balance(cls, account: Account, balance: AccountBalance) -> "AccountWithBalance":
        return cls(
            **AccountResponse.from_domain(account).model_dump(),
            current_balance=float(balance.current_balance),
            total_expenses=float(balance.total_expenses),
        )


class AccountDetail(AccountWithBalance):
    expenses: list[ExpenseResponse]


class AccountStatsResponse(BaseModel):
    total_balance: float
    total_accounts: int
    total_expenses_this_month: float

    @classmethod
    def from_domain(cls, stats: AccountStats) -> "AccountStatsResponse":
        return cls(
            total_balance=float(stats.total_balance),
            total_accounts=stats.total_accounts,
            total_expenses_this_month=float(stats.total_expenses_this_month),
        )
