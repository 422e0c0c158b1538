"""Pydantic schemas for tf_expense API.

Create and update arrive as multipart/form-data (the optional receipt file
travels in the same request), so the request models are filled by the
form dependencies in src/tf_expense/api/forms.py.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.tf_common.datetime_utils import utc_now
from src.tf_expense.domain.models import Expense, Receipt

DEFAULT_CATEGORY = "General"

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ExpenseCreateForm(BaseModel):
    description: str = Field(..., min_length=1, max_length=200)
    amount: Decimal = Field(..., max_digits=14, decimal_places=2)
    date: datetime = Field(default_factory=utc_now)
    category: str = Field(DEFAULT_CATEGORY, max_length=50)
    account_id: UUID

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, v: object) -> object:
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_CATEGORY
        return v.strip() if isinstance(v, str) else v

    def to_fields(self, receipt: Receipt | None) -> dict[str, Any]:
        fields = self.model_dump()
        fields["account_id"] = str(self.account_id)
        if receipt is not None:
            fields["receipt_data"] = receipt.data
            fields["receipt_content_type"] = receipt.content_type
        return fields


class ExpenseUpdateForm(BaseModel):
    """Every field optional; account_id cannot be changed after creation."""

    description: str | None = Field(None, min_length=1, max_length=200)
    amount: Decimal | None = Field(None, max_digits=14, decimal_places=2)
    date: datetime | None = None
    category: str | None = Field(None, max_length=50)

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return DEFAULT_CATEGORY
        return v.strip() if isinstance(v, str) else v

    def to_fields(self, receipt: Receipt | None) -> dict[str, Any]:
        """Only the fields the client sent, plus the new receipt if any."""
        fields = {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}
        if receipt is not None:
            fields["receipt_data"] = receipt.data
            fields["receipt_content_type"] = receipt.content_type
        return fields


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ExpenseResponse(BaseModel):
    id: str
    description: str
    amount: float
    date: datetime
    category: str
    account_id: str
    user_id: str
    has_receipt: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, expense: Expense) -> "ExpenseResponse":
        return cls(
            id=expense.id,
            description=expense.description,
            amount=float(expense.amount),
            date=expense.date,
            category=expense.category,
            account_id=expense.account_id,
            user_id=expense.user_id,
            has_receipt=expense.has_receipt,
            created_at=expense.created_at,
            updated_at=expense.updated_at,
        )
