"""Domain models for tf_expense — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Expense:
    """An expense row without its receipt bytes.

    List and detail queries never load receipt_data; has_receipt tells the
    client whether GET /expenses/{id}/image will return anything.
    """

    id: str
    user_id: str
    account_id: str
    description: str
    amount: Decimal
    date: datetime
    category: str
    has_receipt: bool
    created_at: datetime
    updated_at: datetime


@dataclass
class Receipt:
    data: bytes
    content_type: str
