"""Domain models for tf_account — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Account:
    id: str
    user_id: str
    name: str
    initial_balance: Decimal
    type: str                # AccountType value
    currency: str            # Currency value
    color: str
    created_at: datetime
    updated_at: datetime


@dataclass
class AccountBalance:
    """Derived on every read, never persisted."""

    current_balance: Decimal
    total_expenses: Decimal


@dataclass
class AccountStats:
    total_balance: Decimal
    total_accounts: int
    total_expenses_this_month: Decimal
