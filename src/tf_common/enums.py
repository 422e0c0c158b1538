"""Global enums — must match DB CHECK constraints exactly.

See alembic/versions/003_create_tasks.py and 004_create_accounts.py.
"""

from enum import Enum


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AccountType(str, Enum):
    CHECKING = "checking"
    SAVINGS = "savings"
    CASH = "cash"
    CREDIT = "credit"
    OTHER = "other"


class Currency(str, Enum):
    USD = "USD"
    COP = "COP"
    EUR = "EUR"
