"""Domain models for tf_task — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Task:
    id: str
    user_id: str
    title: str
    description: str | None
    completed: bool
    priority: str                    # TaskPriority value
    due_date: datetime | None
    account_id: str | None
    created_at: datetime
    updated_at: datetime
