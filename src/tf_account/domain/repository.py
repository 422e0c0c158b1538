"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.tf_account.domain.models import Account


class AccountRepositoryProtocol(Protocol):
    async def list_accounts(self, db: AsyncSession, user_id: str) -> list[Account]: ...

    async def get_account(
        self, db: AsyncSession, user_id: str, account_id: str
    ) -> Account | None: ...

    async def create_account(
        self, db: AsyncSession, user_id: str, fields: dict[str, Any]
    ) -> Account: ...

    async def update_account(
        self, db: AsyncSession, user_id: str, account_id: str, fields: dict[str, Any]
    ) -> Account | None: ...

    async def delete_account(
        self, db: AsyncSession, user_id: str, account_id: str
    ) -> Account | None: ...

    async def delete_accounts_by_user(self, db: AsyncSession, user_id: str) -> int: ...

    async def expense_totals(
        self, db: AsyncSession, account_ids: list[str]
    ) -> dict[str, Decimal]: ...

    async def expenses_since(
        self, db: AsyncSession, user_id: str, since: datetime
    ) -> Decimal: ...
