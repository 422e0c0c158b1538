"""Derived balance calculator — pure functions over raw expense amounts.

Nothing here is cached or stored: callers pass in the amounts read from the
expenses table at query time, so a balance is only ever as stale as the
query that fed it.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal

from src.tf_account.domain.models import Account, AccountBalance, AccountStats

_ZERO = Decimal("0")


def compute_balance(initial_balance: Decimal, expense_amounts: Iterable[Decimal]) -> AccountBalance:
    """current_balance = initial_balance − Σ amounts; total_expenses = Σ amounts."""
    total = sum(expense_amounts, _ZERO)
    return AccountBalance(current_balance=initial_balance - total, total_expenses=total)


def balance_from_total(initial_balance: Decimal, total_expenses: Decimal | None) -> AccountBalance:
    """Same as compute_balance when the sum was already aggregated in SQL."""
    total = total_expenses if total_expenses is not None else _ZERO
    return AccountBalance(current_balance=initial_balance - total, total_expenses=total)


def compute_stats(
    accounts: Iterable[Account],
    totals_by_account: Mapping[str, Decimal],
    expenses_this_month: Decimal | None,
) -> AccountStats:
    """Aggregate a user's accounts into dashboard statistics.

    *totals_by_account* maps account id → Σ expense amounts; accounts
    without expenses may be absent.
    """
    accounts = list(accounts)
    total_balance = sum(
        (
            balance_from_total(a.initial_balance, totals_by_account.get(a.id)).current_balance
            for a in accounts
        ),
        _ZERO,
    )
    return AccountStats(
        total_balance=total_balance,
        total_accounts=len(accounts),
        total_expenses_this_month=expenses_this_month if expenses_this_month is not None else _ZERO,
    )
