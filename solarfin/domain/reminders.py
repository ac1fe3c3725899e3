"""Reminders for recurring transactions falling around today"""

from datetime import date, timedelta
from typing import List, Sequence

from solarfin.domain.models import Reminder, Transaction
from solarfin.domain.occurrences import MAX_OCCURRENCES, occurrences
from solarfin.domain.validation import ensure_single_owner, require_date

DAYS_BEFORE = 7
DAYS_AFTER = 14


def _created_ts(transaction: Transaction) -> float:
    return transaction.created_at.timestamp() if transaction.created_at else 0.0


def upcoming_reminders(
    transactions: Sequence[Transaction],
    today: date,
    days_before: int = DAYS_BEFORE,
    days_after: int = DAYS_AFTER,
    max_occurrences: int = MAX_OCCURRENCES,
) -> List[Reminder]:
    """
    Occurrences of recurring transactions from `days_before` days ago up to
    `days_after` days ahead, latest projected date first.
    """
    ensure_single_owner(transactions)
    require_date(today, "today", "today")
    # Window is cut at the ends of the calendar
    window_start = today - timedelta(days=min(days_before, (today - date.min).days))
    window_end = today + timedelta(days=min(days_after, (date.max - today).days))

    reminders = []
    for tx in transactions:
        if not tx.is_recurring:
            continue
        for projected in occurrences(tx, window_start, window_end, max_occurrences):
            reminders.append(
                Reminder(
                    id=f"tx-{tx.id}-{projected.isoformat()}",
                    transaction_id=tx.id,
                    message=f"{tx.description or tx.category} - {tx.amount:.2f}",
                    projected_date=projected,
                    is_past=projected < today,
                    transaction=tx,
                )
            )

    reminders.sort(
        key=lambda r: (r.projected_date, _created_ts(r.transaction)),
        reverse=True,
    )
    return reminders
