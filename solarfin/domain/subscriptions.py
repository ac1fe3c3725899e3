"""Recurring expenses with their expected payment in the current month"""

from datetime import date
from typing import List, Optional, Sequence

from solarfin.domain.models import EXPENSE, SubscriptionStatus, Transaction
from solarfin.domain.occurrences import MAX_OCCURRENCES, occurrences
from solarfin.domain.validation import ensure_single_owner, require_date
from solarfin.utils.date_utils import month_bounds


def expected_date(
    transaction: Transaction,
    today: date,
    max_occurrences: int = MAX_OCCURRENCES,
) -> Optional[date]:
    """
    Payment date of a recurring transaction in today's month.

    Monthly and annual items report their occurrence in the month even when
    it is still ahead. Weekly items report the latest occurrence up to today.
    """
    month_start, month_end = month_bounds(today.month, today.year)
    if transaction.frequency == "weekly":
        dates = occurrences(transaction, month_start, today, max_occurrences)
        return dates[-1] if dates else None
    dates = occurrences(transaction, month_start, month_end, max_occurrences)
    return dates[0] if dates else None


def subscription_status(
    transactions: Sequence[Transaction],
    today: date,
    max_occurrences: int = MAX_OCCURRENCES,
) -> List[SubscriptionStatus]:
    ensure_single_owner(transactions)
    require_date(today, "today", "today")

    recurring = [tx for tx in transactions if tx.type == EXPENSE and tx.is_recurring]
    recurring.sort(key=lambda tx: (tx.category, tx.description or ""))

    statuses = []
    for tx in recurring:
        expected = expected_date(tx, today, max_occurrences)
        statuses.append(
            SubscriptionStatus(
                transaction_id=tx.id,
                description=tx.description,
                category=tx.category,
                amount=tx.amount,
                frequency=tx.frequency,
                anchor_date=tx.date,
                expected_date=expected,
                paid_this_month=expected is not None and expected <= today,
                transaction=tx,
            )
        )
    return statuses
