"""Expansion of recurring transaction templates into concrete dates"""

import logging
from datetime import date
from typing import List

from solarfin.domain.exceptions import DateOutOfRangeError, InvalidRecordError
from solarfin.domain.models import FREQUENCIES, NO_RECURRENCE, Transaction
from solarfin.domain.validation import require_date
from solarfin.utils.date_utils import add_days, add_months, months_between

MAX_OCCURRENCES = 200


def _first_step(anchor: date, frequency: str, window_start: date) -> int:
    """Smallest step index whose date can fall on or after window_start"""
    if window_start <= anchor:
        return 0
    if frequency == "weekly":
        return -(-(window_start - anchor).days // 7)
    if frequency == "monthly":
        return months_between(anchor, window_start)
    return window_start.year - anchor.year


def _step_date(anchor: date, frequency: str, step: int) -> date:
    # Always derived from the anchor so a clamped day never sticks
    if frequency == "weekly":
        return add_days(anchor, 7 * step)
    if frequency == "monthly":
        return add_months(anchor, step)
    return add_months(anchor, 12 * step)


def occurrences(
    transaction: Transaction,
    window_start: date,
    window_end: date,
    max_occurrences: int = MAX_OCCURRENCES,
) -> List[date]:
    """
    Dates on which a transaction falls inside [window_start, window_end].

    Non-recurring transactions yield their own date when it is in the window.
    Recurring ones step from the anchor date by one week, calendar month or
    calendar year; monthly and annual steps keep the anchor's day-of-month,
    clamped to shorter months. Nothing is emitted before the anchor.

    Raises:
        InvalidRecordError: On a malformed date or unknown frequency
    """
    anchor = require_date(transaction.date, transaction.id)
    require_date(window_start, transaction.id, "window_start")
    require_date(window_end, transaction.id, "window_end")

    if transaction.frequency not in FREQUENCIES:
        raise InvalidRecordError(
            f"Record {transaction.id}: unknown recurrence frequency {transaction.frequency!r}"
        )

    if window_end < window_start or anchor > window_end:
        return []

    if transaction.frequency == NO_RECURRENCE:
        return [anchor] if anchor >= window_start else []

    step = _first_step(anchor, transaction.frequency, window_start)
    dates: List[date] = []
    while len(dates) < max_occurrences:
        try:
            occurrence = _step_date(anchor, transaction.frequency, step)
        except DateOutOfRangeError:
            # Past date.max, so past any window
            break
        if occurrence > window_end:
            break
        if occurrence >= window_start:
            dates.append(occurrence)
        step += 1
    else:
        logging.warning(
            "Occurrence cap reached",
            extra={
                "transaction_id": transaction.id,
                "step": "occurrences",
                "max_occurrences": max_occurrences,
            },
        )

    return dates
