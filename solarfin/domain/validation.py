"""Fail-fast checks on records entering the engine"""

from datetime import date, datetime
from typing import Iterable

from solarfin.domain.exceptions import InvalidRecordError, OwnerMismatchError


def require_date(value: object, record_id: str, field_name: str = "date") -> date:
    """Return `value` if it is a calendar date, otherwise reject the record"""
    if not isinstance(value, date) or isinstance(value, datetime):
        raise InvalidRecordError(f"Record {record_id}: {field_name} must be a calendar date, got {value!r}")
    return value


def require_installments(count: object, record_id: str) -> int:
    if not isinstance(count, int) or isinstance(count, bool) or count < 1:
        raise InvalidRecordError(f"Record {record_id}: installment count must be >= 1, got {count!r}")
    return count


def require_day_of_month(day: object, record_id: str, field_name: str) -> int:
    if not isinstance(day, int) or isinstance(day, bool) or not 1 <= day <= 31:
        raise InvalidRecordError(f"Record {record_id}: {field_name} must be between 1 and 31, got {day!r}")
    return day


def ensure_single_owner(*collections: Iterable) -> str | None:
    """
    Verify every record across the given collections has the same owner.

    Returns the shared owner id, or None when all collections are empty.
    """
    owner_id = None
    for records in collections:
        for record in records:
            if owner_id is None:
                owner_id = record.owner_id
            elif record.owner_id != owner_id:
                raise OwnerMismatchError(
                    f"Record {record.id} belongs to {record.owner_id}, expected {owner_id}"
                )
    return owner_id
