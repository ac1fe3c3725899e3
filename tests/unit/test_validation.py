"""Unit tests for record validation"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from solarfin.domain.exceptions import InvalidRecordError, OwnerMismatchError
from solarfin.domain.models import Loan, Transaction
from solarfin.domain.validation import (
    ensure_single_owner,
    require_date,
    require_day_of_month,
    require_installments,
)


def make_tx(tx_id: str, owner_id: str) -> Transaction:
    return Transaction(
        id=tx_id,
        owner_id=owner_id,
        type="expense",
        amount=Decimal("10"),
        category="Food",
        date=date(2025, 3, 1),
    )


def test_require_date_accepts_date():
    assert require_date(date(2025, 3, 1), "r1") == date(2025, 3, 1)


@pytest.mark.parametrize("value", [datetime(2025, 3, 1, 12, 0), "2025-03-01", None])
def test_require_date_rejects_non_dates(value):
    with pytest.raises(InvalidRecordError, match="r1"):
        require_date(value, "r1")


@pytest.mark.parametrize("count", [0, -2, 1.5, True])
def test_require_installments_rejects_bad_counts(count):
    with pytest.raises(InvalidRecordError):
        require_installments(count, "p1")


@pytest.mark.parametrize("day", [0, 32])
def test_require_day_of_month_range(day):
    with pytest.raises(InvalidRecordError, match="closing_day"):
        require_day_of_month(day, "card_1", "closing_day")
    assert require_day_of_month(31, "card_1", "closing_day") == 31


def test_single_owner_across_collections():
    loan = Loan(
        id="loan_1",
        owner_id="user_1",
        bank_name="Bank",
        description="Loan",
        installment_amount=Decimal("100"),
        installments_count=2,
        start_date=date(2025, 1, 1),
    )
    assert ensure_single_owner([make_tx("t1", "user_1")], [], [loan]) == "user_1"
    assert ensure_single_owner([], []) is None


def test_mixed_owners_rejected():
    with pytest.raises(OwnerMismatchError, match="t2"):
        ensure_single_owner([make_tx("t1", "user_1"), make_tx("t2", "user_2")])
