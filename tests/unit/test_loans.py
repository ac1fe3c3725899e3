"""Unit tests for loan schedules and progress"""

import pytest
from datetime import date
from decimal import Decimal
from solarfin.domain.exceptions import InvalidRecordError
from solarfin.domain.loans import installment_due_dates, installment_due_in_month, loan_portfolio, loan_progress
from solarfin.domain.models import Loan


def make_loan(start: date, count: int = 3, amount: str = "200", loan_id: str = "loan_1", bank: str = "Bank A") -> Loan:
    return Loan(
        id=loan_id,
        owner_id="user_1",
        bank_name=bank,
        description="Personal loan",
        installment_amount=Decimal(amount),
        installments_count=count,
        start_date=start,
    )


def test_schedule_from_31st_is_not_permanently_shifted():
    loan = make_loan(date(2025, 1, 31))
    assert installment_due_dates(loan) == [date(2025, 1, 31), date(2025, 2, 28), date(2025, 3, 31)]


def test_schedule_in_leap_year():
    loan = make_loan(date(2024, 1, 31))
    assert installment_due_dates(loan)[1] == date(2024, 2, 29)


def test_end_date_is_derived():
    assert make_loan(date(2025, 1, 31)).end_date == date(2025, 3, 31)
    assert make_loan(date(2025, 11, 15), count=3).end_date == date(2026, 1, 15)


def test_installment_due_in_month():
    loan = make_loan(date(2025, 1, 31))
    assert installment_due_in_month(loan, 2, 2025) == Decimal("200")


def test_nothing_due_outside_schedule():
    loan = make_loan(date(2025, 1, 31))
    assert installment_due_in_month(loan, 12, 2024) is None
    assert installment_due_in_month(loan, 4, 2025) is None


def test_zero_installments_rejected():
    with pytest.raises(InvalidRecordError):
        installment_due_dates(make_loan(date(2025, 1, 1), count=0))


def test_progress_upcoming():
    progress = loan_progress(make_loan(date(2025, 4, 1)), date(2025, 3, 15))
    assert progress.status == "upcoming"
    assert progress.installments_paid == 0
    assert progress.remaining_amount == Decimal("600")


def test_progress_active():
    progress = loan_progress(make_loan(date(2025, 2, 10)), date(2025, 3, 15))
    assert progress.status == "active"
    assert progress.installments_paid == 2
    assert progress.installments_remaining == 1
    assert progress.paid_amount == Decimal("400")
    assert progress.progress_pct == pytest.approx(66.666, rel=1e-3)


def test_progress_completed_on_last_due_date():
    progress = loan_progress(make_loan(date(2025, 1, 15)), date(2025, 3, 15))
    assert progress.status == "completed"
    assert progress.remaining_amount == Decimal("0")
    assert progress.progress_pct == 100.0


def test_portfolio_groups_by_bank():
    today = date(2025, 3, 15)
    loans = [
        make_loan(date(2025, 3, 1), count=3, amount="100", loan_id="a", bank="Bank A"),
        make_loan(date(2025, 2, 20), count=4, amount="300", loan_id="b", bank="Bank B"),
        make_loan(date(2024, 1, 1), count=2, amount="999", loan_id="c", bank="Bank A"),  # completed
    ]
    portfolio = loan_portfolio(loans, today)

    # a: 2 remaining * 100, b: 3 remaining * 300
    assert portfolio.total_remaining == Decimal("1100")
    assert portfolio.next_month_payments == Decimal("400")
    assert [(d.bank_name, d.total_remaining, d.loan_count) for d in portfolio.debt_by_bank] == [
        ("Bank B", Decimal("900"), 1),
        ("Bank A", Decimal("200"), 1),
    ]
    assert len(portfolio.loans) == 3


def test_portfolio_next_month_includes_upcoming_loan():
    """A loan starting next month already counts toward next month's payments"""
    portfolio = loan_portfolio([make_loan(date(2025, 4, 5), count=2, amount="250")], date(2025, 3, 15))

    assert portfolio.loans[0].status == "upcoming"
    assert portfolio.next_month_payments == Decimal("250")
    assert portfolio.total_remaining == Decimal("500")
