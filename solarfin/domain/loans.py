"""Loan installment schedules and repayment progress"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from solarfin.domain.models import BankDebt, Loan, LoanPortfolio, LoanProgress
from solarfin.domain.validation import require_date, require_installments
from solarfin.utils.date_utils import add_months, shift_month

ZERO = Decimal("0")


def installment_due_dates(loan: Loan) -> List[date]:
    """
    Due date of every installment.

    Installment i falls i calendar months after the start date, keeping the
    start's day-of-month clamped per month:
        Jan 31 start → [Jan 31, Feb 28, Mar 31]
    """
    start = require_date(loan.start_date, loan.id, "start_date")
    count = require_installments(loan.installments_count, loan.id)
    return [add_months(start, i) for i in range(count)]


def installment_due_in_month(loan: Loan, month: int, year: int) -> Optional[Decimal]:
    """Installment amount due in (month, year), or None when nothing is due"""
    due = [d for d in installment_due_dates(loan) if d.month == month and d.year == year]
    if not due:
        return None
    return Decimal(loan.installment_amount) * len(due)


def loan_progress(loan: Loan, today: date) -> LoanProgress:
    """Repayment status counting every installment due on or before today as paid"""
    due_dates = installment_due_dates(loan)
    count = len(due_dates)
    paid = sum(1 for d in due_dates if d <= today)

    if due_dates[0] > today:
        status = "upcoming"
    elif paid == count:
        status = "completed"
    else:
        status = "active"

    amount = Decimal(loan.installment_amount)
    total = amount * count
    paid_amount = amount * paid

    return LoanProgress(
        loan_id=loan.id,
        status=status,
        installments_paid=paid,
        installments_remaining=count - paid,
        paid_amount=paid_amount,
        remaining_amount=total - paid_amount,
        total_amount=total,
        progress_pct=paid / count * 100,
    )


def loan_portfolio(loans: Iterable[Loan], today: date) -> LoanPortfolio:
    """
    Summarize outstanding debt across loans.

    - total remaining over loans not yet completed
    - installments due in the next calendar month
    - remaining debt per bank, largest first
    """
    next_month, next_year = shift_month(today.month, today.year, 1)
    total_remaining = ZERO
    next_month_payments = ZERO
    by_bank: Dict[str, List[Decimal]] = defaultdict(list)
    progress_list = []

    for loan in loans:
        progress = loan_progress(loan, today)
        progress_list.append(progress)

        if progress.status != "completed":
            total_remaining += progress.remaining_amount
            by_bank[loan.bank_name].append(progress.remaining_amount)

        due = installment_due_in_month(loan, next_month, next_year)
        if due is not None:
            next_month_payments += due

    debt_by_bank = sorted(
        (
            BankDebt(bank_name=bank, total_remaining=sum(amounts, ZERO), loan_count=len(amounts))
            for bank, amounts in by_bank.items()
        ),
        key=lambda d: (-d.total_remaining, d.bank_name),
    )

    return LoanPortfolio(
        total_remaining=total_remaining,
        next_month_payments=next_month_payments,
        debt_by_bank=debt_by_bank,
        loans=progress_list,
    )
