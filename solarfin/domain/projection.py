"""Month projection engine - combines transactions, card invoices and loans per month"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence

from solarfin.domain.billing import invoice_due_date, invoice_total
from solarfin.domain.exceptions import InvalidRecordError
from solarfin.domain.loans import installment_due_dates, installment_due_in_month
from solarfin.domain.models import (
    EXPENSE,
    INCOME,
    TRANSACTION_TYPES,
    CategoryChange,
    CreditCard,
    CreditCardPurchase,
    Loan,
    MonthSummary,
    ProjectedOccurrence,
    Transaction,
)
from solarfin.domain.occurrences import MAX_OCCURRENCES, occurrences
from solarfin.domain.validation import ensure_single_owner, require_date
from solarfin.utils.date_utils import month_bounds, previous_month

ZERO = Decimal("0")


def _require_type(transaction: Transaction) -> str:
    if transaction.type not in TRANSACTION_TYPES:
        raise InvalidRecordError(f"Record {transaction.id}: unknown transaction type {transaction.type!r}")
    return transaction.type


def expense_by_category(
    transactions: Iterable[Transaction],
    month: int,
    year: int,
    max_occurrences: int = MAX_OCCURRENCES,
) -> Dict[str, Decimal]:
    """Direct expense per category projected into a month"""
    start, end = month_bounds(month, year)
    totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for tx in transactions:
        if _require_type(tx) != EXPENSE:
            continue
        hits = len(occurrences(tx, start, end, max_occurrences))
        if hits:
            totals[tx.category] += Decimal(tx.amount) * hits
    return dict(totals)


def category_breakdown(
    transactions: Sequence[Transaction],
    month: int,
    year: int,
    max_occurrences: int = MAX_OCCURRENCES,
) -> List[CategoryChange]:
    """
    Compare each expense category with the preceding month.

    A category with nothing last month is reported with status "new" and no
    percentage; otherwise change_pct = (current - previous) / previous * 100.
    """
    prev_month, prev_year = previous_month(month, year)
    current = expense_by_category(transactions, month, year, max_occurrences)
    previous = expense_by_category(transactions, prev_month, prev_year, max_occurrences)

    changes = []
    for category in set(current) | set(previous):
        curr_total = current.get(category, ZERO)
        prev_total = previous.get(category, ZERO)
        if prev_total > 0:
            changes.append(
                CategoryChange(
                    category=category,
                    current=curr_total,
                    previous=prev_total,
                    status="changed",
                    change_pct=round(float((curr_total - prev_total) / prev_total * 100), 2),
                )
            )
        else:
            changes.append(CategoryChange(category=category, current=curr_total, previous=ZERO, status="new"))

    return sorted(changes, key=lambda c: (-c.current, c.category))


def project_month(
    transactions: Sequence[Transaction],
    cards: Sequence[CreditCard],
    purchases: Sequence[CreditCardPurchase],
    loans: Sequence[Loan],
    month: int,
    year: int,
    today: date,
    max_occurrences: int = MAX_OCCURRENCES,
) -> MonthSummary:
    """
    Project one owner's money movements for a calendar month.

    Card spending is the sum of invoices whose cycle closes in the target
    month; the same figure feeds the total expense.

    Raises:
        OwnerMismatchError: When records of different owners are mixed
        InvalidRecordError: When any record is malformed
    """
    ensure_single_owner(transactions, cards, purchases, loans)
    require_date(today, "today", "today")
    start, end = month_bounds(month, year)

    income = ZERO
    direct_expense = ZERO
    scheduled: List[ProjectedOccurrence] = []

    for tx in transactions:
        kind = _require_type(tx)
        dates = occurrences(tx, start, end, max_occurrences)
        amount = Decimal(tx.amount)
        if kind == INCOME:
            income += amount * len(dates)
        else:
            direct_expense += amount * len(dates)

        if tx.is_recurring:
            scheduled.extend(
                ProjectedOccurrence(
                    source_id=tx.id,
                    source_kind="transaction",
                    description=tx.description or tx.category,
                    projected_date=d,
                    amount=amount,
                    direction=kind,
                    is_past=d < today,
                )
                for d in dates
            )

    card_spending = ZERO
    for card in cards:
        total = invoice_total(card, purchases, month, year)
        card_spending += total
        if total > 0:
            due = invoice_due_date(card, month, year)
            scheduled.append(
                ProjectedOccurrence(
                    source_id=card.id,
                    source_kind="card_invoice",
                    description=card.name,
                    projected_date=due,
                    amount=total,
                    direction=EXPENSE,
                    is_past=due < today,
                )
            )

    loan_expense = ZERO
    for loan in loans:
        due_amount = installment_due_in_month(loan, month, year)
        if due_amount is None:
            continue
        loan_expense += due_amount
        for due in installment_due_dates(loan):
            if start <= due <= end:
                scheduled.append(
                    ProjectedOccurrence(
                        source_id=loan.id,
                        source_kind="loan",
                        description=f"{loan.bank_name} - {loan.description}",
                        projected_date=due,
                        amount=Decimal(loan.installment_amount),
                        direction=EXPENSE,
                        is_past=due < today,
                    )
                )

    # sort is stable: same-day items keep transaction, card, loan order
    scheduled.sort(key=lambda item: item.projected_date)

    total_expense = direct_expense + card_spending + loan_expense
    net = income - total_expense

    return MonthSummary(
        month=month,
        year=year,
        income=income,
        direct_expense=direct_expense,
        card_spending=card_spending,
        loan_expense=loan_expense,
        total_expense=total_expense,
        net=net,
        savings_rate=round(float(net / income * 100), 2) if income > 0 else 0.0,
        scheduled=scheduled,
        categories=category_breakdown(transactions, month, year, max_occurrences),
    )


def current_balance(
    transactions: Sequence[Transaction],
    cards: Sequence[CreditCard],
    purchases: Sequence[CreditCardPurchase],
    loans: Sequence[Loan],
    today: date,
    max_occurrences: int = MAX_OCCURRENCES,
) -> Decimal:
    """
    Real-time balance anticipating this month's committed outflows.

    Recorded transactions dated up to today are summed (income minus
    expense). From that we subtract, for today's calendar month:
    - recurring expense occurrences not already recorded
    - card invoices whose cycle closes this month
    - loan installments due this month
    """
    ensure_single_owner(transactions, cards, purchases, loans)
    require_date(today, "today", "today")
    start, end = month_bounds(today.month, today.year)

    balance = ZERO
    for tx in transactions:
        kind = _require_type(tx)
        tx_date = require_date(tx.date, tx.id)
        amount = Decimal(tx.amount)
        if tx_date <= today:
            balance += amount if kind == INCOME else -amount
        if kind == EXPENSE and tx.is_recurring:
            # the anchor is already in the recorded sum once it is on or before today
            projected = [
                d for d in occurrences(tx, start, end, max_occurrences) if not (d == tx_date <= today)
            ]
            balance -= amount * len(projected)

    for card in cards:
        balance -= invoice_total(card, purchases, today.month, today.year)

    for loan in loans:
        balance -= installment_due_in_month(loan, today.month, today.year) or ZERO

    return balance
