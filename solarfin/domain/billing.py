"""Credit card billing cycles: installment allocation, invoices and statements"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from solarfin.domain.models import (
    CardOverview,
    CardStatement,
    CategorySpend,
    CreditCard,
    CreditCardPurchase,
    StatementLine,
)
from solarfin.domain.validation import require_date, require_day_of_month, require_installments
from solarfin.utils.date_utils import clamp_day, shift_month

ZERO = Decimal("0")


def _month_key(month: int, year: int) -> int:
    return year * 12 + month - 1


def closing_date(card: CreditCard, month: int, year: int) -> date:
    """Closing date of the card's invoice for a month, clamped to the month's length"""
    require_day_of_month(card.closing_day, card.id, "closing_day")
    return clamp_day(year, month, card.closing_day)


def invoice_due_date(card: CreditCard, month: int, year: int) -> date:
    """Payment date of the invoice labeled (month, year); same labeled month as its closing"""
    require_day_of_month(card.due_day, card.id, "due_day")
    return clamp_day(year, month, card.due_day)


def installment_amount(purchase: CreditCardPurchase) -> Decimal:
    """
    Amount billed per installment.

    The total is split evenly without moving any rounding remainder onto the
    last installment.
    """
    installments = require_installments(purchase.installments, purchase.id)
    return Decimal(purchase.total_amount) / installments


def installment_cycle(card: CreditCard, purchase: CreditCardPurchase, index: int) -> Tuple[int, int]:
    """
    Billing cycle (month, year) of installment `index` (0-based).

    A purchase made on or before the closing day lands on the current month's
    invoice; after it, on the next month's. Each further installment is one
    calendar month later.
    """
    purchase_date = require_date(purchase.date, purchase.id)
    installments = require_installments(purchase.installments, purchase.id)
    if not 0 <= index < installments:
        raise ValueError(f"Installment index {index} out of range for {installments} installments")

    closing = closing_date(card, purchase_date.month, purchase_date.year)
    offset = 1 if purchase_date.day > closing.day else 0
    return shift_month(purchase_date.month, purchase_date.year, offset + index)


def installment_cycles(card: CreditCard, purchase: CreditCardPurchase) -> List[Tuple[int, int]]:
    installments = require_installments(purchase.installments, purchase.id)
    return [installment_cycle(card, purchase, i) for i in range(installments)]


def _card_purchases(card: CreditCard, purchases: Iterable[CreditCardPurchase]) -> List[CreditCardPurchase]:
    return [p for p in purchases if p.card_id == card.id]


def invoice_total(
    card: CreditCard,
    purchases: Iterable[CreditCardPurchase],
    month: int,
    year: int,
) -> Decimal:
    """Sum of installments of this card's purchases billed in the (month, year) cycle"""
    target = _month_key(month, year)
    total = ZERO
    for purchase in _card_purchases(card, purchases):
        first_month, first_year = installment_cycle(card, purchase, 0)
        index = target - _month_key(first_month, first_year)
        if 0 <= index < purchase.installments:
            total += installment_amount(purchase)
    return total


def card_statements(
    card: CreditCard,
    purchases: Iterable[CreditCardPurchase],
    since: Optional[date] = None,
) -> List[CardStatement]:
    """
    Group every installment of the card's purchases into monthly statements.

    Statements are sorted by cycle. When `since` is given, cycles before its
    month are left out.
    """
    grouped: Dict[Tuple[int, int], List[StatementLine]] = defaultdict(list)
    for purchase in sorted(_card_purchases(card, purchases), key=lambda p: require_date(p.date, p.id)):
        amount = installment_amount(purchase)
        for index, (month, year) in enumerate(installment_cycles(card, purchase)):
            grouped[(year, month)].append(
                StatementLine(
                    purchase_id=purchase.id,
                    description=purchase.description,
                    category=purchase.category,
                    amount=amount,
                    installment_number=index + 1,
                    installments=purchase.installments,
                )
            )

    statements = []
    for year, month in sorted(grouped):
        if since is not None and _month_key(month, year) < _month_key(since.month, since.year):
            continue
        lines = grouped[(year, month)]
        statements.append(
            CardStatement(
                month=month,
                year=year,
                total=sum((line.amount for line in lines), ZERO),
                due_date=invoice_due_date(card, month, year),
                lines=lines,
            )
        )
    return statements


def open_invoice_period(card: CreditCard, today: date) -> Tuple[date, date]:
    """
    Purchase-date window of the invoice currently open.

    Returns (start, end): purchases strictly after `start` and on or before
    `end` belong to the open invoice.
    """
    this_closing = closing_date(card, today.month, today.year)
    if today.day > this_closing.day:
        month, year = shift_month(today.month, today.year, 1)
        return this_closing, closing_date(card, month, year)
    month, year = shift_month(today.month, today.year, -1)
    return closing_date(card, month, year), this_closing


def card_category_spending(
    card: CreditCard,
    purchases: Iterable[CreditCardPurchase],
    today: Optional[date] = None,
) -> List[CategorySpend]:
    """
    Purchase totals per category with each category's share of the total.

    With `today`, only purchases of the currently open invoice are counted.
    """
    selected = _card_purchases(card, purchases)
    if today is not None:
        start, end = open_invoice_period(card, today)
        selected = [p for p in selected if start < require_date(p.date, p.id) <= end]

    totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for purchase in selected:
        totals[purchase.category] += Decimal(purchase.total_amount)

    grand_total = sum(totals.values(), ZERO)
    spending = [
        CategorySpend(
            category=category,
            total=total,
            share_pct=float(total / grand_total * 100) if grand_total > 0 else 0.0,
        )
        for category, total in totals.items()
    ]
    return sorted(spending, key=lambda s: (-s.total, s.category))


def card_overview(card: CreditCard, purchases: Iterable[CreditCardPurchase], today: date) -> CardOverview:
    """Current and next invoice figures plus how much of the limit is committed"""
    purchases = _card_purchases(card, purchases)
    next_month, next_year = shift_month(today.month, today.year, 1)
    current_key = _month_key(today.month, today.year)

    committed = ZERO
    for purchase in purchases:
        amount = installment_amount(purchase)
        for month, year in installment_cycles(card, purchase):
            if _month_key(month, year) >= current_key:
                committed += amount

    return CardOverview(
        card_id=card.id,
        current_invoice_total=invoice_total(card, purchases, today.month, today.year),
        current_closing_date=closing_date(card, today.month, today.year),
        current_due_date=invoice_due_date(card, today.month, today.year),
        next_invoice_total=invoice_total(card, purchases, next_month, next_year),
        next_closing_date=closing_date(card, next_month, next_year),
        next_due_date=invoice_due_date(card, next_month, next_year),
        committed_limit=committed,
        available_limit=Decimal(card.limit) - committed,
    )
