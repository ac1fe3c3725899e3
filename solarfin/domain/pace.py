"""Spending pace comparison between the current and previous month-to-date"""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from solarfin.domain.billing import installment_amount, installment_cycles
from solarfin.domain.models import EXPENSE, CreditCard, CreditCardPurchase, PaceAlert, Transaction
from solarfin.domain.validation import ensure_single_owner, require_date
from solarfin.utils.date_utils import clamp_day, month_bounds, previous_month

ZERO = Decimal("0")
WARNING_RATIO = Decimal("1.3")
INFO_RATIO = Decimal("0.7")


def period_spend(
    transactions: Sequence[Transaction],
    cards: Sequence[CreditCard],
    purchases: Sequence[CreditCardPurchase],
    start: date,
    end: date,
) -> Decimal:
    """
    Expense accrued between start and end (inclusive, same month).

    Counts non-recurring expense transactions dated in the period, plus card
    installments purchased in the period and billed in the period's month.
    """
    total = ZERO
    for tx in transactions:
        if tx.type == EXPENSE and not tx.is_recurring and start <= require_date(tx.date, tx.id) <= end:
            total += Decimal(tx.amount)

    for card in cards:
        for purchase in purchases:
            if purchase.card_id != card.id:
                continue
            if not start <= require_date(purchase.date, purchase.id) <= end:
                continue
            amount = installment_amount(purchase)
            for month, year in installment_cycles(card, purchase):
                if month == start.month and year == start.year:
                    total += amount
    return total


def compare_pace(
    transactions: Sequence[Transaction],
    cards: Sequence[CreditCard],
    purchases: Sequence[CreditCardPurchase],
    today: date,
    warning_ratio: Decimal = WARNING_RATIO,
    info_ratio: Decimal = INFO_RATIO,
) -> Optional[PaceAlert]:
    """
    Flag accelerating or slowing spend against the same days last month.

    Thresholds:
    - warning: current > previous * warning_ratio (default 130%)
    - info:    0 < current < previous * info_ratio (default 70%)

    Nothing is evaluated on the first day of a month or when the previous
    period had no spend.
    """
    ensure_single_owner(transactions, cards, purchases)
    require_date(today, "today", "today")
    if today.day == 1:
        return None

    prev_month, prev_year = previous_month(today.month, today.year)
    current = period_spend(transactions, cards, purchases, today.replace(day=1), today)
    previous = period_spend(
        transactions,
        cards,
        purchases,
        month_bounds(prev_month, prev_year)[0],
        clamp_day(prev_year, prev_month, today.day),
    )

    if previous <= 0:
        return None

    change_pct = round(float((current - previous) / previous * 100), 2)
    if current > previous * Decimal(warning_ratio):
        return PaceAlert(
            level="warning",
            current_total=current,
            previous_total=previous,
            change_pct=change_pct,
            message=f"Spending is {change_pct:.0f}% above the same period last month",
        )
    if ZERO < current < previous * Decimal(info_ratio):
        return PaceAlert(
            level="info",
            current_total=current,
            previous_total=previous,
            change_pct=change_pct,
            message=f"Spending is {abs(change_pct):.0f}% below the same period last month",
        )
    return None
