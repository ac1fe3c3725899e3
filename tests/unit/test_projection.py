"""Unit tests for month projection and current balance"""

import pytest
from datetime import date
from decimal import Decimal
from solarfin.domain.exceptions import InvalidRecordError, OwnerMismatchError
from solarfin.domain.models import CreditCardPurchase, Transaction
from solarfin.domain.projection import category_breakdown, current_balance, project_month


def expense(tx_id: str, category: str, amount: str, when: date, frequency: str = "none") -> Transaction:
    return Transaction(
        id=tx_id,
        owner_id="user_1",
        type="expense",
        amount=Decimal(amount),
        category=category,
        date=when,
        frequency=frequency,
    )


def test_march_projection_end_to_end(salary, card, tv_purchase):
    """Salary on the 5th plus the last of three card installments"""
    summary = project_month([salary], [card], [tv_purchase], [], 3, 2025, today=date(2025, 3, 15))

    assert summary.income == Decimal("5000")
    assert summary.card_spending == Decimal("100")
    assert summary.direct_expense == Decimal("0")
    assert summary.loan_expense == Decimal("0")
    assert summary.total_expense == Decimal("100")
    assert summary.net == Decimal("4900")
    assert summary.savings_rate == 98.0

    assert [(s.source_kind, s.projected_date, s.amount) for s in summary.scheduled] == [
        ("transaction", date(2025, 3, 5), Decimal("5000")),
        ("card_invoice", date(2025, 3, 5), Decimal("100")),
    ]
    assert all(s.is_past for s in summary.scheduled)


def test_april_has_no_card_invoice(salary, card, tv_purchase):
    summary = project_month([salary], [card], [tv_purchase], [], 4, 2025, today=date(2025, 3, 15))
    assert summary.card_spending == Decimal("0")
    assert [s.source_kind for s in summary.scheduled] == ["transaction"]
    assert summary.scheduled[0].is_past is False


def test_loans_enter_total_and_schedule(salary, car_loan):
    summary = project_month([salary], [], [], [car_loan], 3, 2025, today=date(2025, 3, 10))

    assert summary.loan_expense == Decimal("450")
    assert summary.total_expense == Decimal("450")
    loan_item = summary.scheduled[-1]
    assert loan_item.source_kind == "loan"
    assert loan_item.projected_date == date(2025, 3, 10)
    assert loan_item.is_past is False  # due today is not past


def test_scheduled_sorted_by_date(salary, car_loan):
    rent = expense("tx_rent", "Rent", "1200", date(2025, 1, 1), "monthly")
    summary = project_month([salary, rent], [], [], [car_loan], 3, 2025, today=date(2025, 3, 1))
    assert [s.projected_date for s in summary.scheduled] == [
        date(2025, 3, 1),
        date(2025, 3, 5),
        date(2025, 3, 10),
    ]


def test_non_recurring_counted_but_not_scheduled():
    gym = expense("tx_gym", "Gym", "50", date(2025, 3, 3))
    summary = project_month([gym], [], [], [], 3, 2025, today=date(2025, 3, 15))
    assert summary.direct_expense == Decimal("50")
    assert summary.scheduled == []
    assert summary.savings_rate == 0.0


def test_category_new_vs_changed():
    transactions = [
        expense("tx_rent", "Rent", "1000", date(2025, 1, 1), "monthly"),
        expense("tx_food_feb", "Food", "200", date(2025, 2, 10)),
        expense("tx_food_mar", "Food", "300", date(2025, 3, 12)),
        expense("tx_gym", "Gym", "50", date(2025, 3, 3)),
        expense("tx_trip", "Travel", "400", date(2025, 2, 5)),
    ]
    changes = {c.category: c for c in category_breakdown(transactions, 3, 2025)}

    assert changes["Rent"].status == "changed"
    assert changes["Rent"].change_pct == 0.0
    assert changes["Food"].change_pct == 50.0
    assert changes["Travel"].change_pct == -100.0
    assert changes["Gym"].status == "new"
    assert changes["Gym"].change_pct is None


def test_category_order_by_current_total():
    transactions = [
        expense("tx_rent", "Rent", "1000", date(2025, 1, 1), "monthly"),
        expense("tx_gym", "Gym", "50", date(2025, 3, 3)),
        expense("tx_food", "Food", "300", date(2025, 3, 12)),
    ]
    summary = project_month(transactions, [], [], [], 3, 2025, today=date(2025, 3, 15))
    assert [c.category for c in summary.categories] == ["Rent", "Food", "Gym"]


def test_mixed_owners_rejected(salary, card):
    other = expense("tx_other", "Food", "10", date(2025, 3, 1))
    other.owner_id = "user_2"
    with pytest.raises(OwnerMismatchError):
        project_month([salary, other], [card], [], [], 3, 2025, today=date(2025, 3, 15))


def test_zero_installment_purchase_rejected(card):
    broken = CreditCardPurchase(
        id="p_bad",
        owner_id="user_1",
        card_id=card.id,
        date=date(2025, 3, 1),
        description="Broken",
        category="Misc",
        total_amount=Decimal("10"),
        installments=0,
    )
    with pytest.raises(InvalidRecordError):
        project_month([], [card], [broken], [], 3, 2025, today=date(2025, 3, 15))


def test_unknown_transaction_type_rejected():
    tx = expense("tx_x", "Misc", "10", date(2025, 3, 1))
    tx.type = "transfer"
    with pytest.raises(InvalidRecordError):
        project_month([tx], [], [], [], 3, 2025, today=date(2025, 3, 15))


def test_current_balance_anticipates_month_outflows(salary, card, tv_purchase, car_loan):
    """
    Recorded: +5000 salary, -1000 rent, -100 internet, -50 groceries.
    Anticipated in March: rent on Mar 1 (1000), card invoice (100), loan (450).
    The internet anchor on Mar 3 is already recorded and not subtracted twice;
    the Mar 20 purchase is after today and not yet recorded.
    """
    transactions = [
        salary,
        expense("tx_rent", "Rent", "1000", date(2025, 1, 1), "monthly"),
        expense("tx_net", "Internet", "100", date(2025, 3, 3), "monthly"),
        expense("tx_groceries", "Food", "50", date(2025, 3, 2)),
        expense("tx_later", "Food", "70", date(2025, 3, 20)),
    ]
    balance = current_balance(transactions, [card], [tv_purchase], [car_loan], today=date(2025, 3, 15))
    assert balance == Decimal("2300")


def test_projection_ignores_today_for_totals(salary, card, tv_purchase):
    early = project_month([salary], [card], [tv_purchase], [], 3, 2025, today=date(2024, 1, 1))
    late = project_month([salary], [card], [tv_purchase], [], 3, 2025, today=date(2026, 1, 1))
    assert early.total_expense == late.total_expense
    assert early.income == late.income
