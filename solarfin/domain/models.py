"""Domain models - pure Python dataclasses representing finance records and projections"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from solarfin.utils.date_utils import add_months

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)

NO_RECURRENCE = "none"
FREQUENCIES = (NO_RECURRENCE, "weekly", "monthly", "annually")


@dataclass
class Transaction:
    """Income or expense entry, optionally a recurring template"""

    id: str
    owner_id: str
    type: str  # "income" or "expense"
    amount: Decimal
    category: str
    date: date
    description: Optional[str] = None
    frequency: str = NO_RECURRENCE  # "none", "weekly", "monthly", "annually"
    created_at: Optional[datetime] = None

    @property
    def is_recurring(self) -> bool:
        return self.frequency != NO_RECURRENCE


@dataclass
class CreditCard:
    id: str
    owner_id: str
    name: str
    limit: Decimal
    due_day: int
    closing_day: int


@dataclass
class CreditCardPurchase:
    """Card purchase split into monthly installments"""

    id: str
    owner_id: str
    card_id: str
    date: date
    description: str
    category: str
    total_amount: Decimal
    installments: int = 1


@dataclass
class Loan:
    """Loan repaid in fixed monthly installments starting on `start_date`"""

    id: str
    owner_id: str
    bank_name: str
    description: str
    installment_amount: Decimal
    installments_count: int
    start_date: date

    @property
    def end_date(self) -> date:
        """Due date of the last installment"""
        return add_months(self.start_date, self.installments_count - 1)


@dataclass
class ProjectedOccurrence:
    """Computed money movement on a given date, never persisted"""

    source_id: str
    source_kind: str  # "transaction", "card_invoice" or "loan"
    description: str
    projected_date: date
    amount: Decimal
    direction: str  # "income" or "expense"
    is_past: bool


@dataclass
class CategoryChange:
    """Month-over-month comparison of one expense category"""

    category: str
    current: Decimal
    previous: Decimal
    status: str  # "new" or "changed"
    change_pct: Optional[float] = None


@dataclass
class MonthSummary:
    month: int
    year: int
    income: Decimal
    direct_expense: Decimal
    card_spending: Decimal
    loan_expense: Decimal
    total_expense: Decimal
    net: Decimal
    savings_rate: float
    scheduled: List[ProjectedOccurrence] = field(default_factory=list)
    categories: List[CategoryChange] = field(default_factory=list)


@dataclass
class PaceAlert:
    level: str  # "warning" or "info"
    current_total: Decimal
    previous_total: Decimal
    change_pct: float
    message: str


@dataclass
class StatementLine:
    """One installment of a purchase as billed on a statement"""

    purchase_id: str
    description: str
    category: str
    amount: Decimal
    installment_number: int
    installments: int


@dataclass
class CardStatement:
    month: int
    year: int
    total: Decimal
    due_date: date
    lines: List[StatementLine] = field(default_factory=list)


@dataclass
class CategorySpend:
    category: str
    total: Decimal
    share_pct: float


@dataclass
class CardOverview:
    card_id: str
    current_invoice_total: Decimal
    current_closing_date: date
    current_due_date: date
    next_invoice_total: Decimal
    next_closing_date: date
    next_due_date: date
    committed_limit: Decimal
    available_limit: Decimal


@dataclass
class LoanProgress:
    loan_id: str
    status: str  # "upcoming", "active" or "completed"
    installments_paid: int
    installments_remaining: int
    paid_amount: Decimal
    remaining_amount: Decimal
    total_amount: Decimal
    progress_pct: float


@dataclass
class BankDebt:
    bank_name: str
    total_remaining: Decimal
    loan_count: int


@dataclass
class LoanPortfolio:
    total_remaining: Decimal
    next_month_payments: Decimal
    debt_by_bank: List[BankDebt] = field(default_factory=list)
    loans: List[LoanProgress] = field(default_factory=list)


@dataclass
class Reminder:
    """Upcoming or recently past occurrence of a recurring transaction"""

    id: str
    transaction_id: str
    message: str
    projected_date: date
    is_past: bool
    transaction: Transaction


@dataclass
class SubscriptionStatus:
    transaction_id: str
    description: Optional[str]
    category: str
    amount: Decimal
    frequency: str
    anchor_date: date
    expected_date: Optional[date]
    paid_this_month: bool
    transaction: Transaction
