"""Pydantic schemas for API request/response validation"""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from solarfin.domain.models import CreditCard, CreditCardPurchase, Loan, Transaction

CENT = Decimal("0.01")

# Money leaves the API rounded to cents, serialized as a string
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: str(v.quantize(CENT, rounding=ROUND_HALF_UP)), return_type=str, when_used="json"),
]


# --- Records -----------------------------------------------------------------


class TransactionSchema(BaseModel):
    """Income or expense transaction as stored by the owner"""

    id: str = Field(..., min_length=1)
    owner_id: str = Field(..., min_length=1)
    type: Literal["income", "expense"]
    amount: Decimal = Field(..., gt=0)
    category: str
    date: dt.date
    description: Optional[str] = None
    frequency: Literal["none", "weekly", "monthly", "annually"] = "none"
    created_at: Optional[dt.datetime] = None

    def to_domain(self) -> Transaction:
        return Transaction(**self.model_dump())


class CreditCardSchema(BaseModel):
    id: str = Field(..., min_length=1)
    owner_id: str = Field(..., min_length=1)
    name: str
    limit: Decimal = Field(..., ge=0)
    due_day: int = Field(..., ge=1, le=31)
    closing_day: int = Field(..., ge=1, le=31)

    def to_domain(self) -> CreditCard:
        return CreditCard(**self.model_dump())


class CreditCardPurchaseSchema(BaseModel):
    id: str = Field(..., min_length=1)
    owner_id: str = Field(..., min_length=1)
    card_id: str
    date: dt.date
    description: str
    category: str
    total_amount: Decimal = Field(..., gt=0)
    installments: int = Field(1, ge=1)

    def to_domain(self) -> CreditCardPurchase:
        return CreditCardPurchase(**self.model_dump())


class LoanSchema(BaseModel):
    id: str = Field(..., min_length=1)
    owner_id: str = Field(..., min_length=1)
    bank_name: str
    description: str
    installment_amount: Decimal = Field(..., gt=0)
    installments_count: int = Field(..., ge=1)
    start_date: dt.date

    def to_domain(self) -> Loan:
        return Loan(**self.model_dump())


# --- Requests ----------------------------------------------------------------


class RecordsRequest(BaseModel):
    """All records of one owner; `today` defaults to the server's date"""

    transactions: List[TransactionSchema] = []
    cards: List[CreditCardSchema] = []
    purchases: List[CreditCardPurchaseSchema] = []
    loans: List[LoanSchema] = []
    today: Optional[dt.date] = None

    def record_count(self) -> int:
        return len(self.transactions) + len(self.cards) + len(self.purchases) + len(self.loans)


class MonthProjectionRequest(RecordsRequest):
    """Request body for POST /v1/projection/month"""

    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1, le=9998)


class CardRequest(BaseModel):
    """Request body for the card overview and statement endpoints"""

    card: CreditCardSchema
    purchases: List[CreditCardPurchaseSchema] = []
    today: Optional[dt.date] = None


class LoansRequest(BaseModel):
    loans: List[LoanSchema] = []
    today: Optional[dt.date] = None


class RemindersRequest(BaseModel):
    transactions: List[TransactionSchema] = []
    today: Optional[dt.date] = None


class SubscriptionsRequest(BaseModel):
    transactions: List[TransactionSchema] = []
    today: Optional[dt.date] = None


# --- Responses ---------------------------------------------------------------


class ResponseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ProjectedOccurrenceSchema(ResponseModel):
    source_id: str
    source_kind: str
    description: str
    projected_date: dt.date
    amount: Money
    direction: str
    is_past: bool


class CategoryChangeSchema(ResponseModel):
    category: str
    current: Money
    previous: Money
    status: str
    change_pct: Optional[float] = None


class MonthSummaryResponse(ResponseModel):
    """Response for POST /v1/projection/month"""

    month: int
    year: int
    income: Money
    direct_expense: Money
    card_spending: Money
    loan_expense: Money
    total_expense: Money
    net: Money
    savings_rate: float
    scheduled: List[ProjectedOccurrenceSchema]
    categories: List[CategoryChangeSchema]


class BalanceResponse(BaseModel):
    balance: Money
    as_of: dt.date


class PaceAlertSchema(ResponseModel):
    level: str
    current_total: Money
    previous_total: Money
    change_pct: float
    message: str


class PaceResponse(BaseModel):
    alert: Optional[PaceAlertSchema] = None


class StatementLineSchema(ResponseModel):
    purchase_id: str
    description: str
    category: str
    amount: Money
    installment_number: int
    installments: int


class CardStatementSchema(ResponseModel):
    month: int
    year: int
    total: Money
    due_date: dt.date
    lines: List[StatementLineSchema]


class CardStatementsResponse(BaseModel):
    card_id: str
    statements: List[CardStatementSchema]


class CategorySpendSchema(ResponseModel):
    category: str
    total: Money
    share_pct: float


class CardOverviewResponse(ResponseModel):
    """Response for POST /v1/cards/{card_id}/overview"""

    card_id: str
    current_invoice_total: Money
    current_closing_date: dt.date
    current_due_date: dt.date
    next_invoice_total: Money
    next_closing_date: dt.date
    next_due_date: dt.date
    committed_limit: Money
    available_limit: Money
    open_invoice_categories: List[CategorySpendSchema] = []


class LoanProgressSchema(ResponseModel):
    loan_id: str
    status: str
    installments_paid: int
    installments_remaining: int
    paid_amount: Money
    remaining_amount: Money
    total_amount: Money
    progress_pct: float


class BankDebtSchema(ResponseModel):
    bank_name: str
    total_remaining: Money
    loan_count: int


class LoanPortfolioResponse(ResponseModel):
    total_remaining: Money
    next_month_payments: Money
    debt_by_bank: List[BankDebtSchema]
    loans: List[LoanProgressSchema]


class ReminderSchema(ResponseModel):
    id: str
    transaction_id: str
    message: str
    projected_date: dt.date
    is_past: bool


class RemindersResponse(BaseModel):
    reminders: List[ReminderSchema]


class SubscriptionStatusSchema(ResponseModel):
    transaction_id: str
    description: Optional[str]
    category: str
    amount: Money
    frequency: str
    anchor_date: dt.date
    expected_date: Optional[dt.date]
    paid_this_month: bool


class SubscriptionsResponse(BaseModel):
    subscriptions: List[SubscriptionStatusSchema]
