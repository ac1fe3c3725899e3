"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from fastapi.testclient import TestClient
from solarfin.api.dependencies import get_today
from solarfin.api.main import create_app
from solarfin.domain.models import CreditCard, CreditCardPurchase, Loan, Transaction


OWNER = "user_1"
TODAY = date(2025, 3, 15)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client with a fixed reference date"""
    app = create_app()
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def salary() -> Transaction:
    """Monthly salary anchored on Jan 5"""
    return Transaction(
        id="tx_salary",
        owner_id=OWNER,
        type="income",
        amount=Decimal("5000"),
        category="Salary",
        date=date(2025, 1, 5),
        description="Salary",
        frequency="monthly",
    )


@pytest.fixture
def card() -> CreditCard:
    return CreditCard(
        id="card_1",
        owner_id=OWNER,
        name="Gold",
        limit=Decimal("2000"),
        due_day=5,
        closing_day=25,
    )


@pytest.fixture
def tv_purchase() -> CreditCardPurchase:
    """300 split in 3 installments, bought before the card's closing day"""
    return CreditCardPurchase(
        id="p_tv",
        owner_id=OWNER,
        card_id="card_1",
        date=date(2025, 1, 20),
        description="TV",
        category="Electronics",
        total_amount=Decimal("300"),
        installments=3,
    )


@pytest.fixture
def car_loan() -> Loan:
    return Loan(
        id="loan_car",
        owner_id=OWNER,
        bank_name="First Bank",
        description="Car",
        installment_amount=Decimal("450"),
        installments_count=12,
        start_date=date(2025, 1, 10),
    )


@pytest.fixture
def records_payload() -> dict:
    """JSON body equivalent to the salary/card/purchase fixtures"""
    return {
        "transactions": [
            {
                "id": "tx_salary",
                "owner_id": OWNER,
                "type": "income",
                "amount": 5000,
                "category": "Salary",
                "date": "2025-01-05",
                "description": "Salary",
                "frequency": "monthly",
            }
        ],
        "cards": [
            {"id": "card_1", "owner_id": OWNER, "name": "Gold", "limit": 2000, "due_day": 5, "closing_day": 25}
        ],
        "purchases": [
            {
                "id": "p_tv",
                "owner_id": OWNER,
                "card_id": "card_1",
                "date": "2025-01-20",
                "description": "TV",
                "category": "Electronics",
                "total_amount": 300,
                "installments": 3,
            }
        ],
        "loans": [],
    }
