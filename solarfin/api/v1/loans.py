"""POST /v1/loans/portfolio - Loan progress and outstanding debt"""

from datetime import date

from fastapi import APIRouter, Depends, Request

from solarfin.api.dependencies import get_request_id, get_today
from solarfin.api.v1.errors import reject
from solarfin.api.v1.schemas import LoanPortfolioResponse, LoansRequest
from solarfin.domain.exceptions import DomainException
from solarfin.domain.loans import loan_portfolio
from solarfin.domain.validation import ensure_single_owner
from solarfin.infrastructure.observability.metrics import projection_counter

router = APIRouter()


@router.post("/loans/portfolio", response_model=LoanPortfolioResponse)
def get_loan_portfolio(
    body: LoansRequest,
    request: Request,
    today: date = Depends(get_today),
):
    request_id = get_request_id(request)
    loans = [loan.to_domain() for loan in body.loans]

    try:
        ensure_single_owner(loans)
        portfolio = loan_portfolio(loans, body.today or today)
    except DomainException as e:
        raise reject(e, request_id) from e

    projection_counter.labels(kind="loans").inc()
    return LoanPortfolioResponse.model_validate(portfolio)
