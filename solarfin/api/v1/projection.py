"""POST /v1/projection/* - Month projection and current balance"""

import time
from datetime import date

from fastapi import APIRouter, Depends, Request

from solarfin.api.dependencies import get_request_id, get_settings, get_today
from solarfin.api.v1.errors import reject
from solarfin.api.v1.schemas import BalanceResponse, MonthProjectionRequest, MonthSummaryResponse, RecordsRequest
from solarfin.config import Settings
from solarfin.domain.exceptions import DomainException
from solarfin.domain.projection import current_balance, project_month
from solarfin.domain.validation import ensure_single_owner
from solarfin.infrastructure.observability.logging import log_projection
from solarfin.infrastructure.observability.metrics import projection_counter, record_month_projection

router = APIRouter()


def _records(body: RecordsRequest):
    return (
        [t.to_domain() for t in body.transactions],
        [c.to_domain() for c in body.cards],
        [p.to_domain() for p in body.purchases],
        [loan.to_domain() for loan in body.loans],
    )


@router.post("/projection/month", response_model=MonthSummaryResponse)
def create_month_projection(
    body: MonthProjectionRequest,
    request: Request,
    today: date = Depends(get_today),
    config: Settings = Depends(get_settings),
):
    """
    Project income, expenses and scheduled items for one month.

    Flow:
    1. Convert request records into domain records
    2. Expand recurring transactions, card installments and loan schedules
    3. Aggregate totals, schedule and category comparison
    """
    start_time = time.time()
    request_id = get_request_id(request)
    transactions, cards, purchases, loans = _records(body)

    try:
        owner_id = ensure_single_owner(transactions, cards, purchases, loans)
        summary = project_month(
            transactions,
            cards,
            purchases,
            loans,
            body.month,
            body.year,
            body.today or today,
            max_occurrences=config.occurrence_cap,
        )
    except DomainException as e:
        raise reject(e, request_id) from e

    duration_ms = (time.time() - start_time) * 1000
    record_month_projection(len(summary.scheduled))
    log_projection(request_id, owner_id, "month_projection", body.record_count(), duration_ms)

    return MonthSummaryResponse.model_validate(summary)


@router.post("/projection/balance", response_model=BalanceResponse)
def get_current_balance(
    body: RecordsRequest,
    request: Request,
    today: date = Depends(get_today),
    config: Settings = Depends(get_settings),
):
    """Balance of recorded transactions minus this month's committed outflows"""
    start_time = time.time()
    request_id = get_request_id(request)
    transactions, cards, purchases, loans = _records(body)
    as_of = body.today or today

    try:
        owner_id = ensure_single_owner(transactions, cards, purchases, loans)
        balance = current_balance(
            transactions, cards, purchases, loans, as_of, max_occurrences=config.occurrence_cap
        )
    except DomainException as e:
        raise reject(e, request_id) from e

    projection_counter.labels(kind="balance").inc()
    log_projection(request_id, owner_id, "current_balance", body.record_count(), (time.time() - start_time) * 1000)

    return BalanceResponse(balance=balance, as_of=as_of)
