"""POST /v1/cards/{card_id}/* - Card invoices, statements and category spending"""

from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request

from solarfin.api.dependencies import get_request_id, get_today
from solarfin.api.v1.errors import reject
from solarfin.api.v1.schemas import (
    CardOverviewResponse,
    CardRequest,
    CardStatementSchema,
    CardStatementsResponse,
    CategorySpendSchema,
)
from solarfin.domain.billing import card_category_spending, card_overview, card_statements
from solarfin.domain.exceptions import DomainException
from solarfin.domain.validation import ensure_single_owner
from solarfin.infrastructure.observability.metrics import projection_counter
from solarfin.utils.date_utils import month_bounds, shift_month

router = APIRouter()


def _card_records(card_id: str, body: CardRequest):
    if body.card.id != card_id:
        raise HTTPException(status_code=400, detail="Card ID in path does not match request body")
    return body.card.to_domain(), [p.to_domain() for p in body.purchases]


@router.post("/cards/{card_id}/overview", response_model=CardOverviewResponse)
def get_card_overview(
    card_id: str,
    body: CardRequest,
    request: Request,
    today: date = Depends(get_today),
):
    """Current and next invoice, limit usage and open-invoice spending by category"""
    request_id = get_request_id(request)
    card, purchases = _card_records(card_id, body)
    as_of = body.today or today

    try:
        ensure_single_owner([card], purchases)
        overview = card_overview(card, purchases, as_of)
        categories = card_category_spending(card, purchases, today=as_of)
    except DomainException as e:
        raise reject(e, request_id) from e

    projection_counter.labels(kind="card").inc()
    return CardOverviewResponse(
        **asdict(overview),
        open_invoice_categories=[CategorySpendSchema.model_validate(c) for c in categories],
    )


@router.post("/cards/{card_id}/statements", response_model=CardStatementsResponse)
def get_card_statements(
    card_id: str,
    body: CardRequest,
    request: Request,
    today: date = Depends(get_today),
):
    """
    Monthly statements from the previous month onward.

    Returns:
        One statement per billing cycle with installment lines
    """
    request_id = get_request_id(request)
    card, purchases = _card_records(card_id, body)
    as_of = body.today or today
    prev_month, prev_year = shift_month(as_of.month, as_of.year, -1)

    try:
        ensure_single_owner([card], purchases)
        since, _ = month_bounds(prev_month, prev_year)
        statements = card_statements(card, purchases, since=since)
    except DomainException as e:
        raise reject(e, request_id) from e

    projection_counter.labels(kind="card").inc()
    return CardStatementsResponse(
        card_id=card.id,
        statements=[CardStatementSchema.model_validate(s) for s in statements],
    )
