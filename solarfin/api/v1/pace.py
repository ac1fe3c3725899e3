"""POST /v1/pace - Month-to-date spending pace alert"""

import time
from datetime import date

from fastapi import APIRouter, Depends, Request

from solarfin.api.dependencies import get_request_id, get_settings, get_today
from solarfin.api.v1.errors import reject
from solarfin.api.v1.schemas import PaceAlertSchema, PaceResponse, RecordsRequest
from solarfin.config import Settings
from solarfin.domain.exceptions import DomainException
from solarfin.domain.pace import compare_pace
from solarfin.domain.validation import ensure_single_owner
from solarfin.infrastructure.observability.logging import log_projection
from solarfin.infrastructure.observability.metrics import record_pace_result

router = APIRouter()


@router.post("/pace", response_model=PaceResponse)
def get_spending_pace(
    body: RecordsRequest,
    request: Request,
    today: date = Depends(get_today),
    config: Settings = Depends(get_settings),
):
    """
    Compare spend from day 1 to today against the same days last month.

    Returns:
        A warning (> pace_warning_ratio) or info (< pace_info_ratio) alert, or null
    """
    start_time = time.time()
    request_id = get_request_id(request)
    transactions = [t.to_domain() for t in body.transactions]
    cards = [c.to_domain() for c in body.cards]
    purchases = [p.to_domain() for p in body.purchases]

    try:
        owner_id = ensure_single_owner(transactions, cards, purchases)
        alert = compare_pace(
            transactions,
            cards,
            purchases,
            body.today or today,
            warning_ratio=config.pace_warning_ratio,
            info_ratio=config.pace_info_ratio,
        )
    except DomainException as e:
        raise reject(e, request_id) from e

    record_pace_result(alert.level if alert else None)
    log_projection(request_id, owner_id, "spending_pace", body.record_count(), (time.time() - start_time) * 1000)

    return PaceResponse(alert=PaceAlertSchema.model_validate(alert) if alert else None)
