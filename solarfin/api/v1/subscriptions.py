"""POST /v1/subscriptions - Recurring expenses and whether they were paid this month"""

from datetime import date

from fastapi import APIRouter, Depends, Request

from solarfin.api.dependencies import get_request_id, get_settings, get_today
from solarfin.api.v1.errors import reject
from solarfin.api.v1.schemas import SubscriptionsRequest, SubscriptionsResponse, SubscriptionStatusSchema
from solarfin.config import Settings
from solarfin.domain.exceptions import DomainException
from solarfin.domain.subscriptions import subscription_status
from solarfin.infrastructure.observability.metrics import projection_counter

router = APIRouter()


@router.post("/subscriptions", response_model=SubscriptionsResponse)
def get_subscriptions(
    body: SubscriptionsRequest,
    request: Request,
    today: date = Depends(get_today),
    config: Settings = Depends(get_settings),
):
    request_id = get_request_id(request)

    try:
        statuses = subscription_status(
            [t.to_domain() for t in body.transactions],
            body.today or today,
            max_occurrences=config.occurrence_cap,
        )
    except DomainException as e:
        raise reject(e, request_id) from e

    projection_counter.labels(kind="subscriptions").inc()
    return SubscriptionsResponse(subscriptions=[SubscriptionStatusSchema.model_validate(s) for s in statuses])
