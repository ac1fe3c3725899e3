"""POST /v1/reminders - Recurring transactions due around today"""

from datetime import date

from fastapi import APIRouter, Depends, Request

from solarfin.api.dependencies import get_request_id, get_settings, get_today
from solarfin.api.v1.errors import reject
from solarfin.api.v1.schemas import ReminderSchema, RemindersRequest, RemindersResponse
from solarfin.config import Settings
from solarfin.domain.exceptions import DomainException
from solarfin.domain.reminders import upcoming_reminders
from solarfin.infrastructure.observability.metrics import projection_counter

router = APIRouter()


@router.post("/reminders", response_model=RemindersResponse)
def get_reminders(
    body: RemindersRequest,
    request: Request,
    today: date = Depends(get_today),
    config: Settings = Depends(get_settings),
):
    """
    List occurrences of recurring transactions near today.

    Window: reminder_days_before days back to reminder_days_after days ahead.
    """
    request_id = get_request_id(request)

    try:
        reminders = upcoming_reminders(
            [t.to_domain() for t in body.transactions],
            body.today or today,
            days_before=config.reminder_days_before,
            days_after=config.reminder_days_after,
            max_occurrences=config.occurrence_cap,
        )
    except DomainException as e:
        raise reject(e, request_id) from e

    projection_counter.labels(kind="reminders").inc()
    return RemindersResponse(reminders=[ReminderSchema.model_validate(r) for r in reminders])
