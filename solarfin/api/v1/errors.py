"""Mapping of domain failures to HTTP errors"""

import logging

from fastapi import HTTPException

from solarfin.domain.exceptions import DomainException, OwnerMismatchError
from solarfin.infrastructure.observability.metrics import record_rejection


def reject(exc: DomainException, request_id: str) -> HTTPException:
    """Log and count a rejected computation, returning the 422 to raise"""
    reason = "owner_mismatch" if isinstance(exc, OwnerMismatchError) else "invalid_record"
    record_rejection(reason)
    logging.warning(f"Projection rejected: {exc}", extra={"request_id": request_id, "reason": reason})
    return HTTPException(status_code=422, detail=str(exc))
