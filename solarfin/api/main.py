"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from solarfin.api.middleware import MetricsMiddleware, RequestIDMiddleware
from solarfin.api.v1 import cards, loans, pace, projection, reminders, subscriptions
from solarfin.config import settings
from solarfin.infrastructure.observability.logging import setup_logging

setup_logging(settings.log_level)

V1_ROUTERS = (
    (projection.router, "projections"),
    (pace.router, "pace"),
    (cards.router, "cards"),
    (loans.router, "loans"),
    (reminders.router, "reminders"),
    (subscriptions.router, "subscriptions"),
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Solar Fin Projection Service",
        description="Recurrence, billing-cycle and loan projections for personal finance records",
        version="0.1.0",
    )

    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    for router, tag in V1_ROUTERS:
        app.include_router(router, prefix="/v1", tags=[tag])

    return app


app = create_app()
