"""Prometheus metrics for projection volume, pace alerts and request latency"""

from prometheus_client import Counter, Histogram

projection_counter = Counter(
    "solarfin_projection_total",
    "Total projections computed",
    ["kind"],  # month | balance | pace | card | loans | reminders
)

projection_rejected_counter = Counter(
    "solarfin_projection_rejected_total",
    "Projections rejected because of invalid or mixed-owner records",
    ["reason"],
)

pace_alert_counter = Counter(
    "solarfin_pace_alert_total",
    "Spending pace alerts emitted",
    ["level"],  # warning | info
)

scheduled_items_histogram = Histogram(
    "solarfin_scheduled_items",
    "Scheduled line items per month projection",
    buckets=[0, 5, 10, 25, 50, 100, 250],
)

request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_month_projection(scheduled_count: int) -> None:
    """Record a month projection and the size of its schedule"""
    projection_counter.labels(kind="month").inc()
    scheduled_items_histogram.observe(scheduled_count)


def record_pace_result(level: str | None) -> None:
    projection_counter.labels(kind="pace").inc()
    if level is not None:
        pace_alert_counter.labels(level=level).inc()


def record_rejection(reason: str) -> None:
    projection_rejected_counter.labels(reason=reason).inc()
