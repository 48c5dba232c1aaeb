"""Prometheus metrics for monitoring contracts, investments and payment runs"""

from prometheus_client import Counter, Histogram, Gauge

# Payment metrics
payment_counter = Counter(
    "solar_payment_total",
    "Monthly payment attempts",
    ["outcome"],  # paid | not_due | failed
)

payment_amount_histogram = Histogram(
    "solar_payment_amount_dollars",
    "Monthly payment amounts applied",
    buckets=[25, 50, 75, 100, 150, 250, 500],
)

calendar_month_gauge = Gauge(
    "solar_calendar_month",
    "Current billing month",
)

# Funding metrics
contracts_created_counter = Counter(
    "solar_contracts_created_total",
    "Financing contracts created",
)

investment_counter = Counter(
    "solar_investment_total",
    "Investments recorded",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_payment(outcome: str, amount: float | None = None) -> None:
    """Record one payment attempt and, when paid, its amount"""
    payment_counter.labels(outcome=outcome).inc()

    if amount is not None:
        payment_amount_histogram.observe(amount)
