"""Prometheus metrics for ledger activity and request latency"""

from prometheus_client import Counter, Histogram

# Ledger metrics
ledger_operation_counter = Counter(
    "finance_ledger_operations_total",
    "Ledger operations handled",
    ["operation", "outcome"],  # outcome: ok | rejected | not_found | unavailable
)

installment_group_size_histogram = Histogram(
    "finance_installment_group_size",
    "Rows written per added transaction",
    buckets=[1, 2, 3, 6, 10, 12, 24, 48, 120],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_operation(operation: str, outcome: str = "ok") -> None:
    """Count one ledger operation by its outcome"""
    ledger_operation_counter.labels(operation=operation, outcome=outcome).inc()
