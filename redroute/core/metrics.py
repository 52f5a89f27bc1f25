"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking metrics
booking_attempts = Counter(
    'booking_attempts_total',
    'Total booking attempts',
    ['kind', 'status']  # hotel/event; success, rejected, error
)

booking_latency = Histogram(
    'booking_latency_seconds',
    'Booking request latency',
    ['kind'],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

# Review metrics
review_writes = Counter(
    'review_writes_total',
    'Review upserts',
    ['kind', 'operation']  # hotel/event; created, updated
)

# Favorite metrics
favorite_toggles = Counter(
    'favorite_toggles_total',
    'Favorite toggle outcomes',
    ['result']  # created, removed
)

# Auth metrics
auth_attempts = Counter(
    'auth_attempts_total',
    'Registration and login attempts',
    ['action', 'result']  # register/login; success, conflict, invalid
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set, hit/miss
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


# Convenience functions for instrumentation
def record_booking_attempt(kind: str, status: str):
    """Record booking attempt. Kind: hotel, event. Status: success, rejected, error"""
    booking_attempts.labels(kind=kind, status=status).inc()

def record_review_write(kind: str, created: bool):
    operation = "created" if created else "updated"
    review_writes.labels(kind=kind, operation=operation).inc()

def record_favorite_toggle(created: bool):
    result = "created" if created else "removed"
    favorite_toggles.labels(result=result).inc()

def record_auth_attempt(action: str, result: str):
    auth_attempts.labels(action=action, result=result).inc()

def record_cache_operation(operation: str, hit: bool):
    """Record cache operation."""
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()
