"""Prometheus metric inventory.

All metrics are declared here; the modules that own a behaviour import the
metric they need and update it at the point of action.  ``/metrics``
exposes the default registry.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, route template, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Assessment metrics
# ---------------------------------------------------------------------------

ASSESSMENT_SUBMISSIONS = Counter(
    "assessment_submissions_total",
    "Graded and recorded submissions",
    ["language", "proficiency_level"],
)

ASSESSMENT_PERCENTAGE = Histogram(
    "assessment_percentage",
    "Distribution of submission percentages",
    ["language"],
    # tier boundaries sit at 40 and 70
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

QUESTION_CACHE_OPERATIONS = Counter(
    "question_cache_operations_total",
    "Display question list cache lookups by result",
    ["operation"],  # "hit" or "miss"
)
