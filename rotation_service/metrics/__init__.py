# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "rotation_requests_total",
    "Total HTTP requests to rotation service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "rotation_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "rotation_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
GENERATION_RUNS = Counter(
    "rotation_generation_runs_total",
    "Generation runs by kind, mode and outcome",
    ["kind", "mode", "outcome"],
)
ASSIGNMENTS_CREATED = Counter(
    "rotation_assignments_created_total",
    "Assignments written to the store",
    ["kind"],
)
ASSIGNMENTS_SKIPPED = Counter(
    "rotation_assignments_skipped_total",
    "Members skipped because they were already covered",
    ["kind"],
)
GENERATION_EXCEPTIONS = Counter(
    "rotation_generation_exceptions_total",
    "Members reported as exceptions during matching",
    ["kind", "reason"],
)
GENERATION_DURATION = Histogram(
    "rotation_generation_duration_seconds",
    "Wall time of one generation run",
    ["kind", "mode"],
)
