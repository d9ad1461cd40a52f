from prometheus_client import Counter, Histogram


REQUESTS = Counter("tonelens_requests_total", "Total API requests", ["endpoint"])
UPSTREAM_ERRORS = Counter(
    "tonelens_upstream_errors_total",
    "Failed calls to external services",
    ["service"],
)
LATENCY = Histogram(
    "tonelens_request_latency_seconds",
    "Request latency",
    buckets=(0.05, 0.1, 0.2, 0.5, 1, 2, 5)
)
