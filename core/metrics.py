"""
Prometheus metrics.

HTTP metrics are recorded by ``core.middleware.metrics``; the article
counters are incremented by the application handlers.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Article metrics
article_transitions_total = Counter(
    "article_transitions_total",
    "Article status transitions",
    ["to_status"],
)

articles_auto_published_total = Counter(
    "articles_auto_published_total",
    "Scheduled articles published by the background job",
)

# Cache metrics
cache_requests_total = Counter(
    "cache_requests_total",
    "Read-through cache lookups",
    ["cache", "result"],
)

# Settings audit
settings_audit_results_total = Counter(
    "settings_audit_results_total",
    "Settings audit check outcomes",
    ["severity"],
)
