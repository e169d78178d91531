"""Prometheus metrics for the Tether API"""

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    'tether_http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

REQUEST_DURATION = Histogram(
    'tether_http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

MATCH_COUNT = Counter(
    'tether_match_requests_total',
    'Total match requests',
    ['source']
)

MATCH_DURATION = Histogram(
    'tether_match_duration_seconds',
    'Matching pipeline duration in seconds'
)

ERROR_COUNT = Counter(
    'tether_errors_total',
    'Total errors',
    ['error_type']
)
