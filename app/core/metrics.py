# app/core/metrics.py
from prometheus_client import Counter, Histogram

UPSTREAM_REQUESTS = Counter(
    "upstream_requests_total",
    "SerpApi calls by outcome",
    ["outcome"],
)
UPSTREAM_LATENCY = Histogram(
    "upstream_request_duration_seconds",
    "SerpApi call latency",
)
CACHE_HITS = Counter("cache_hits_total", "Cache hits", ["cache"])
CACHE_MISSES = Counter("cache_misses_total", "Cache misses", ["cache"])
