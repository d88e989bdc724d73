"""Custom Prometheus metrics for the Casting Director backend.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- llm_requests_total{outcome="exhausted"} (Gemini overloaded or returning garbage)
- actor_cache_lookups_total{result="error"} (document store unavailable)
"""

from prometheus_client import Counter, Histogram

# === Gemini Metrics ===

llm_requests_total = Counter(
    "llm_requests_total",
    "Logical Gemini calls by model and final outcome",
    ["model", "outcome"],
)
"""
Logical call counter.

Labels:
- model: Gemini model id
- outcome: success, terminal (4xx except 429), exhausted (attempt cap reached)
"""

llm_attempts_total = Counter(
    "llm_attempts_total",
    "Individual Gemini HTTP attempts by model and result",
    ["model", "result"],
)
"""
Attempt counter. attempts / requests gives the average retry amplification.

Labels:
- result: success, http_error, network_error, malformed_response
"""

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "Logical Gemini call latency in seconds, backoff included",
    ["model", "success"],
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0],
)

# === Actor Cache Metrics ===

actor_cache_lookups_total = Counter(
    "actor_cache_lookups_total",
    "Actor fee cache lookups by result",
    ["result"],
)
"""
Cache lookup counter.

Labels:
- result: hit, miss, expired, invalid (malformed document), error (store fault)

Alert thresholds:
- WARN: any error (every lookup falls through to Gemini while the store is down)
"""

actor_cache_writes_total = Counter(
    "actor_cache_writes_total",
    "Actor fee cache writes by success",
    ["success"],
)
