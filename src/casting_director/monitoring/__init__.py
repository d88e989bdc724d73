"""Monitoring and metrics instrumentation for the Casting Director backend.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from casting_director.monitoring.metrics import (
    actor_cache_lookups_total,
    actor_cache_writes_total,
    llm_attempts_total,
    llm_latency_seconds,
    llm_requests_total,
)

__all__ = [
    "actor_cache_lookups_total",
    "actor_cache_writes_total",
    "llm_attempts_total",
    "llm_latency_seconds",
    "llm_requests_total",
]
