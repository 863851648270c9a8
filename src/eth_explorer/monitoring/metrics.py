# File: src/eth_explorer/monitoring/metrics.py

import time
from contextlib import contextmanager
from typing import Iterator, Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)


class MetricsCollector:
    """Prometheus metrics for inbound HTTP traffic and outbound upstream calls.

    Each collector owns its registry so several apps (one per test) can live
    in the same process.
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()

        self.http_requests = Counter(
            'eth_explorer_http_requests',
            'HTTP requests served',
            ['method', 'path', 'status'],
            registry=self.registry,
        )
        self.upstream_requests = Counter(
            'eth_explorer_upstream_requests',
            'Requests made to the node or Etherscan',
            ['upstream', 'operation', 'outcome'],
            registry=self.registry,
        )
        self.upstream_latency = Histogram(
            'eth_explorer_upstream_latency_seconds',
            'Upstream request latency',
            ['upstream', 'operation'],
            registry=self.registry,
        )

    def record_http_request(self, method: str, path: str, status: int):
        self.http_requests.labels(method=method, path=path, status=str(status)).inc()

    @contextmanager
    def track_upstream(self, upstream: str, operation: str) -> Iterator[None]:
        """Count and time one upstream call; the outcome label is 'error' if it raises."""
        start = time.perf_counter()
        outcome = "success"
        try:
            yield
        except Exception:
            outcome = "error"
            raise
        finally:
            self.upstream_latency.labels(upstream=upstream, operation=operation).observe(
                time.perf_counter() - start
            )
            self.upstream_requests.labels(
                upstream=upstream, operation=operation, outcome=outcome
            ).inc()

    def render(self) -> bytes:
        return generate_latest(self.registry)
