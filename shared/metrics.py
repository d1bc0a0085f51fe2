"""
Shared metrics configuration for the access-jwt token codec.
"""

from prometheus_client import Counter, Histogram, CollectorRegistry
from typing import Dict, Any, Optional
import time
from contextlib import contextmanager


class MetricsCollector:
    """Centralized metrics collector for token operations."""

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up token codec metrics."""

        self._metrics["jwt_tokens_encoded_total"] = Counter(
            "jwt_tokens_encoded_total",
            "Total tokens encoded",
            ["algorithm", "service"],
            registry=self.registry
        )

        self._metrics["jwt_token_verifications_total"] = Counter(
            "jwt_token_verifications_total",
            "Total token verifications by outcome",
            ["outcome", "service"],
            registry=self.registry
        )

        self._metrics["jwt_operation_duration_seconds"] = Histogram(
            "jwt_operation_duration_seconds",
            "Token operation duration in seconds",
            ["operation"],
            registry=self.registry
        )

    def record_encode(self, algorithm: str):
        """Record an encoded token."""
        self._metrics["jwt_tokens_encoded_total"].labels(
            algorithm=algorithm,
            service=self.service_name
        ).inc()

    def record_verification(self, outcome: str):
        """Record a verification outcome ("valid" or a failure kind)."""
        self._metrics["jwt_token_verifications_total"].labels(
            outcome=outcome,
            service=self.service_name
        ).inc()

    @contextmanager
    def time_operation(self, operation: str):
        """Context manager to time a token operation."""
        start_time = time.time()
        try:
            yield
        finally:
            duration = time.time() - start_time
            self._metrics["jwt_operation_duration_seconds"].labels(operation=operation).observe(duration)


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for a service."""
    return MetricsCollector(service_name, registry)
