"""
Shared metrics configuration for the Exclusion Rules service.
"""

from typing import Dict, Any, Optional

from prometheus_client import Counter, Gauge, Info, CollectorRegistry, start_http_server


class ExclusionMetrics:
    """Centralized metrics collector for rule compilation and evaluation."""

    def __init__(self, service_name: str = "exclusions", registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up rule engine metrics."""

        # Service info
        self._metrics["service_info"] = Info(
            "service_info",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })

        self._metrics["rules_compiled_total"] = Counter(
            "rules_compiled_total",
            "Total rule rows compiled",
            ["outcome"],
            registry=self.registry
        )

        self._metrics["rule_set_size"] = Gauge(
            "rule_set_size",
            "Number of fields in the active rule set",
            registry=self.registry
        )

        self._metrics["records_evaluated_total"] = Counter(
            "records_evaluated_total",
            "Total records evaluated",
            ["outcome"],
            registry=self.registry
        )

        self._metrics["rule_reloads_total"] = Counter(
            "rule_reloads_total",
            "Total rule set reloads",
            ["status"],
            registry=self.registry
        )

    def start_metrics_server(self, port: int = 9090):
        """Start the Prometheus metrics server."""
        start_http_server(port, registry=self.registry)

    def record_compilation(self, compiled: int, rejected: int = 0):
        """Record a compilation pass."""
        self._metrics["rules_compiled_total"].labels(outcome="compiled").inc(compiled)
        if rejected:
            self._metrics["rules_compiled_total"].labels(outcome="rejected").inc(rejected)

    def set_rule_set_size(self, size: int):
        """Record the size of the active rule set."""
        self._metrics["rule_set_size"].set(size)

    def record_evaluation(self, invalid: bool):
        """Record a single record evaluation."""
        outcome = "invalid" if invalid else "valid"
        self._metrics["records_evaluated_total"].labels(outcome=outcome).inc()

    def record_reload(self, status: str):
        """Record a reload attempt."""
        self._metrics["rule_reloads_total"].labels(status=status).inc()

    def sample(self, name: str, **labels) -> float:
        """Read the current value of a sample from the registry."""
        value = self.registry.get_sample_value(name, labels or None)
        return value or 0.0


_metrics_collector: Optional[ExclusionMetrics] = None


def get_metrics_collector(service_name: str = "exclusions") -> ExclusionMetrics:
    """Get the process-wide metrics collector."""
    global _metrics_collector
    if _metrics_collector is None:
        _metrics_collector = ExclusionMetrics(service_name)
    return _metrics_collector
