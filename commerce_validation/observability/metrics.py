"""
Prometheus metrics collection for commerce-validation

Counts rule evaluations, failures by rule kind and remote uniqueness-check
errors so validation behaviour can be monitored from the host service.
"""

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# EVALUATION METRICS
# =======================

# Field evaluations by outcome
validation_evaluations_total = Counter(
    name="validation_evaluations_total",
    documentation="Total number of field evaluations",
    labelnames=["outcome"],  # outcome: passed, failed, error
    registry=REGISTRY,
)

# Failures by the kind of rule that produced them
validation_failures_total = Counter(
    name="validation_failures_total",
    documentation="Total number of rule failures",
    labelnames=["rule_kind"],  # required, min_length, max_length, pattern, custom
    registry=REGISTRY,
)

# Remote uniqueness checks that could not be completed
validation_unique_check_errors_total = Counter(
    name="validation_unique_check_errors_total",
    documentation="Total number of uniqueness checks that raised or timed out",
    labelnames=["reason"],  # reason: exception, timeout
    registry=REGISTRY,
)

# Evaluation latency
validation_evaluation_duration_seconds = Histogram(
    name="validation_evaluation_duration_seconds",
    documentation="Time spent evaluating one field's rules in seconds",
    buckets=[0.0001, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
    registry=REGISTRY,
)


# =======================
# PAYLOAD METRICS
# =======================

# Request payload validations by schema and status
payload_validations_total = Counter(
    name="validation_payloads_total",
    documentation="Total number of request payloads validated",
    labelnames=["schema", "status"],  # status: valid, invalid
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def get_metrics() -> str:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in the Prometheus text exposition format
    """
    return generate_latest(REGISTRY).decode("utf-8")


# =======================
# CONTEXT MANAGERS
# =======================

class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(validation_evaluation_duration_seconds):
            ...
    """

    def __init__(self, histogram: Histogram, **labels):
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        metric = self.histogram.labels(**self.labels) if self.labels else self.histogram
        self.timer = metric.time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    counter.labels(**labels).inc(value)


def record_evaluation(outcome: str, rule_kind: str | None = None) -> None:
    """
    Record the outcome of one field evaluation.

    Args:
        outcome: "passed", "failed" or "error"
        rule_kind: Kind of the rule that failed, when outcome is "failed"
    """
    increment_counter(validation_evaluations_total, outcome=outcome)
    if rule_kind is not None:
        increment_counter(validation_failures_total, rule_kind=rule_kind)
