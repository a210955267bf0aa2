"""Prometheus metrics for the Registry Operator."""

from prometheus_client import Counter, Histogram

# Reconciliation metrics
reconcile_total = Counter(
    "registry_operator_reconcile_total",
    "Total number of reconciliations",
    ["phase", "result"],
)

reconcile_duration_seconds = Histogram(
    "registry_operator_reconcile_duration_seconds",
    "Duration of reconciliations in seconds",
    ["phase"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

phase_transitions_total = Counter(
    "registry_operator_phase_transitions_total",
    "Total number of persisted phase transitions",
    ["from_phase", "to_phase"],
)

# Child resource metrics
child_operations_total = Counter(
    "registry_operator_child_operations_total",
    "Total number of child resource operations",
    ["kind", "operation", "result"],
)

# Error metrics
error_total = Counter(
    "registry_operator_error_total",
    "Total number of reconciliation errors",
    ["error_type"],
)

# API call metrics
api_call_total = Counter(
    "registry_operator_api_call_total",
    "Total number of API calls",
    ["api_type", "operation", "result"],
)

api_call_duration_seconds = Histogram(
    "registry_operator_api_call_duration_seconds",
    "Duration of API calls in seconds",
    ["api_type", "operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)

rate_limit_hits_total = Counter(
    "registry_operator_rate_limit_hits_total",
    "Total number of rate limit hits",
    ["api_type"],
)
