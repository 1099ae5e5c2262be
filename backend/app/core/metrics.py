"""Prometheus metrics for the analytics pipeline (exposed on /metrics)."""

from prometheus_client import Counter, Histogram

PIPELINE_RUNS = Counter(
    "analytics_pipeline_runs_total",
    "Analytics pipeline runs",
)
RECOMMENDATIONS_FIRED = Counter(
    "analytics_recommendations_total",
    "Recommendations produced, by priority",
    ["priority"],
)
ALERTS_RAISED = Counter(
    "analytics_alerts_total",
    "Alerts produced, by level",
    ["level"],
)
OPS_TOTAL = Histogram(
    "analytics_ops_total",
    "Distribution of computed OPS totals",
    buckets=(10, 20, 30, 40, 50, 60, 70, 80, 90, 100),
)
