"""Severity-tagged alerts from OPS + aggregated analytics. Independent of recommendations."""

from __future__ import annotations

from datetime import datetime

from app.core.scoring_policy import DEFAULT_POLICY, ScoringPolicy
from app.schemas.analytics import AggregatedAnalytics, Alert, AlertLevel, OPSScore


def generate_alerts(
    ops: OPSScore,
    data: AggregatedAnalytics,
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
    now: datetime,
) -> list[Alert]:
    """Return Critical (OPS drop), Warning (sleep) and Info (new PRs) alerts; may be empty."""
    alerts: list[Alert] = []
    stamp = int(now.timestamp() * 1000)

    if ops.delta < policy.alert_ops_drop_delta:
        alerts.append(
            Alert(
                id=f"alt_drop_{stamp}",
                level=AlertLevel.CRITICAL,
                reason=f"Performance Score dropped by {abs(ops.delta)}%",
                metrics_involved=["ops"],
                timestamp=now,
                suggested_action="Check Health Module",
            )
        )

    if data.health.avg_sleep < policy.alert_sleep_hours:
        alerts.append(
            Alert(
                id=f"alt_sleep_{stamp}",
                level=AlertLevel.WARNING,
                reason=f"Chronic Sleep Deprivation (< {policy.alert_sleep_hours}h)",
                metrics_involved=["sleep"],
                timestamp=now,
                suggested_action="Prioritize Sleep Tonight",
            )
        )

    pr_count = data.performance.pr_count_monthly
    if pr_count > 0:
        alerts.append(
            Alert(
                id=f"alt_pr_{stamp}",
                level=AlertLevel.INFO,
                reason=f"{pr_count} New PRs this month!",
                metrics_involved=["strength"],
                timestamp=now,
            )
        )

    return alerts
