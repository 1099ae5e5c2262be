"""
Analytics pipeline: aggregate -> score (OPS) -> recommend -> alert -> assemble.
Pure and synchronous; no I/O and no state shared between runs. The only
non-determinism (synthetic weekly trend) comes from the injected rng, and
"now" comes from the injected clock.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from app.core.scoring_policy import DEFAULT_POLICY, ScoringPolicy
from app.schemas.analytics import AnalyticsState, OpsHistoryPoint
from app.schemas.daily_log import DailyLog
from app.schemas.profile import UserProfile
from app.services.alerts import generate_alerts
from app.services.analytics_aggregator import aggregate
from app.services.metric_strategies import DEFAULT_STRATEGIES, MetricStrategies
from app.services.ops_history import build_weekly_trend
from app.services.ops_scoring import compute_ops
from app.services.recommendations import generate_recommendations

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AnalyticsPipeline:
    def __init__(
        self,
        policy: ScoringPolicy = DEFAULT_POLICY,
        strategies: MetricStrategies = DEFAULT_STRATEGIES,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.policy = policy
        self.strategies = strategies
        self.rng = rng or random.Random()
        self.clock = clock

    def run(
        self,
        profile: UserProfile,
        logs: Sequence[DailyLog],
        history: Sequence[OpsHistoryPoint] = (),
    ) -> AnalyticsState:
        """
        Run the full pipeline for one user. history is the persisted OPS series,
        oldest first; it drives delta/trend and the weekly trend when long enough.
        """
        as_of = self.clock()
        data = aggregate(profile, logs, policy=self.policy, strategies=self.strategies, as_of=as_of)
        ops = compute_ops(
            data.health,
            data.training,
            data.nutrition,
            data.performance,
            data.supplements,
            data.bio,
            policy=self.policy,
            history=history,
            as_of=as_of,
        )
        recommendations = generate_recommendations(ops, profile, data, policy=self.policy, now=as_of)
        alerts = generate_alerts(ops, data, policy=self.policy, now=as_of)
        weekly_trend = build_weekly_trend(ops.total, history, as_of=as_of, rng=self.rng, policy=self.policy)
        logger.debug(
            "Analytics: pipeline run profile_id=%s ops=%s trend=%s recs=%s alerts=%s",
            profile.id,
            ops.total,
            ops.trend.value,
            len(recommendations),
            len(alerts),
        )
        return AnalyticsState(
            ops=ops,
            recommendations=recommendations,
            alerts=alerts,
            weekly_trend=weekly_trend,
        )


def run_analytics_pipeline(
    profile: UserProfile,
    logs: Sequence[DailyLog],
    history: Sequence[OpsHistoryPoint] = (),
    *,
    policy: ScoringPolicy = DEFAULT_POLICY,
    rng: random.Random | None = None,
) -> AnalyticsState:
    """One-off run with a default pipeline."""
    return AnalyticsPipeline(policy=policy, rng=rng).run(profile, logs, history)
