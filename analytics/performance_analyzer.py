"""
Performance Analyzer — lifetime agent metrics, ranking and team averages.

Works on the raw interaction batch (not the daily window). Both ranking
scores are synthetic: they only order agents relative to each other.
"""

from __future__ import annotations

import math
from typing import Callable, Optional, Sequence

import structlog

from analytics.common import (
    UNKNOWN_AGENT,
    build_agent_lookup,
    group_by_agent,
    load_thresholds,
    resolve_agent_name,
    round_half_up,
    total_length,
)
from analytics.formatting import format_duration
from api.schemas import (
    Agent,
    AgentPerformanceMetrics,
    Interaction,
    PerformanceSummary,
    TeamAverage,
    TrendEstimate,
)

logger = structlog.get_logger()

_DEFAULTS = {
    "efficiency_numerator": 10000,
    "support_numerator": 20000,
    "trend_improving_ratio": 0.3,
    "trend_declining_ratio": 0.15,
}
PERFORMANCE_CONFIG = {**_DEFAULTS, **load_thresholds("performance")}


def compute_agent_metrics(
    interactions: Sequence[Interaction],
    agents: Sequence[Agent],
) -> list[AgentPerformanceMetrics]:
    """One metrics row per agent with at least one attributable interaction."""
    lookup = build_agent_lookup(agents)
    metrics = []
    for agent_id, group in group_by_agent(interactions).items():
        total_time = total_length(group)
        metrics.append(AgentPerformanceMetrics(
            agent_id=agent_id,
            name=resolve_agent_name(lookup, agent_id, UNKNOWN_AGENT),
            interaction_count=len(group),
            total_time_seconds=total_time,
            average_length_seconds=round_half_up(total_time / len(group)),
        ))
    return metrics


def efficiency_score(metrics: AgentPerformanceMetrics) -> float:
    """High volume at short handle time scores highest."""
    numerator = PERFORMANCE_CONFIG["efficiency_numerator"]
    return metrics.interaction_count * (numerator / max(metrics.average_length_seconds, 1))


def support_score(metrics: AgentPerformanceMetrics) -> float:
    """
    Lowest score marks the agent most in need of support.

    Volume and handle time are not weighted symmetrically: low volume pulls
    the score down hard, a long average only shrinks the second term.
    """
    numerator = PERFORMANCE_CONFIG["support_numerator"]
    return metrics.interaction_count + numerator / max(metrics.average_length_seconds, 1)


def _pick(
    metrics: Sequence[AgentPerformanceMetrics],
    score: Callable[[AgentPerformanceMetrics], float],
    better: Callable[[float, float], bool],
) -> Optional[AgentPerformanceMetrics]:
    # first encountered wins ties
    best: Optional[AgentPerformanceMetrics] = None
    best_score = 0.0
    for candidate in metrics:
        if candidate.interaction_count <= 0:
            continue
        candidate_score = score(candidate)
        if best is None or better(candidate_score, best_score):
            best, best_score = candidate, candidate_score
    return best


def find_top_performer(
    metrics: Sequence[AgentPerformanceMetrics],
) -> Optional[AgentPerformanceMetrics]:
    return _pick(metrics, efficiency_score, lambda a, b: a > b)


def find_needs_support(
    metrics: Sequence[AgentPerformanceMetrics],
) -> Optional[AgentPerformanceMetrics]:
    return _pick(metrics, support_score, lambda a, b: a < b)


def illustrative_trend_estimate(active_agent_count: int) -> TrendEstimate:
    """
    Fixed fractions of the active agent count.

    NOT a measured trend: there is no historical comparison behind these
    numbers. Replace once per-period history exists.
    """
    return TrendEstimate(
        improving=math.floor(active_agent_count * PERFORMANCE_CONFIG["trend_improving_ratio"]),
        declining=math.floor(active_agent_count * PERFORMANCE_CONFIG["trend_declining_ratio"]),
    )


def mentoring_recommendation(summary: PerformanceSummary) -> str:
    if summary.needs_support and summary.top_performer:
        return (
            f"Consider pairing {summary.needs_support.name} with "
            f"{summary.top_performer.name} for mentoring"
        )
    return "Team performance is strong across all agents"


def analyze_performance(
    interactions: Sequence[Interaction],
    agents: Sequence[Agent],
) -> PerformanceSummary:
    """
    Rank agents and compute team-wide averages.

    Team averages count every interaction in the batch, including ones
    without an agent, over the size of the agent directory.
    """
    if not interactions or not agents:
        logger.info(
            "performance_analysis_skipped",
            interactions=len(interactions),
            agents=len(agents),
        )
        summary = PerformanceSummary()
        return summary.model_copy(update={"recommendation": mentoring_recommendation(summary)})

    metrics = compute_agent_metrics(interactions, agents)

    total_interactions = len(interactions)
    team_average = TeamAverage(
        interactions=round_half_up(total_interactions / len(agents)),
        avg_length=round_half_up(total_length(interactions) / total_interactions),
    )

    summary = PerformanceSummary(
        top_performer=find_top_performer(metrics),
        needs_support=find_needs_support(metrics),
        team_average=team_average,
        trends=illustrative_trend_estimate(len(metrics)),
        active_agent_count=len(metrics),
    )
    summary = summary.model_copy(update={"recommendation": mentoring_recommendation(summary)})

    logger.info(
        "performance_analyzed",
        active_agents=summary.active_agent_count,
        top_performer=summary.top_performer.agent_id if summary.top_performer else None,
        needs_support=summary.needs_support.agent_id if summary.needs_support else None,
        team_avg_interactions=team_average.interactions,
        team_avg_length=format_duration(team_average.avg_length),
    )
    return summary
