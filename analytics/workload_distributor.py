"""
Workload Distributor — share of total volume per agent with a capacity tier.
"""

from __future__ import annotations

from typing import Optional, Sequence

import structlog

from analytics.common import (
    UNKNOWN_AGENT,
    build_agent_lookup,
    group_by_agent,
    load_thresholds,
    resolve_agent_name,
)
from api.schemas import (
    Agent,
    Interaction,
    TierCounts,
    WorkloadDistribution,
    WorkloadEntry,
    WorkloadTier,
)

logger = structlog.get_logger()

DEFAULT_TOP_N = 8

_DEFAULTS = {
    "high_multiplier": 1.5,
    "low_multiplier": 0.5,
}
WORKLOAD_CONFIG = {**_DEFAULTS, **load_thresholds("workload")}


def classify_tier(count: int, average: float) -> WorkloadTier:
    if count > average * WORKLOAD_CONFIG["high_multiplier"]:
        return WorkloadTier.HIGH
    if count < average * WORKLOAD_CONFIG["low_multiplier"]:
        return WorkloadTier.LOW
    return WorkloadTier.MEDIUM


def count_tiers(entries: Sequence[WorkloadEntry]) -> TierCounts:
    return TierCounts(
        overloaded=sum(1 for e in entries if e.tier == WorkloadTier.HIGH),
        balanced=sum(1 for e in entries if e.tier == WorkloadTier.MEDIUM),
        underutilized=sum(1 for e in entries if e.tier == WorkloadTier.LOW),
    )


def distribute_workload(
    interactions: Sequence[Interaction],
    agents: Sequence[Agent],
    top_n: Optional[int] = DEFAULT_TOP_N,
) -> WorkloadDistribution:
    """
    Rank agents by interaction volume and classify each against the team average.

    The average is the whole batch over the agent directory size. Only the
    `top_n` busiest agents are returned, and the tier counts describe those
    retained entries only.
    """
    if not interactions or not agents:
        return WorkloadDistribution()

    lookup = build_agent_lookup(agents)
    total_interactions = len(interactions)
    average = total_interactions / len(agents)

    entries = [
        WorkloadEntry(
            agent_id=agent_id,
            agent_name=resolve_agent_name(lookup, agent_id, UNKNOWN_AGENT),
            interaction_count=len(group),
            percentage_of_total=len(group) / total_interactions * 100,
            tier=classify_tier(len(group), average),
        )
        for agent_id, group in group_by_agent(interactions).items()
    ]
    entries.sort(key=lambda e: e.interaction_count, reverse=True)
    if top_n is not None:
        entries = entries[:top_n]

    distribution = WorkloadDistribution(entries=entries, tier_counts=count_tiers(entries))

    logger.info(
        "workload_distributed",
        agents=len(entries),
        overloaded=distribution.tier_counts.overloaded,
        balanced=distribution.tier_counts.balanced,
        underutilized=distribution.tier_counts.underutilized,
    )
    return distribution
