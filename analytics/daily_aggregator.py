"""
Daily Aggregator — builds per-agent, per-day summaries for the report table.

Interaction timestamps are routinely missing in the source data, so each
agent's interactions are spread over a synthetic window of recent days
instead of being bucketed by created_at. The quota/offset arithmetic is a
stand-in until real timestamps are available; its formulas are fixed and
must not be retuned without a product decision.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Sequence

import structlog

from analytics.common import (
    UNKNOWN_AGENT_REPORT,
    build_agent_lookup,
    group_by_agent,
    resolve_agent_name,
    round_half_up,
    total_length,
)
from api.schemas import Agent, AgentDailySummary, Interaction

logger = structlog.get_logger()

DEFAULT_WINDOW_DAYS = 7
INTERACTIONS_PER_DAY = 3


def report_window(today: date, window_days: int = DEFAULT_WINDOW_DAYS) -> list[date]:
    """Calendar days ending at `today`, most recent first."""
    return [today - timedelta(days=i) for i in range(window_days)]


def days_with_data(interaction_count: int, window_days: int = DEFAULT_WINDOW_DAYS) -> int:
    return min(window_days, max(1, math.ceil(interaction_count / INTERACTIONS_PER_DAY)))


def day_quota(interaction_count: int, days: int, day_index: int) -> int:
    """Interactions assigned to day `day_index` (0 = most recent); biased toward recent days."""
    return max(
        1,
        math.floor(interaction_count / days * (days - day_index) / days * 2),
    )


def _split_across_days(
    interactions: list[Interaction],
    window: list[date],
) -> list[tuple[date, list[Interaction]]]:
    """
    Day i takes up to its quota starting at offset i * (n // days).

    A day's block stops where the next day's block begins (the oldest day
    may run to the end of the list), so no interaction is counted twice.
    """
    n = len(interactions)
    days = days_with_data(n, len(window))
    stride = n // days

    slices = []
    for i in range(days):
        start = i * stride
        next_start = start + stride if i < days - 1 else n
        end = min(start + day_quota(n, days, i), next_start)
        chunk = interactions[start:end]
        if chunk:
            slices.append((window[i], chunk))
    return slices


def compute_daily_summaries(
    interactions: Sequence[Interaction],
    agents: Sequence[Agent],
    today: Optional[date] = None,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> list[AgentDailySummary]:
    """
    Derive AgentDailySummary rows from raw interactions.

    Args:
        interactions: the fetched interaction batch.
        agents: agent directory used for name lookup.
        today: last day of the window; defaults to the current UTC date.
        window_days: length of the synthetic window.

    Returns:
        One summary per non-empty agent/day slice, grouped by agent in
        first-appearance order, most recent day first within each agent.
    """
    if window_days < 1:
        raise ValueError(f"window_days must be at least 1, got {window_days}")
    if today is None:
        today = datetime.now(timezone.utc).date()

    lookup = build_agent_lookup(agents)
    window = report_window(today, window_days)

    summaries: list[AgentDailySummary] = []
    for agent_id, group in group_by_agent(interactions).items():
        agent_name = resolve_agent_name(lookup, agent_id, UNKNOWN_AGENT_REPORT)
        for day, chunk in _split_across_days(group, window):
            summaries.append(AgentDailySummary(
                date=day,
                agent_id=agent_id,
                agent_name=agent_name,
                total_interactions=len(chunk),
                average_length_seconds=round_half_up(total_length(chunk) / len(chunk)),
            ))

    logger.debug(
        "daily_summaries_computed",
        interactions=len(interactions),
        summaries=len(summaries),
        window_end=today.isoformat(),
    )
    return summaries
