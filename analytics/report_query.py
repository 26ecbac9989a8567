"""
Report Query Engine — filter, sort and paginate daily summaries.

Steps always run in the same order: search term, agent selection, minimum
date, stable sort, then the page slice. Summary statistics are taken from
the filtered set before pagination.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

import structlog

from analytics.common import round_half_up
from api.schemas import (
    AgentDailySummary,
    ReportFilters,
    ReportPage,
    ReportResult,
    ReportSort,
    ReportState,
    ReportStats,
    SortDirection,
)

logger = structlog.get_logger()

ALL_AGENTS = "all"


def filter_daily_summaries(
    summaries: Sequence[AgentDailySummary],
    filters: ReportFilters,
) -> list[AgentDailySummary]:
    filtered = list(summaries)

    if filters.search_term:
        needle = filters.search_term.lower()
        filtered = [s for s in filtered if needle in s.agent_name.lower()]

    if filters.selected_agent != ALL_AGENTS:
        filtered = [s for s in filtered if s.agent_name == filters.selected_agent]

    if filters.min_date is not None:
        filtered = [s for s in filtered if s.date >= filters.min_date]

    return filtered


def sort_daily_summaries(
    summaries: Sequence[AgentDailySummary],
    sort: ReportSort,
) -> list[AgentDailySummary]:
    """Stable sort; rows that compare equal keep their incoming order in both directions."""
    attribute = sort.field.attribute
    return sorted(
        summaries,
        key=lambda s: getattr(s, attribute),
        reverse=sort.direction == SortDirection.DESC,
    )


def paginate(
    rows: Sequence[AgentDailySummary],
    page: ReportPage,
) -> list[AgentDailySummary]:
    start = (page.page - 1) * page.page_size
    return list(rows[start:start + page.page_size])


def compute_report_stats(rows: Sequence[AgentDailySummary]) -> ReportStats:
    if not rows:
        return ReportStats()

    total_agents = len({row.agent_id for row in rows})
    total_interactions = sum(row.total_interactions for row in rows)
    avg_length = sum(row.average_length_seconds for row in rows) / len(rows)

    return ReportStats(
        total_agents=total_agents,
        total_interactions=total_interactions,
        avg_interactions_per_agent=round_half_up(total_interactions / total_agents),
        avg_length_seconds=round_half_up(avg_length),
    )


def agent_name_options(summaries: Sequence[AgentDailySummary]) -> list[str]:
    """Sorted distinct agent names for the agent filter."""
    return sorted({s.agent_name for s in summaries})


def query_daily_summaries(
    summaries: Sequence[AgentDailySummary],
    filters: Optional[ReportFilters] = None,
    sort: Optional[ReportSort] = None,
    page: Optional[ReportPage] = None,
) -> ReportResult:
    """
    Run the full filter → sort → paginate pipeline.

    A page past the end returns no rows; stats and totals still describe
    every filtered row.
    """
    filters = filters or ReportFilters()
    sort = sort or ReportSort()
    page = page or ReportPage()

    ordered = sort_daily_summaries(filter_daily_summaries(summaries, filters), sort)
    rows = paginate(ordered, page)

    result = ReportResult(
        rows=rows,
        stats=compute_report_stats(ordered),
        total_rows=len(ordered),
        page_count=math.ceil(len(ordered) / page.page_size),
        agent_options=agent_name_options(summaries),
    )

    logger.debug(
        "report_queried",
        input_rows=len(summaries),
        filtered_rows=result.total_rows,
        page=page.page,
        returned_rows=len(rows),
        sort_field=sort.field.value,
        sort_direction=sort.direction.value,
    )
    return result


def query_with_state(
    summaries: Sequence[AgentDailySummary],
    state: ReportState,
) -> ReportResult:
    return query_daily_summaries(summaries, state.filters, state.sort, state.page)
