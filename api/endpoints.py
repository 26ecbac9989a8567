"""
API Endpoints — all REST API route definitions (FastAPI routers).

Every analytics route works on one record snapshot supplied by the
`get_snapshot` dependency; the report routes also take the report day from
`get_today` so tests can pin the window.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
import structlog

from analytics.daily_aggregator import compute_daily_summaries
from analytics.exporter import export_daily_report
from analytics.performance_analyzer import analyze_performance
from analytics.report_query import (
    ALL_AGENTS,
    filter_daily_summaries,
    query_daily_summaries,
    sort_daily_summaries,
)
from analytics.workload_distributor import distribute_workload
from api.schemas import (
    AgentDailySummary,
    DashboardResponse,
    PerformanceSummary,
    RecordSnapshot,
    ReportFilters,
    ReportPage,
    ReportResult,
    ReportSort,
    SortDirection,
    SortField,
    WorkloadDistribution,
)
from config.settings import Settings, get_settings
from dashboard.aggregator import build_dashboard
from db.record_source import RecordSource

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1", tags=["AgentInsights"])


# ── Dependencies ──────────────────────────────────────────────────────────────

async def get_snapshot() -> RecordSnapshot:
    return await RecordSource().fetch_snapshot()


def get_today() -> date:
    return datetime.now(timezone.utc).date()


def _report_filters(
    search: str = "",
    agent: str = ALL_AGENTS,
    min_date: Optional[date] = None,
) -> ReportFilters:
    return ReportFilters(search_term=search, selected_agent=agent, min_date=min_date)


def _report_sort(
    sort_field: SortField = SortField.DATE,
    sort_direction: SortDirection = SortDirection.DESC,
) -> ReportSort:
    return ReportSort(field=sort_field, direction=sort_direction)


def _daily_summaries(
    snapshot: RecordSnapshot = Depends(get_snapshot),
    today: date = Depends(get_today),
    settings: Settings = Depends(get_settings),
) -> list[AgentDailySummary]:
    return compute_daily_summaries(
        snapshot.interactions,
        snapshot.agents,
        today=today,
        window_days=settings.report_window_days,
    )


# ── Records ───────────────────────────────────────────────────────────────────

@router.get("/agents")
async def list_agents(snapshot: RecordSnapshot = Depends(get_snapshot)) -> dict:
    """Agent directory as fetched from the record source."""
    return {"data": [agent.model_dump() for agent in snapshot.agents]}


@router.get("/interactions")
async def list_interactions(snapshot: RecordSnapshot = Depends(get_snapshot)) -> dict:
    """Raw interaction batch as fetched from the record source."""
    return {"data": [i.model_dump(mode="json") for i in snapshot.interactions]}


# ── Daily Report ──────────────────────────────────────────────────────────────

@router.get("/reports/agents-daily", response_model=ReportResult)
async def agents_daily_report(
    summaries: list[AgentDailySummary] = Depends(_daily_summaries),
    filters: ReportFilters = Depends(_report_filters),
    sort: ReportSort = Depends(_report_sort),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1),
    settings: Settings = Depends(get_settings),
) -> ReportResult:
    """Filtered, sorted and paginated per-agent daily summaries with stats."""
    return query_daily_summaries(
        summaries,
        filters,
        sort,
        ReportPage(page=page, page_size=page_size or settings.report_page_size),
    )


@router.get("/reports/agents-daily/export", response_class=PlainTextResponse)
async def export_agents_daily_report(
    summaries: list[AgentDailySummary] = Depends(_daily_summaries),
    filters: ReportFilters = Depends(_report_filters),
    sort: ReportSort = Depends(_report_sort),
    settings: Settings = Depends(get_settings),
) -> PlainTextResponse:
    """CSV download of every filtered row (not paginated)."""
    rows = sort_daily_summaries(filter_daily_summaries(summaries, filters), sort)
    return PlainTextResponse(
        content=export_daily_report(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{settings.export_filename}"'},
    )


# ── Widgets ───────────────────────────────────────────────────────────────────

@router.get("/analytics/performance", response_model=PerformanceSummary)
async def performance_summary(
    snapshot: RecordSnapshot = Depends(get_snapshot),
) -> PerformanceSummary:
    return analyze_performance(snapshot.interactions, snapshot.agents)


@router.get("/analytics/workload", response_model=WorkloadDistribution)
async def workload_distribution(
    snapshot: RecordSnapshot = Depends(get_snapshot),
    settings: Settings = Depends(get_settings),
) -> WorkloadDistribution:
    return distribute_workload(
        snapshot.interactions,
        snapshot.agents,
        top_n=settings.workload_top_n,
    )


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    snapshot: RecordSnapshot = Depends(get_snapshot),
    today: date = Depends(get_today),
) -> DashboardResponse:
    """All widgets over one snapshot; a failing widget comes back as null."""
    response = build_dashboard(snapshot, today)
    logger.info("dashboard_built", widget_status=response.widget_status)
    return response


@router.get("/health")
async def health_check() -> dict:
    """Simple health-check endpoint."""
    return {
        "status": "healthy",
        "service": "AgentInsights",
        "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    }
