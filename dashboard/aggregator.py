"""
Aggregator — runs every analytics widget over one snapshot and merges the
results into the unified DashboardResponse.

Handles:
- A single shared "today" so all widgets see the same report window
- Per-widget failure isolation (degraded output instead of a 500)
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, Optional, TypeVar

from pydantic import BaseModel

from analytics.daily_aggregator import compute_daily_summaries
from analytics.performance_analyzer import analyze_performance
from analytics.report_query import query_with_state
from analytics.workload_distributor import distribute_workload
from api.schemas import DashboardResponse, RecordSnapshot, ReportState
from config.settings import get_settings
from dashboard.logger import get_logger

T = TypeVar("T", bound=BaseModel)


def _run_widget(name: str, compute: Callable[[], T]) -> tuple[Optional[T], str]:
    """
    Wraps one widget computation with structured error handling.
    Returns (None, "failed") instead of raising so the other widgets still render.
    """
    log = get_logger(name)
    try:
        result = compute()
        log.debug("widget_completed")
        return result, "ok"
    except Exception as e:
        log.error("widget_failed", error=str(e), exc_info=True)
        return None, "failed"


def build_dashboard(
    snapshot: RecordSnapshot,
    today: date,
    state: Optional[ReportState] = None,
) -> DashboardResponse:
    """Compute the daily report, performance summary and workload for one snapshot."""
    settings = get_settings()
    state = state or ReportState.reset(page_size=settings.report_page_size)

    def report():
        summaries = compute_daily_summaries(
            snapshot.interactions,
            snapshot.agents,
            today=today,
            window_days=settings.report_window_days,
        )
        return query_with_state(summaries, state)

    report_result, report_status = _run_widget("daily_report", report)
    performance, performance_status = _run_widget(
        "performance",
        lambda: analyze_performance(snapshot.interactions, snapshot.agents),
    )
    workload, workload_status = _run_widget(
        "workload",
        lambda: distribute_workload(
            snapshot.interactions,
            snapshot.agents,
            top_n=settings.workload_top_n,
        ),
    )

    return DashboardResponse(
        generated_at=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        report=report_result,
        performance=performance,
        workload=workload,
        widget_status={
            "daily_report": report_status,
            "performance": performance_status,
            "workload": workload_status,
        },
    )
