"""
Exporter — comma-delimited text for report downloads.

Cells are written as-is: no quoting, no escaping of embedded commas.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import structlog

from api.schemas import AgentDailySummary

logger = structlog.get_logger()

DAILY_REPORT_HEADER = ("Date", "Agent", "Total Interactions", "Average Length (seconds)")


def export_rows(rows: Iterable[Sequence[str]], header: Sequence[str]) -> str:
    """Header first, one line per row, rows joined by newlines (no trailing newline)."""
    lines = [",".join(header)]
    lines.extend(",".join(str(cell) for cell in row) for row in rows)
    return "\n".join(lines)


def daily_report_rows(summaries: Iterable[AgentDailySummary]) -> list[tuple[str, ...]]:
    return [
        (
            s.date.isoformat(),
            s.agent_name,
            str(s.total_interactions),
            str(s.average_length_seconds),
        )
        for s in summaries
    ]


def export_daily_report(summaries: Sequence[AgentDailySummary]) -> str:
    content = export_rows(daily_report_rows(summaries), DAILY_REPORT_HEADER)
    logger.info("report_exported", rows=len(summaries), size_bytes=len(content.encode("utf-8")))
    return content
