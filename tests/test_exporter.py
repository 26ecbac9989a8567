"""
Tests for the Exporter and display formatting.
"""

from datetime import date

from analytics.exporter import (
    DAILY_REPORT_HEADER,
    daily_report_rows,
    export_daily_report,
    export_rows,
)
from analytics.formatting import format_duration
from api.schemas import AgentDailySummary


# ── export_rows ───────────────────────────────────────────────────────────────

class TestExportRows:
    def test_header_then_rows(self):
        content = export_rows(
            [["2024-01-01", "Alice"], ["2024-01-02", "Bob"]],
            ["Date", "Agent"],
        )
        assert content == "Date,Agent\n2024-01-01,Alice\n2024-01-02,Bob"

    def test_header_only(self):
        assert export_rows([], ["Date", "Agent"]) == "Date,Agent"

    def test_no_quoting(self):
        content = export_rows([["Smith, Jane", "3"]], ["Agent", "Total"])
        assert content.splitlines()[1] == "Smith, Jane,3"


# ── Daily Report Export ───────────────────────────────────────────────────────

class TestDailyReportExport:
    def test_daily_report(self):
        summaries = [
            AgentDailySummary(
                date=date(2024, 1, 10),
                agent_id=1,
                agent_name="Alice",
                total_interactions=4,
                average_length_seconds=95,
            ),
        ]
        assert daily_report_rows(summaries) == [("2024-01-10", "Alice", "4", "95")]
        assert export_daily_report(summaries) == (
            "Date,Agent,Total Interactions,Average Length (seconds)\n"
            "2024-01-10,Alice,4,95"
        )

    def test_empty_report(self):
        assert export_daily_report([]) == ",".join(DAILY_REPORT_HEADER)


# ── Formatting ────────────────────────────────────────────────────────────────

class TestFormatDuration:
    def test_minutes_and_seconds(self):
        assert format_duration(125) == "2m 5s"

    def test_under_a_minute(self):
        assert format_duration(45) == "0m 45s"

    def test_zero(self):
        assert format_duration(0) == "0m 0s"
