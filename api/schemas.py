"""
Pydantic v2 models for the Agent Insights API.
All data flowing through the system is validated by these schemas.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ── Enums ──────────────────────────────────────────────────────────────────────

class SortField(str, Enum):
    DATE = "date"
    AGENT_NAME = "agentName"
    TOTAL_INTERACTIONS = "totalInteractions"
    AVERAGE_LENGTH = "averageLengthSeconds"

    @property
    def attribute(self) -> str:
        """Name of the AgentDailySummary attribute this field sorts on."""
        return _SORT_ATTRIBUTES[self]


_SORT_ATTRIBUTES = {
    SortField.DATE: "date",
    SortField.AGENT_NAME: "agent_name",
    SortField.TOTAL_INTERACTIONS: "total_interactions",
    SortField.AVERAGE_LENGTH: "average_length_seconds",
}


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class WorkloadTier(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ── Input Records ─────────────────────────────────────────────────────────────

class Interaction(BaseModel):
    """A logged agent/customer contact. Every field may be missing."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[int] = None
    agent_id: Optional[int] = None
    customer_id: Optional[int] = None
    length_seconds: Optional[int] = None
    created_at: Optional[dt.datetime] = None


class Agent(BaseModel):
    """Agent directory entry, used only to resolve names."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[int] = None
    name: Optional[str] = None


class RecordSnapshot(BaseModel):
    """One already-fetched batch of records; every derivation reads from one of these."""
    interactions: list[Interaction] = Field(default_factory=list)
    agents: list[Agent] = Field(default_factory=list)


# ── Daily Report ──────────────────────────────────────────────────────────────

class AgentDailySummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: dt.date
    agent_id: int
    agent_name: str
    total_interactions: int = Field(ge=1)
    average_length_seconds: int


class ReportFilters(BaseModel):
    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    selected_agent: str = "all"
    min_date: Optional[dt.date] = None

    @field_validator("min_date", mode="before")
    @classmethod
    def _blank_min_date(cls, value):
        # an empty date input means no lower bound
        return None if value == "" else value


class ReportSort(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: SortField = SortField.DATE
    direction: SortDirection = SortDirection.DESC


class ReportPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)


class ReportState(BaseModel):
    """
    Complete filter/sort/page selection for the daily report.

    Immutable: every transition returns a new state, so any combination
    can be replayed by passing the same state back in.
    """
    model_config = ConfigDict(frozen=True)

    filters: ReportFilters = Field(default_factory=ReportFilters)
    sort: ReportSort = Field(default_factory=ReportSort)
    page: ReportPage = Field(default_factory=ReportPage)

    @classmethod
    def reset(cls, page_size: int = 10) -> ReportState:
        return cls(page=ReportPage(page_size=page_size))

    def _with_filters(self, **changes) -> ReportState:
        return self.model_copy(update={
            "filters": ReportFilters.model_validate({**self.filters.model_dump(), **changes}),
            "page": self.page.model_copy(update={"page": 1}),
        })

    def with_search_term(self, search_term: str) -> ReportState:
        return self._with_filters(search_term=search_term)

    def with_selected_agent(self, selected_agent: str) -> ReportState:
        return self._with_filters(selected_agent=selected_agent)

    def with_min_date(self, min_date: Optional[dt.date | str]) -> ReportState:
        return self._with_filters(min_date=min_date)

    def with_page(self, page: int) -> ReportState:
        return self.model_copy(update={
            "page": ReportPage(page=page, page_size=self.page.page_size),
        })

    def with_sort(self, field: SortField, direction: SortDirection) -> ReportState:
        return self.model_copy(update={"sort": ReportSort(field=field, direction=direction)})

    def toggle_sort(self, field: SortField) -> ReportState:
        """Flip direction when re-selecting the current column, else sort ascending."""
        if field == self.sort.field:
            direction = (
                SortDirection.DESC
                if self.sort.direction == SortDirection.ASC
                else SortDirection.ASC
            )
        else:
            direction = SortDirection.ASC
        return self.with_sort(field, direction)


class ReportStats(BaseModel):
    total_agents: int = 0
    total_interactions: int = 0
    avg_interactions_per_agent: int = 0
    avg_length_seconds: int = 0


class ReportResult(BaseModel):
    rows: list[AgentDailySummary] = Field(default_factory=list)
    stats: ReportStats = Field(default_factory=ReportStats)
    total_rows: int = 0
    page_count: int = 0
    agent_options: list[str] = Field(default_factory=list)


# ── Performance ───────────────────────────────────────────────────────────────

class AgentPerformanceMetrics(BaseModel):
    agent_id: int
    name: str
    interaction_count: int
    total_time_seconds: int
    average_length_seconds: int


class TeamAverage(BaseModel):
    interactions: int = 0
    avg_length: int = 0


class TrendEstimate(BaseModel):
    """Placeholder counts scaled from the active agent total, not measured trends."""
    improving: int = 0
    declining: int = 0


class PerformanceSummary(BaseModel):
    top_performer: Optional[AgentPerformanceMetrics] = None
    needs_support: Optional[AgentPerformanceMetrics] = None
    team_average: TeamAverage = Field(default_factory=TeamAverage)
    trends: TrendEstimate = Field(default_factory=TrendEstimate)
    active_agent_count: int = 0
    recommendation: str = ""


# ── Workload ──────────────────────────────────────────────────────────────────

class WorkloadEntry(BaseModel):
    agent_id: int
    agent_name: str
    interaction_count: int
    percentage_of_total: float
    tier: WorkloadTier


class TierCounts(BaseModel):
    overloaded: int = 0
    balanced: int = 0
    underutilized: int = 0


class WorkloadDistribution(BaseModel):
    entries: list[WorkloadEntry] = Field(default_factory=list)
    tier_counts: TierCounts = Field(default_factory=TierCounts)


# ── Dashboard Unified Response ────────────────────────────────────────────────

class DashboardResponse(BaseModel):
    """Every widget computed over one snapshot. A failed widget is None."""
    generated_at: str  # ISO-8601
    report: Optional[ReportResult] = None
    performance: Optional[PerformanceSummary] = None
    workload: Optional[WorkloadDistribution] = None
    widget_status: dict[str, str] = Field(default_factory=dict)
