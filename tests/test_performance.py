"""
Tests for the Performance Analyzer.
"""

from analytics.common import load_thresholds
from analytics.performance_analyzer import (
    analyze_performance,
    compute_agent_metrics,
    efficiency_score,
    find_needs_support,
    find_top_performer,
    illustrative_trend_estimate,
    mentoring_recommendation,
    support_score,
)
from api.schemas import Agent, AgentPerformanceMetrics, Interaction, PerformanceSummary

AGENTS = [Agent(id=1, name="Alice"), Agent(id=2, name="Bob")]
INTERACTIONS = [
    Interaction(agent_id=1, length_seconds=60),
    Interaction(agent_id=1, length_seconds=120),
    Interaction(agent_id=2, length_seconds=30),
]


def _metrics(agent_id, name, count, avg):
    return AgentPerformanceMetrics(
        agent_id=agent_id,
        name=name,
        interaction_count=count,
        total_time_seconds=count * avg,
        average_length_seconds=avg,
    )


# ── Agent Metrics ─────────────────────────────────────────────────────────────

class TestAgentMetrics:
    def test_lifetime_metrics(self):
        metrics = compute_agent_metrics(INTERACTIONS, AGENTS)
        assert [m.agent_id for m in metrics] == [1, 2]
        alice = metrics[0]
        assert alice.name == "Alice"
        assert alice.interaction_count == 2
        assert alice.total_time_seconds == 180
        assert alice.average_length_seconds == 90

    def test_unknown_agent_still_counted(self):
        metrics = compute_agent_metrics([Interaction(agent_id=99, length_seconds=40)], AGENTS)
        assert len(metrics) == 1
        assert metrics[0].name == "Unknown"
        assert metrics[0].interaction_count == 1
        assert metrics[0].total_time_seconds == 40

    def test_missing_fields(self):
        metrics = compute_agent_metrics(
            [Interaction(agent_id=1), Interaction(length_seconds=500)],
            AGENTS,
        )
        assert len(metrics) == 1
        assert metrics[0].total_time_seconds == 0
        assert metrics[0].average_length_seconds == 0


# ── Scores & Ranking ──────────────────────────────────────────────────────────

class TestScores:
    def test_efficiency_score(self):
        assert efficiency_score(_metrics(1, "A", 2, 100)) == 200.0

    def test_support_score(self):
        assert support_score(_metrics(1, "A", 2, 100)) == 202.0

    def test_zero_length_treated_as_one(self):
        assert efficiency_score(_metrics(1, "A", 3, 0)) == 30000.0
        assert support_score(_metrics(1, "A", 3, 0)) == 20003.0

    def test_top_performer_tie_keeps_first(self):
        first = _metrics(1, "A", 2, 100)
        second = _metrics(2, "B", 2, 100)
        assert find_top_performer([first, second]) is first

    def test_needs_support_tie_keeps_first(self):
        first = _metrics(1, "A", 2, 100)
        second = _metrics(2, "B", 2, 100)
        assert find_needs_support([first, second]) is first

    def test_long_calls_flagged_for_support(self):
        quick = _metrics(1, "Quick", 10, 60)
        slow = _metrics(2, "Slow", 10, 900)
        assert find_top_performer([quick, slow]) is quick
        assert find_needs_support([quick, slow]) is slow

    def test_no_candidates(self):
        assert find_top_performer([]) is None
        assert find_needs_support([]) is None


class TestTrendEstimate:
    def test_fixed_fractions(self):
        trends = illustrative_trend_estimate(11)
        assert trends.improving == 3
        assert trends.declining == 1

    def test_small_team(self):
        trends = illustrative_trend_estimate(2)
        assert trends.improving == 0
        assert trends.declining == 0


# ── analyze_performance ───────────────────────────────────────────────────────

class TestAnalyzePerformance:
    def test_team_averages(self):
        summary = analyze_performance(INTERACTIONS, AGENTS)
        assert summary.team_average.interactions == 2
        assert summary.team_average.avg_length == 70
        assert summary.active_agent_count == 2

    def test_ranking(self):
        summary = analyze_performance(INTERACTIONS, AGENTS)
        # Bob: 1 * 10000/30 beats Alice: 2 * 10000/90
        assert summary.top_performer.name == "Bob"
        # Alice: 2 + 20000/90 is below Bob: 1 + 20000/30
        assert summary.needs_support.name == "Alice"
        assert summary.recommendation == "Consider pairing Alice with Bob for mentoring"

    def test_no_interactions(self):
        summary = analyze_performance([], AGENTS)
        assert summary.top_performer is None
        assert summary.needs_support is None
        assert summary.team_average.interactions == 0
        assert summary.team_average.avg_length == 0
        assert summary.active_agent_count == 0
        assert summary.recommendation == "Team performance is strong across all agents"

    def test_no_agents(self):
        summary = analyze_performance(INTERACTIONS, [])
        assert summary.top_performer is None
        assert summary.team_average.interactions == 0
        assert summary.trends.improving == 0

    def test_unattributed_interactions_count_toward_team_average(self):
        interactions = INTERACTIONS + [Interaction(length_seconds=90)]
        summary = analyze_performance(interactions, AGENTS)
        assert summary.team_average.interactions == 2  # 4 / 2
        assert summary.team_average.avg_length == 75  # 300 / 4
        assert summary.active_agent_count == 2

    def test_unknown_agent_can_rank(self):
        summary = analyze_performance([Interaction(agent_id=99, length_seconds=10)], AGENTS)
        assert summary.top_performer.name == "Unknown"
        assert summary.top_performer.agent_id == 99


class TestRecommendation:
    def test_strong_team_message(self):
        assert mentoring_recommendation(PerformanceSummary()) == (
            "Team performance is strong across all agents"
        )


# ── Thresholds file ───────────────────────────────────────────────────────────

class TestLoadThresholds:
    def test_reads_section(self, tmp_path):
        path = tmp_path / "thresholds.yaml"
        path.write_text("performance:\n  support_numerator: 5000\n", encoding="utf-8")
        assert load_thresholds("performance", path) == {"support_numerator": 5000}

    def test_empty_section_is_empty_dict(self, tmp_path):
        path = tmp_path / "thresholds.yaml"
        path.write_text("performance:\nworkload:\n  high_multiplier: 2.0\n", encoding="utf-8")
        assert load_thresholds("performance", path) == {}

    def test_missing_file_is_empty_dict(self, tmp_path):
        assert load_thresholds("workload", tmp_path / "absent.yaml") == {}
