"""
Shared helpers for the analytics widgets: name resolution, per-agent
grouping, dashboard-style rounding and the YAML tuning constants.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable, Optional

import structlog
import yaml

from api.schemas import Agent, Interaction
from config.settings import get_settings

logger = structlog.get_logger()

UNKNOWN_AGENT = "Unknown"
UNKNOWN_AGENT_REPORT = "Unknown Agent"


def load_thresholds(section: str, path: Optional[Path] = None) -> dict:
    """Read one section of the analytics thresholds file, or {} when absent."""
    config_path = path or get_settings().thresholds_path
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return (yaml.safe_load(f) or {}).get(section) or {}
    except FileNotFoundError:
        logger.warning("analytics_thresholds_not_found", path=str(config_path))
        return {}


def round_half_up(value: float) -> int:
    """Round .5 toward +inf (1.5 -> 2, 2.5 -> 3, -1.5 -> -1)."""
    return math.floor(value + 0.5)


def build_agent_lookup(agents: Iterable[Agent]) -> dict[int, Optional[str]]:
    """Map agent id to name. Entries without an id are skipped; later duplicates win."""
    return {agent.id: agent.name for agent in agents if agent.id is not None}


def resolve_agent_name(
    lookup: dict[int, Optional[str]],
    agent_id: int,
    placeholder: str = UNKNOWN_AGENT,
) -> str:
    name = lookup.get(agent_id)
    return name if name is not None else placeholder


def group_by_agent(interactions: Iterable[Interaction]) -> dict[int, list[Interaction]]:
    """
    Partition interactions by agent_id in first-appearance order.

    Interactions with no agent_id are dropped; they cannot be attributed.
    """
    groups: dict[int, list[Interaction]] = {}
    for interaction in interactions:
        if interaction.agent_id is None:
            continue
        groups.setdefault(interaction.agent_id, []).append(interaction)
    return groups


def total_length(interactions: Iterable[Interaction]) -> int:
    """Sum of length_seconds, counting a missing length as zero."""
    return sum(i.length_seconds or 0 for i in interactions)
