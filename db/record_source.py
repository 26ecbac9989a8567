"""
Record Source — reads the agent directory and interaction log from the DB.

Returns plain schema objects; no aggregation happens here. Each fetch is
capped at `max_records` rows so every derivation runs over a bounded batch.
"""

from __future__ import annotations

from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api.schemas import Agent, Interaction, RecordSnapshot
from config.settings import get_settings
from db.models import AgentRecord, InteractionRecord, async_session


logger = structlog.get_logger()


class RecordSource:
    """Fetches read-only record batches for the analytics layer."""

    def __init__(
        self,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
        max_records: Optional[int] = None,
    ) -> None:
        self.session_factory = session_factory or async_session
        self.max_records = max_records or get_settings().max_records

    async def fetch_agents(self) -> list[Agent]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(AgentRecord).order_by(AgentRecord.id).limit(self.max_records)
            )
            return [
                Agent(id=row.id, name=row.name)
                for row in result.scalars()
            ]

    async def fetch_interactions(self) -> list[Interaction]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(InteractionRecord).order_by(InteractionRecord.id).limit(self.max_records)
            )
            return [
                Interaction(
                    id=row.id,
                    agent_id=row.agent_id,
                    customer_id=row.customer_id,
                    length_seconds=row.length_seconds,
                    created_at=row.created_at,
                )
                for row in result.scalars()
            ]

    async def fetch_snapshot(self) -> RecordSnapshot:
        """Both collections, fetched back to back."""
        agents = await self.fetch_agents()
        interactions = await self.fetch_interactions()
        logger.info(
            "snapshot_fetched",
            agents=len(agents),
            interactions=len(interactions),
            max_records=self.max_records,
        )
        return RecordSnapshot(interactions=interactions, agents=agents)
