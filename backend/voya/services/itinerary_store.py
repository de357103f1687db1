"""Itinerary persistence over an SQLAlchemy async session factory."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from voya.models.itinerary import Itinerary


class ItineraryStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def insert(self, record: Itinerary) -> Itinerary:
        async with self._session_factory() as db:
            db.add(record)
            await db.commit()
            await db.refresh(record)
        return record

    async def get(self, itinerary_id: uuid.UUID) -> Itinerary | None:
        async with self._session_factory() as db:
            result = await db.execute(select(Itinerary).where(Itinerary.id == itinerary_id))
            return result.scalar_one_or_none()

    async def list_recent(self, limit: int = 20) -> list[Itinerary]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(Itinerary).order_by(Itinerary.created_at.desc()).limit(limit)
            )
            return list(result.scalars().all())
