from typing import List
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from reunion.core.metrics import record_db_operation
from reunion.models.event import Event
from reunion.schemas.event import EventCreate

async def list_events(db: AsyncSession) -> List[Event]:
    """All events, soonest first"""
    record_db_operation("select", "events")
    result = await db.execute(select(Event).order_by(Event.event_start_date.asc()))
    return list(result.scalars().all())

async def create_event(db: AsyncSession, event_in: EventCreate) -> Event:
    """Create a new event"""
    db_event = Event(**event_in.model_dump())
    db.add(db_event)
    record_db_operation("insert", "events")
    await db.commit()
    await db.refresh(db_event)
    return db_event

async def delete_event(db: AsyncSession, event_id: str) -> int:
    """Hard delete an event; a missing id deletes nothing"""
    record_db_operation("delete", "events")
    result = await db.execute(delete(Event).where(Event.id == event_id))
    await db.commit()
    return result.rowcount
