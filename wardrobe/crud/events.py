import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe.database.models import Event
from wardrobe.schemas.wardrobe import EventCreate

logger = logging.getLogger(__name__)


def _as_naive_utc(value: datetime) -> datetime:
    """Events are stored as naive UTC timestamps."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


async def get_user_events(db: AsyncSession, user_id: int) -> List[Event]:
    """Get all events for a user ordered by date"""
    stmt = select(Event).where(Event.user_id == user_id).order_by(Event.date, Event.id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_event_by_id(db: AsyncSession, event_id: str, user_id: int) -> Optional[Event]:
    stmt = select(Event).where((Event.id == event_id) & (Event.user_id == user_id))
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_upcoming_events(
        db: AsyncSession,
        user_id: int,
        limit: int = 5,
        now: Optional[datetime] = None
) -> List[Event]:
    """Next events starting from ``now``, soonest first"""
    now = _as_naive_utc(now) if now else datetime.utcnow()
    stmt = (
        select(Event)
        .where((Event.user_id == user_id) & (Event.date >= now))
        .order_by(Event.date, Event.id)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_events_on(db: AsyncSession, user_id: int, day: date) -> List[Event]:
    """Events falling on one calendar day"""
    start = datetime.combine(day, time.min)
    end = start + timedelta(days=1)
    stmt = (
        select(Event)
        .where((Event.user_id == user_id) & (Event.date >= start) & (Event.date < end))
        .order_by(Event.date, Event.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def create_event(db: AsyncSession, event_data: EventCreate, user_id: int) -> Event:
    title = event_data.title.strip()
    if not title:
        raise ValueError("Please provide event title and date")

    event = Event(
        user_id=user_id,
        title=title,
        date=_as_naive_utc(event_data.date),
        type=event_data.type,
        description=event_data.description,
    )
    db.add(event)
    await db.commit()
    await db.refresh(event)
    logger.info("User %s added %s event %s", user_id, event.type, event.id)
    return event


async def delete_event(db: AsyncSession, event_id: str, user_id: int) -> bool:
    event = await get_event_by_id(db, event_id, user_id)
    if not event:
        return False

    await db.delete(event)
    await db.commit()
    logger.info("User %s deleted event %s", user_id, event_id)
    return True
