"""
Event Service
Event catalogue queries
"""

from datetime import date, datetime, time
from typing import Optional, Union
from app.database import database
from fastapi import HTTPException, status


def parse_date(value: Union[date, str, None]) -> Optional[date]:
    """Accept a date column value as returned by either driver (date object or ISO text)"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value)).date()


def parse_time(value: Union[time, str, None]) -> Optional[time]:
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value
    return time.fromisoformat(str(value))


class EventService:
    """Service for event catalogue operations"""

    @staticmethod
    def serialize_event(event) -> dict:
        """Event row with date as DD-MM-YYYY and time as HH:MM:SS"""
        event_date = parse_date(event["date"])
        event_time = parse_time(event["time"])
        return {
            "id": event["id"],
            "name": event["name"],
            "date": event_date.strftime("%d-%m-%Y") if event_date else None,
            "time": event_time.strftime("%H:%M:%S") if event_time else None,
            "venue": event["venue"],
        }

    @staticmethod
    async def list_events() -> list:
        events = await database.fetch_all(
            "SELECT id, name, date, time, venue FROM events ORDER BY id"
        )
        return [EventService.serialize_event(event) for event in events]

    @staticmethod
    async def get_event(event_id: int) -> dict:
        """Get event by ID"""

        event = await database.fetch_one(
            "SELECT id, name, date, time, venue FROM events WHERE id = :event_id",
            {"event_id": event_id}
        )

        if not event:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found!"
            )

        return dict(event)

    @staticmethod
    async def get_slots_taken(event_id: int) -> int:
        """Number of teams formed for an event"""
        total = await database.fetch_val(
            "SELECT COUNT(*) FROM teams WHERE event_id = :event_id",
            {"event_id": event_id}
        )
        return total or 0

    @staticmethod
    async def get_user_events(user_id: int) -> list:
        """Events the user holds a registration for"""
        rows = await database.fetch_all(
            """
            SELECT e.id, e.name, e.date, e.time, e.venue
            FROM events e
            INNER JOIN registrations r ON e.id = r.event_id
            WHERE r.user_id = :user_id
            ORDER BY e.id
            """,
            {"user_id": user_id}
        )
        return [EventService.serialize_event(row) for row in rows]


# Create singleton instance
event_service = EventService()
