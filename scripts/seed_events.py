"""
Seed the event catalogue
Creates the tables if needed and inserts any missing events
"""

import sys
import asyncio
from datetime import date, time
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app.database import Base, database, engine, connect_db, disconnect_db
from app.models import Event

# Event 1 is a pair event, 6-9 are team events, the rest are individual
EVENTS = [
    {"id": 1, "name": "Paper Presentation", "date": date(2026, 3, 14), "time": time(10, 0), "venue": "Seminar Hall A"},
    {"id": 2, "name": "Coding Contest", "date": date(2026, 3, 14), "time": time(10, 0), "venue": "Lab 1"},
    {"id": 3, "name": "Technical Quiz", "date": date(2026, 3, 14), "time": time(13, 30), "venue": "Seminar Hall B"},
    {"id": 4, "name": "Debugging", "date": date(2026, 3, 14), "time": time(14, 0), "venue": "Lab 2"},
    {"id": 5, "name": "Photography", "date": date(2026, 3, 15), "time": time(9, 30), "venue": "Campus Grounds"},
    {"id": 6, "name": "Hackathon", "date": date(2026, 3, 15), "time": time(9, 0), "venue": "Main Auditorium"},
    {"id": 7, "name": "Project Expo", "date": date(2026, 3, 15), "time": time(10, 0), "venue": "Exhibition Hall"},
    {"id": 8, "name": "Robo Race", "date": date(2026, 3, 15), "time": time(11, 0), "venue": "Open Arena"},
    {"id": 9, "name": "Treasure Hunt", "date": date(2026, 3, 15), "time": time(14, 0), "venue": "Campus Grounds"},
]


async def seed_events():
    Base.metadata.create_all(bind=engine)
    await connect_db()

    try:
        created = 0
        for event in EVENTS:
            existing = await database.fetch_one(
                "SELECT id FROM events WHERE id = :event_id",
                {"event_id": event["id"]}
            )
            if existing:
                continue

            # Core insert so each driver gets date/time in its own bind format
            await database.execute(Event.__table__.insert().values(**event))
            created += 1

        print(f"✅ Seeded {created} event(s); {len(EVENTS) - created} already present")

    finally:
        await disconnect_db()


if __name__ == "__main__":
    asyncio.run(seed_events())
