"""
Database Models
Import all models here for Alembic migrations
"""

from app.models.user import User
from app.models.event import Event, Registration, Team
from app.models.attendance import Attendance

__all__ = [
    "User",
    "Event",
    "Registration",
    "Team",
    "Attendance",
]
