"""
Event Models
Events, per-participant registrations and the teams formed for them
"""

from sqlalchemy import Column, String, Integer, Date, Time, Text, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from app.database import Base


class Event(Base):
    __tablename__ = "events"
    
    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    date = Column(Date, nullable=True)
    time = Column(Time, nullable=True)
    venue = Column(String(200), nullable=True)


class Registration(Base):
    __tablename__ = "registrations"
    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_registrations_user_event"),
    )
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    
    # Relationships
    user = relationship("User", backref="registrations")
    event = relationship("Event", backref="registrations")


class Team(Base):
    __tablename__ = "teams"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    members = Column(Text, nullable=False)  # comma separated user ids
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    
    event = relationship("Event", backref="teams")
