"""
Attendance Service
Admin attendance marking and attendance reports
"""

import logging
from app.database import database, INTEGRITY_ERRORS
from app.services.event_service import event_service
from fastapi import HTTPException, status

logger = logging.getLogger(__name__)

# Events in this range only admit participants who registered beforehand
PRE_REGISTERED_EVENT_IDS = range(1, 10)

PRESENT = "present"


class AttendanceService:
    """Service for attendance operations"""

    @staticmethod
    async def mark_attendance(qr_code_id: str, event_id: int, admin_id: int) -> dict:
        """
        Mark a participant present at an event

        Process:
        1. Resolve the scanned code to a user
        2. Resolve the event
        3. Events 1-9 require an existing registration; other events
           register the participant on the spot
        4. Reject a second attendance record for the same event and user
        """

        user = await database.fetch_one(
            "SELECT id FROM users WHERE qr_code_id = :qr_code_id",
            {"qr_code_id": qr_code_id}
        )
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="QR Code ID not found!"
            )

        await event_service.get_event(event_id)
        user_id = user["id"]

        try:
            async with database.transaction():
                registration = await database.fetch_one(
                    "SELECT id FROM registrations WHERE user_id = :user_id AND event_id = :event_id",
                    {"user_id": user_id, "event_id": event_id}
                )

                if not registration:
                    if event_id in PRE_REGISTERED_EVENT_IDS:
                        raise HTTPException(
                            status_code=status.HTTP_403_FORBIDDEN,
                            detail="User didn't register for this event."
                        )
                    await database.execute(
                        "INSERT INTO registrations (user_id, event_id) VALUES (:user_id, :event_id)",
                        {"user_id": user_id, "event_id": event_id}
                    )
                    logger.info("Registered user %s for event %s at the door", user_id, event_id)

                attendance = await database.fetch_one(
                    "SELECT id FROM attendance WHERE event_id = :event_id AND user_id = :user_id",
                    {"event_id": event_id, "user_id": user_id}
                )
                if attendance:
                    raise HTTPException(
                        status_code=status.HTTP_409_CONFLICT,
                        detail="Attendance already marked!"
                    )

                await database.execute(
                    """
                    INSERT INTO attendance (event_id, user_id, admin_id, attendance_status)
                    VALUES (:event_id, :user_id, :admin_id, :status)
                    """,
                    {"event_id": event_id, "user_id": user_id, "admin_id": admin_id, "status": PRESENT}
                )
        except HTTPException:
            raise
        except INTEGRITY_ERRORS:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Attendance already marked!"
            )

        logger.info("Admin %s marked user %s present at event %s", admin_id, user_id, event_id)
        return {
            "success": True,
            "message": "Attendance marked successfully!",
            "user_id": user_id,
            "event_id": event_id
        }

    @staticmethod
    async def get_overall_attendance() -> list:
        rows = await database.fetch_all(
            """
            SELECT
                attendance.id,
                users.name AS user_name,
                users.college,
                events.name AS event_name,
                attendance.attendance_status,
                attendance.marked_at
            FROM attendance
            JOIN users ON attendance.user_id = users.id
            JOIN events ON attendance.event_id = events.id
            ORDER BY attendance.marked_at DESC, attendance.id DESC
            """
        )
        return [dict(row) for row in rows]

    @staticmethod
    async def get_admin_attendance(admin_id: int) -> list:
        """Attendance records marked by one admin"""
        rows = await database.fetch_all(
            """
            SELECT events.name AS event_name, users.name AS participant_name,
                   attendance.attendance_status, attendance.marked_at
            FROM attendance
            JOIN events ON attendance.event_id = events.id
            JOIN users ON attendance.user_id = users.id
            WHERE attendance.admin_id = :admin_id
            ORDER BY attendance.marked_at DESC
            """,
            {"admin_id": admin_id}
        )
        return [dict(row) for row in rows]


# Create singleton instance
attendance_service = AttendanceService()
