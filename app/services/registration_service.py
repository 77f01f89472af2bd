"""
Registration Service
Team registration rules for events
"""

import logging
import re
from dataclasses import dataclass
from functools import partial
from typing import List

from app.database import database, INTEGRITY_ERRORS
from app.services.email_service import email_service
from app.services.event_service import event_service
from app.services.notification_queue import notification_queue
from fastapi import HTTPException, status

logger = logging.getLogger(__name__)

SINGLE_PASS = "single"
EMPTY_SLOT = 0

NON_DIGITS = re.compile(r"[^0-9]")
# Upper bound of the users.id column
MAX_USER_ID = 2**31 - 1


@dataclass(frozen=True)
class TeamPolicy:
    max_teammates: int
    allow_solo: bool


PAIR_EVENT_POLICY = TeamPolicy(max_teammates=1, allow_solo=True)
TEAM_EVENT_POLICY = TeamPolicy(max_teammates=3, allow_solo=False)
INDIVIDUAL_EVENT_POLICY = TeamPolicy(max_teammates=0, allow_solo=True)

PAIR_EVENT_IDS = {1}
TEAM_EVENT_IDS = {6, 7, 8, 9}


def team_policy_for(event_id: int) -> TeamPolicy:
    """How many teammates an event takes and whether it may be entered alone"""
    if event_id in PAIR_EVENT_IDS:
        return PAIR_EVENT_POLICY
    if event_id in TEAM_EVENT_IDS:
        return TEAM_EVENT_POLICY
    return INDIVIDUAL_EVENT_POLICY


def parse_teammate_ids(teammates: List[str]) -> List[int]:
    """
    Convert submitted teammate identifiers to user ids

    Non-digit characters are stripped, so display codes such as "PSM_12"
    resolve to 12. Empty slots ("0") are dropped.

    Raises:
        HTTPException: If an identifier contains no digits or is out of range
    """
    parsed = []
    for raw in teammates:
        digits = NON_DIGITS.sub("", str(raw))
        if not digits or int(digits) > MAX_USER_ID:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid teammate ID: {raw!r}"
            )
        teammate_id = int(digits)
        if teammate_id != EMPTY_SLOT:
            parsed.append(teammate_id)
    return parsed


class RegistrationService:
    """Service for event registration operations"""

    @staticmethod
    async def is_already_registered(user_id: int, event_id: int) -> bool:
        existing = await database.fetch_one(
            "SELECT id FROM registrations WHERE user_id = :user_id AND event_id = :event_id",
            {"user_id": user_id, "event_id": event_id}
        )
        return existing is not None

    @staticmethod
    async def has_single_pass_restriction(user_id: int) -> bool:
        """A single-pass holder who already has any registration may not register again"""
        pass_type = await database.fetch_val(
            "SELECT pass_type FROM users WHERE id = :user_id",
            {"user_id": user_id}
        )
        if pass_type != SINGLE_PASS:
            return False

        count = await database.fetch_val(
            "SELECT COUNT(*) FROM registrations WHERE user_id = :user_id",
            {"user_id": user_id}
        )
        return (count or 0) > 0

    @staticmethod
    async def register_team(user_id: int, event_id: int, teammates: List[str]) -> dict:
        """
        Register the acting user and their teammates for an event

        Every check runs before the first insert, inside one transaction.
        Confirmation emails are queued after commit and cannot fail the
        registration.

        Returns: Serialized team member list
        """

        event = await event_service.get_event(event_id)
        policy = team_policy_for(event_id)

        try:
            async with database.transaction():
                members = await RegistrationService._validate_team(user_id, event_id, policy, teammates)

                for member_id in members:
                    await database.execute(
                        "INSERT INTO registrations (user_id, event_id) VALUES (:user_id, :event_id)",
                        {"user_id": member_id, "event_id": event_id}
                    )

                team = ",".join(str(member_id) for member_id in members)
                await database.execute(
                    "INSERT INTO teams (event_id, members) VALUES (:event_id, :members)",
                    {"event_id": event_id, "members": team}
                )
        except HTTPException:
            raise
        except INTEGRITY_ERRORS:
            # Lost a race with a concurrent registration for the same member
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User already registered!"
            )
        except Exception:
            logger.exception("Registration failed for user %s, event %s", user_id, event_id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to register"
            )

        logger.info("Registered team %s for event %s", team, event_id)
        await RegistrationService._queue_confirmations(members, event)

        return {
            "success": True,
            "message": "Registration successful!",
            "event_id": event_id,
            "team": team
        }

    @staticmethod
    async def _validate_team(user_id: int, event_id: int, policy: TeamPolicy, teammates: List[str]) -> List[int]:
        if await RegistrationService.is_already_registered(user_id, event_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User already registered!"
            )

        user = await database.fetch_one(
            "SELECT id FROM users WHERE id = :user_id",
            {"user_id": user_id}
        )
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found!"
            )

        if await RegistrationService.has_single_pass_restriction(user_id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Single Event Pass Holders Can Only Register For One Event."
            )

        teammate_ids = parse_teammate_ids(teammates)
        members = [user_id] + teammate_ids

        if len(members) != len(set(members)):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Duplicate teammate IDs found."
            )

        if len(teammate_ids) > policy.max_teammates:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Max {policy.max_teammates} teammate(s) allowed."
            )

        if not policy.allow_solo and not teammate_ids:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="All teammates are required for this event."
            )

        for teammate_id in teammate_ids:
            teammate = await database.fetch_one(
                "SELECT id FROM users WHERE id = :user_id",
                {"user_id": teammate_id}
            )
            if not teammate:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"Teammate with ID {teammate_id} does not exist."
                )

            if await RegistrationService.is_already_registered(teammate_id, event_id):
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"Teammate with ID {teammate_id} already registered."
                )

            if await RegistrationService.has_single_pass_restriction(teammate_id):
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"Teammate with ID {teammate_id} has a single event pass and is already registered."
                )

        return members

    @staticmethod
    async def _queue_confirmations(members: List[int], event: dict) -> None:
        try:
            rows = await database.fetch_all(
                "SELECT id, name, email, qr_code_id FROM users WHERE id IN ({})".format(
                    ", ".join(f":id_{i}" for i in range(len(members)))
                ),
                {f"id_{i}": member_id for i, member_id in enumerate(members)}
            )
        except Exception:
            logger.exception("Could not load contact details for event %s confirmations", event["id"])
            return

        for member in rows:
            notification_queue.enqueue(
                partial(
                    email_service.send_registration_confirmation,
                    name=member["name"],
                    email=member["email"],
                    qr_code_id=member["qr_code_id"],
                    event=event
                ),
                description=f"registration confirmation to {member['email']}"
            )


# Create singleton instance
registration_service = RegistrationService()
