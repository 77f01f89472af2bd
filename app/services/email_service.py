"""
Email Service
Configuration-driven delivery of transactional emails
"""

import json
import logging
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from pathlib import Path
from typing import Optional, Tuple

import aiosmtplib

from app.config import settings
from app.services.event_service import parse_date

logger = logging.getLogger(__name__)

PROVIDERS = {"smtp", "console"}


class EmailService:
    """
    Service for sending emails

    The provider, sender address and credential source come from settings
    (MAIL_PROVIDER, EMAIL_FROM, MAIL_CREDENTIALS_SOURCE). Methods raise on
    delivery failure; callers decide whether that matters.
    """

    def __init__(
        self,
        provider: str = settings.MAIL_PROVIDER,
        from_address: str = settings.EMAIL_FROM,
        credentials_source: str = settings.MAIL_CREDENTIALS_SOURCE
    ):
        if provider not in PROVIDERS:
            raise ValueError(f"Unknown mail provider: {provider}")
        self.provider = provider
        self.from_address = from_address
        self.credentials_source = credentials_source

    def _load_credentials(self) -> Tuple[Optional[str], Optional[str]]:
        """Resolve SMTP username and password from the configured source"""
        if self.credentials_source == "env":
            return settings.SMTP_USER, settings.SMTP_PASSWORD

        if self.credentials_source.startswith("file:"):
            path = Path(self.credentials_source[len("file:"):])
            data = json.loads(path.read_text(encoding="utf-8"))
            return data.get("user"), data.get("password")

        raise ValueError(f"Unknown mail credentials source: {self.credentials_source}")

    async def send_email(self, to_email: str, subject: str, html_body: str, text_body: str) -> None:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = self.from_address
        message["To"] = to_email
        message.attach(MIMEText(text_body, "plain"))
        message.attach(MIMEText(html_body, "html"))

        if self.provider == "console":
            # Development mode - no SMTP configured
            logger.info("EMAIL (console) to=%s subject=%s\n%s", to_email, subject, text_body)
            return

        user, password = self._load_credentials()
        async with aiosmtplib.SMTP(hostname=settings.SMTP_HOST, port=settings.SMTP_PORT) as smtp:
            if user and password:
                await smtp.login(user, password)
            await smtp.sendmail(self.from_address, to_email, message.as_string())
        logger.info("Mail sent to %s: %s", to_email, subject)

    async def send_registration_confirmation(
        self,
        name: str,
        email: str,
        qr_code_id: str,
        event: dict
    ) -> None:
        """
        Confirm an event registration to one team member
        
        Args:
            name: Member name
            email: Member email
            qr_code_id: Member display code, shown at the venue
            event: Event row with name, date and venue
        """
        event_date = parse_date(event.get("date"))
        formatted_date = event_date.strftime("%d %B %Y") if event_date else "TBA"
        venue = event.get("venue") or "TBA"

        subject = f"You're Registered! - {event['name']}"

        html_body = f"""
        <html>
          <body style="font-family: Arial, sans-serif; color: #333;">
            <p>Dear {name},</p>
            <p>Your registration for <strong>{event['name']}</strong> on <strong>{formatted_date}</strong>
               at <strong>{venue}</strong> is confirmed.</p>
            <p><strong>User ID:</strong> {qr_code_id}</p>
            <p><strong>Event:</strong> {event['name']}</p>
            <p>Stay updated: <a href="{settings.APP_URL}">{settings.APP_NAME}</a></p>
            <p><strong>Regards,</strong><br/>{settings.APP_NAME} Team</p>
          </body>
        </html>
        """

        text_body = f"""
Dear {name},

Your registration for {event['name']} on {formatted_date} at {venue} is confirmed.

User ID: {qr_code_id}
Event: {event['name']}

Stay updated: {settings.APP_URL}

Regards,
{settings.APP_NAME} Team
        """

        await self.send_email(email, subject, html_body, text_body)

    async def send_password_reset(self, name: str, email: str, reset_code: str) -> None:
        """Send the random half of a password reset token"""
        ttl = settings.RESET_TOKEN_TTL_MINUTES
        subject = f"{settings.APP_NAME} password reset"

        html_body = f"""
        <html>
          <body style="font-family: Arial, sans-serif; color: #333;">
            <p>Hi {name},</p>
            <p>Your reset token is your registered phone number followed by <code>{reset_code}</code>.</p>
            <p>For example, if your phone number is 1234567890, enter <code>1234567890{reset_code}</code>.</p>
            <p>The token expires in {ttl} minutes. If you did not request a reset, ignore this email.</p>
          </body>
        </html>
        """

        text_body = f"""
Hi {name},

Your reset token is your registered phone number followed by: {reset_code}
For example, if your phone number is 1234567890, enter 1234567890{reset_code}

The token expires in {ttl} minutes. If you did not request a reset, ignore this email.
        """

        await self.send_email(email, subject, html_body, text_body)


# Create singleton instance
email_service = EmailService()
