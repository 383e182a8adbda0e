# Standard library imports
from datetime import datetime
from typing import Protocol

# Third-party imports
from pydantic import BaseModel

# Local application imports
from recognition.core.monitoring.logging import get_logger
from recognition.settings import settings
from recognition.utils.date_utils import month_name
from recognition.utils.email_utils import send_mailgun_email

logger = get_logger(__name__)


class Notification(BaseModel):
    to: str
    subject: str
    body: str


class Notifier(Protocol):
    async def notify(self, recipient: str, subject: str, body: str) -> None: ...


class MailgunNotifier:
    async def notify(self, recipient: str, subject: str, body: str) -> None:
        await send_mailgun_email(to_email=recipient, subject=subject, text=body)
        logger.info(f"Notification sent to {recipient}: {subject}")


class LoggingNotifier:
    """Writes notifications to the log instead of delivering them."""

    def __init__(self) -> None:
        self.sent: list[Notification] = []

    async def notify(self, recipient: str, subject: str, body: str) -> None:
        self.sent.append(Notification(to=recipient, subject=subject, body=body))
        logger.info(f"Notification (not delivered) to {recipient}: {subject}")


def create_notifier() -> Notifier:
    if settings.UNDER_DEVELOPMENT or not (settings.MAILGUN_API_KEY and settings.MAILGUN_DOMAIN):
        return LoggingNotifier()
    return MailgunNotifier()


def _period_label(year: int, month: int) -> str:
    return f"{month_name(month)} {year}"


def voting_open_message(year: int, month: int, end_date: datetime, recipient: str) -> Notification:
    period = _period_label(year, month)
    return Notification(
        to=recipient,
        subject=f"Voting Now Open - Employee of the Month {period}",
        body=(
            "The voting period for Employee of the Month is now open!\n\n"
            f"Period: {period}\n"
            f"Voting closes: {end_date:%Y-%m-%d}\n\n"
            "Please submit your nominations through the company portal."
        ),
    )


def voting_closed_message(year: int, month: int, recipient: str) -> Notification:
    period = _period_label(year, month)
    return Notification(
        to=recipient,
        subject=f"Voting Closed - Employee of the Month {period}",
        body=(
            "The voting period for Employee of the Month has closed.\n\n"
            f"Period: {period}\n"
            "Results will be announced soon."
        ),
    )


def winner_announcement_message(
    year: int,
    month: int,
    employee_name: str,
    department: str,
    position: str,
    nomination_count: int,
    percentage: float,
    recipient: str,
) -> Notification:
    period = _period_label(year, month)
    return Notification(
        to=recipient,
        subject=f"Employee of the Month Winner - {period}",
        body=(
            "Congratulations to our Employee of the Month!\n\n"
            f"Winner: {employee_name}\n"
            f"Department: {department}\n"
            f"Position: {position}\n"
            f"Votes: {nomination_count} ({percentage:.1f}%)\n\n"
            "Thank you to everyone who participated in the voting!"
        ),
    )


def nomination_confirmation_message(
    year: int,
    month: int,
    nominee_name: str,
    nominee_department: str,
    reason: str,
    recipient: str,
) -> Notification:
    period = _period_label(year, month)
    return Notification(
        to=recipient,
        subject=f"Nomination Submitted - Employee of the Month {period}",
        body=(
            "Your nomination has been successfully submitted!\n\n"
            f"Nominated Employee: {nominee_name}\n"
            f"Department: {nominee_department}\n"
            f"Voting Period: {period}\n"
            f"Reason: {reason}\n\n"
            "Thank you for participating in our Employee of the Month program!"
        ),
    )
