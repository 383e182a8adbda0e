# Third-party imports
import httpx

# Local application imports
from recognition.core.monitoring.logging import get_logger
from recognition.settings import settings

logger = get_logger(__name__)


def _mailgun_url() -> str:
    if settings.ENVIRONMENT == "dev":
        return f"https://api.mailgun.net/v3/{settings.MAILGUN_DOMAIN}/messages"
    return f"https://api.eu.mailgun.net/v3/{settings.MAILGUN_DOMAIN}/messages"


async def send_mailgun_email(
    to_email: str,
    subject: str,
    text: str,
    html: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> None:
    """Sends an email using Mailgun asynchronously. Raises on HTTP failure."""
    data = {
        "from": f"{settings.PROJECT_NAME} <noreply@{settings.MAILGUN_DOMAIN}>",
        "to": to_email,
        "subject": subject,
        "text": text,
    }
    if html:
        data["html"] = html

    auth = ("api", settings.MAILGUN_API_KEY or "")
    try:
        if client is not None:
            response = await client.post(_mailgun_url(), auth=auth, data=data)
            response.raise_for_status()
            return
        async with httpx.AsyncClient(timeout=30.0) as own_client:
            response = await own_client.post(_mailgun_url(), auth=auth, data=data)
            response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.error(f"Mailgun returned {exc.response.status_code}: {exc.response.text}")
        raise
