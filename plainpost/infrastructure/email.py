# plainpost/infrastructure/email.py
import os
import aiosmtplib
from email.message import EmailMessage
from dotenv import load_dotenv
import structlog

load_dotenv()
logger = structlog.get_logger(__name__)

SMTP_HOST = os.getenv("SMTP_HOST", "")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER = os.getenv("SMTP_USER", "")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
SMTP_FROM = os.getenv("SMTP_FROM", "no-reply@example.com")
ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()
NOTIFY_EMAIL = os.getenv("PLAINPOST_NOTIFY_EMAIL", "")


async def send_email(
    to_email: str,
    subject: str,
    plain_text: str,
) -> None:
    """
    Send an email asynchronously using SMTP (aiosmtplib).
    Raises exception on failure.
    """
    if ENVIRONMENT == "development" and not SMTP_HOST:
        # no SMTP configured in development: log only
        logger.info("email_send_stub_dev", to=to_email, subject=subject)
        return

    msg = EmailMessage()
    msg["From"] = SMTP_FROM
    msg["To"] = to_email
    msg["Subject"] = subject
    msg.set_content(plain_text)

    try:
        await aiosmtplib.send(
            msg,
            hostname=SMTP_HOST,
            port=SMTP_PORT,
            username=SMTP_USER or None,
            password=SMTP_PASSWORD or None,
            start_tls=SMTP_PORT in (587, 25),
        )
        logger.info("email_sent", to=to_email, subject=subject)
    except Exception as e:
        logger.exception("email_send_failed", to=to_email, subject=subject, error=str(e))
        raise


async def notify_post_published(post, post_url: str) -> bool:
    """Tell the configured recipient a post went live.

    Returns True when a message was handed to ``send_email``. Delivery errors
    are logged and reported as False so the create request still succeeds.
    """
    if not NOTIFY_EMAIL:
        return False
    subject = f"New post published: {post.title}"
    body = f"{post.title}\n\n{post.content}\n\nRead it at {post_url}\n"
    try:
        await send_email(NOTIFY_EMAIL, subject, body)
    except Exception as e:
        logger.exception("post_notification_failed", post_id=str(post.id), error=str(e))
        return False
    return True
