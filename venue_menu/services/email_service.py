"""
Outgoing mail. Without an SMTP host configured the message is logged
instead of sent, which is what development and tests rely on.
"""
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from venue_menu.core.config import settings

logger = logging.getLogger(__name__)


def send_password_reset_email(to_email: str, reset_link: str) -> None:
    """Send the password reset link; delivery failures are logged, not raised."""
    if not settings.SMTP_HOST:
        logger.info("SMTP not configured; password reset link for %s: %s", to_email, reset_link)
        return

    msg = MIMEMultipart()
    msg["From"] = settings.FROM_EMAIL
    msg["To"] = to_email
    msg["Subject"] = f"Reset your {settings.APP_NAME} password"
    body = f"""
    Hi,

    Use the link below to choose a new password:

    {reset_link}

    This link expires in {settings.PASSWORD_RESET_EXPIRE_MINUTES} minutes.

    If you did not ask for a reset, ignore this email.
    """
    msg.attach(MIMEText(body, "plain"))

    try:
        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=10) as server:
            server.starttls()
            if settings.SMTP_USER:
                server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
            server.sendmail(settings.FROM_EMAIL, to_email, msg.as_string())
    except (smtplib.SMTPException, OSError):
        logger.error("Failed to send password reset email to %s", to_email, exc_info=True)
        return
    logger.info("Password reset email sent to %s", to_email)
