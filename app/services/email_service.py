"""Send transactional email (password reset) over SMTP."""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from app.config import get_settings

logger = logging.getLogger(__name__)


def build_reset_link(reset_token: str) -> str:
    settings = get_settings()
    path = settings.password_reset_link_path.strip("/")
    return f"{settings.site_url.rstrip('/')}/{path}/{reset_token}"


def send_password_reset_email(to_email: str, name: str, reset_token: str) -> None:
    """
    Send the reset link to the user. Raises smtplib.SMTPException or OSError on delivery failure.
    Link is site_url + password_reset_link_path + /<token>.
    """
    settings = get_settings()
    if not settings.email_user:
        logger.warning("EMAIL_USER not configured; skipping password reset email to %s", to_email)
        return
    link = build_reset_link(reset_token)
    ttl_minutes = settings.password_reset_token_expire_minutes
    subject = "Reset your password"
    body = f"""Hello {name},

You requested a password reset. Click the link below to set a new password:

{link}

This link expires in {ttl_minutes} minutes. If you didn't request this, you can ignore this email.
"""
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = settings.mail_sender
    msg["To"] = to_email
    msg.attach(MIMEText(body, "plain"))

    with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=30) as smtp:
        if settings.smtp_use_tls:
            smtp.starttls()
        if settings.email_user and settings.email_pass:
            smtp.login(settings.email_user, settings.email_pass)
        smtp.sendmail(settings.mail_sender, [to_email], msg.as_string())
    logger.info("Password reset email sent to %s", to_email)
