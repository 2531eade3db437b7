from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from app.config import settings

LOGGER = logging.getLogger(__name__)


class EmailSendError(RuntimeError):
    pass


def send_otp_email(to_email: str, code: str) -> None:
    sender = settings.otp_email_sender
    if not sender:
        raise EmailSendError("OTP email sender is not configured")
    if not settings.smtp_host:
        raise EmailSendError("SMTP host is not configured")

    message = _build_message(sender, to_email, settings.otp_email_subject, code)
    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=10) as client:
            if settings.smtp_use_tls:
                client.starttls()
            if settings.smtp_username:
                client.login(settings.smtp_username, settings.smtp_password)
            client.send_message(message)
    except smtplib.SMTPException as exc:
        LOGGER.error("SMTP error sending OTP to=%s: %s", to_email, exc)
        raise EmailSendError("Failed to send OTP email") from exc
    except OSError as exc:
        raise EmailSendError("Failed to reach SMTP server") from exc


def _build_body(code: str, ttl_seconds: int) -> str:
    minutes = max(1, ttl_seconds // 60)
    return (
        f"Your CrossFit Tracker login code is {code}.\n\n"
        f"It expires in {minutes} minute(s).\n\n"
        "If you did not request this code, you can ignore this email."
    )


def _build_message(sender: str, recipient: str, subject: str, code: str) -> EmailMessage:
    message = EmailMessage()
    message["From"] = sender
    message["To"] = recipient
    message["Subject"] = subject
    message.set_content(_build_body(code, settings.otp_ttl_seconds))
    message.add_alternative(
        f"<p>Your login code: <strong>{code}</strong></p>", subtype="html"
    )
    return message
