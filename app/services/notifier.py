import logging

from app.config import settings
from app.services.contact import Contact
from app.services.email import EmailSendError, send_otp_email
from app.services.sms import SmsSendError, send_otp_sms

LOGGER = logging.getLogger(__name__)


class CodeNotifier:
    """Best-effort delivery of a login code to every channel the contact has."""

    def __init__(self, email_sender=send_otp_email, sms_sender=send_otp_sms) -> None:
        self._email_sender = email_sender
        self._sms_sender = sms_sender

    def deliver(self, contact: Contact, code: str) -> bool:
        if settings.echo_otp_codes:
            LOGGER.info("OTP code for %s: %s", contact.label, code)
        delivered = False
        if contact.email:
            try:
                self._email_sender(contact.email, code)
                delivered = True
            except EmailSendError as exc:
                LOGGER.warning("OTP email to %s not delivered: %s", contact.email, exc)
        if contact.phone:
            try:
                self._sms_sender(contact.phone, code)
                delivered = True
            except SmsSendError as exc:
                LOGGER.warning("OTP SMS to %s not delivered: %s", contact.phone, exc)
        return delivered
