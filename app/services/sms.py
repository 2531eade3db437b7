"""Login codes over SMS through the Twilio Messages REST endpoint."""
from __future__ import annotations

import base64
import json
import logging
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from app.config import settings
from app.services.contact import normalize_phone
from app.services.errors import InvalidInput

LOGGER = logging.getLogger(__name__)

TWILIO_MESSAGES_ENDPOINT = "https://api.twilio.com/2010-04-01/Accounts/{sid}/Messages.json"


class SmsSendError(RuntimeError):
    pass


def send_otp_sms(to_phone: str, code: str) -> None:
    if not (
        settings.twilio_account_sid
        and settings.twilio_auth_token
        and settings.twilio_phone_number
    ):
        raise SmsSendError("Twilio is not configured")

    to_number = to_e164(to_phone)
    message_sid = _post_message(
        {
            "To": to_number,
            "From": to_e164(settings.twilio_phone_number),
            "Body": _build_body(code),
        }
    )
    LOGGER.info("Login code SMS queued for %s (sid=%s)", to_number, message_sid)


def to_e164(phone_number: str) -> str:
    """Digits-only numbers of national length get the default country code."""
    try:
        digits = normalize_phone(phone_number)
    except InvalidInput as exc:
        raise SmsSendError(str(exc)) from exc
    if not digits:
        raise SmsSendError("Phone number is missing")
    if len(digits) == 10:
        country_code = normalize_phone(settings.default_country_code or "")
        if not country_code:
            raise SmsSendError("Default country code is not configured")
        digits = country_code + digits
    if not 10 < len(digits) <= 15:
        raise SmsSendError("Phone number must include a valid country code")
    return f"+{digits}"


def _post_message(fields: dict) -> str | None:
    account_sid = settings.twilio_account_sid
    basic = base64.b64encode(
        f"{account_sid}:{settings.twilio_auth_token}".encode("utf-8")
    ).decode("ascii")
    request = Request(
        TWILIO_MESSAGES_ENDPOINT.format(sid=account_sid),
        data=urlencode(fields).encode("utf-8"),
        headers={
            "Authorization": f"Basic {basic}",
            "Content-Type": "application/x-www-form-urlencoded",
        },
        method="POST",
    )
    try:
        with urlopen(request, timeout=10) as response:
            body = response.read()
    except HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="replace")
        LOGGER.error("Twilio rejected login code SMS to %s: %s", fields["To"], detail)
        raise SmsSendError(f"Twilio returned HTTP {exc.code}") from exc
    except URLError as exc:
        raise SmsSendError("Failed to reach Twilio API") from exc
    try:
        return json.loads(body).get("sid")
    except ValueError:
        return None


def _build_body(code: str) -> str:
    minutes = max(1, settings.otp_ttl_seconds // 60)
    return f"Your CrossFit Tracker login code is {code}. It expires in {minutes} minute(s)."
