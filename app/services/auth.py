"""OTP login lifecycle and bearer-token validation.

A challenge is pending until it is consumed by a successful verification or
its expiry passes. Expiry is never stored as a state change; every lookup
filters on ``expires_at > now``, so the periodic sweep only reclaims space.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
import logging
from typing import Optional

from app.repositories.base import AccountRecord, AccountStore, ChallengeStore
from app.services.clock import RandomCodeGenerator, SystemClock
from app.services.contact import Contact, normalize_contact
from app.services.errors import (
    AccountNotFound,
    InvalidInput,
    InvalidOrExpiredCode,
    InvalidToken,
    MissingToken,
    RateLimited,
)
from app.services.notifier import CodeNotifier
from app.services.tokens import TokenError, create_access_token, decode_access_token

LOGGER = logging.getLogger(__name__)

NEW_ACCOUNT_NAME = "New User"
DEFAULT_UNIT_SYSTEM = "kg"
DEFAULT_TIMEZONE = "UTC"


@dataclass(frozen=True)
class IssuedChallenge:
    contact: Contact
    code: str
    expires_at: datetime
    delivered: bool


@dataclass(frozen=True)
class LoginResult:
    account: AccountRecord
    needs_onboarding: bool


class Authenticator:
    def __init__(
        self,
        challenges: ChallengeStore,
        accounts: AccountStore,
        notifier: Optional[CodeNotifier] = None,
        clock: Optional[SystemClock] = None,
        code_generator: Optional[RandomCodeGenerator] = None,
        *,
        code_ttl_seconds: int = 600,
        rate_limit_count: int = 3,
        rate_limit_window_seconds: int = 300,
    ) -> None:
        self._challenges = challenges
        self._accounts = accounts
        self._notifier = notifier or CodeNotifier()
        self._clock = clock or SystemClock()
        self._code_generator = code_generator or RandomCodeGenerator()
        self._code_ttl = timedelta(seconds=code_ttl_seconds)
        self._rate_limit_count = rate_limit_count
        self._rate_limit_window = timedelta(seconds=rate_limit_window_seconds)

    @property
    def code_ttl_seconds(self) -> int:
        return int(self._code_ttl.total_seconds())

    @property
    def rate_limit_window_seconds(self) -> int:
        return int(self._rate_limit_window.total_seconds())

    def request_challenge(
        self, email: Optional[str] = None, phone: Optional[str] = None
    ) -> IssuedChallenge:
        contact = normalize_contact(email, phone).owner
        self.check_rate_limit(contact)

        now = self._clock.now()
        code = self._code_generator.generate()
        expires_at = now + self._code_ttl
        self._challenges.add_challenge(contact, code, created_at=now, expires_at=expires_at)
        LOGGER.info("Issued OTP challenge for %s", contact.label)

        delivered = self._notifier.deliver(contact, code)
        return IssuedChallenge(
            contact=contact, code=code, expires_at=expires_at, delivered=delivered
        )

    def check_rate_limit(self, contact: Contact) -> None:
        since = self._clock.now() - self._rate_limit_window
        issued = self._challenges.count_issued_since(contact, since)
        if issued >= self._rate_limit_count:
            LOGGER.warning(
                "OTP rate limit hit for %s (%d in %ds)",
                contact.label,
                issued,
                self.rate_limit_window_seconds,
            )
            raise RateLimited(retry_after_seconds=self.rate_limit_window_seconds)

    def verify_challenge(
        self, email: Optional[str], phone: Optional[str], code: str
    ) -> LoginResult:
        contact = normalize_contact(email, phone)
        clean_code = (code or "").strip()
        if not clean_code:
            raise InvalidInput("Code is required")

        now = self._clock.now()
        owner = self._challenges.consume_latest_match(contact, clean_code, now)
        if owner is None:
            raise InvalidOrExpiredCode()

        # The consumed challenge proves one channel only; never widen it to the request.
        account = self._accounts.find_by_contact(owner)
        if account is None:
            account = self._accounts.create(
                owner,
                name=NEW_ACCOUNT_NAME,
                unit_system=DEFAULT_UNIT_SYSTEM,
                timezone=DEFAULT_TIMEZONE,
                now=now,
            )
            LOGGER.info("Created account id=%s for %s", account.id, owner.label)
        else:
            account = self._accounts.touch_login(account.id, now) or account
        return LoginResult(
            account=account, needs_onboarding=account.name == NEW_ACCOUNT_NAME
        )

    def issue_token(self, account_id: int) -> str:
        return create_access_token(account_id, issued_at=self._clock.now())

    def validate_token(self, token: Optional[str]) -> int:
        if not token:
            raise MissingToken()
        try:
            data = decode_access_token(token)
        except TokenError as exc:
            raise InvalidToken(str(exc)) from exc
        if not self._accounts.exists(data.account_id):
            LOGGER.warning("Token subject %s no longer exists", data.account_id)
            raise AccountNotFound()
        return data.account_id

    def validate_authorization_header(self, authorization: Optional[str]) -> int:
        if not authorization:
            raise MissingToken()
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise InvalidToken("Invalid Authorization header")
        return self.validate_token(token.strip())

    def sweep(self) -> int:
        return self._challenges.delete_expired(self._clock.now())
