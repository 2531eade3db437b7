from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from app.config import settings

TOKEN_TYPE = "access"


class TokenError(ValueError):
    pass


@dataclass(frozen=True)
class AccessTokenData:
    account_id: int
    issued_at: datetime
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(account_id: int, issued_at: datetime | None = None) -> str:
    if not settings.jwt_secret:
        raise TokenError("JWT secret is not configured")
    now = issued_at or _utcnow()
    expires_at = now + timedelta(days=settings.access_token_expire_days)
    payload = {
        "sub": str(account_id),
        "type": TOKEN_TYPE,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> AccessTokenData:
    if not token:
        raise TokenError("Token is missing")
    if not settings.jwt_secret:
        raise TokenError("JWT secret is not configured")
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenError("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise TokenError("Invalid token") from exc
    if payload.get("type") != TOKEN_TYPE:
        raise TokenError("Invalid token type")
    return AccessTokenData(
        account_id=_parse_subject(payload),
        issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def _parse_subject(payload: dict) -> int:
    subject = payload.get("sub")
    if not subject:
        raise TokenError("Token subject is missing")
    try:
        return int(subject)
    except (TypeError, ValueError) as exc:
        raise TokenError("Invalid token subject") from exc
