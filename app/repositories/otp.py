from datetime import datetime
from typing import Optional

from sqlalchemy import delete, func, or_, select, update

from app.database import SessionLocal, session_scope
from app.models.otp import OtpChallenge
from app.services.contact import Contact


def _contact_clause(contact: Contact):
    conditions = []
    if contact.email:
        conditions.append(OtpChallenge.email == contact.email)
    if contact.phone:
        conditions.append(OtpChallenge.phone == contact.phone)
    if not conditions:
        raise ValueError("Contact has neither email nor phone")
    return or_(*conditions)


class OtpRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def add_challenge(
        self, contact: Contact, code: str, created_at: datetime, expires_at: datetime
    ) -> OtpChallenge:
        entry = OtpChallenge(
            email=contact.email,
            phone=contact.phone,
            code=code,
            created_at=created_at,
            expires_at=expires_at,
            consumed=False,
        )
        with session_scope(self._session_factory) as session:
            session.add(entry)
            session.flush()
        return entry

    def count_issued_since(self, contact: Contact, since: datetime) -> int:
        with session_scope(self._session_factory) as session:
            return session.execute(
                select(func.count(OtpChallenge.id)).where(
                    _contact_clause(contact),
                    OtpChallenge.created_at > since,
                )
            ).scalar_one()

    def consume_latest_match(
        self, contact: Contact, code: str, now: datetime
    ) -> Optional[Contact]:
        """Mark the newest live challenge matching ``contact`` and ``code`` consumed.

        Returns the contact the consumed challenge was issued to, or ``None`` when
        nothing matched or a concurrent verification consumed it first.
        """
        with session_scope(self._session_factory) as session:
            row = session.execute(
                select(OtpChallenge.id, OtpChallenge.email, OtpChallenge.phone)
                .where(
                    _contact_clause(contact),
                    OtpChallenge.code == code,
                    OtpChallenge.consumed.is_(False),
                    OtpChallenge.expires_at > now,
                )
                .order_by(OtpChallenge.created_at.desc(), OtpChallenge.id.desc())
                .limit(1)
            ).first()
            if row is None:
                return None
            result = session.execute(
                update(OtpChallenge)
                .where(OtpChallenge.id == row.id, OtpChallenge.consumed.is_(False))
                .values(consumed=True)
            )
            if result.rowcount != 1:
                return None
            return Contact(email=row.email, phone=row.phone)

    def delete_expired(self, now: datetime) -> int:
        with session_scope(self._session_factory) as session:
            result = session.execute(
                delete(OtpChallenge).where(OtpChallenge.expires_at < now)
            )
            return result.rowcount
