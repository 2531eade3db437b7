from datetime import date, datetime
import logging
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError

from app.database import SessionLocal, session_scope
from app.models.account import AccountEntry
from app.services.contact import Contact

LOGGER = logging.getLogger(__name__)


class AccountRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def find_by_contact(self, contact: Contact) -> Optional[AccountEntry]:
        conditions = []
        if contact.email:
            conditions.append(AccountEntry.email == contact.email)
        if contact.phone:
            conditions.append(AccountEntry.phone == contact.phone)
        if not conditions:
            return None
        with session_scope(self._session_factory) as session:
            return (
                session.execute(
                    select(AccountEntry).where(or_(*conditions)).order_by(AccountEntry.id)
                )
                .scalars()
                .first()
            )

    def create(
        self,
        contact: Contact,
        name: str,
        unit_system: str,
        timezone: str,
        now: datetime,
    ) -> AccountEntry:
        entry = AccountEntry(
            email=contact.email,
            phone=contact.phone,
            name=name,
            unit_system=unit_system,
            timezone=timezone,
            created_at=now,
            last_login=now,
        )
        try:
            with session_scope(self._session_factory) as session:
                session.add(entry)
                session.flush()
        except IntegrityError:
            # Another first login for the same contact committed in between.
            existing = self.find_by_contact(contact)
            if existing is None:
                raise
            LOGGER.info(
                "Account for %s already exists, reusing id=%s", contact.label, existing.id
            )
            return self.touch_login(existing.id, now) or existing
        return entry

    def touch_login(self, account_id: int, now: datetime) -> Optional[AccountEntry]:
        with session_scope(self._session_factory) as session:
            entry = session.get(AccountEntry, account_id)
            if entry is None:
                return None
            entry.last_login = now
            session.flush()
            return entry

    def get(self, account_id: int) -> Optional[AccountEntry]:
        with session_scope(self._session_factory) as session:
            return session.get(AccountEntry, account_id)

    def exists(self, account_id: int) -> bool:
        with session_scope(self._session_factory) as session:
            return (
                session.execute(
                    select(AccountEntry.id).where(AccountEntry.id == account_id)
                ).scalar_one_or_none()
                is not None
            )

    def update_profile(
        self,
        account_id: int,
        *,
        name: str,
        unit_system: str,
        timezone: str,
        birth_date: Optional[date],
        gender: Optional[str],
    ) -> Optional[AccountEntry]:
        with session_scope(self._session_factory) as session:
            entry = session.get(AccountEntry, account_id)
            if entry is None:
                return None
            entry.name = name
            entry.unit_system = unit_system
            entry.timezone = timezone
            entry.birth_date = birth_date
            entry.gender = gender
            session.flush()
            return entry
