"""Storage interfaces consumed by the authenticator and the stats engine.

Each query the core needs is one named method. The SQLAlchemy classes in this
package are the default implementations; anything with the same methods can be
injected instead.
"""
from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from app.services.contact import Contact


class ChallengeRecord(Protocol):
    id: int
    email: Optional[str]
    phone: Optional[str]
    code: str
    created_at: datetime
    expires_at: datetime
    consumed: bool


class AccountRecord(Protocol):
    id: int
    email: Optional[str]
    phone: Optional[str]
    name: str
    unit_system: str
    timezone: str


class PrRecordRow(Protocol):
    date: date
    created_at: datetime
    est_1rm: Optional[float]


class WodResultRow(Protocol):
    date: date
    created_at: datetime
    time_sec: Optional[int]
    rounds: Optional[int]
    extra_reps: Optional[int]


class ChallengeStore(Protocol):
    def add_challenge(
        self, contact: Contact, code: str, created_at: datetime, expires_at: datetime
    ) -> ChallengeRecord: ...

    def count_issued_since(self, contact: Contact, since: datetime) -> int: ...

    def consume_latest_match(
        self, contact: Contact, code: str, now: datetime
    ) -> Optional[Contact]: ...

    def delete_expired(self, now: datetime) -> int: ...


class AccountStore(Protocol):
    def find_by_contact(self, contact: Contact) -> Optional[AccountRecord]: ...

    def create(
        self, contact: Contact, name: str, unit_system: str, timezone: str, now: datetime
    ) -> AccountRecord: ...

    def touch_login(self, account_id: int, now: datetime) -> Optional[AccountRecord]: ...

    def exists(self, account_id: int) -> bool: ...


class RecordStore(Protocol):
    def list_pr_records(
        self, account_id: int, movement_id: Optional[int] = None
    ) -> Sequence[PrRecordRow]: ...

    def list_wod_results(
        self, account_id: int, wod_id: Optional[int] = None
    ) -> Sequence[WodResultRow]: ...
