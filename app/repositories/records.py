from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select

from app.database import SessionLocal, session_scope
from app.models.records import PrRecordEntry, WodResultEntry
from app.schemas.records import (
    PrRecordCreate,
    PrRecordUpdate,
    WodResultCreate,
    WodResultUpdate,
)


class RecordRepository:
    """PR records and WOD results, always scoped to the owning account."""

    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def list_pr_records(
        self, account_id: int, movement_id: Optional[int] = None
    ) -> list[PrRecordEntry]:
        stmt = select(PrRecordEntry).where(PrRecordEntry.user_id == account_id)
        if movement_id is not None:
            stmt = stmt.where(PrRecordEntry.movement_id == movement_id)
        stmt = stmt.order_by(PrRecordEntry.date.desc(), PrRecordEntry.created_at.desc())
        with session_scope(self._session_factory) as session:
            return list(session.execute(stmt).scalars().unique().all())

    def get_pr_record(self, record_id: int, account_id: int) -> Optional[PrRecordEntry]:
        with session_scope(self._session_factory) as session:
            return (
                session.execute(
                    select(PrRecordEntry).where(
                        PrRecordEntry.id == record_id,
                        PrRecordEntry.user_id == account_id,
                    )
                )
                .unique()
                .scalar_one_or_none()
            )

    def add_pr_record(
        self,
        account_id: int,
        payload: PrRecordCreate,
        est_1rm: Optional[float],
        now: datetime,
    ) -> PrRecordEntry:
        entry = PrRecordEntry(
            user_id=account_id,
            movement_id=payload.movement_id,
            date=payload.date,
            rep_scheme=payload.rep_scheme,
            weight=payload.weight,
            reps=payload.reps,
            est_1rm=est_1rm,
            note=payload.note,
            media_link=payload.media_link,
            unit=payload.unit,
            is_pr=payload.is_pr,
            created_at=now,
        )
        with session_scope(self._session_factory) as session:
            session.add(entry)
            session.flush()
            return entry

    def update_pr_record(
        self,
        record_id: int,
        account_id: int,
        payload: PrRecordUpdate,
        est_1rm: Optional[float],
    ) -> bool:
        with session_scope(self._session_factory) as session:
            entry = session.get(PrRecordEntry, record_id)
            if entry is None or entry.user_id != account_id:
                return False
            entry.date = payload.date
            entry.rep_scheme = payload.rep_scheme
            entry.weight = payload.weight
            entry.reps = payload.reps
            entry.est_1rm = est_1rm
            entry.note = payload.note
            entry.media_link = payload.media_link
            entry.unit = payload.unit
            entry.is_pr = payload.is_pr
            return True

    def delete_pr_record(self, record_id: int, account_id: int) -> bool:
        with session_scope(self._session_factory) as session:
            result = session.execute(
                delete(PrRecordEntry).where(
                    PrRecordEntry.id == record_id,
                    PrRecordEntry.user_id == account_id,
                )
            )
            return result.rowcount > 0

    def list_wod_results(
        self, account_id: int, wod_id: Optional[int] = None
    ) -> list[WodResultEntry]:
        stmt = select(WodResultEntry).where(WodResultEntry.user_id == account_id)
        if wod_id is not None:
            stmt = stmt.where(WodResultEntry.wod_id == wod_id)
        stmt = stmt.order_by(WodResultEntry.date.desc(), WodResultEntry.created_at.desc())
        with session_scope(self._session_factory) as session:
            return list(session.execute(stmt).scalars().unique().all())

    def get_wod_result(self, result_id: int, account_id: int) -> Optional[WodResultEntry]:
        with session_scope(self._session_factory) as session:
            return (
                session.execute(
                    select(WodResultEntry).where(
                        WodResultEntry.id == result_id,
                        WodResultEntry.user_id == account_id,
                    )
                )
                .unique()
                .scalar_one_or_none()
            )

    def add_wod_result(
        self, account_id: int, payload: WodResultCreate, wod_format: str, now: datetime
    ) -> WodResultEntry:
        entry = WodResultEntry(
            user_id=account_id,
            wod_id=payload.wod_id,
            date=payload.date,
            format=wod_format,
            time_sec=payload.time_sec,
            rounds=payload.rounds,
            extra_reps=payload.extra_reps,
            loads_used=payload.loads_used,
            rx_scaled=payload.rx_scaled,
            note=payload.note,
            media_link=payload.media_link,
            created_at=now,
        )
        with session_scope(self._session_factory) as session:
            session.add(entry)
            session.flush()
            return entry

    def update_wod_result(
        self, result_id: int, account_id: int, payload: WodResultUpdate
    ) -> bool:
        with session_scope(self._session_factory) as session:
            entry = session.get(WodResultEntry, result_id)
            if entry is None or entry.user_id != account_id:
                return False
            entry.date = payload.date
            entry.time_sec = payload.time_sec
            entry.rounds = payload.rounds
            entry.extra_reps = payload.extra_reps
            entry.loads_used = payload.loads_used
            entry.rx_scaled = payload.rx_scaled
            entry.note = payload.note
            entry.media_link = payload.media_link
            return True

    def delete_wod_result(self, result_id: int, account_id: int) -> bool:
        with session_scope(self._session_factory) as session:
            result = session.execute(
                delete(WodResultEntry).where(
                    WodResultEntry.id == result_id,
                    WodResultEntry.user_id == account_id,
                )
            )
            return result.rowcount > 0
