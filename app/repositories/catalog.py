from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import or_, select

from app.database import SessionLocal, session_scope
from app.models.catalog import MovementEntry, WodEntry
from app.schemas.catalog import MovementCreate, WodCreate

SEARCH_LIMIT = 10


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _visible_to(model, account_id: int):
    return or_(model.is_custom.is_(False), model.user_id == account_id)


class CatalogRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def list_movements(self, account_id: int) -> list[MovementEntry]:
        with session_scope(self._session_factory) as session:
            result = session.execute(
                select(MovementEntry)
                .where(_visible_to(MovementEntry, account_id))
                .order_by(MovementEntry.name, MovementEntry.id)
            )
            return list(result.scalars().all())

    def get_movement(self, movement_id: int, account_id: int) -> Optional[MovementEntry]:
        with session_scope(self._session_factory) as session:
            return session.execute(
                select(MovementEntry).where(
                    MovementEntry.id == movement_id,
                    _visible_to(MovementEntry, account_id),
                )
            ).scalar_one_or_none()

    def add_movement(
        self, account_id: Optional[int], payload: MovementCreate
    ) -> MovementEntry:
        entry = MovementEntry(
            user_id=account_id,
            name=payload.name,
            category=payload.category or "Other",
            is_custom=account_id is not None,
            notes=payload.notes,
            created_at=datetime.now(timezone.utc),
        )
        with session_scope(self._session_factory) as session:
            session.add(entry)
            session.flush()
        return entry

    def list_wods(self, account_id: int) -> list[WodEntry]:
        with session_scope(self._session_factory) as session:
            result = session.execute(
                select(WodEntry)
                .where(_visible_to(WodEntry, account_id))
                .order_by(WodEntry.name, WodEntry.id)
            )
            return list(result.scalars().all())

    def get_wod(self, wod_id: int, account_id: int) -> Optional[WodEntry]:
        with session_scope(self._session_factory) as session:
            return session.execute(
                select(WodEntry).where(
                    WodEntry.id == wod_id,
                    _visible_to(WodEntry, account_id),
                )
            ).scalar_one_or_none()

    def add_wod(
        self, account_id: Optional[int], payload: WodCreate
    ) -> WodEntry:
        entry = WodEntry(
            user_id=account_id,
            name=payload.name,
            format=payload.format,
            description=payload.description,
            prescribed_loads=payload.prescribed_loads,
            tags=payload.tags,
            is_custom=account_id is not None,
            created_at=datetime.now(timezone.utc),
        )
        with session_scope(self._session_factory) as session:
            session.add(entry)
            session.flush()
        return entry

    def search_movements(self, account_id: int, query: str) -> list[MovementEntry]:
        pattern = f"%{_escape_like(query)}%"
        with session_scope(self._session_factory) as session:
            result = session.execute(
                select(MovementEntry)
                .where(
                    _visible_to(MovementEntry, account_id),
                    MovementEntry.name.ilike(pattern, escape="\\"),
                )
                .order_by(MovementEntry.name)
                .limit(SEARCH_LIMIT)
            )
            return list(result.scalars().all())

    def search_wods(self, account_id: int, query: str) -> list[WodEntry]:
        pattern = f"%{_escape_like(query)}%"
        with session_scope(self._session_factory) as session:
            result = session.execute(
                select(WodEntry)
                .where(
                    _visible_to(WodEntry, account_id),
                    WodEntry.name.ilike(pattern, escape="\\"),
                )
                .order_by(WodEntry.name)
                .limit(SEARCH_LIMIT)
            )
            return list(result.scalars().all())
