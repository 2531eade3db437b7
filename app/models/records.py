from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.catalog import MovementEntry, WodEntry


class PrRecordEntry(Base):
    __tablename__ = "pr_records"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    movement_id = Column(Integer, ForeignKey("movements.id"), nullable=False)
    date = Column(Date, nullable=False)
    rep_scheme = Column(String(50), nullable=False)
    weight = Column(Float, nullable=True)
    reps = Column(Integer, nullable=True)
    est_1rm = Column(Float, nullable=True)
    note = Column(Text, nullable=True)
    media_link = Column(String(500), nullable=True)
    unit = Column(String(2), nullable=False)
    is_pr = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    movement = relationship(MovementEntry, lazy="joined")

    __table_args__ = (Index("ix_pr_records_user_movement", "user_id", "movement_id"),)

    @property
    def movement_name(self) -> str | None:
        return self.movement.name if self.movement is not None else None

    @property
    def category(self) -> str | None:
        return self.movement.category if self.movement is not None else None


class WodResultEntry(Base):
    __tablename__ = "wod_results"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    wod_id = Column(Integer, ForeignKey("wods.id"), nullable=False)
    date = Column(Date, nullable=False)
    format = Column(String(50), nullable=False)
    time_sec = Column(Integer, nullable=True)
    rounds = Column(Integer, nullable=True)
    extra_reps = Column(Integer, nullable=True)
    loads_used = Column(String(255), nullable=True)
    rx_scaled = Column(String(10), nullable=False, default="Rx")
    note = Column(Text, nullable=True)
    media_link = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)

    wod = relationship(WodEntry, lazy="joined")

    __table_args__ = (Index("ix_wod_results_user_wod", "user_id", "wod_id"),)

    @property
    def wod_name(self) -> str | None:
        return self.wod.name if self.wod is not None else None

    @property
    def wod_format(self) -> str | None:
        return self.wod.format if self.wod is not None else None
