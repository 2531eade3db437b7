from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from app.database import Base


class MovementEntry(Base):
    __tablename__ = "movements"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("accounts.id"), nullable=True, index=True)
    name = Column(String(100), nullable=False)
    category = Column(String(50), nullable=False, default="Other")
    is_custom = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)


class WodEntry(Base):
    __tablename__ = "wods"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("accounts.id"), nullable=True, index=True)
    name = Column(String(100), nullable=False)
    format = Column(String(50), nullable=False)
    description = Column(Text, nullable=False)
    prescribed_loads = Column(String(255), nullable=True)
    tags = Column(String(255), nullable=True)
    is_custom = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
