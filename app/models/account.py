from sqlalchemy import Column, Date, DateTime, Integer, String

from app.database import Base


class AccountEntry(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    email = Column(String(255), nullable=True, unique=True)
    phone = Column(String(32), nullable=True, unique=True)
    name = Column(String(100), nullable=False)
    unit_system = Column(String(2), nullable=False, default="kg")
    timezone = Column(String(64), nullable=False, default="UTC")
    birth_date = Column(Date, nullable=True)
    gender = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)
