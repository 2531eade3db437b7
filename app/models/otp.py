from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String

from app.database import Base


class OtpChallenge(Base):
    __tablename__ = "otp_challenges"

    id = Column(Integer, primary_key=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(32), nullable=True)
    code = Column(String(10), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    consumed = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_otp_email_lookup", "email", "code", "consumed", "expires_at"),
        Index("ix_otp_phone_lookup", "phone", "code", "consumed", "expires_at"),
        Index("ix_otp_email_created", "email", "created_at"),
        Index("ix_otp_phone_created", "phone", "created_at"),
        Index("ix_otp_expires_at", "expires_at"),
    )
