from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.config import settings
from app.schemas.accounts import AccountSummary

OTP_LENGTH = settings.otp_length


class ContactPayload(BaseModel):
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)

    @field_validator("email", "phone")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None


class OtpRequest(ContactPayload):
    pass


class OtpResponse(BaseModel):
    accepted: bool
    message: str
    expires_in_seconds: int
    dev_code: Optional[str] = None


class OtpVerifyRequest(ContactPayload):
    code: str = Field(min_length=1, max_length=16)

    @model_validator(mode="after")
    def strip_code(self) -> "OtpVerifyRequest":
        self.code = self.code.strip()
        return self


class OtpVerifyResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in_seconds: int
    user: AccountSummary
