from dataclasses import dataclass
import re

from app.services.errors import InvalidInput


@dataclass(frozen=True)
class Contact:
    email: str | None = None
    phone: str | None = None

    @property
    def label(self) -> str:
        return self.email or self.phone or ""

    @property
    def owner(self) -> "Contact":
        """The one channel a challenge belongs to. Email wins when both are given."""
        if self.email:
            return Contact(email=self.email)
        return Contact(phone=self.phone)


def normalize_email(email: str | None) -> str | None:
    if email is None:
        return None
    cleaned = email.strip().lower()
    if not cleaned:
        return None
    if "@" not in cleaned:
        raise InvalidInput("Email address is invalid")
    return cleaned


def normalize_phone(phone: str | None) -> str | None:
    if phone is None or not phone.strip():
        return None
    digits = re.sub(r"\D", "", phone)
    if not digits:
        raise InvalidInput("Phone number is invalid")
    return digits


def normalize_contact(email: str | None, phone: str | None) -> Contact:
    contact = Contact(email=normalize_email(email), phone=normalize_phone(phone))
    if contact.email is None and contact.phone is None:
        raise InvalidInput("Email or phone required")
    return contact
