# backend/contactbook/models/contact.py
from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import validates

from contactbook.core.validation import validate_email, validate_name, validate_phone
from contactbook.models.base import Base


def _uuid() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(String, primary_key=True, default=_uuid)
    name = Column(String, nullable=False, index=True)
    email = Column(String, nullable=False)
    phone = Column(String, unique=True, index=True, nullable=False)

    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now, nullable=False)

    # Re-checked on every assignment, so nothing malformed reaches a flush.
    @validates("name")
    def _validate_name(self, key, value):
        return validate_name(value)

    @validates("email")
    def _validate_email(self, key, value):
        return validate_email(value)

    @validates("phone")
    def _validate_phone(self, key, value):
        return validate_phone(value)

    def __repr__(self) -> str:
        return f"<Contact id={self.id!r} name={self.name!r}>"
