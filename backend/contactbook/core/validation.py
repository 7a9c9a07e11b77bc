# backend/contactbook/core/validation.py
"""
Field checks for contacts. Pure functions, shared by the request handlers
(before any store call) and by the ORM model (on every attribute write).
"""
import re
from dataclasses import dataclass
from typing import Optional

from contactbook.core.errors import ValidationError

EMAIL_RE = re.compile(r".+@.+\..+")
PHONE_RE = re.compile(r"[0-9]{10}")

CREATE_REQUIRED_MESSAGE = "Name, email, and phone fields are required."
UPDATE_REQUIRED_MESSAGE = "Name, email, and phone are required."


@dataclass(frozen=True)
class ContactFields:
    name: str
    email: str
    phone: str


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def check_required(
    name: Optional[str],
    email: Optional[str],
    phone: Optional[str],
    message: str = CREATE_REQUIRED_MESSAGE,
) -> None:
    """Raw presence check; runs before any format validation."""
    if not name or not email or not phone:
        raise ValidationError(message)


def validate_name(value: Optional[str]) -> str:
    name = _clean(value)
    if not name:
        raise ValidationError("Name is required.")
    return name


def validate_email(value: Optional[str]) -> str:
    email = _clean(value).lower()
    if not email:
        raise ValidationError("Email is required.")
    if not EMAIL_RE.fullmatch(email):
        raise ValidationError("Please enter a valid email address.")
    return email


def validate_phone(value: Optional[str]) -> str:
    phone = _clean(value)
    if not phone:
        raise ValidationError("Phone number is required.")
    if not PHONE_RE.fullmatch(phone):
        raise ValidationError(f"{phone} is not a valid 10-digit phone number!")
    return phone


def validate_contact(
    name: Optional[str], email: Optional[str], phone: Optional[str]
) -> ContactFields:
    """
    Normalize and check all three fields. Every failing field is reported
    in a single ValidationError, e.g.
    "Contact validation failed: email: ..., phone: ...".
    """
    cleaned = {}
    problems = []
    for field, check, raw in (
        ("name", validate_name, name),
        ("email", validate_email, email),
        ("phone", validate_phone, phone),
    ):
        try:
            cleaned[field] = check(raw)
        except ValidationError as exc:
            problems.append(f"{field}: {exc.message}")

    if problems:
        raise ValidationError("Contact validation failed: " + ", ".join(problems))
    return ContactFields(**cleaned)
