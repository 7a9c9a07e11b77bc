# backend/contactbook/crud/contacts.py
import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from contactbook.core.errors import ConflictError, NotFoundError, PersistenceError
from contactbook.core.validation import ContactFields
from contactbook.db.functions import casefold
from contactbook.models.contact import Contact

logger = logging.getLogger(__name__)

DUPLICATE_PHONE_MESSAGE = "This phone number is already registered."
NOT_FOUND_MESSAGE = "Contact not found"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _escape_like(s: str) -> str:
    return s.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def list_contacts(db: AsyncSession, search: str = "") -> List[Contact]:
    """All contacts, or those whose name contains `search` (any case), sorted by name ignoring case."""
    stmt = select(Contact)
    if search:
        like = f"%{_escape_like(search.casefold())}%"
        stmt = stmt.where(casefold(Contact.name).like(like, escape="\\"))
    stmt = stmt.order_by(casefold(Contact.name), Contact.name, Contact.id)

    try:
        rows = (await db.execute(stmt)).scalars().all()
    except SQLAlchemyError as exc:
        logger.exception("[contacts] list failed")
        raise PersistenceError("Error fetching contacts", str(exc)) from exc
    return list(rows)


async def get_contact(db: AsyncSession, contact_id: str) -> Contact:
    try:
        obj = await db.get(Contact, contact_id)
    except SQLAlchemyError as exc:
        logger.exception("[contacts] get failed id=%s", contact_id)
        raise PersistenceError("Error fetching contact", str(exc)) from exc
    if obj is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return obj


async def create_contact(db: AsyncSession, fields: ContactFields) -> Contact:
    now = _now()
    obj = Contact(
        name=fields.name,
        email=fields.email,
        phone=fields.phone,
        created_at=now,
        updated_at=now,
    )
    db.add(obj)
    await _commit(db, "Error creating contact")
    logger.info("[contacts] created id=%s", obj.id)
    return obj


async def update_contact(db: AsyncSession, contact_id: str, fields: ContactFields) -> Contact:
    """Replace name/email/phone of an existing contact; id and created_at stay as they are."""
    obj = await get_contact(db, contact_id)
    obj.name = fields.name
    obj.email = fields.email
    obj.phone = fields.phone
    obj.updated_at = _now()
    await _commit(db, "Error updating contact")
    logger.info("[contacts] updated id=%s", contact_id)
    return obj


async def delete_contact(db: AsyncSession, contact_id: str) -> None:
    try:
        obj = await db.get(Contact, contact_id)
    except SQLAlchemyError as exc:
        logger.exception("[contacts] delete lookup failed id=%s", contact_id)
        raise PersistenceError("Error deleting contact", str(exc)) from exc
    if obj is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    await db.delete(obj)
    await _commit(db, "Error deleting contact")
    logger.info("[contacts] deleted id=%s", contact_id)


async def _commit(db: AsyncSession, failure_message: str) -> None:
    try:
        await db.commit()
    except IntegrityError as exc:
        # phone is the only unique column besides the primary key
        await db.rollback()
        raise ConflictError(DUPLICATE_PHONE_MESSAGE) from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("[contacts] commit failed: %s", failure_message)
        raise PersistenceError(failure_message, str(exc)) from exc
