# contactbook/api/routes/contacts.py
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from contactbook.core.validation import (
    CREATE_REQUIRED_MESSAGE,
    UPDATE_REQUIRED_MESSAGE,
    ContactFields,
    check_required,
    validate_contact,
)
from contactbook.crud.contacts import (
    create_contact as crud_create,
    delete_contact as crud_delete,
    get_contact as crud_get,
    list_contacts as crud_list,
    update_contact as crud_update,
)
from contactbook.db.session import get_db
from contactbook.schemas.contacts import ContactIn, ContactOut, MessageOut

router = APIRouter(prefix="/contacts", tags=["contacts"])


def _fields(payload: Optional[ContactIn], required_message: str) -> ContactFields:
    # no body at all is treated like an empty object
    payload = payload or ContactIn()
    check_required(payload.name, payload.email, payload.phone, message=required_message)
    return validate_contact(payload.name, payload.email, payload.phone)


# GET /api/contacts?search=
@router.get("", response_model=List[ContactOut])
async def list_contacts(
    search: str = Query("", alias="search"),
    db: AsyncSession = Depends(get_db),
):
    return await crud_list(db, search=search)


# GET /api/contacts/{id}
@router.get("/{id}", response_model=ContactOut)
async def get_contact(id: str, db: AsyncSession = Depends(get_db)):
    return await crud_get(db, id)


# POST /api/contacts (409 if the phone is taken)
@router.post("", response_model=ContactOut, status_code=status.HTTP_201_CREATED)
async def create_contact(payload: Optional[ContactIn] = Body(None), db: AsyncSession = Depends(get_db)):
    fields = _fields(payload, CREATE_REQUIRED_MESSAGE)
    return await crud_create(db, fields)


# PUT /api/contacts/{id} (full replacement, no partial updates)
@router.put("/{id}", response_model=ContactOut)
async def update_contact(id: str, payload: Optional[ContactIn] = Body(None), db: AsyncSession = Depends(get_db)):
    fields = _fields(payload, UPDATE_REQUIRED_MESSAGE)
    return await crud_update(db, id, fields)


# DELETE /api/contacts/{id} (hard delete)
@router.delete("/{id}", response_model=MessageOut)
async def delete_contact(id: str, db: AsyncSession = Depends(get_db)):
    await crud_delete(db, id)
    return {"message": "Contact deleted successfully"}
