"""Store-level tests: call the crud functions directly against a temporary SQLite file."""
import asyncio

import pytest

from contactbook.core.errors import ConflictError, NotFoundError, ValidationError
from contactbook.core.validation import ContactFields
from contactbook.crud import contacts as crud
from contactbook.db.session import Database
from contactbook.models.contact import Contact


def run_with_db(tmp_path, scenario):
    """Connect, run `scenario(db)` in one event loop, dispose."""

    async def _run():
        database = Database(f"sqlite+aiosqlite:///{tmp_path / 'crud.sqlite3'}")
        await database.connect()
        try:
            return await scenario(database)
        finally:
            await database.dispose()

    return asyncio.run(_run())


def test_create_assigns_id_and_timestamps(tmp_path):
    async def scenario(database):
        async with database.session() as db:
            obj = await crud.create_contact(db, ContactFields("Ann", "ann@example.com", "5550000001"))
        return obj

    obj = run_with_db(tmp_path, scenario)
    assert obj.id
    assert obj.created_at is not None
    assert obj.created_at == obj.updated_at


def test_unique_phone_index_rejects_second_write(tmp_path):
    async def scenario(database):
        async with database.session() as db:
            await crud.create_contact(db, ContactFields("Ann", "ann@example.com", "5550000001"))
        async with database.session() as db:
            with pytest.raises(ConflictError):
                await crud.create_contact(db, ContactFields("Ben", "ben@example.com", "5550000001"))
        async with database.session() as db:
            return await crud.list_contacts(db)

    rows = run_with_db(tmp_path, scenario)
    assert [r.name for r in rows] == ["Ann"]


def test_model_revalidates_fields_on_write(tmp_path):
    async def scenario(database):
        async with database.session() as db:
            with pytest.raises(ValidationError, match="not a valid 10-digit phone number"):
                await crud.create_contact(db, ContactFields("Ann", "ann@example.com", "123"))
        async with database.session() as db:
            return await crud.list_contacts(db)

    assert run_with_db(tmp_path, scenario) == []


def test_model_normalizes_assigned_values():
    obj = Contact(name="  Ann ", email=" ANN@Example.com", phone=" 5550000001 ")
    assert (obj.name, obj.email, obj.phone) == ("Ann", "ann@example.com", "5550000001")


def test_update_and_delete_unknown_id_raise_not_found(tmp_path):
    async def scenario(database):
        async with database.session() as db:
            with pytest.raises(NotFoundError):
                await crud.update_contact(db, "missing", ContactFields("Ann", "ann@example.com", "5550000001"))
            with pytest.raises(NotFoundError):
                await crud.delete_contact(db, "missing")
            with pytest.raises(NotFoundError):
                await crud.get_contact(db, "missing")

    run_with_db(tmp_path, scenario)


def test_update_keeps_id_and_created_at(tmp_path):
    async def scenario(database):
        async with database.session() as db:
            created = await crud.create_contact(db, ContactFields("Ann", "ann@example.com", "5550000001"))
            contact_id, created_at = created.id, created.created_at
        async with database.session() as db:
            updated = await crud.update_contact(db, contact_id, ContactFields("Anna", "anna@example.com", "5550000002"))
        return contact_id, created_at, updated

    contact_id, created_at, updated = run_with_db(tmp_path, scenario)
    assert updated.id == contact_id
    assert updated.created_at.replace(tzinfo=None) == created_at.replace(tzinfo=None)
    assert updated.updated_at.replace(tzinfo=None) > created_at.replace(tzinfo=None)
    assert updated.name == "Anna"


def test_search_and_ordering(tmp_path):
    async def scenario(database):
        async with database.session() as db:
            for i, name in enumerate(["charlie", "Alice", "bob", "Bobby Tables"]):
                await crud.create_contact(db, ContactFields(name, f"p{i}@example.com", f"555000000{i}"))
        async with database.session() as db:
            everyone = await crud.list_contacts(db)
            bobs = await crud.list_contacts(db, search="BOB")
        return [c.name for c in everyone], [c.name for c in bobs]

    everyone, bobs = run_with_db(tmp_path, scenario)
    assert everyone == ["Alice", "bob", "Bobby Tables", "charlie"]
    assert bobs == ["bob", "Bobby Tables"]
