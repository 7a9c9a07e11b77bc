# backend/contactbook/db/base.py
from sqlalchemy.ext.asyncio import AsyncEngine

from contactbook.models.base import Base


def _import_models() -> None:
    """Import all models so their metadata is registered on Base."""
    import contactbook.models.contact  # noqa: F401


async def create_all(engine: AsyncEngine) -> None:
    """Create all tables (and the unique phone index) for the registered models."""
    _import_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
