# backend/contactbook/db/session.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from contactbook.core.errors import StartupError
from contactbook.db.base import create_all
from contactbook.db.functions import register_sqlite_functions

logger = logging.getLogger(__name__)


def _ensure_sqlite_parent_dir(url: str) -> Optional[Path]:
    """Create the parent folder of a file-backed SQLite database."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return None
    db_path = parsed.database or ""
    if not db_path or db_path == ":memory:" or db_path.startswith("file:"):
        return None
    p = Path(db_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p.resolve()


class Database:
    """
    Process-wide store handle: one async engine plus its session factory.
    Built by create_app(), connected on startup, disposed on shutdown.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None

    async def connect(self) -> None:
        """Open the engine, ping it and create tables. Any failure is fatal."""
        try:
            resolved = _ensure_sqlite_parent_dir(self.url)
            if resolved is not None:
                logger.info("[db] SQLite file: %s", resolved)
            self.engine = create_async_engine(self.url, echo=self.echo, pool_pre_ping=True)
            if self.engine.dialect.name == "sqlite":
                event.listen(self.engine.sync_engine, "connect", register_sqlite_functions)
            async with self.engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
            await create_all(self.engine)
        except Exception as exc:
            if self.engine is not None:
                await self.engine.dispose()
                self.engine = None
            raise StartupError("Database connection error", str(exc)) from exc

        self.sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False, class_=AsyncSession)
        logger.info("[db] connected: %s", make_url(self.url).render_as_string(hide_password=True))

    async def dispose(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            logger.info("[db] disposed")
        self.engine = None
        self.sessionmaker = None

    def session(self) -> AsyncSession:
        if self.sessionmaker is None:
            raise RuntimeError("Database.connect() has not been awaited")
        return self.sessionmaker()


# -------------------------------------------------------
# FastAPI dependency
# -------------------------------------------------------
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Usage in routes:
        from contactbook.db.session import get_db
        async def endpoint(db: AsyncSession = Depends(get_db)):
            ...
    """
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session
