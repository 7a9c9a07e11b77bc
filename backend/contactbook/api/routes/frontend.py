# contactbook/api/routes/frontend.py
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

from contactbook.core.errors import NotFoundError

ENTRY_DOCUMENT = "index.html"


def build_router(public_dir: Path) -> APIRouter:
    """
    Catch-all for the single-page frontend: real files under `public_dir`
    are served as-is, every other path gets the entry document.
    Must be included after all API routers.
    """
    router = APIRouter()
    root = Path(public_dir).resolve()

    @router.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str):
        if full_path:
            candidate = (root / full_path).resolve()
            if candidate.is_relative_to(root) and candidate.is_file():
                return FileResponse(candidate)

        entry = root / ENTRY_DOCUMENT
        if not entry.is_file():
            raise NotFoundError("Frontend entry document not found")
        return FileResponse(entry)

    return router
