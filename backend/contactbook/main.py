import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contactbook.api.routes.contacts import router as contacts_router
from contactbook.api.routes.frontend import build_router as build_frontend_router
from contactbook.api.routes.health import router as health_router
from contactbook.core.config import Settings, get_settings
from contactbook.core.errors import ContactBookError, StartupError, status_for
from contactbook.db.session import Database

logger = logging.getLogger(__name__)


async def _contactbook_error_handler(request: Request, exc: ContactBookError) -> JSONResponse:
    return JSONResponse(status_code=status_for(exc), content=exc.to_body())


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    detail = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}" for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"message": "Invalid request body", "error": detail})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title=settings.PROJECT_NAME, version="1.0")
    app.state.settings = settings
    app.state.db = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

    allowed_origins = settings.cors_origins_list or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "HEAD"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ContactBookError, _contactbook_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    app.include_router(health_router, tags=["health"])
    app.include_router(contacts_router, prefix="/api", tags=["contacts"])
    # last: the frontend catch-all must never shadow an API route
    app.include_router(build_frontend_router(settings.PUBLIC_DIR), tags=["frontend"])

    @app.on_event("startup")
    async def _startup_db() -> None:
        try:
            await app.state.db.connect()
        except StartupError as exc:
            logger.exception("[db] %s: %s", exc.message, exc.detail)
            raise
        logger.info("[CORS] allow_origins = %s", allowed_origins)

    @app.on_event("shutdown")
    async def _shutdown_db() -> None:
        await app.state.db.dispose()

    return app


# `uvicorn contactbook.main:app`
app = create_app()
