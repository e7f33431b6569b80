import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from tarotdeck.api import (
    cards_router,
    decks_router,
    health_router,
    readings_router,
    uploads_router,
)
from tarotdeck.config import settings
from tarotdeck.db.database import init_db, session_scope
from tarotdeck.models.failure import KnownError, create_unknown_failure, finalize_response
from tarotdeck.services.sample_deck import seed_sample_deck

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    )
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    await init_db()
    if settings.seed_default_deck:
        async with session_scope() as session:
            await seed_sample_deck(session)
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("tarotdeck"),
    lifespan=lifespan,
)

app.include_router(cards_router)
app.include_router(decks_router)
app.include_router(health_router)
app.include_router(readings_router)
app.include_router(uploads_router)

app.mount(
    settings.upload_url_prefix,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render a KnownError as a classified failure envelope."""
    if exc.status_code >= 500:
        logger.error("%s: %s (%s)", exc.kind.value, exc.message, exc.detail)
    response = finalize_response(exc.to_response())
    return JSONResponse(status_code=exc.status_code, content=response.model_dump(mode="json"))


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Database errors outside the upload pipeline are unclassified failures."""
    logger.exception("Unhandled database error", exc_info=exc)
    response = create_unknown_failure(exc)
    return JSONResponse(status_code=500, content=response.model_dump(mode="json"))
