import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from deckinsight.api import (
    decks_router,
    health_router,
    meta_router,
    profiles_router,
    sessions_router,
)
from deckinsight.config import settings
from deckinsight.models.failure import ApiResponse, KnownError
from deckinsight.scrapers.moxfield import MoxfieldClient
from deckinsight.scrapers.mtggoldfish import MtgGoldfishClient
from deckinsight.services.sessions import SessionRegistry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.state.sessions = SessionRegistry()
    app.state.goldfish = MtgGoldfishClient()
    app.state.moxfield = MoxfieldClient()
    logger.info("%s started", settings.app_name)
    yield
    app.state.goldfish.close()
    app.state.moxfield.close()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("deckinsight"),
    debug=settings.debug,
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Known failures become an ApiResponse envelope with the error's status code."""
    logger.warning("Request failed: %s", exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def unknown_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(
        status_code=500,
        content=ApiResponse.unknown_failure(detail=type(exc).__name__).model_dump(mode="json"),
    )


app.include_router(decks_router)
app.include_router(health_router)
app.include_router(meta_router)
app.include_router(profiles_router)
app.include_router(sessions_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
