"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rift_draft.config import settings
from rift_draft.errors import DraftError
from rift_draft.api.routes.auth import router as auth_router
from rift_draft.api.routes.drafts import router as drafts_router
from rift_draft.api.routes.tournaments import router as tournaments_router
from rift_draft.repositories.draft_repository import DraftRepository
from rift_draft.services.auth_service import AuthService
from rift_draft.services.draft_service import DraftService
from rift_draft.services.series_service import SeriesService
from rift_draft.services.tournament_service import TournamentService

logger = logging.getLogger(__name__)


def get_database_path() -> str:
    """Resolve the DuckDB path; relative paths are anchored at the repo root."""
    if settings.database_path == ":memory:":
        return settings.database_path
    db_path = Path(settings.database_path)
    if db_path.is_absolute():
        return str(db_path)
    repo_root = Path(__file__).parent.parent.parent.parent
    return str(repo_root / settings.database_path)


def init_services(app: FastAPI, repository: DraftRepository) -> None:
    """Attach repository and services to ``app.state``."""
    app.state.repository = repository
    app.state.draft_service = DraftService(
        repository,
        timer=settings.draft_timer_seconds,
        allow_duplicates=settings.allow_duplicate_champions,
    )
    app.state.series_service = SeriesService(repository, app.state.draft_service)
    app.state.tournament_service = TournamentService(repository)
    app.state.auth_service = AuthService(
        admin_password=settings.admin_password,
        token_ttl_seconds=settings.token_ttl_seconds,
        code_length=settings.access_code_length,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    if not hasattr(app.state, "repository"):
        init_services(app, DraftRepository(get_database_path()))
    yield
    app.state.repository.close()


app = FastAPI(
    title="Rift Draft",
    description="Champion select simulator with fearless best-of-N series",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DraftError)
async def draft_error_handler(request: Request, exc: DraftError):
    """Map typed draft failures onto HTTP responses."""
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "rift-draft"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Rift Draft API",
        "version": "0.1.0",
        "docs": "/docs",
    }


# Register routers
app.include_router(drafts_router)
app.include_router(tournaments_router)
app.include_router(auth_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("rift_draft.main:app", host=settings.host, port=settings.port, reload=settings.debug)
