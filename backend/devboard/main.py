"""Main FastAPI application."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from devboard.api import github, projects, stats
from devboard.config import settings
from devboard.database import check_connection, create_db_engine, create_session_factory
from devboard.services.github import GitHubService, create_github_client
from devboard.utils.logger import logger

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the database engine and GitHub client, and release them on shutdown."""
    engine = create_db_engine(settings.database_url)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.github = GitHubService(create_github_client(settings))

    if check_connection(engine):
        logger.info("Database connected successfully")

    try:
        yield
    finally:
        await app.state.github.close()
        engine.dispose()
        logger.info("Database engine disposed")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return _error_response(status.HTTP_400_BAD_REQUEST, "; ".join(messages) or "Invalid request")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


def create_application() -> FastAPI:
    app = FastAPI(
        title="Devboard API",
        description="Backend API for the devboard project-tracking dashboard",
        version=VERSION,
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include routers
    app.include_router(projects.router)
    app.include_router(stats.router)
    app.include_router(github.router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Devboard API",
            "version": VERSION,
            "docs": "/docs",
        }

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint, including database reachability."""
        database = "ok" if check_connection(request.app.state.engine) else "unavailable"
        return {"status": "healthy", "database": database}

    return app


app = create_application()
