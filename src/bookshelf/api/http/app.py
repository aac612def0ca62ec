"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from src.bookshelf.api.http.app_data import ApplicationDependencies
from src.bookshelf.api.http.errors import (
    GENERIC_ERROR_MESSAGE,
    error_response,
    register_exception_handlers,
)
from src.bookshelf.api.http.routers.books import router as books_router
from src.bookshelf.api.http.routers.health import router as health_router
from src.bookshelf.api.utils.app_startup import configure_logging
from src.bookshelf.core.services import (
    DbManageService,
    DbSessionService,
    InMemoryBookStore,
    SqlBookStore,
)
from src.bookshelf.runtime.context import get_config

configure_logging()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        return response


def build_dependencies() -> ApplicationDependencies:
    """Create the store selected by ``database.backend``."""
    db_config = get_config().database
    if db_config.backend == "memory":
        logger.warning("Using in-memory book store; data is lost on shutdown")
        return ApplicationDependencies(
            database_service=None, book_store=InMemoryBookStore()
        )

    database_service = DbSessionService(db_config)
    if db_config.create_tables:
        DbManageService(database_service.engine).create_all()
    return ApplicationDependencies(
        database_service=database_service,
        book_store=SqlBookStore(database_service),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup(app)
    try:
        yield
    finally:
        await shutdown(app)


async def startup(app: FastAPI) -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)
    app.state.app_dependencies = build_dependencies()


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None and app_dependencies.database_service is not None:
        app_dependencies.database_service.dispose()


app = FastAPI(
    title="Books API",
    lifespan=lifespan,
    docs_url=None if get_config().app.environment == "production" else "/docs",
    redoc_url=None if get_config().app.environment == "production" else "/redoc",
)

__all__ = ["app", "startup", "shutdown"]

app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().app.cors.origins,
    allow_credentials=get_config().app.cors.allow_credentials,
    allow_methods=get_config().app.cors.allow_methods,
    allow_headers=get_config().app.cors.allow_headers,
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
    }

    start = time.perf_counter()
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return error_response(request, 500, {"message": GENERIC_ERROR_MESSAGE})


app.include_router(books_router)
app.include_router(health_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # request logging middleware covers access logs
    )
