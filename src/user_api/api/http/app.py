"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pymongo.errors import PyMongoError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.user_api.api.http.app_data import ApplicationDependencies
from src.user_api.api.http.routers.health import router as health_router
from src.user_api.api.http.routers.users import router as users_router
from src.user_api.api.utils.app_startup import configure_logging
from src.user_api.core.services import MongoService
from src.user_api.entities.core.user import UserRepository
from src.user_api.runtime.context import get_config

__all__ = ["app", "create_app", "build_dependencies", "startup", "shutdown"]


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        # HSTS only in prod
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    # query strings are left out of the context on purpose
    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
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
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


async def store_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    """Log store failures with context and answer with an opaque 500."""
    logger.bind(error_type=type(exc).__name__).opt(exception=exc).error(
        "Unhandled database error on {} {}", request.method, request.url.path
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


# --- Lifecycle hooks ---
def build_dependencies(database_service: MongoService | None = None) -> ApplicationDependencies:
    """Create the process-wide store client and the repository that uses it."""
    database_service = database_service or MongoService()
    return ApplicationDependencies(
        database_service=database_service,
        user_repository=UserRepository(database_service.get_collection()),
    )


async def startup(app: FastAPI) -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    if getattr(app.state, "app_dependencies", None) is None:
        app.state.app_dependencies = build_dependencies()
        app.state.owns_dependencies = True

    if config.mongo.create_indexes:
        # Fail fast when the store is unreachable or holds duplicate usernames
        app.state.app_dependencies.user_repository.ensure_indexes()


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    if getattr(app.state, "owns_dependencies", False):
        app.state.app_dependencies.database_service.close()
        app.state.app_dependencies = None
        app.state.owns_dependencies = False


def create_app(dependencies: ApplicationDependencies | None = None) -> FastAPI:
    """Build the FastAPI application.

    ``dependencies`` replaces the store client built at startup; the caller
    stays responsible for closing it.
    """
    config = get_config()
    docs_on = config.app.docs_enabled and config.app.environment != "production"

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await startup(app)
        try:
            yield
        finally:
            await shutdown(app)

    application = FastAPI(
        title="User API",
        description="API for managing users with MongoDB",
        version="v1",
        lifespan=lifespan,
        docs_url="/docs" if docs_on else None,
        redoc_url="/redoc" if docs_on else None,
    )
    application.state.app_dependencies = dependencies
    application.state.owns_dependencies = False

    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    application.middleware("http")(log_requests)
    application.add_exception_handler(PyMongoError, store_error_handler)

    application.include_router(health_router)
    application.include_router(users_router)
    return application


configure_logging()

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # We handle access logging in middleware
    )
