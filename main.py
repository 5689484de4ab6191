import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todoapp.config import Settings, settings
from todoapp.logging_setup import setup_logging
from todoapp.middleware import (
    FixedWindowRateLimiter,
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    UnhandledExceptionMiddleware,
    register_exception_handlers,
)
from todoapp.routers import tasks, users
from todoapp.seed import init_database
from todoapp.spa import mount_spa

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def create_app(app_settings: Settings = settings, initialize_database: bool = True) -> FastAPI:
    app = FastAPI(
        title="ToDoApp API",
        description="Users, tasks and subtasks",
        version="1.0.0",
        docs_url="/swagger" if app_settings.is_development else None,
        redoc_url=None,
    )
    app.state.settings = app_settings

    register_exception_handlers(app)

    # Middleware registered last runs first:
    # CORS -> request logging -> rate limiting -> unhandled errors -> routes
    app.add_middleware(UnhandledExceptionMiddleware, debug=app_settings.is_development)

    limits = app_settings.RATE_LIMITS
    if limits["enabled"]:
        app.state.rate_limiter = FixedWindowRateLimiter(
            limit=limits["requests_per_window"],
            window_seconds=limits["window_seconds"],
            queue_limit=limits["queue_limit"],
        )
        app.add_middleware(RateLimitMiddleware, limiter=app.state.rate_limiter)

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS["allow_origins"],
        allow_credentials=app_settings.CORS["allow_credentials"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-Id"],
    )

    # Route registration
    app.include_router(users.router, prefix="/api/users", tags=["Users"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    if initialize_database:
        @app.on_event("startup")
        def startup_event():
            """Create tables and seed the admin account when the application starts"""
            logger.info("Starting ToDoApp API (%s)...", app_settings.ENVIRONMENT)
            init_database()

    # Catch-all front-end route goes last so it never shadows the API
    mount_spa(app, app_settings.STATIC["directory"], app_settings.STATIC["index_file"])

    return app


app = create_app()
