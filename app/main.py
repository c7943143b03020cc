"""
app/main.py

Purpose: Application entry point

- Builds the FastAPI app (create_app)
- Loads configuration and logging
- Registers API routes (auth, users, companies, invitations, forms)
- No business logic should be written here
- Manages application lifecycle (Mongo client, identity provider)
"""

from contextlib import asynccontextmanager
from typing import Optional
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import auth, companies, forms, invitations, users
from app.core.config import Settings, settings as default_settings, validate_settings
from app.core.errors import add_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.db.indexes import create_indexes
from app.db.mongo import connect_to_mongo, close_mongo_connection
from app.db.store import DocumentStore
from app.services.identity_provider import FirebaseIdentityProvider

logger = get_logger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Creates the clients that were not injected and closes them on shutdown.
    """
    config: Settings = app.state.settings
    mongo_client = None
    owned_identity = None

    logger.info("Starting NEXA API...")

    try:
        validate_settings(config)
        logger.info("Configuration validated")

        if app.state.store is None:
            logger.info("Connecting to MongoDB...")
            mongo_client = await connect_to_mongo(config)
            app.state.store = DocumentStore(mongo_client[config.MONGODB_DB_NAME])
            await create_indexes(app.state.store)

        if app.state.identity_provider is None:
            owned_identity = FirebaseIdentityProvider.from_settings(config)
            app.state.identity_provider = owned_identity

        logger.info(f"NEXA API started (environment={config.ENVIRONMENT}, registration={config.REGISTRATION_MODE})")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    yield  # Application runs here

    logger.info("Shutting down NEXA API...")

    try:
        if owned_identity is not None:
            await owned_identity.close()
            logger.info("Identity provider client closed")

        if mongo_client is not None:
            close_mongo_connection(mongo_client)

        logger.info("NEXA API shut down successfully")

    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}", exc_info=True)


def create_app(
    config: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
    identity_provider: Optional[FirebaseIdentityProvider] = None,
) -> FastAPI:
    """
    Builds the application.

    `store` and `identity_provider` are created by the lifespan when not
    given, so tests can inject in-memory or fake backends.
    """
    config = config or default_settings
    setup_logging(config)

    app = FastAPI(
        title="NEXA API",
        description="Organizations, memberships and invitations",
        version=VERSION,
        lifespan=lifespan,
        debug=config.DEBUG,
        docs_url="/docs" if config.is_development else None,  # Disable docs in production
        redoc_url="/redoc" if config.is_development else None,
    )

    app.state.settings = config
    app.state.store = store
    app.state.identity_provider = identity_provider

    # CORS Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request timing middleware
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add processing time header to all responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        if process_time > config.SLOW_REQUEST_SECONDS:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path}",
                extra={"process_time": process_time}
            )

        return response

    add_exception_handlers(app, config)

    for router in (auth.router, users.router, companies.router, invitations.router, forms.router):
        app.include_router(router, prefix=config.API_PREFIX)

    # Root endpoint
    @app.get("/", tags=["Health"])
    async def root():
        return {
            "name": "NEXA API",
            "version": VERSION,
            "status": "running",
            "environment": config.ENVIRONMENT,
        }

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Checks database connectivity and identity provider configuration.
        """
        health_status = {
            "status": "healthy",
            "timestamp": time.time(),
            "environment": config.ENVIRONMENT,
            "version": VERSION,
            "checks": {}
        }

        current_store: Optional[DocumentStore] = app.state.store
        db_healthy = current_store is not None and await current_store.ping()
        health_status["checks"]["database"] = "healthy" if db_healthy else "unhealthy"
        if not db_healthy:
            health_status["status"] = "unhealthy"

        if app.state.identity_provider is None:
            health_status["checks"]["identity_provider"] = "not_configured"
            if health_status["status"] == "healthy":
                health_status["status"] = "degraded"
        else:
            health_status["checks"]["identity_provider"] = "configured"

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)

    # Readiness probe (for Kubernetes/orchestration)
    @app.get("/ready", tags=["Health"])
    async def readiness_check():
        current_store: Optional[DocumentStore] = app.state.store
        if current_store is not None and await current_store.ping():
            return {"status": "ready"}
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "reason": "database_unavailable"}
        )

    # Liveness probe (for Kubernetes/orchestration)
    @app.get("/live", tags=["Health"])
    async def liveness_check():
        return {"status": "alive"}

    return app


app = create_app()
