"""
Tennis Coach API - application entry point
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tennis_coach.config import Settings, load_settings
from tennis_coach.database import create_db_engine, create_session_factory, init_database
from tennis_coach.errors import register_error_handlers
from tennis_coach.feature_flags import FeatureFlagService
from tennis_coach.routers import auth, training_sessions
from tennis_coach.security import TokenIssuer

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info(
        "Tennis Coach API starting (environment=%s, database=%s)",
        settings.environment,
        app.state.engine.dialect.name,
    )
    yield
    logger.info("Tennis Coach API shut down")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application from one settings object"""
    if settings is None:
        settings = load_settings()

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=settings.log_level,
    )

    app = FastAPI(
        title="Tennis Coach API",
        description="Scheduling of training sessions for tennis coaches",
        version=API_VERSION,
        lifespan=lifespan,
    )

    engine = create_db_engine(settings.database_url)
    if settings.create_tables:
        init_database(engine)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.token_issuer = TokenIssuer(settings)
    app.state.feature_flags = FeatureFlagService(settings)

    # CORS for the web frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Root endpoint
    @app.get("/", include_in_schema=False)
    async def root():
        """Service banner"""
        return {
            "message": "Tennis Coach API",
            "status": "running",
            "version": API_VERSION,
        }

    # Health check
    @app.get("/health")
    async def health_check():
        """Liveness check"""
        return {
            "status": "healthy",
            "service": "Tennis Coach API",
            "environment": settings.environment,
        }

    # Routers
    app.include_router(auth.router)
    app.include_router(training_sessions.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("tennis_coach.main:app", host="0.0.0.0", port=8000, reload=True)
