"""Users API - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import Settings, get_settings
from app.core.errors import UNAVAILABLE_ERRORS, register_error_handlers
from app.core.logging import setup_logging
from app.db.base import init_schema
from app.db.session import build_engine, build_sessionmaker
from app.routers import users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    engine = build_engine(settings)
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)
    try:
        await init_schema(engine)
    except (SQLAlchemyError, *UNAVAILABLE_ERRORS):
        # keep serving; requests report the store failure one by one
        logger.exception("Could not create the users table at startup")

    try:
        yield
    finally:
        await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging("DEBUG" if settings.debug else settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="CRUD over user records",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(users.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
