"""Async engine construction and per-request sessions.

The engine is built from ``Settings`` inside the application lifespan and kept
on ``app.state``; handlers receive an ``AsyncSession`` through ``get_db``.
"""
import logging
import ssl
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()

# libpq-only query options that asyncpg rejects; TLS comes from DATABASE_SSL instead
_LIBPQ_SSL_PARAMS = ("sslmode", "sslrootcert", "sslcert", "sslkey")


def normalize_database_url(url: str) -> URL:
    """Pick the async driver for the given connection string."""
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]

    parsed = make_url(url)
    backend = parsed.get_backend_name()
    if backend == "postgresql":
        parsed = parsed.set(drivername="postgresql+asyncpg")
        parsed = parsed.difference_update_query(_LIBPQ_SSL_PARAMS)
    elif backend == "sqlite":
        parsed = parsed.set(drivername="sqlite+aiosqlite")
    return parsed


# DATABASE_SSL -> libpq sslmode, for the sync driver used by migrations
_LIBPQ_SSLMODES = {"disable": "disable", "require": "require", "verify": "verify-full"}


def to_sync_database_url(url: str, ssl_mode: str) -> str:
    """Sync (psycopg2 / sqlite) form of the app URL, for Alembic."""
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    if url.startswith("postgresql+asyncpg://"):
        url = url.replace("postgresql+asyncpg://", "postgresql+psycopg2://", 1)
    if url.startswith("postgresql") and "sslmode=" not in url:
        sep = "&" if "?" in url else "?"
        url = f"{url}{sep}sslmode={_LIBPQ_SSLMODES[ssl_mode]}"
    if url.startswith("sqlite+aiosqlite://"):
        return url.replace("sqlite+aiosqlite://", "sqlite://", 1)
    return url


def build_ssl_context(mode: str) -> ssl.SSLContext | bool:
    if mode == "disable":
        return False
    context = ssl.create_default_context()
    if mode == "require":
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def build_connect_args(url: URL, ssl_mode: str) -> dict:
    if url.get_backend_name() != "postgresql":
        return {}
    if ssl_mode == "require":
        logger.warning(
            "Database TLS is enabled without certificate verification; "
            "set DATABASE_SSL=verify to check the server certificate"
        )
    return {"ssl": build_ssl_context(ssl_mode)}


def build_engine(settings: Settings) -> AsyncEngine:
    url = normalize_database_url(settings.database_url)
    return create_async_engine(
        url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        connect_args=build_connect_args(url, settings.database_ssl),
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.sessionmaker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
