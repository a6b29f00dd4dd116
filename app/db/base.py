"""SQLAlchemy declarative base and model imports for Alembic."""
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.session import Base

# Import all models so Alembic and create_all can see them
from app.models.user import User  # noqa: F401

__all__ = ["Base", "User", "init_schema"]

logger = logging.getLogger(__name__)


async def init_schema(engine: AsyncEngine) -> None:
    """Create the users table if it does not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tabla users lista")
