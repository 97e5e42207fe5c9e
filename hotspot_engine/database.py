"""Engine, sessions and schema migrations for the hotspot database."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from hotspot_engine.config import get_settings

logger = logging.getLogger(__name__)

ALEMBIC_INI = Path(__file__).parent.parent / "alembic.ini"


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative base shared by the report and hotspot tables."""


settings = get_settings()

# Aggregation runs and API reads share this pool
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
)

async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; committed on success, rolled back on error."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def alembic_config(ini_path: Path = ALEMBIC_INI) -> Config:
    """Load the Alembic config, leaving logging to the caller."""
    if not ini_path.exists():
        raise FileNotFoundError(f"Alembic config not found: {ini_path}")
    cfg = Config(str(ini_path))
    cfg.attributes["skip_logging"] = True
    return cfg


async def init_db() -> None:
    """Bring the wildlife_reports and hotspots tables up to the latest revision."""
    cfg = alembic_config()
    logger.info("Upgrading hotspot schema to head")
    try:
        await asyncio.to_thread(command.upgrade, cfg, "head")
    except Exception:
        logger.exception("Hotspot schema migration failed")
        raise
    logger.info("Hotspot schema is up to date")


async def close_db() -> None:
    """Dispose of pooled connections on shutdown."""
    await engine.dispose()
