import logging

from aacshare.app.db.base import Base, engine

logger = logging.getLogger(__name__)


async def init_models(drop: bool = False):
    # Import models so Base.metadata knows every table
    from aacshare.app import models  # noqa: F401

    try:
        async with engine.begin() as conn:
            if drop:
                await conn.run_sync(Base.metadata.drop_all)
            logger.info("Creating database tables")
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables are ready")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
