# aacshare/app/db/base.py
"""
SQLAlchemy declarative base and re-exports of the session components.
"""
from sqlalchemy.orm import DeclarativeBase


# ─────────────────────────────────────────────────────────────────────────────
# Declarative Base for ORM Models
# All models inherit from this class
# ─────────────────────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Usage:
        class User(Base):
            __tablename__ = "users"
            id = Column(Integer, primary_key=True)
            ...
    """
    pass


from aacshare.app.db.session import (  # noqa: E402
    engine,
    AsyncSessionLocal,
    get_db,
)

__all__ = [
    "Base",
    "engine",
    "AsyncSessionLocal",
    "get_db",
]
