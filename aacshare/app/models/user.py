# aacshare/app/models/user.py
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from aacshare.app.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # Display name shown to other users (owner_name, shared_to)
    name = Column(String(100), nullable=False)
    username = Column(String(50), unique=True, index=True, nullable=False)

    # Salted hash only, see security/hashing.py
    password_hash = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
