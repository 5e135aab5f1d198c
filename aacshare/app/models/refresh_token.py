# aacshare/app/models/refresh_token.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from aacshare.app.db.base import Base


class RefreshToken(Base):
    __tablename__ = "refresh_tokens"

    # One active refresh token per user; issuing a new one overwrites the row
    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    refresh_token = Column(String(128), unique=True, index=True, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
