# aacshare/app/models/audio.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.sql import func
from aacshare.app.db.base import Base


class Audio(Base):
    __tablename__ = "audios"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    # Blank until the owner adds a description
    title = Column(String(255), nullable=False, default="", server_default="")
    duration = Column(Integer, nullable=False, default=0, server_default="0")

    # Blob id (uuid string); the file lives at <STORAGE_DIR>/<file_path>.aac
    file_path = Column(String(64), unique=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
