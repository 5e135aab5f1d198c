# aacshare/app/models/share.py
from sqlalchemy import Column, Integer, ForeignKey
from aacshare.app.db.base import Base


class Share(Base):
    """Grants user_id read/download access to an audio it does not own."""
    __tablename__ = "shares"

    audio_id = Column(Integer, ForeignKey("audios.id"), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True, index=True)
