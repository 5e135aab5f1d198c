from aacshare.app.models.user import User
from aacshare.app.models.audio import Audio
from aacshare.app.models.share import Share
from aacshare.app.models.refresh_token import RefreshToken

__all__ = ["User", "Audio", "Share", "RefreshToken"]
