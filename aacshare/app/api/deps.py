# aacshare/app/api/deps.py
from datetime import timedelta
from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from aacshare.app.core.config import settings
from aacshare.app.core.errors import InvalidToken
from aacshare.app.db.base import get_db
from aacshare.app.repositories.audio import AudioRepository
from aacshare.app.repositories.auth import RefreshTokenRepository, UserRepository
from aacshare.app.repositories.share import ShareRepository
from aacshare.app.repositories.storage import FileStorage
from aacshare.app.security import jwt
from aacshare.app.services.audio import AudioService
from aacshare.app.services.auth import AuthService
from aacshare.app.services.share import ShareService
from aacshare.app.services.storage import StorageService

# auto_error=False: a missing header is reported as InvalidToken (401)
# with the usual {"message": ...} body instead of FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> int:
    if credentials is None or not credentials.credentials:
        raise InvalidToken("empty auth header")
    return jwt.decode_access_token(credentials.credentials)


@lru_cache()
def get_file_storage() -> FileStorage:
    return FileStorage(settings.STORAGE_DIR)


def get_storage_service(storage: FileStorage = Depends(get_file_storage)) -> StorageService:
    return StorageService(storage)


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(
        UserRepository(db),
        RefreshTokenRepository(db),
        access_token_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        refresh_token_ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )


def get_audio_service(
        db: AsyncSession = Depends(get_db),
        storage: StorageService = Depends(get_storage_service),
) -> AudioService:
    return AudioService(AudioRepository(db), storage)


def get_share_service(db: AsyncSession = Depends(get_db)) -> ShareService:
    return ShareService(ShareRepository(db))
