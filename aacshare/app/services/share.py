# aacshare/app/services/share.py
import logging

from aacshare.app.core.errors import SelfShare
from aacshare.app.repositories.share import ShareRepository
from aacshare.app.schemas.share import ShareListResponse

logger = logging.getLogger(__name__)


class ShareService:
    def __init__(self, repo: ShareRepository):
        self.repo = repo

    async def share_audio(self, user_id: int, audio_id: int, share_to: int) -> None:
        if user_id == share_to:
            raise SelfShare()
        await self.repo.share_audio(user_id, audio_id, share_to)
        logger.info("User %d shared audio %d with user %d", user_id, audio_id, share_to)

    async def unshare_audio(self, user_id: int, audio_id: int, share_to: int) -> None:
        if user_id == share_to:
            raise SelfShare()
        await self.repo.unshare_audio(user_id, audio_id, share_to)
        logger.info("User %d unshared audio %d from user %d", user_id, audio_id, share_to)

    async def get_shared_list(self, offset: int, limit: int) -> ShareListResponse:
        return await self.repo.get_shared_list(offset, limit)
