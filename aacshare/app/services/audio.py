# aacshare/app/services/audio.py
import logging
import uuid
from typing import BinaryIO

from aacshare.app.repositories.audio import AudioRepository
from aacshare.app.schemas.audio import AudioListResponse, AudioUpdate, DownloadAudio
from aacshare.app.services.storage import StorageService

logger = logging.getLogger(__name__)


class AudioService:
    def __init__(self, repo: AudioRepository, storage: StorageService):
        self.repo = repo
        self.storage = storage

    async def upload_file(self, user_id: int, file: BinaryIO) -> int:
        """
        Store the blob, then insert its metadata row.

        If the insert fails the blob is removed again so no file is left
        without an audio row pointing at it.
        """
        file_id = uuid.uuid4()
        await self.storage.store_file(file_id, file)

        try:
            audio_id = await self.repo.upload_file(user_id, str(file_id))
        except Exception:
            logger.warning("Metadata insert failed, removing blob %s", file_id)
            await self.storage.remove_file(file_id)
            raise

        logger.info("User %d uploaded audio %d", user_id, audio_id)
        return audio_id

    async def add_description(self, user_id: int, audio_id: int, update: AudioUpdate) -> None:
        await self.repo.add_description(user_id, audio_id, update.changes())

    async def download_file(self, user_id: int, audio_id: int) -> DownloadAudio:
        return await self.repo.download_file(user_id, audio_id)

    async def get_audio_list(
        self, user_id: int, offset: int, limit: int, order_type: str
    ) -> AudioListResponse:
        return await self.repo.get_audio_list(user_id, offset, limit, order_type)
