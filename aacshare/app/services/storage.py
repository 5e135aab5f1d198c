# aacshare/app/services/storage.py
import uuid
from typing import BinaryIO, Tuple

from fastapi.concurrency import run_in_threadpool

from aacshare.app.repositories.storage import FileStorage


class StorageService:
    """Async facade over FileStorage; file IO runs in the threadpool."""

    def __init__(self, storage: FileStorage):
        self.storage = storage

    async def store_file(self, file_id: uuid.UUID, file: BinaryIO) -> None:
        await run_in_threadpool(self.storage.store_file, file_id, file)

    async def get_file(self, file_id: uuid.UUID) -> Tuple[BinaryIO, int]:
        return await run_in_threadpool(self.storage.get_file, file_id)

    async def remove_file(self, file_id: uuid.UUID) -> None:
        await run_in_threadpool(self.storage.remove_file, file_id)
