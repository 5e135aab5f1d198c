# aacshare/app/repositories/storage.py
"""
Filesystem blob store for uploaded AAC files.

Blobs are named ``<uuid>.aac`` inside one directory. Ids are generated
fresh for every upload, so files are never overwritten and need no
locking. All methods block; call them through run_in_threadpool.
"""
import logging
import os
import shutil
import uuid
from typing import BinaryIO, Tuple

from aacshare.app.core.errors import BlobNotFound, NotSupportedFormat, StorageIOError

logger = logging.getLogger(__name__)

FILE_EXT = ".aac"

# ADTS frame sync word: 12 set bits, MPEG-4 (F1) or MPEG-2 (F9), no CRC
AAC_SIGNATURES = (b"\xff\xf1", b"\xff\xf9")


def is_aac(header: bytes) -> bool:
    return header[:2] in AAC_SIGNATURES


class FileStorage:
    def __init__(self, directory: str):
        self.directory = directory

    def path_for(self, file_id: uuid.UUID) -> str:
        return os.path.join(self.directory, f"{file_id}{FILE_EXT}")

    def store_file(self, file_id: uuid.UUID, file: BinaryIO) -> None:
        try:
            header = file.read(2)
        except OSError as exc:
            raise StorageIOError(f"can't read uploaded file: {exc}")

        if len(header) < 2:
            raise StorageIOError("unexpected end of file while reading header")
        if not is_aac(header):
            raise NotSupportedFormat()

        path = self.path_for(file_id)
        try:
            file.seek(0)
            os.makedirs(self.directory, exist_ok=True)
            with open(path, "wb") as out:
                shutil.copyfileobj(file, out)
        except OSError as exc:
            raise StorageIOError(f"can't store file: {exc}")

        logger.debug("Stored blob %s", path)

    def get_file(self, file_id: uuid.UUID) -> Tuple[BinaryIO, int]:
        """Open a blob for reading. The caller closes the returned file."""
        path = self.path_for(file_id)
        try:
            file = open(path, "rb")
        except FileNotFoundError:
            raise BlobNotFound()
        except OSError as exc:
            raise StorageIOError(f"can't open file: {exc}")

        try:
            size = os.fstat(file.fileno()).st_size
        except OSError as exc:
            file.close()
            raise StorageIOError(f"can't stat file: {exc}")
        return file, size

    def remove_file(self, file_id: uuid.UUID) -> None:
        try:
            os.remove(self.path_for(file_id))
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise StorageIOError(f"can't remove file: {exc}")
