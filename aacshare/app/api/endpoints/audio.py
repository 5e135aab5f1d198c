# aacshare/app/api/endpoints/audio.py
import uuid
from typing import BinaryIO, Iterator
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import StreamingResponse

from aacshare.app.api import deps
from aacshare.app.core.config import settings
from aacshare.app.core.errors import StorageIOError, UploadTooLarge
from aacshare.app.repositories.storage import FILE_EXT
from aacshare.app.schemas.audio import AudioListResponse, AudioUpdate
from aacshare.app.schemas.user import IdResponse, StatusResponse
from aacshare.app.services.audio import AudioService
from aacshare.app.services.storage import StorageService

router = APIRouter()

CHUNK_SIZE = 64 * 1024


def content_disposition(title: str) -> str:
    """
    Plain ``filename`` for printable ASCII titles; otherwise an ASCII fallback
    plus the exact name as RFC 5987 ``filename*``.
    """
    filename = f"{title or 'audio'}{FILE_EXT}"
    if filename.isascii() and filename.isprintable() and not any(c in filename for c in '"\\'):
        return f'attachment; filename="{filename}"'

    fallback = "".join(
        c if c.isascii() and c.isprintable() and c not in '"\\' else "_" for c in filename
    )
    return f"attachment; filename=\"{fallback}\"; filename*=utf-8''{quote(filename)}"


def iter_file(file: BinaryIO) -> Iterator[bytes]:
    try:
        while True:
            chunk = file.read(CHUNK_SIZE)
            if not chunk:
                break
            yield chunk
    finally:
        file.close()


@router.get("/", response_model=AudioListResponse, response_model_exclude_none=True)
async def get_all_audio(
        offset: int = Query(..., ge=0),
        limit: int = Query(..., ge=1),
        order_type: str = Query(..., description="owner or alphabet"),
        user_id: int = Depends(deps.get_current_user_id),
        audio: AudioService = Depends(deps.get_audio_service),
):
    return await audio.get_audio_list(user_id, offset, limit, order_type)


@router.post("/", response_model=IdResponse)
async def upload_audio(
        file: UploadFile = File(...),
        user_id: int = Depends(deps.get_current_user_id),
        audio: AudioService = Depends(deps.get_audio_service),
):
    try:
        if file.size is not None and file.size > settings.MAX_UPLOAD_SIZE:
            raise UploadTooLarge()
        audio_id = await audio.upload_file(user_id, file.file)
    finally:
        await file.close()
    return IdResponse(id=audio_id)


@router.put("/{audio_id}", response_model=StatusResponse)
async def add_description(
        audio_id: int,
        update: AudioUpdate,
        user_id: int = Depends(deps.get_current_user_id),
        audio: AudioService = Depends(deps.get_audio_service),
):
    await audio.add_description(user_id, audio_id, update)
    return StatusResponse()


@router.get("/{audio_id}")
async def download_audio(
        audio_id: int,
        user_id: int = Depends(deps.get_current_user_id),
        audio: AudioService = Depends(deps.get_audio_service),
        storage: StorageService = Depends(deps.get_storage_service),
):
    record = await audio.download_file(user_id, audio_id)

    try:
        file_id = uuid.UUID(record.file_path)
    except ValueError:
        raise StorageIOError(f"invalid file reference for audio {audio_id}")

    file, size = await storage.get_file(file_id)
    return StreamingResponse(
        iter_file(file),
        media_type="application/octet-stream",
        headers={
            "Content-Disposition": content_disposition(record.title),
            "Content-Length": str(size),
        },
    )
