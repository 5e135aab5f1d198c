# aacshare/app/api/endpoints/share.py
from fastapi import APIRouter, Depends, Query

from aacshare.app.api import deps
from aacshare.app.schemas.share import ShareInput, ShareListResponse
from aacshare.app.schemas.user import StatusResponse
from aacshare.app.services.share import ShareService

router = APIRouter()


@router.post("/share/{audio_id}", response_model=StatusResponse)
async def share_audio(
        audio_id: int,
        body: ShareInput,
        user_id: int = Depends(deps.get_current_user_id),
        shares: ShareService = Depends(deps.get_share_service),
):
    await shares.share_audio(user_id, audio_id, body.share_to)
    return StatusResponse()


@router.delete("/share/{audio_id}", response_model=StatusResponse)
async def unshare_audio(
        audio_id: int,
        body: ShareInput,
        user_id: int = Depends(deps.get_current_user_id),
        shares: ShareService = Depends(deps.get_share_service),
):
    await shares.unshare_audio(user_id, audio_id, body.share_to)
    return StatusResponse()


# Global view over all users' shares; callers only need to be signed in
@router.get("/shares", response_model=ShareListResponse)
async def get_shared_list(
        offset: int = Query(..., ge=0),
        limit: int = Query(..., ge=1),
        shares: ShareService = Depends(deps.get_share_service),
):
    return await shares.get_shared_list(offset, limit)
