# aacshare/app/api/router.py
from fastapi import APIRouter, Depends

from aacshare.app.api import deps
from aacshare.app.api.endpoints import audio, auth, share

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Everything under /api needs a valid access token
protected = APIRouter(prefix="/api", dependencies=[Depends(deps.get_current_user_id)])
protected.include_router(audio.router, prefix="/audio", tags=["audio"])
protected.include_router(share.router, tags=["share"])

api_router.include_router(protected)
