# aacshare/app/api/endpoints/auth.py
from fastapi import APIRouter, Depends

from aacshare.app.api import deps
from aacshare.app.schemas.user import IdResponse, RefreshInput, SignInInput, TokenPair, UserCreate
from aacshare.app.services.auth import AuthService

router = APIRouter()


@router.post("/sign-up", response_model=IdResponse)
async def sign_up(user_in: UserCreate, auth: AuthService = Depends(deps.get_auth_service)):
    user_id = await auth.create_user(user_in)
    return IdResponse(id=user_id)


@router.post("/sign-in", response_model=TokenPair)
async def sign_in(form: SignInInput, auth: AuthService = Depends(deps.get_auth_service)):
    return await auth.sign_in(form.username, form.password)


@router.post("/refresh", response_model=TokenPair)
async def refresh_tokens(body: RefreshInput, auth: AuthService = Depends(deps.get_auth_service)):
    # The presented refresh token is consumed; only the returned one is valid afterwards
    return await auth.refresh(body.refresh_token)
