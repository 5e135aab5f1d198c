# aacshare/app/services/auth.py
import logging
from datetime import timedelta

from aacshare.app.repositories.auth import RefreshTokenRepository, UserRepository
from aacshare.app.schemas.user import TokenPair, UserCreate
from aacshare.app.security import jwt

logger = logging.getLogger(__name__)


class AuthService:
    """
    Sign-up, sign-in and token refresh.

    Access tokens are stateless; refresh tokens are stored one per user and
    replaced on every sign-in or refresh, so an old refresh token stops
    working as soon as a new one is issued.
    """

    def __init__(
        self,
        users: UserRepository,
        tokens: RefreshTokenRepository,
        access_token_ttl: timedelta,
        refresh_token_ttl: timedelta,
    ):
        self.users = users
        self.tokens = tokens
        self.access_token_ttl = access_token_ttl
        self.refresh_token_ttl = refresh_token_ttl

    async def create_user(self, user_in: UserCreate) -> int:
        user_id = await self.users.create_user(user_in.name, user_in.username, user_in.password)
        logger.info("Created user %s (id=%d)", user_in.username, user_id)
        return user_id

    async def sign_in(self, username: str, password: str) -> TokenPair:
        user_id = await self.users.get_user(username, password)
        refresh_token = await self.generate_refresh_token(user_id)
        logger.info("User %d signed in", user_id)
        return TokenPair(token=self.generate_access_token(user_id), refresh_token=refresh_token)

    async def refresh(self, old_refresh_token: str) -> TokenPair:
        new_refresh_token = jwt.generate_refresh_token()
        user_id = await self.tokens.update_refresh_token(
            old_refresh_token, new_refresh_token, self.refresh_token_ttl
        )
        return TokenPair(token=self.generate_access_token(user_id), refresh_token=new_refresh_token)

    def generate_access_token(self, user_id: int) -> str:
        return jwt.create_access_token(user_id, expires_delta=self.access_token_ttl)

    async def generate_refresh_token(self, user_id: int) -> str:
        refresh_token = jwt.generate_refresh_token()
        await self.tokens.set_refresh_token(user_id, refresh_token, self.refresh_token_ttl)
        return refresh_token
