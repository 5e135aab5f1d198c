# aacshare/app/repositories/auth.py
"""
Credential store and refresh token table.

Every write is a single statement so concurrent requests rely on the
database constraints (unique username, one refresh token per user) rather
than on read-then-write checks.
"""
from datetime import datetime, timedelta, timezone

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import insert, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from aacshare.app.core.errors import InvalidCredentials, InvalidRefreshToken, UserExists
from aacshare.app.db.errors import UNIQUE_VIOLATION, violated_constraint
from aacshare.app.models.refresh_token import RefreshToken
from aacshare.app.models.user import User
from aacshare.app.security import hashing


class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_user(self, name: str, username: str, password: str) -> int:
        password_hash = await run_in_threadpool(hashing.get_password_hash, password)
        stmt = (
            insert(User)
            .values(
                name=name,
                username=username,
                password_hash=password_hash,
            )
            .returning(User.id)
        )
        try:
            result = await self.db.execute(stmt)
            user_id = result.scalar_one()
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            if violated_constraint(exc) == UNIQUE_VIOLATION:
                raise UserExists()
            raise
        return user_id

    async def get_user(self, username: str, password: str) -> int:
        """Return the user id when the credentials match; never the hash."""
        result = await self.db.execute(
            select(User.id, User.password_hash).where(User.username == username)
        )
        row = result.first()
        if row is None or not await run_in_threadpool(
            hashing.verify_password, password, row.password_hash
        ):
            raise InvalidCredentials()
        return row.id


class RefreshTokenRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _upsert(self):
        if self.db.bind.dialect.name == "postgresql":
            return postgresql.insert(RefreshToken)
        return sqlite.insert(RefreshToken)

    async def set_refresh_token(self, user_id: int, token: str, ttl: timedelta) -> None:
        """Store ``token`` as the only valid refresh token of ``user_id``."""
        expires_at = datetime.now(timezone.utc) + ttl
        stmt = self._upsert().values(
            user_id=user_id, refresh_token=token, expires_at=expires_at
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[RefreshToken.user_id],
            set_={
                "refresh_token": stmt.excluded.refresh_token,
                "expires_at": stmt.excluded.expires_at,
            },
        )
        await self.db.execute(stmt)
        await self.db.commit()

    async def update_refresh_token(self, old_token: str, new_token: str, ttl: timedelta) -> int:
        """
        Swap a live refresh token for ``new_token`` and return its owner.

        The match on the old value and the expiry check are part of the
        UPDATE itself, so a token can be rotated at most once.
        """
        now = datetime.now(timezone.utc)
        stmt = (
            update(RefreshToken)
            .where(
                RefreshToken.refresh_token == old_token,
                RefreshToken.expires_at > now,
            )
            .values(refresh_token=new_token, expires_at=now + ttl)
            .returning(RefreshToken.user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        user_id = result.scalar_one_or_none()
        if user_id is None:
            await self.db.rollback()
            raise InvalidRefreshToken()
        await self.db.commit()
        return user_id
