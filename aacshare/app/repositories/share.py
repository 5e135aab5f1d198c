# aacshare/app/repositories/share.py
from sqlalchemy import delete, func, insert, literal, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from aacshare.app.core.errors import NotOwnerOrNotFound, ShareExists, ShareTargetNotFound
from aacshare.app.db.errors import FOREIGN_KEY_VIOLATION, UNIQUE_VIOLATION, violated_constraint
from aacshare.app.models.audio import Audio
from aacshare.app.models.share import Share
from aacshare.app.models.user import User
from aacshare.app.schemas.share import ShareCount, ShareListResponse


class ShareRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def share_audio(self, user_id: int, audio_id: int, share_to: int) -> None:
        # INSERT ... SELECT: the row only exists if user_id owns audio_id
        owned_audio = select(Audio.id, literal(share_to)).where(
            Audio.id == audio_id, Audio.user_id == user_id
        )
        stmt = insert(Share.__table__).from_select(["audio_id", "user_id"], owned_audio)

        try:
            result = await self.db.execute(stmt)
        except IntegrityError as exc:
            await self.db.rollback()
            constraint = violated_constraint(exc)
            if constraint == UNIQUE_VIOLATION:
                raise ShareExists()
            if constraint == FOREIGN_KEY_VIOLATION:
                raise ShareTargetNotFound()
            raise

        if result.rowcount == 0:
            await self.db.rollback()
            raise NotOwnerOrNotFound()
        await self.db.commit()

    async def unshare_audio(self, user_id: int, audio_id: int, share_to: int) -> None:
        owned_audio = (
            select(Audio.id)
            .where(Audio.id == audio_id, Audio.user_id == user_id)
            .scalar_subquery()
        )
        stmt = (
            delete(Share)
            .where(Share.audio_id == owned_audio, Share.user_id == share_to)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        if result.rowcount == 0:
            await self.db.rollback()
            raise NotOwnerOrNotFound()
        await self.db.commit()

    async def get_shared_list(self, offset: int, limit: int) -> ShareListResponse:
        """
        Count shared audios per receiving user, across the whole system.

        ``total_count`` is the number of users with at least one share,
        taken from a window over the grouped rows before OFFSET/LIMIT.
        """
        stmt = (
            select(
                func.count().over().label("full_count"),
                Share.user_id,
                User.name,
                func.count(Share.audio_id).label("shared_records"),
            )
            .join(User, User.id == Share.user_id)
            .group_by(Share.user_id, User.name)
            .order_by(User.name, Share.user_id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        rows = result.all()

        if rows:
            total_count = rows[0].full_count
        elif offset > 0:
            total_count = await self._count_receivers()
        else:
            total_count = 0

        users = [
            ShareCount(id=row.user_id, name=row.name, shared_records=row.shared_records)
            for row in rows
        ]
        return ShareListResponse(total_count=total_count, users=users)

    async def _count_receivers(self) -> int:
        result = await self.db.execute(select(func.count(func.distinct(Share.user_id))))
        return result.scalar_one()
